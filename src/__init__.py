"""
docmark - documentation markup extensions

Custom tag registry with validated attribute schemas, and a page-wide
toggle between the language variants of code samples.
"""

__version__ = "1.0.0"

from .lib import (
    Compiler,
    SelectionContext,
    TagRegistry,
    initialize,
    registry_createDefault,
    select,
    visibility_apply,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Compiler",
    "SelectionContext",
    "TagRegistry",
    "initialize",
    "registry_createDefault",
    "select",
    "visibility_apply",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
