"""
docmark library

Tag registry, built-in tags, compiler and language toggle.
"""

from .errors import DocmarkError
from .registry import TagRegistry
from .tags import registry_createDefault
from .compiler import Compiler, html_render
from .toggle import LanguageBlock, SelectionContext, blocks_attach, initialize, select, visibility_apply
from .log import LOG, WARN, state_connectToLogger

__all__ = [
    "DocmarkError",
    "TagRegistry",
    "registry_createDefault",
    "Compiler",
    "html_render",
    "LanguageBlock",
    "SelectionContext",
    "blocks_attach",
    "initialize",
    "select",
    "visibility_apply",
    "LOG",
    "WARN",
    "state_connectToLogger",
]
