"""
Models package for docmark

Contains data structures and type definitions shared by the tag registry,
the compiler, the language toggle and the command line.
"""

from .state import ProgramState, pipeline
from .tags import (
    ABSENT,
    AttributeSpec,
    ContentNode,
    Diagnostic,
    LanguageCode,
    Severity,
    SourceLocation,
    TagDefinition,
    ValueType,
)
from .document import CompileResult, TagInvocation

__all__ = [
    "ProgramState",
    "pipeline",
    "ABSENT",
    "AttributeSpec",
    "ContentNode",
    "Diagnostic",
    "LanguageCode",
    "Severity",
    "SourceLocation",
    "TagDefinition",
    "ValueType",
    "CompileResult",
    "TagInvocation",
]
