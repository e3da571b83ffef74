"""
Document tree models

Structures handed over by the external markup parser and returned by the
Compiler.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .tags import ContentNode, Diagnostic, SourceLocation


@dataclass
class TagInvocation:
    """
    One tag occurrence in a pre-parsed document

    Attributes:
        name: Tag name (e.g., "callout", "code-java")
        attributes: Raw attribute values as produced by the parser
        children: Nested invocations or text, in document order
        location: Where the tag appears in the source (for error reporting)

    Example:
        For source '{% callout type="warning" %}Careful{% /callout %}':
        TagInvocation(
            name="callout",
            attributes={"type": "warning"},
            children=["Careful"],
        )
    """
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    children: List[Union["TagInvocation", str]] = field(default_factory=list)
    location: Optional[SourceLocation] = None


@dataclass
class CompileResult:
    """
    Result of compiling a document

    Attributes:
        nodes: Rendered top-level content nodes (or text)
        diagnostics: WARN severity diagnostics in document order
        html: Serialized HTML of all nodes
    """
    nodes: List[Union[ContentNode, str]]
    diagnostics: List[Diagnostic]
    html: str
