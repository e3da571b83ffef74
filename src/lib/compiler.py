"""
Compiler for pre-parsed documents

Walks a tree of TagInvocations produced by the external markup parser,
resolves every tag through the TagRegistry and serializes the resulting
ContentNodes to HTML.

A BLOCK severity attribute violation, an unknown tag or children on a
self-closing tag aborts the whole build: the error propagates out of
compile() and no output is produced.
"""

from html import escape
from typing import Any, List, Optional, Sequence, Union

from ..models.document import CompileResult, TagInvocation
from ..models.tags import Child, Diagnostic
from .errors import UnexpectedChildrenError, UnknownTagError
from .log import LOG
from .registry import TagRegistry

# Elements that never take a closing tag in HTML
VOID_ELEMENTS = frozenset({"img", "br", "hr", "input", "meta", "link", "source"})


class Compiler:
    """
    Compiles a pre-parsed document into content nodes and HTML

    Responsibilities:
    - Resolve tags inside-out (children before their parent)
    - Collect WARN diagnostics for the whole document
    - Serialize the content tree to HTML
    """

    def __init__(self, registry: Optional[TagRegistry] = None) -> None:
        """
        Initialize compiler

        Args:
            registry: Tag registry to resolve against (default: built-in tags)
        """
        if registry is None:
            from .tags import registry_createDefault
            registry = registry_createDefault()
        self.registry = registry
        self.diagnostics: List[Diagnostic] = []

    def compile(self, document: Sequence[Union[TagInvocation, str]]) -> CompileResult:
        """
        Compile a document

        Args:
            document: Top-level invocations and text of the document

        Returns:
            CompileResult with content nodes, diagnostics and HTML

        Raises:
            DocmarkError: On any fatal tag or attribute error
        """
        LOG("Starting compilation...", level=2)
        self.diagnostics = []

        nodes = [self.node_compile(item) for item in document]
        html_content = "".join(html_render(node) for node in nodes)

        LOG(f"Compiled {len(nodes)} top-level nodes, {len(self.diagnostics)} diagnostics", level=2)
        return CompileResult(nodes=nodes, diagnostics=list(self.diagnostics), html=html_content)

    def node_compile(self, item: Union[TagInvocation, str]) -> Child:
        """
        Compile a single invocation (text passes through unchanged)

        Uses inside-out compilation:
        1. Check the tag exists and accepts children (before any child is touched)
        2. Recursively compile all children
        3. Resolve the tag with the compiled children

        Raises:
            UnknownTagError: If the tag is not registered
            UnexpectedChildrenError: If a self-closing tag has children
        """
        if isinstance(item, str):
            return item

        definition = self.registry.definition_get(item.name)
        if definition is None:
            raise UnknownTagError(item.name, item.location)
        if definition.self_closing and item.children:
            raise UnexpectedChildrenError(item.name, item.location)

        children = [self.node_compile(child) for child in item.children]
        return self.registry.resolve(
            item.name,
            item.attributes,
            children,
            diagnostics=self.diagnostics,
            location=item.location,
        )


def attribute_render(name: str, value: Any) -> str:
    """Serialize one HTML attribute; True renders as a bare attribute"""
    if value is True:
        return f" {name}"
    return f' {name}="{escape(str(value), quote=True)}"'


def html_render(node: Child) -> str:
    """
    Serialize a content node (or text) to HTML.

    Text is escaped; rawHTML is emitted verbatim after the children.
    Attributes whose value is None or False are omitted.
    """
    if isinstance(node, str):
        return escape(node, quote=False)

    attrs = "".join(
        attribute_render(name, value)
        for name, value in node.attributes.items()
        if value is not None and value is not False
    )
    if node.tag in VOID_ELEMENTS:
        return f"<{node.tag}{attrs}>"

    inner = "".join(html_render(child) for child in node.children)
    if node.rawHTML:
        inner += node.rawHTML
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"
