"""
Built-in documentation tags

Each tag pairs an attribute schema with a renderer producing ContentNodes.
Renderers only ever see validated, default-filled attributes: an omitted
attribute without default arrives as ABSENT (falsy), never as raw input.

Tags:
    callout       admonition box, type note|warning (invalid type fails the build)
    figure        self-closing image with caption
    quick-links   grid container for quick-link cards
    quick-link    self-closing navigation card
    codes         multi-language code sample with a language selector
    code-java     Java variant of a code sample (language-marked)
    code-kotlin   Kotlin variant of a code sample (language-marked)
    code-icon     self-closing language icon
"""

from typing import Any, Dict, List, Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name

from ..models.tags import (
    ABSENT,
    AttributeSpec,
    Child,
    ContentNode,
    LanguageCode,
    Severity,
    TagDefinition,
    TagRenderer,
)
from .registry import TagRegistry

LANGUAGE_LABELS: Dict[LanguageCode, str] = {
    LanguageCode.JAVA: "Java",
    LanguageCode.KOTLIN: "Kotlin",
}

CALLOUT_TYPES = ("note", "warning")


def optional(value: Any) -> Optional[Any]:
    """Map ABSENT to None so the HTML serializer drops the attribute"""
    return None if value is ABSENT else value


def callout_render(attributes: Dict[str, Any], children: List[Child]) -> ContentNode:
    kind = attributes["type"]
    parts: List[Child] = []
    if attributes["title"]:
        parts.append(ContentNode("p", {"class": "callout-title"}, [attributes["title"]]))
    parts.append(ContentNode("div", {"class": "callout-body"}, children))
    return ContentNode("div", {"class": f"callout callout-{kind}"}, parts)


def figure_render(attributes: Dict[str, Any], children: List[Child]) -> ContentNode:
    alt = attributes["alt"]
    caption = attributes["caption"]
    image = ContentNode("img", {"src": optional(attributes["src"]), "alt": alt})
    figcaption = ContentNode("figcaption", {}, [caption] if caption else [])
    return ContentNode("figure", {}, [image, figcaption])


def quickLinks_render(attributes: Dict[str, Any], children: List[Child]) -> ContentNode:
    return ContentNode("div", {"class": "quick-links"}, children)


def quickLink_render(attributes: Dict[str, Any], children: List[Child]) -> ContentNode:
    parts: List[Child] = []
    if attributes["icon"]:
        parts.append(ContentNode("span", {"class": "quick-link-icon", "data-icon": attributes["icon"]}))

    title = attributes["title"] or ""
    link = ContentNode("a", {"href": optional(attributes["href"])}, [title])
    parts.append(ContentNode("h2", {"class": "quick-link-title"}, [link]))

    if attributes["description"]:
        parts.append(ContentNode("p", {"class": "quick-link-description"}, [attributes["description"]]))
    return ContentNode("div", {"class": "quick-link"}, parts)


def codes_render(attributes: Dict[str, Any], children: List[Child]) -> ContentNode:
    """
    Container for the language variants of one code sample.

    The selector buttons carry data-select-language; the page event layer
    forwards clicks on them to toggle.select().
    """
    buttons: List[Child] = [
        ContentNode(
            "button",
            {"type": "button", "class": "codes-select", "data-select-language": code.value},
            [ContentNode("span", {"class": f"code-icon code-icon-{code.value}"}), label],
        )
        for code, label in LANGUAGE_LABELS.items()
    ]
    selector = ContentNode("div", {"class": "codes-selector"}, buttons)
    samples = ContentNode("div", {"class": "codes-samples"}, children)
    return ContentNode("div", {"class": "codes"}, [selector, samples])


def codeText_render(text: str, language: LanguageCode) -> ContentNode:
    """Render raw source text of a code sample, highlighted if enabled"""
    from ..config import appsettings

    if not appsettings.highlight_code:
        code = ContentNode("code", {"class": f"language-{language.value}"}, [text])
        return ContentNode("pre", {}, [code])

    formatter = HtmlFormatter(style=appsettings.highlight_style, noclasses=True)
    highlighted = highlight(text, get_lexer_by_name(language.value), formatter)
    return ContentNode("div", {"class": "code-sample"}, rawHTML=highlighted)


def codeSample_renderer(language: LanguageCode) -> TagRenderer:
    """Factory for the language-marked code-<language> renderers"""

    def render(attributes: Dict[str, Any], children: List[Child]) -> ContentNode:
        from ..config import appsettings

        content: List[Child] = [
            codeText_render(child, language) if isinstance(child, str) else child
            for child in children
        ]
        return ContentNode(
            "span",
            {appsettings.marker_attribute: language.value},
            content,
            language=language,
        )

    return render


def codeIcon_render(attributes: Dict[str, Any], children: List[Child]) -> ContentNode:
    code = LanguageCode(attributes["type"])
    return ContentNode(
        "span",
        {
            "class": f"code-icon code-icon-{code.value}",
            "data-language-icon": code.value,
            "title": LANGUAGE_LABELS[code],
        },
    )


def calloutTags_register(registry: TagRegistry) -> None:
    """Register callout and figure"""
    registry.register(TagDefinition(
        name="callout",
        render=callout_render,
        attributes=(
            AttributeSpec("title", description="Heading shown above the callout body"),
            AttributeSpec(
                "type",
                default="note",
                allowed=CALLOUT_TYPES,
                severity=Severity.BLOCK,
                description="Callout flavour",
            ),
        ),
        description="Highlighted note or warning box",
        examples=('{% callout type="warning" title="Careful" %}Text{% /callout %}',),
    ))

    registry.register(TagDefinition(
        name="figure",
        render=figure_render,
        self_closing=True,
        attributes=(
            AttributeSpec("src", description="Image URL"),
            AttributeSpec("alt", default="", description="Alternative text"),
            AttributeSpec("caption", description="Caption below the image"),
        ),
        description="Image with caption",
        examples=('{% figure src="/img/workflow.png" alt="Workflow" caption="A workflow" /%}',),
    ))


def linkTags_register(registry: TagRegistry) -> None:
    """Register quick-links and quick-link"""
    registry.register(TagDefinition(
        name="quick-links",
        render=quickLinks_render,
        description="Grid of quick-link cards",
        examples=('{% quick-links %}...{% /quick-links %}',),
    ))

    registry.register(TagDefinition(
        name="quick-link",
        render=quickLink_render,
        self_closing=True,
        attributes=(
            AttributeSpec("title", description="Card title"),
            AttributeSpec("description", description="Card text"),
            AttributeSpec("icon", description="Icon name"),
            AttributeSpec("href", description="Link target"),
        ),
        description="Navigation card",
        examples=('{% quick-link title="Installation" icon="installation" href="/docs/install" /%}',),
    ))


def codeTags_register(registry: TagRegistry) -> None:
    """Register the multi-language code sample tags"""
    registry.register(TagDefinition(
        name="codes",
        render=codes_render,
        description="Code sample available in several languages",
        examples=('{% codes %}{% code-java %}...{% /code-java %}{% code-kotlin %}...{% /code-kotlin %}{% /codes %}',),
    ))

    for code, label in LANGUAGE_LABELS.items():
        registry.register(TagDefinition(
            name=f"code-{code.value}",
            render=codeSample_renderer(code),
            description=f"{label} variant of a code sample",
        ))

    registry.register(TagDefinition(
        name="code-icon",
        render=codeIcon_render,
        self_closing=True,
        attributes=(
            AttributeSpec(
                "type",
                default=LanguageCode.JAVA.value,
                allowed=tuple(code.value for code in LanguageCode),
                description="Language whose icon is shown",
            ),
        ),
        description="Language icon",
        examples=('{% code-icon type="kotlin" /%}',),
    ))


def registry_createDefault(strict: Optional[bool] = None) -> TagRegistry:
    """
    Build the frozen registry of all built-in tags.

    Args:
        strict: Escalate WARN violations to BLOCK (None: use settings)
    """
    registry = TagRegistry(strict=strict)
    calloutTags_register(registry)
    linkTags_register(registry)
    codeTags_register(registry)
    return registry.freeze()
