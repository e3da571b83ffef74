"""
Tag reference generation

Documents the tag schema surface consumed by document authors: for every
registered tag its name, whether it is self-closing, and each attribute's
type, default, allowed values and severity. Output is Markdown or YAML.
"""

from typing import Any, Dict, List

import yaml

from ..models.tags import ABSENT, TagDefinition
from .attributes import severity_effective
from .registry import TagRegistry


def tag_describe(definition: TagDefinition, strict: bool = False) -> Dict[str, Any]:
    """
    Plain-data description of one tag.

    Severities are the ones enforced: in strict mode every attribute blocks.
    """
    attributes = []
    for spec in definition.attributes:
        attributes.append({
            "name": spec.name,
            "type": spec.value_type.value,
            "default": None if spec.default is ABSENT else spec.default,
            "allowed": list(spec.allowed) if spec.allowed is not None else None,
            "severity": severity_effective(spec.severity, strict).value,
            "description": spec.description,
        })
    return {
        "name": definition.name,
        "selfClosing": definition.self_closing,
        "description": definition.description,
        "attributes": attributes,
        "examples": list(definition.examples),
    }


def reference_build(registry: TagRegistry) -> List[Dict[str, Any]]:
    """Describe every registered tag, in registration order"""
    return [tag_describe(definition, registry.strict) for definition in registry.definitions]


def reference_toYAML(registry: TagRegistry) -> str:
    return yaml.safe_dump({"tags": reference_build(registry)}, sort_keys=False)


def reference_toMarkdown(registry: TagRegistry) -> str:
    """
    Render the reference as Markdown: one section per tag with an
    attribute table.
    """
    lines: List[str] = ["# Tag reference", ""]

    for tag in reference_build(registry):
        lines.append(f"## `{tag['name']}`")
        lines.append("")
        if tag["description"]:
            lines.append(tag["description"])
            lines.append("")
        lines.append(f"Self-closing: {'yes' if tag['selfClosing'] else 'no'}")
        lines.append("")

        if tag["attributes"]:
            lines.append("| Attribute | Type | Default | Allowed values | Severity |")
            lines.append("|---|---|---|---|---|")
            for attr in tag["attributes"]:
                default = "-" if attr["default"] is None else f"`{attr['default']}`"
                allowed = (
                    "any" if attr["allowed"] is None
                    else ", ".join(f"`{value}`" for value in attr["allowed"])
                )
                lines.append(
                    f"| `{attr['name']}` | {attr['type']} | {default} | {allowed} | {attr['severity']} |"
                )
            lines.append("")
        else:
            lines.append("No attributes.")
            lines.append("")

        for example in tag["examples"]:
            lines.append("```")
            lines.append(example)
            lines.append("```")
            lines.append("")

    return "\n".join(lines).rstrip() + "\n"
