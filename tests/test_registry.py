"""
Tag registry tests

Registration, freezing, lookup and the resolve() error paths that do not
depend on attribute values.
"""

import pytest

from docmark.lib.errors import (
    DuplicateTagError,
    RegistryFrozenError,
    UnexpectedChildrenError,
    UnknownTagError,
)
from docmark.lib.registry import TagRegistry
from docmark.lib.tags import registry_createDefault
from docmark.models.tags import (
    ABSENT,
    AttributeSpec,
    ContentNode,
    SourceLocation,
    TagDefinition,
)


def echo_render(attributes, children):
    """Renderer that exposes exactly what it was called with"""
    return ContentNode("div", dict(attributes), list(children))


def registry_make(*definitions, strict=False):
    registry = TagRegistry(strict=strict)
    for definition in definitions:
        registry.register(definition)
    return registry


class TestRegistration:
    """Test register() and freeze()"""

    def test_register_and_lookup(self):
        """Registered tag is found by name"""
        definition = TagDefinition("badge", render=echo_render)
        registry = registry_make(definition)

        assert registry.has("badge")
        assert "badge" in registry
        assert registry.definition_get("badge") is definition
        assert len(registry) == 1

    def test_names_are_case_sensitive(self):
        """'Badge' and 'badge' are different tags"""
        registry = registry_make(TagDefinition("badge", render=echo_render))
        assert "Badge" not in registry

    def test_hyphenated_name(self):
        """Tag names may contain hyphens"""
        registry = registry_make(TagDefinition("quick-link", render=echo_render))
        assert registry.has("quick-link")

    def test_duplicate_rejected(self):
        """Registering an existing name raises DuplicateTagError"""
        registry = registry_make(TagDefinition("badge", render=echo_render))

        with pytest.raises(DuplicateTagError, match="badge"):
            registry.register(TagDefinition("badge", render=echo_render))
        assert len(registry) == 1

    def test_register_chains(self):
        """register() returns the registry"""
        registry = TagRegistry(strict=False)
        result = registry.register(TagDefinition("a", render=echo_render))
        assert result is registry

    def test_frozen_registry_rejects_registration(self):
        """No registrations after freeze()"""
        registry = registry_make(TagDefinition("badge", render=echo_render)).freeze()

        assert registry.frozen
        with pytest.raises(RegistryFrozenError, match="late"):
            registry.register(TagDefinition("late", render=echo_render))
        assert registry.names == ["badge"]

    def test_freeze_is_idempotent(self):
        """Freezing twice keeps the same tags"""
        registry = registry_make(TagDefinition("badge", render=echo_render))
        registry.freeze()
        registry.freeze()
        assert registry.names == ["badge"]

    def test_names_keep_registration_order(self):
        """names lists tags in the order they were registered"""
        registry = registry_make(
            TagDefinition("b", render=echo_render),
            TagDefinition("a", render=echo_render),
        )
        assert registry.names == ["b", "a"]


class TestDefaultRegistry:
    """Test the built-in registry"""

    def test_builtin_tags(self):
        """All documentation tags are registered"""
        registry = registry_createDefault(strict=False)
        assert registry.names == [
            "callout",
            "figure",
            "quick-links",
            "quick-link",
            "codes",
            "code-java",
            "code-kotlin",
            "code-icon",
        ]

    def test_default_registry_is_frozen(self):
        """Built-in registry cannot be extended after construction"""
        registry = registry_createDefault(strict=False)
        with pytest.raises(RegistryFrozenError):
            registry.register(TagDefinition("extra", render=echo_render))

    def test_self_closing_flags(self):
        """figure, quick-link and code-icon carry no content"""
        registry = registry_createDefault(strict=False)
        self_closing = {d.name for d in registry.definitions if d.self_closing}
        assert self_closing == {"figure", "quick-link", "code-icon"}


class TestResolveStructure:
    """Test resolve() checks that precede attribute validation"""

    def test_unknown_tag(self):
        """Unregistered name raises UnknownTagError"""
        registry = registry_make()
        with pytest.raises(UnknownTagError, match="missing"):
            registry.resolve("missing", {}, [])

    def test_unknown_tag_reports_location(self):
        """Location is part of the message"""
        registry = registry_make()
        with pytest.raises(UnknownTagError, match="guide.md:7"):
            registry.resolve("missing", location=SourceLocation(line=7, file="guide.md"))

    def test_self_closing_with_children(self):
        """Children on a self-closing tag raise UnexpectedChildrenError"""
        registry = registry_make(TagDefinition("hr", render=echo_render, self_closing=True))

        with pytest.raises(UnexpectedChildrenError) as excinfo:
            registry.resolve("hr", {}, ["text"], location=SourceLocation(line=3))

        assert excinfo.value.tag == "hr"
        assert "line 3" in str(excinfo.value)

    def test_self_closing_with_empty_children(self):
        """An empty children list is fine for a self-closing tag"""
        registry = registry_make(TagDefinition("hr", render=echo_render, self_closing=True))
        node = registry.resolve("hr", {}, [])
        assert node.children == []

    def test_children_reach_renderer(self):
        """Container tags receive their children in order"""
        registry = registry_make(TagDefinition("box", render=echo_render))
        inner = ContentNode("span")
        node = registry.resolve("box", {}, ["a", inner, "b"])
        assert node.children == ["a", inner, "b"]

    def test_omitted_attribute_without_default_is_absent(self):
        """Renderer sees ABSENT, not None or empty string"""
        registry = registry_make(TagDefinition(
            "link", render=echo_render, attributes=(AttributeSpec("href"),)
        ))
        node = registry.resolve("link", {}, [])

        assert node.attributes["href"] is ABSENT
        assert node.attributes["href"] is not None
        assert node.attributes["href"] != ""

    def test_renderer_not_called_on_structural_error(self):
        """Renderer is never invoked for a failed resolution"""
        calls = []

        def render(attributes, children):
            calls.append(attributes)
            return ContentNode("hr")

        registry = registry_make(TagDefinition("hr", render=render, self_closing=True))
        with pytest.raises(UnexpectedChildrenError):
            registry.resolve("hr", {}, ["oops"])
        assert calls == []
