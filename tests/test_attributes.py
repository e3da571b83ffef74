"""
Attribute validation tests

Coercion, defaults, enumeration constraints and the warn/block severity
split.
"""

import pytest

from docmark.lib.attributes import CoercionError, value_coerce
from docmark.lib.errors import (
    InvalidEnumValueError,
    SchemaDefinitionError,
    TypeMismatchError,
    UnknownAttributeError,
)
from docmark.lib.registry import TagRegistry
from docmark.models.tags import (
    ABSENT,
    AttributeSpec,
    ContentNode,
    Severity,
    TagDefinition,
    ValueType,
)


def echo_render(attributes, children):
    return ContentNode("div", dict(attributes), list(children))


def video_registry(strict=False):
    """Registry with one tag covering every value type and both severities"""
    registry = TagRegistry(strict=strict)
    registry.register(TagDefinition(
        "video",
        render=echo_render,
        self_closing=True,
        attributes=(
            AttributeSpec("src"),
            AttributeSpec("width", ValueType.NUMBER, default=640),
            AttributeSpec("autoplay", ValueType.BOOLEAN, default=False),
            AttributeSpec("quality", default="hd", allowed=("sd", "hd")),
            AttributeSpec("layout", default="inline", allowed=("inline", "wide"), severity=Severity.BLOCK),
        ),
    ))
    return registry.freeze()


class TestCoercion:
    """Test value_coerce()"""

    def test_string_accepts_str_only(self):
        assert value_coerce("abc", ValueType.STRING) == "abc"
        with pytest.raises(CoercionError):
            value_coerce(5, ValueType.STRING)

    def test_number_from_numbers(self):
        assert value_coerce(3, ValueType.NUMBER) == 3
        assert value_coerce(2.5, ValueType.NUMBER) == 2.5

    def test_number_from_strings(self):
        """Numeric strings become int when integral, float otherwise"""
        assert value_coerce("800", ValueType.NUMBER) == 800
        assert isinstance(value_coerce("800", ValueType.NUMBER), int)
        assert value_coerce(" 1.5 ", ValueType.NUMBER) == 1.5

    def test_number_rejects_bool_and_text(self):
        with pytest.raises(CoercionError):
            value_coerce(True, ValueType.NUMBER)
        with pytest.raises(CoercionError):
            value_coerce("wide", ValueType.NUMBER)

    def test_number_rejects_nan_and_infinity(self):
        """Non-finite values are type mismatches"""
        for raw in ("nan", "inf", "-Infinity", float("nan"), float("inf")):
            with pytest.raises(CoercionError):
                value_coerce(raw, ValueType.NUMBER)

    def test_boolean(self):
        assert value_coerce(True, ValueType.BOOLEAN) is True
        assert value_coerce("Yes", ValueType.BOOLEAN) is True
        assert value_coerce("0", ValueType.BOOLEAN) is False
        with pytest.raises(CoercionError):
            value_coerce("maybe", ValueType.BOOLEAN)
        with pytest.raises(CoercionError):
            value_coerce(1, ValueType.BOOLEAN)


class TestResolvedValues:
    """Test the values renderers receive"""

    def test_fully_specified_no_diagnostics(self):
        """A complete, valid attribute map resolves cleanly"""
        diagnostics = []
        node = video_registry().resolve(
            "video",
            {"src": "/v.mp4", "width": "1280", "autoplay": "true", "quality": "sd", "layout": "wide"},
            diagnostics=diagnostics,
        )

        assert diagnostics == []
        assert node.attributes == {
            "src": "/v.mp4",
            "width": 1280,
            "autoplay": True,
            "quality": "sd",
            "layout": "wide",
        }

    def test_defaults_fill_omitted_attributes(self):
        """Omitted attributes take their default, no diagnostics"""
        diagnostics = []
        node = video_registry().resolve("video", {}, diagnostics=diagnostics)

        assert diagnostics == []
        assert node.attributes == {
            "src": ABSENT,
            "width": 640,
            "autoplay": False,
            "quality": "hd",
            "layout": "inline",
        }


class TestWarnSeverity:
    """Warn violations fall back to the default with exactly one diagnostic"""

    def test_invalid_enum_value(self):
        diagnostics = []
        node = video_registry().resolve("video", {"quality": "4k"}, diagnostics=diagnostics)

        assert node.attributes["quality"] == "hd"
        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert isinstance(diagnostic.error, InvalidEnumValueError)
        assert diagnostic.severity is Severity.WARN
        assert diagnostic.fallback == "hd"
        assert "'4k'" in diagnostic.message

    def test_type_mismatch(self):
        diagnostics = []
        node = video_registry().resolve("video", {"width": "wide"}, diagnostics=diagnostics)

        assert node.attributes["width"] == 640
        assert len(diagnostics) == 1
        assert isinstance(diagnostics[0].error, TypeMismatchError)
        assert diagnostics[0].error.expected == "number"

    def test_type_mismatch_without_default_is_absent(self):
        diagnostics = []
        node = video_registry().resolve("video", {"src": 42}, diagnostics=diagnostics)

        assert node.attributes["src"] is ABSENT
        assert len(diagnostics) == 1

    def test_one_diagnostic_per_attribute(self):
        """Type mismatch on an enumerated attribute is not reported twice"""
        diagnostics = []
        video_registry().resolve("video", {"quality": 7}, diagnostics=diagnostics)

        assert len(diagnostics) == 1
        assert isinstance(diagnostics[0].error, TypeMismatchError)

    def test_unknown_attribute_dropped(self):
        """Attributes outside the schema are reported and ignored"""
        diagnostics = []
        node = video_registry().resolve("video", {"loop": "true"}, diagnostics=diagnostics)

        assert "loop" not in node.attributes
        assert len(diagnostics) == 1
        assert isinstance(diagnostics[0].error, UnknownAttributeError)

    def test_resolve_without_diagnostics_list(self):
        """Diagnostics are optional for callers"""
        node = video_registry().resolve("video", {"quality": "4k"})
        assert node.attributes["quality"] == "hd"


class TestBlockSeverity:
    """Block violations abort resolution"""

    def test_invalid_enum_value(self):
        calls = []

        def render(attributes, children):
            calls.append(attributes)
            return ContentNode("video")

        registry = TagRegistry(strict=False)
        registry.register(TagDefinition(
            "video",
            render=render,
            attributes=(AttributeSpec("layout", default="inline", allowed=("inline", "wide"), severity=Severity.BLOCK),),
        ))

        with pytest.raises(InvalidEnumValueError) as excinfo:
            registry.resolve("video", {"layout": "full"})

        error = excinfo.value
        assert error.tag == "video"
        assert error.attribute == "layout"
        assert error.value == "full"
        assert error.allowed == ["inline", "wide"]
        assert error.severity is Severity.BLOCK
        assert calls == []

    def test_strict_mode_escalates_warn(self):
        """In strict mode a warn attribute blocks"""
        with pytest.raises(InvalidEnumValueError) as excinfo:
            video_registry(strict=True).resolve("video", {"quality": "4k"})
        assert excinfo.value.severity is Severity.BLOCK

    def test_strict_mode_unknown_attribute(self):
        with pytest.raises(UnknownAttributeError):
            video_registry(strict=True).resolve("video", {"loop": "true"})


class TestSchemaInvariants:
    """AttributeSpec and TagDefinition validate themselves"""

    def test_default_must_be_allowed(self):
        with pytest.raises(SchemaDefinitionError, match="not one of"):
            AttributeSpec("type", default="tip", allowed=("note", "warning"))

    def test_default_must_match_type(self):
        with pytest.raises(SchemaDefinitionError):
            AttributeSpec("width", ValueType.NUMBER, default="640")

    def test_allowed_values_must_match_type(self):
        with pytest.raises(SchemaDefinitionError):
            AttributeSpec("level", ValueType.NUMBER, allowed=(1, "2"))

    def test_duplicate_attribute_names(self):
        with pytest.raises(SchemaDefinitionError, match="duplicate"):
            TagDefinition("x", render=echo_render, attributes=(AttributeSpec("a"), AttributeSpec("a")))

    def test_absent_sentinel(self):
        """ABSENT is falsy and distinct from None and empty string"""
        assert not ABSENT
        assert ABSENT is not None
        assert ABSENT != ""
        assert repr(ABSENT) == "ABSENT"
