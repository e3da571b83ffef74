"""
Tag schema and content node models

Defines the structures shared by the tag registry, the built-in tag
renderers and the language toggle: attribute schemas, tag definitions,
rendered content nodes and validation diagnostics.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..lib.errors import AttributeValidationError, SchemaDefinitionError


class ValueType(Enum):
    """Semantic primitive type of an attribute value"""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class Severity(Enum):
    """
    What happens when an attribute fails validation

    BLOCK aborts the document build. WARN records a diagnostic and the
    attribute falls back to its default.
    """
    WARN = "warn"
    BLOCK = "block"


class LanguageCode(str, Enum):
    """Closed set of code-sample languages a page can switch between"""
    JAVA = "java"
    KOTLIN = "kotlin"


class _Absent:
    """Type of the ABSENT sentinel"""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


# Value of an omitted attribute that has no default
ABSENT = _Absent()


def valueType_matches(value: Any, value_type: ValueType) -> bool:
    """Check that an already-typed python value has the given value type"""
    if value_type is ValueType.STRING:
        return isinstance(value, str)
    if value_type is ValueType.BOOLEAN:
        return isinstance(value, bool)
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class AttributeSpec:
    """
    Schema entry for one attribute of a tag

    Attributes:
        name: Attribute name, unique within the tag
        value_type: Semantic type the raw value must coerce to
        default: Value used when the attribute is omitted (ABSENT if none)
        allowed: Permitted values (None means unconstrained)
        severity: Consequence of a validation failure
        description: Human-readable description for the tag reference

    Raises:
        SchemaDefinitionError: If the default or an allowed value does not
            have value_type, or the default is not an allowed value
    """
    name: str
    value_type: ValueType = ValueType.STRING
    default: Any = ABSENT
    allowed: Optional[Tuple[Any, ...]] = None
    severity: Severity = Severity.WARN
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaDefinitionError("Attribute name must not be empty")

        if self.allowed is not None:
            object.__setattr__(self, "allowed", tuple(self.allowed))
            for value in self.allowed:
                if not valueType_matches(value, self.value_type):
                    raise SchemaDefinitionError(
                        f"Attribute '{self.name}': allowed value {value!r} "
                        f"is not a {self.value_type.value}"
                    )

        if self.default_has():
            if not valueType_matches(self.default, self.value_type):
                raise SchemaDefinitionError(
                    f"Attribute '{self.name}': default {self.default!r} "
                    f"is not a {self.value_type.value}"
                )
            if self.allowed is not None and self.default not in self.allowed:
                raise SchemaDefinitionError(
                    f"Attribute '{self.name}': default {self.default!r} "
                    f"is not one of {list(self.allowed)!r}"
                )

    def default_has(self) -> bool:
        return self.default is not ABSENT


@dataclass
class ContentNode:
    """
    Rendered output of a tag (or a plain element inside one)

    Attributes:
        tag: HTML element name (e.g., "div", "figure")
        attributes: HTML attributes; None values are omitted on output
        children: Nested content nodes or text
        rawHTML: Pre-rendered HTML placed after children (e.g., highlighted code)
        language: LanguageMarker of a code-sample variant, if any
    """
    tag: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    children: List["Child"] = field(default_factory=list)
    rawHTML: Optional[str] = None
    language: Optional[LanguageCode] = None

    @property
    def hidden(self) -> bool:
        return "hidden" in self.attributes

    def walk(self):
        """Yield this node and every descendant content node, depth first"""
        yield self
        for child in self.children:
            if isinstance(child, ContentNode):
                yield from child.walk()


Child = Union[ContentNode, str]

# (resolved attributes, children) -> ContentNode
TagRenderer = Callable[[Dict[str, Any], List[Child]], ContentNode]


@dataclass(frozen=True)
class TagDefinition:
    """
    A custom markup tag: schema plus renderer

    Attributes:
        name: Tag identifier (case-sensitive, may contain hyphens)
        render: Pure function (attributes, children) -> ContentNode
        self_closing: Tag carries no nested content
        attributes: Attribute schema, names unique
        description: Human-readable description for the tag reference
        examples: Example usages for the tag reference
    """
    name: str
    render: TagRenderer
    self_closing: bool = False
    attributes: Tuple[AttributeSpec, ...] = ()
    description: str = ""
    examples: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaDefinitionError("Tag name must not be empty")
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "examples", tuple(self.examples))

        seen = set()
        for spec in self.attributes:
            if spec.name in seen:
                raise SchemaDefinitionError(
                    f"Tag '{self.name}': duplicate attribute '{spec.name}'"
                )
            seen.add(spec.name)

    def attribute_get(self, name: str) -> Optional[AttributeSpec]:
        for spec in self.attributes:
            if spec.name == name:
                return spec
        return None


@dataclass(frozen=True)
class SourceLocation:
    """Position of a tag invocation in its source document"""
    line: Optional[int] = None
    file: Optional[str] = None

    def __str__(self) -> str:
        if self.file and self.line is not None:
            return f"{self.file}:{self.line}"
        if self.file:
            return self.file
        return f"line {self.line}"


@dataclass
class Diagnostic:
    """
    A recoverable validation failure recorded during resolution

    Attributes:
        error: The recorded validation error
        severity: Effective severity (always WARN for recorded diagnostics)
        fallback: Value the attribute resolved to instead
    """
    error: AttributeValidationError
    severity: Severity
    fallback: Any = ABSENT

    @property
    def message(self) -> str:
        return str(self.error)
