"""
Exception taxonomy for docmark

Registry misuse and schema violations are fatal at build time. Attribute
validation errors carry a severity: `block` errors are raised, `warn`
errors are recorded as diagnostics and the build continues.
"""

from typing import Any, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.tags import Severity, SourceLocation


class DocmarkError(Exception):
    """Base class for all docmark errors"""
    pass


class RegistryError(DocmarkError):
    """Raised on misuse of the tag registry"""
    pass


class DuplicateTagError(RegistryError):
    """A tag with this name is already registered"""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Tag '{tag}' is already registered")


class UnknownTagError(RegistryError):
    """No tag with this name is registered"""

    def __init__(self, tag: str, location: Optional["SourceLocation"] = None):
        self.tag = tag
        self.location = location
        where = f" at {location}" if location else ""
        super().__init__(f"Unknown tag '{tag}'{where}")


class RegistryFrozenError(RegistryError):
    """The registry no longer accepts registrations"""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Cannot register tag '{tag}': registry is frozen")


class SchemaDefinitionError(DocmarkError):
    """A TagDefinition or AttributeSpec violates its own invariants"""
    pass


class UnexpectedChildrenError(DocmarkError):
    """Content was supplied to a self-closing tag"""

    def __init__(self, tag: str, location: Optional["SourceLocation"] = None):
        self.tag = tag
        self.location = location
        where = f" at {location}" if location else ""
        super().__init__(f"Tag '{tag}'{where} is self-closing and cannot have children")


class AttributeValidationError(DocmarkError):
    """
    Base class for attribute validation failures

    Attributes:
        tag: Tag name the attribute belongs to
        attribute: Attribute name
        value: Offending raw value
        allowed: Allowed values, if the attribute is an enumeration
        severity: Declared (or escalated) severity of the violation
        location: Source location of the tag invocation, if known
    """

    def __init__(
        self,
        tag: str,
        attribute: str,
        value: Any,
        reason: str,
        allowed: Optional[Sequence[Any]] = None,
        severity: Optional["Severity"] = None,
        location: Optional["SourceLocation"] = None,
    ):
        self.tag = tag
        self.attribute = attribute
        self.value = value
        self.allowed = list(allowed) if allowed is not None else None
        self.severity = severity
        self.location = location

        where = f" at {location}" if location else ""
        message = f"Tag '{tag}'{where}: attribute '{attribute}' {reason} {value!r}"
        if self.allowed is not None:
            message += f"; allowed values: {self.allowed!r}"
        super().__init__(message)


class TypeMismatchError(AttributeValidationError):
    """Attribute value does not coerce to the declared value type"""

    def __init__(self, tag: str, attribute: str, value: Any, expected: str, **kwargs: Any):
        self.expected = expected
        super().__init__(tag, attribute, value, f"expects a {expected}, got", **kwargs)


class InvalidEnumValueError(AttributeValidationError):
    """Attribute value is outside the declared allowed values"""

    def __init__(self, tag: str, attribute: str, value: Any, **kwargs: Any):
        super().__init__(tag, attribute, value, "has invalid value", **kwargs)


class UnknownAttributeError(AttributeValidationError):
    """Attribute is not part of the tag's schema"""

    def __init__(self, tag: str, attribute: str, value: Any, **kwargs: Any):
        super().__init__(tag, attribute, value, "is not defined; ignoring value", **kwargs)


class UnsupportedLanguageError(DocmarkError):
    """Language code is outside the closed set of code-sample languages"""

    def __init__(self, code: Any, supported: Sequence[str]):
        self.code = code
        self.supported = list(supported)
        super().__init__(
            f"Unsupported language {code!r}; supported languages: {self.supported!r}"
        )
