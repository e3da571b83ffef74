"""
Tag registry for docmark

Maps custom markup tag names to their TagDefinition (attribute schema plus
renderer) and resolves tag invocations into content nodes.

The registry follows a construct-then-freeze discipline: tags are
registered during initialization, then freeze() swaps the backing dict
for a read-only mapping. resolve() is safe to call any number of times on
a frozen registry.

Example:
    >>> registry = TagRegistry()
    >>> registry.register(TagDefinition("note", render=note_render))
    >>> registry.freeze()
    >>> node = registry.resolve("note", {}, ["Hello"])
"""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models.tags import (
    ABSENT,
    Child,
    ContentNode,
    Diagnostic,
    Severity,
    SourceLocation,
    TagDefinition,
)
from .attributes import attribute_validate, error_isBlocking, fallback_get, severity_effective
from .errors import (
    AttributeValidationError,
    DuplicateTagError,
    RegistryFrozenError,
    UnexpectedChildrenError,
    UnknownAttributeError,
    UnknownTagError,
)
from .log import LOG, WARN


class TagRegistry:
    """
    Registry of tag definitions

    Attributes:
        strict: Escalate every WARN attribute violation to BLOCK. When None,
            the DOCMARK_STRICT_MODE setting is used.
    """

    def __init__(self, strict: Optional[bool] = None) -> None:
        self._tags: Mapping[str, TagDefinition] = {}
        self._frozen = False
        if strict is None:
            from ..config import appsettings
            strict = appsettings.strict_mode
        self.strict = strict

    def register(self, definition: TagDefinition) -> "TagRegistry":
        """
        Register a tag definition

        Returns:
            Self for chaining

        Raises:
            RegistryFrozenError: If freeze() has been called
            DuplicateTagError: If the tag name is already registered
        """
        if self._frozen:
            raise RegistryFrozenError(definition.name)
        if definition.name in self._tags:
            raise DuplicateTagError(definition.name)
        self._tags[definition.name] = definition  # type: ignore[index]
        LOG(f"Registered tag '{definition.name}'", level=3)
        return self

    def freeze(self) -> "TagRegistry":
        """Make the registry read-only; idempotent"""
        if not self._frozen:
            self._tags = MappingProxyType(dict(self._tags))
            self._frozen = True
            LOG(f"Tag registry frozen with {len(self._tags)} tags", level=2)
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def definition_get(self, name: str) -> Optional[TagDefinition]:
        """Get full tag definition by name"""
        return self._tags.get(name)

    def has(self, name: str) -> bool:
        return name in self._tags

    @property
    def names(self) -> List[str]:
        """Registered tag names in registration order"""
        return list(self._tags.keys())

    @property
    def definitions(self) -> List[TagDefinition]:
        return list(self._tags.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def attributes_resolve(
        self,
        definition: TagDefinition,
        raw: Mapping[str, Any],
        diagnostics: List[Diagnostic],
        location: Optional[SourceLocation] = None,
    ) -> Dict[str, Any]:
        """
        Validate raw attributes and fill in defaults.

        Every schema attribute ends up in the returned map: with its
        validated value, its default, or ABSENT.

        Raises:
            AttributeValidationError: On the first BLOCK severity violation
        """
        resolved: Dict[str, Any] = {}

        for spec in definition.attributes:
            if spec.name not in raw:
                resolved[spec.name] = fallback_get(spec)
                continue
            try:
                resolved[spec.name] = attribute_validate(
                    definition.name, spec, raw[spec.name], self.strict, location
                )
            except AttributeValidationError as error:
                if error_isBlocking(error):
                    raise
                fallback = fallback_get(spec)
                resolved[spec.name] = fallback
                diagnostic_record(diagnostics, error, fallback)

        for name, value in raw.items():
            if definition.attribute_get(name) is not None:
                continue
            error = UnknownAttributeError(
                definition.name, name, value,
                severity=severity_effective(Severity.WARN, self.strict),
                location=location,
            )
            if error_isBlocking(error):
                raise error
            diagnostic_record(diagnostics, error, ABSENT)

        return resolved

    def resolve(
        self,
        name: str,
        raw_attributes: Optional[Mapping[str, Any]] = None,
        children: Optional[Sequence[Child]] = None,
        diagnostics: Optional[List[Diagnostic]] = None,
        location: Optional[SourceLocation] = None,
    ) -> ContentNode:
        """
        Resolve a tag invocation into a rendered content node.

        Args:
            name: Tag name
            raw_attributes: Attribute values as handed over by the parser
            children: Already-rendered child content
            diagnostics: List that WARN severity diagnostics are appended to
            location: Source location of the invocation, for error messages

        Returns:
            ContentNode produced by the tag's renderer

        Raises:
            UnknownTagError: If no tag with this name is registered
            UnexpectedChildrenError: If a self-closing tag receives children
            TypeMismatchError: On a BLOCK severity type violation
            InvalidEnumValueError: On a BLOCK severity enumeration violation
        """
        definition = self._tags.get(name)
        if definition is None:
            raise UnknownTagError(name, location)

        child_list: List[Child] = list(children or [])
        if definition.self_closing and child_list:
            raise UnexpectedChildrenError(name, location)

        if diagnostics is None:
            diagnostics = []
        resolved = self.attributes_resolve(definition, raw_attributes or {}, diagnostics, location)

        LOG(f"Rendering tag '{name}' with {resolved}", level=3)
        return definition.render(resolved, child_list)


def diagnostic_record(
    diagnostics: List[Diagnostic], error: AttributeValidationError, fallback: Any
) -> None:
    """Append a WARN diagnostic and report it"""
    diagnostics.append(Diagnostic(error=error, severity=Severity.WARN, fallback=fallback))
    if fallback is ABSENT:
        WARN(f"{error}")
    else:
        WARN(f"{error}; using default {fallback!r}")
