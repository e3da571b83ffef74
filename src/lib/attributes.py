"""
Attribute coercion and validation

Turns the raw attribute values handed over by the document parser into
typed values that satisfy a tag's AttributeSpec.

Coercion rules:
    - string: str only
    - number: finite int/float (bool excluded) or a numeric string
    - boolean: bool, or "true"/"false"/"yes"/"no"/"1"/"0" (any case)

Example:
    >>> spec = AttributeSpec("width", ValueType.NUMBER)
    >>> value_coerce("800", spec.value_type)
    800
"""

import math
from typing import Any, Optional

from ..models.tags import ABSENT, AttributeSpec, Severity, SourceLocation, ValueType
from .errors import AttributeValidationError, InvalidEnumValueError, TypeMismatchError

TRUE_STRINGS = frozenset({"true", "yes", "1"})
FALSE_STRINGS = frozenset({"false", "no", "0"})


class CoercionError(ValueError):
    """Raw value cannot be read as the requested value type"""
    pass


def value_coerce(value: Any, value_type: ValueType) -> Any:
    """
    Coerce a raw attribute value to the given value type.

    Args:
        value: Raw value from the parsed document
        value_type: Target semantic type

    Returns:
        Coerced value

    Raises:
        CoercionError: If the value does not coerce
    """
    if value_type is ValueType.STRING:
        if isinstance(value, str):
            return value
        raise CoercionError(value)

    if value_type is ValueType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in TRUE_STRINGS:
                return True
            if lowered in FALSE_STRINGS:
                return False
        raise CoercionError(value)

    # ValueType.NUMBER
    if isinstance(value, bool):
        raise CoercionError(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError as e:
            raise CoercionError(value) from e
    else:
        raise CoercionError(value)

    # nan and inf are not usable attribute values
    if isinstance(number, float) and not math.isfinite(number):
        raise CoercionError(value)
    return number


def attribute_validate(
    tag: str,
    spec: AttributeSpec,
    value: Any,
    strict: bool = False,
    location: Optional[SourceLocation] = None,
) -> Any:
    """
    Coerce and check one supplied attribute value against its spec.

    Args:
        tag: Name of the tag the attribute belongs to
        spec: Attribute schema entry
        value: Raw supplied value
        strict: Escalate WARN severity to BLOCK
        location: Source location for error messages

    Returns:
        The coerced, allowed value

    Raises:
        TypeMismatchError: If the value does not coerce to spec.value_type
        InvalidEnumValueError: If the value is outside spec.allowed

    Both errors carry the effective severity; the caller decides whether
    to abort (BLOCK) or fall back to the default (WARN).
    """
    severity = severity_effective(spec.severity, strict)

    try:
        coerced = value_coerce(value, spec.value_type)
    except CoercionError:
        raise TypeMismatchError(
            tag, spec.name, value, spec.value_type.value,
            allowed=spec.allowed, severity=severity, location=location,
        ) from None

    if spec.allowed is not None and coerced not in spec.allowed:
        raise InvalidEnumValueError(
            tag, spec.name, value,
            allowed=spec.allowed, severity=severity, location=location,
        )

    return coerced


def severity_effective(severity: Severity, strict: bool) -> Severity:
    return Severity.BLOCK if strict else severity


def fallback_get(spec: AttributeSpec) -> Any:
    """Value an attribute resolves to when omitted or invalid under WARN"""
    return spec.default if spec.default_has() else ABSENT


def error_isBlocking(error: AttributeValidationError) -> bool:
    return error.severity is Severity.BLOCK
