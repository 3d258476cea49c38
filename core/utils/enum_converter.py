"""
Enum conversion utilities.

Provides standardized methods for converting between enums and strings.
Parsing is exact: unknown values are an error, never a silent default.
"""

from typing import Any, List, Optional, Type, TypeVar

T = TypeVar("T")


def allowed_values(enum_class: Type[T]) -> List[str]:
    """
    List the string values of an enum in declaration order.

    Example:
        >>> allowed_values(FitMode)
        ['cover', 'contain', 'fill']
    """
    return [member.value for member in enum_class]


def parse_enum(value: Any, enum_class: Type[T], default: Optional[T]) -> Optional[T]:
    """
    Parse value to enum, falling back to default only when value is missing.

    Args:
        value: Value to parse (string, enum, or None)
        enum_class: Enum class to parse to
        default: Value returned for None or empty string

    Returns:
        Parsed enum value or default

    Raises:
        ValueError: If value is non-empty and not one of the enum values
            (matching is case-sensitive)

    Example:
        >>> parse_enum("contain", FitMode, FitMode.COVER)
        <FitMode.CONTAIN: 'contain'>
        >>> parse_enum("", FitMode, FitMode.COVER)
        <FitMode.COVER: 'cover'>
    """
    # Already an enum instance
    if isinstance(value, enum_class):
        return value

    # None or missing value
    if value is None or value == "":
        return default

    if value not in allowed_values(enum_class):
        raise ValueError(f"{value!r} is not a valid {enum_class.__name__}")
    return enum_class(value)

