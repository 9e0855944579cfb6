"""Enum conversion utilities"""

from enum import Enum
from typing import Any, List, Type, TypeVar

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Utility class for working with Enums:
    - Parse config strings to enum members (case-insensitive, '-' == '_')
    - List member names for error messages and API responses
    """

    @staticmethod
    def to_enum(enum_class: Type[E], value: Any) -> E:
        """Convert string or member to enum instance"""
        if isinstance(value, enum_class):
            return value
        if isinstance(value, str):
            try:
                return enum_class[value.strip().upper().replace("-", "_")]
            except KeyError:
                raise ValueError(
                    f"Invalid enum value '{value}' for {enum_class.__name__} "
                    f"(expected one of: {', '.join(EnumHelper.list_names(enum_class, lowercase=True))})"
                )
        raise TypeError(f"Expected str or {enum_class.__name__}, got {type(value)}")

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        """
        List all Enum member names.

        Args:
            enum_class: Enum class to inspect
            lowercase: Return lowercase names

        Returns:
            List of member names (strings)
        """
        if not issubclass(enum_class, Enum):
            raise TypeError(f"{enum_class} is not an Enum class")

        if lowercase:
            return [member.name.lower() for member in enum_class]
        return [member.name for member in enum_class]

