"""Enum conversion utilities"""

from enum import Enum
from typing import TypeVar, Type, Optional, Any

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)

class EnumHelper:
    """
    Utility class for working with Enums:
    - Parse strings back to enum members (case-insensitive)
    - Coerce user input (enum or name) without raising
    """

    @staticmethod
    def from_string(enum_class: Type[E], name: str, case_insensitive: bool = True,
                    default: Optional[E] = None) -> Optional[E]:
        """
        Parse string to Enum member.

        Args:
            enum_class: Enum class to parse into
            name: String name (case-insensitive by default)
            case_insensitive: If True, matches ignoring case
            default: Return value if not found (None = raise)

        Returns:
            Enum member or default if provided
        """
        if not issubclass(enum_class, Enum):
            raise TypeError(f"{enum_class} is not an Enum class")

        if case_insensitive:
            name = name.upper()

        for member in enum_class:
            if (member.name.upper() if case_insensitive else member.name) == name:
                return member

        if default is not None:
            return default
        raise ValueError(f"Invalid {enum_class.__name__} name: {name}")

    @staticmethod
    def coerce(enum_class: Type[E], value: Any) -> Optional[E]:
        """
        Accept an enum member or its (case-insensitive) name.

        Returns None instead of raising, so validators can map the
        failure to their own error code.
        """
        if isinstance(value, enum_class):
            return value
        if isinstance(value, str):
            try:
                return EnumHelper.from_string(enum_class, value)
            except ValueError:
                return None
        return None
