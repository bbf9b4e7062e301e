"""
Naming convention utilities for Schema Scaffold.

This module converts database identifiers (snake_case) into the class and
property names used by the generated code.
"""

from typing import Optional


SEPARATOR = "_"


def to_camel_or_pascal(value: str, capitalize_first: bool) -> str:
    """
    Convert a snake_case identifier to camelCase or PascalCase.

    Every character directly after a run of underscores is upper-cased, every
    other character is lower-cased, and the first character is upper-cased
    when ``capitalize_first`` is set.

    Args:
        value: The identifier to convert
        capitalize_first: Produce PascalCase instead of camelCase

    Returns:
        The converted identifier; empty input is returned unchanged

    Example:
        >>> to_camel_or_pascal("order_item", True)
        'OrderItem'
        >>> to_camel_or_pascal("ORDER__ITEM", False)
        'orderItem'
    """
    if not value:
        return value

    chars = []
    next_upper = False
    for char in value:
        if char == SEPARATOR:
            next_upper = True
            continue
        if next_upper:
            chars.append(char.upper())
            next_upper = False
        else:
            chars.append(char.lower())

    if capitalize_first and chars:
        chars[0] = chars[0].upper()
    return "".join(chars)


def to_camel_case(value: str) -> str:
    """Convert snake_case to camelCase."""
    return to_camel_or_pascal(value, False)


def to_pascal_case(value: str) -> str:
    """Convert snake_case to PascalCase."""
    return to_camel_or_pascal(value, True)


def lower_first(value: str) -> str:
    """Lower-case only the first character."""
    if not value:
        return value
    return value[0].lower() + value[1:]


def upper_first(value: str) -> str:
    """Upper-case only the first character."""
    if not value:
        return value
    return value[0].upper() + value[1:]


def is_blank(value: Optional[str]) -> bool:
    """Check for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


class NamingConventions:
    """
    Centralized naming convention utilities.

    This class provides consistent naming across the codebase.
    """

    @staticmethod
    def table_to_entity(table_name: str) -> str:
        """Convert table name to entity class name."""
        return to_pascal_case(table_name.lower())

    @staticmethod
    def table_to_variable(table_name: str) -> str:
        """Convert table name to entity variable name."""
        return to_camel_case(table_name.lower())

    @staticmethod
    def column_to_property(column_name: str) -> str:
        """Convert column name to property name."""
        return to_camel_case(column_name)
