#!/usr/bin/env python3
"""
Query name validation

A query name ends up as a function name in generated code, so it has to be a
plain identifier: a letter or underscore first, then letters, digits or
underscores.
"""

from .errors import InvalidName


def validate_query_name(name: str) -> None:
    """
    Check that a query name is a valid identifier.

    Args:
        name: The name declared in an annotation line

    Raises:
        InvalidName: If the name is empty or contains a disallowed character
    """
    if not name:
        raise InvalidName(name)

    for i, char in enumerate(name):
        is_letter = char.isalpha() or char == "_"
        if i == 0 and not is_letter:
            raise InvalidName(name)
        if not (is_letter or char.isdecimal()):
            raise InvalidName(name)
