#!/usr/bin/env python3
"""
Comment syntax configuration

Selects which comment forms may open a query annotation. Engine presets are
taken from the comment openers sqlglot declares for each SQL dialect, so a
MySQL source gets '#' annotations while a PostgreSQL source does not.
"""

import logging
from dataclasses import dataclass

from sqlglot import Dialect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentSyntax:
    """Which comment openers are recognised as annotation lines"""

    dash: bool = True
    hash: bool = False
    slash_star: bool = True

    @classmethod
    def all(cls) -> "CommentSyntax":
        """Enable every supported comment form"""
        return cls(dash=True, hash=True, slash_star=True)

    @classmethod
    def for_dialect(cls, dialect: str) -> "CommentSyntax":
        """
        Build the comment syntax used by a SQL engine.

        Args:
            dialect: sqlglot dialect name ('postgres', 'mysql', 'sqlite', etc.)

        Returns:
            CommentSyntax with the flags the dialect's tokenizer supports

        Raises:
            ValueError: If sqlglot does not know the dialect
        """
        comments = Dialect.get_or_raise(dialect).tokenizer_class.COMMENTS

        openers = set()
        for comment in comments:
            if isinstance(comment, tuple):
                openers.add(comment[0])
            else:
                openers.add(comment)

        syntax = cls(
            dash="--" in openers,
            hash="#" in openers,
            slash_star="/*" in openers,
        )
        logger.debug(f"Comment syntax for dialect '{dialect}': {syntax}")
        return syntax
