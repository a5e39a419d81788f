#!/usr/bin/env python3
"""
Query block scanner

Splits a source text holding several annotated SQL queries into Query
records. The SQL itself is not parsed: every line after an annotation, up to
the next annotation, belongs to that query.

Bad annotations do not stop the scan. Each one is recorded as a LineError and
the lines following it are skipped until the next valid annotation.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .annotations import QueryCommand, is_annotation, parse_annotation
from .errors import AnnotationError, LineError
from .syntax import CommentSyntax


@dataclass(frozen=True)
class Query:
    """A named SQL query extracted from a source text"""

    name: str
    sql: str
    line: int
    command: Optional[QueryCommand] = None


class _PendingQuery:
    """Query being accumulated until the next annotation line"""

    def __init__(self, name: str = "", line: int = 0, command: Optional[QueryCommand] = None):
        self.name = name
        self.line = line
        self.command = command
        self.lines: List[str] = []

    @property
    def sql(self) -> str:
        # every line is preceded by a single space
        return "".join(" " + line for line in self.lines)

    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.lines)

    def to_query(self) -> Query:
        return Query(name=self.name, sql=self.sql, line=self.line, command=self.command)


class QueryScanner:
    """Extracts annotated queries from SQL source text"""

    def __init__(self, syntax: Optional[CommentSyntax] = None):
        """
        Initialize the scanner.

        Args:
            syntax: Comment forms recognised as annotations (defaults to
                '--' and '/* */')
        """
        self.syntax = syntax if syntax is not None else CommentSyntax()
        self.logger = logging.getLogger(__name__)

    def scan(self, src: str, flush_trailing: bool = False) -> Tuple[List[Query], List[LineError]]:
        """
        Scan a source text for annotated queries.

        Args:
            src: The full source text
            flush_trailing: Also emit the query still open at end of input.
                By default it is dropped, since a query is only emitted when
                the next annotation line closes it.

        Returns:
            Tuple of (queries in source order, annotation errors in line order)
        """
        queries: List[Query] = []
        errors: List[LineError] = []
        pending = _PendingQuery()

        for i, line in enumerate(src.split("\n")):
            if is_annotation(line, self.syntax):
                name, command = "", None
                try:
                    annotation = parse_annotation(line, self.syntax)
                    if annotation is not None:
                        name, command = annotation
                        self.logger.debug(f"Found query '{name}' ({command.value}) at line {i}")
                except AnnotationError as e:
                    self.logger.warning(f"Invalid annotation at line {i}: {e}")
                    errors.append(LineError(line=i, error=e))

                if pending.is_complete():
                    queries.append(pending.to_query())
                pending = _PendingQuery(name=name, line=i, command=command)
            elif pending.name:
                pending.lines.append(line)

        if flush_trailing and pending.is_complete():
            queries.append(pending.to_query())

        self.logger.info(f"Found {len(queries)} queries and {len(errors)} annotation errors")
        return queries, errors


def get_queries(
    src: str, syntax: CommentSyntax, flush_trailing: bool = False
) -> Tuple[List[Query], List[LineError]]:
    """Scan a source text with the given comment syntax. See QueryScanner.scan."""
    return QueryScanner(syntax).scan(src, flush_trailing=flush_trailing)
