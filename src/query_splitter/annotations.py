#!/usr/bin/env python3
"""
Query annotation parsing

An annotation is a single comment line that names the SQL following it and
says what kind of function should be generated for it:

    -- name: GetAuthor :one
    /* name: ListAuthors :many */
    # name: DeleteAuthor :exec

Only the comment forms enabled in the CommentSyntax are recognised.
"""

from enum import Enum
from typing import NamedTuple, Optional

from .errors import InvalidExecutionMode, MalformedAnnotation, MissingExecutionMode
from .identifiers import validate_query_name
from .syntax import CommentSyntax


class QueryCommand(Enum):
    """How the generated function executes its query"""

    ONE = ":one"
    MANY = ":many"
    EXEC = ":exec"
    EXEC_ROWS = ":execrows"
    EXEC_RESULT = ":execresult"

    @classmethod
    def from_token(cls, token: str) -> "QueryCommand":
        """
        Resolve the query type token of an annotation.

        Raises:
            InvalidExecutionMode: If the token is not a known command
        """
        token = token.strip()
        token = _COMMAND_ALIASES.get(token, token)
        try:
            return cls(token)
        except ValueError:
            raise InvalidExecutionMode(token) from None


_COMMAND_ALIASES = {
    ":exec-rows": QueryCommand.EXEC_ROWS.value,
    ":exec-result": QueryCommand.EXEC_RESULT.value,
}


class Annotation(NamedTuple):
    """Name and command declared by an annotation line"""

    name: str
    command: QueryCommand


def get_prefix(line: str, syntax: CommentSyntax) -> str:
    """
    Return the annotation marker a line has to start with.

    Args:
        line: A raw source line
        syntax: Enabled comment forms

    Returns:
        '-- name:', '/* name:' or '# name:', or an empty string when the line
        does not open with an enabled comment form
    """
    if line.startswith("--"):
        return "-- name:" if syntax.dash else ""
    if line.startswith("/*"):
        return "/* name:" if syntax.slash_star else ""
    if line.startswith("#"):
        return "# name:" if syntax.hash else ""
    return ""


def is_annotation(line: str, syntax: CommentSyntax) -> bool:
    """True if the line starts with an enabled annotation marker"""
    prefix = get_prefix(line, syntax)
    return prefix != "" and line.startswith(prefix)


def parse_annotation(line: str, syntax: CommentSyntax) -> Optional[Annotation]:
    """
    Parse one annotation line.

    Args:
        line: The candidate line
        syntax: Enabled comment forms

    Returns:
        The declared Annotation, or None if the line is not an annotation

    Raises:
        MissingExecutionMode: If the line only declares a name
        MalformedAnnotation: If the line has the wrong number of parts
        InvalidExecutionMode: If the query type is unknown
        InvalidName: If the query name is not a valid identifier
    """
    if not is_annotation(line, syntax):
        return None

    parts = line.strip().split()
    if line.startswith("/*"):
        if parts[-1] != "*/":
            raise MalformedAnnotation(line)
        parts = parts[:-1]

    # marker and name only
    if len(parts) in (2, 3):
        raise MissingExecutionMode(line)
    if len(parts) != 4:
        raise MalformedAnnotation(line)

    name, token = parts[2], parts[3]
    command = QueryCommand.from_token(token)
    validate_query_name(name)
    return Annotation(name, command)


def parse_query_text(text: str, syntax: CommentSyntax) -> Optional[Annotation]:
    """
    Find the annotation of a single query's text.

    Lines that are not annotations are skipped; the first annotation line
    decides the result.

    Args:
        text: The query text, annotation included
        syntax: Enabled comment forms

    Returns:
        The first Annotation found, or None if the text has none

    Raises:
        AnnotationError: If the first annotation line is malformed
    """
    for line in text.split("\n"):
        if is_annotation(line, syntax):
            return parse_annotation(line, syntax)
    return None
