#!/usr/bin/env python3
"""
Errors raised while reading query annotations.

All of them are recoverable per annotation: the scanner records them as
LineError entries and keeps going.
"""

from dataclasses import dataclass


class AnnotationError(ValueError):
    """Base class for a malformed query annotation"""

    def __init__(self, message: str, value: str = ""):
        super().__init__(message)
        self.value = value

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args and self.value == other.value

    def __hash__(self):
        return hash((type(self), self.args, self.value))


class InvalidName(AnnotationError):
    """The declared query name is not a valid identifier"""

    def __init__(self, name: str):
        super().__init__(f'invalid query name "{name}"', name)


class MissingExecutionMode(AnnotationError):
    """The annotation declares a name but no query type"""

    def __init__(self, line: str):
        super().__init__(
            "missing query type [':one', ':many', ':exec', ':execrows', ':execresult']: "
            f"{line}",
            line,
        )


class MalformedAnnotation(AnnotationError):
    """The annotation has the wrong number of parts"""

    def __init__(self, line: str):
        super().__init__(f"invalid query comment: {line}", line)


class InvalidExecutionMode(AnnotationError):
    """The query type token is not one of the known commands"""

    def __init__(self, token: str):
        super().__init__(f"invalid query type: {token}", token)


@dataclass(frozen=True)
class LineError:
    """An annotation error tied to the zero-based line it occurred on"""

    line: int
    error: AnnotationError

    @property
    def kind(self) -> str:
        return type(self.error).__name__

    def __str__(self) -> str:
        return f"line {self.line}: {self.error}"
