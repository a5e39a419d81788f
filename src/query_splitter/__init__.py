"""
SQL Query Splitter package for extracting annotated queries from SQL source text.
"""

from .annotations import Annotation, QueryCommand, get_prefix, parse_annotation, parse_query_text
from .errors import (
    AnnotationError,
    InvalidExecutionMode,
    InvalidName,
    LineError,
    MalformedAnnotation,
    MissingExecutionMode,
)
from .identifiers import validate_query_name
from .scanner import Query, QueryScanner, get_queries
from .syntax import CommentSyntax

__all__ = [
    'Annotation',
    'AnnotationError',
    'CommentSyntax',
    'InvalidExecutionMode',
    'InvalidName',
    'LineError',
    'MalformedAnnotation',
    'MissingExecutionMode',
    'Query',
    'QueryCommand',
    'QueryScanner',
    'get_prefix',
    'get_queries',
    'parse_annotation',
    'parse_query_text',
    'validate_query_name',
]
