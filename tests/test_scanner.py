"""
Tests for the query block scanner
"""

import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from query_splitter import (
    CommentSyntax,
    InvalidExecutionMode,
    InvalidName,
    LineError,
    MissingExecutionMode,
    Query,
    QueryCommand,
    QueryScanner,
    get_queries,
)


ALL = CommentSyntax.all()


class TestGetQueries:
    """Test cases for get_queries"""

    def test_empty_source(self):
        """An empty source has no queries and no errors"""
        assert get_queries("", ALL) == ([], [])

    def test_source_without_annotations(self):
        """Plain SQL is ignored"""
        queries, errors = get_queries("SELECT 1;\nSELECT 2;\n", ALL)

        assert queries == []
        assert errors == []

    def test_two_queries(self):
        """A query is emitted once the next annotation closes it"""
        src = "-- name: get_user :one\nSELECT 1;\n-- name: get_all :many\nSELECT 2;\n"

        queries, errors = get_queries(src, ALL)

        assert errors == []
        assert queries == [Query(name="get_user", sql=" SELECT 1;", line=0, command=QueryCommand.ONE)]

    def test_trailing_query_dropped_by_default(self):
        """The last query is not emitted without a following annotation"""
        queries, errors = get_queries("-- name: get_user :one\nSELECT 1;\n", ALL)

        assert queries == []
        assert errors == []

    def test_flush_trailing(self):
        """flush_trailing emits the query still open at end of input"""
        src = "-- name: get_user :one\nSELECT 1;\n-- name: get_all :many\nSELECT 2;\n"

        queries, errors = get_queries(src, ALL, flush_trailing=True)

        assert errors == []
        assert [q.name for q in queries] == ["get_user", "get_all"]
        assert queries[1].sql == " SELECT 2; "
        assert queries[1].line == 2
        assert queries[1].command is QueryCommand.MANY

    def test_multiline_sql_joined_with_spaces(self):
        """Line breaks are replaced by a single space"""
        src = (
            "-- name: ListAuthors :many\n"
            "SELECT id, name\n"
            "FROM authors\n"
            "ORDER BY name;\n"
            "-- name: Next :exec"
        )

        queries, _ = get_queries(src, ALL)

        assert queries[0].sql == " SELECT id, name FROM authors ORDER BY name;"

    def test_lines_before_first_annotation_discarded(self):
        """SQL ahead of the first annotation belongs to no query"""
        src = "SET search_path = app;\n-- name: A :one\nSELECT 1;\n-- name: B :one\n"

        queries, _ = get_queries(src, ALL)

        assert queries == [Query(name="A", sql=" SELECT 1;", line=1, command=QueryCommand.ONE)]

    def test_annotation_without_sql_emits_nothing(self):
        """Back-to-back annotations leave the first one empty"""
        src = "-- name: Empty :exec\n-- name: Full :one\nSELECT 1;\n-- name: End :exec\n"

        queries, errors = get_queries(src, ALL)

        assert errors == []
        assert [q.name for q in queries] == ["Full"]

    def test_invalid_name(self):
        """A bad name is reported and its SQL is discarded"""
        queries, errors = get_queries("-- name: bad-name :one\nSELECT 1;\n", ALL)

        assert queries == []
        assert len(errors) == 1
        assert errors[0].line == 0
        assert isinstance(errors[0].error, InvalidName)
        assert errors[0].kind == "InvalidName"

    def test_missing_mode(self):
        """An annotation without a query type is reported"""
        queries, errors = get_queries("-- name: get_user\nSELECT 1;\n", ALL)

        assert queries == []
        assert len(errors) == 1
        assert errors[0].line == 0
        assert errors[0].kind == "MissingExecutionMode"
        assert isinstance(errors[0].error, MissingExecutionMode)

    def test_invalid_mode(self):
        """An unknown query type is reported"""
        queries, errors = get_queries("-- name: get_user :bogus\nSELECT 1;\n", ALL)

        assert queries == []
        assert len(errors) == 1
        assert isinstance(errors[0].error, InvalidExecutionMode)

    def test_bad_annotation_does_not_stop_scan(self):
        """Good queries around a bad annotation are still returned"""
        src = (
            "-- name: First :one\n"
            "SELECT 1;\n"
            "-- name: 2nd :one\n"
            "SELECT 2;\n"
            "-- name: Third :many\n"
            "SELECT 3;\n"
            "-- name: Fourth :exec\n"
            "DELETE FROM t;\n"
        )

        queries, errors = get_queries(src, ALL)

        assert [q.name for q in queries] == ["First", "Third"]
        assert queries[0].sql == " SELECT 1;"
        assert [e.line for e in errors] == [2]
        assert str(errors[0]) == 'line 2: invalid query name "2nd"'

    def test_errors_in_line_order(self):
        """Errors are collected in the order they occur"""
        src = "-- name: a :bogus\nx\n-- name: b\ny\n/* name: c :one d */\n"

        _, errors = get_queries(src, ALL)

        assert [(e.line, e.kind) for e in errors] == [
            (0, "InvalidExecutionMode"),
            (2, "MissingExecutionMode"),
            (4, "MalformedAnnotation"),
        ]

    def test_mixed_dialects(self):
        """All enabled comment forms open queries"""
        src = (
            "-- name: A :one\n"
            "SELECT 1;\n"
            "/* name: B :many */\n"
            "SELECT 2;\n"
            "# name: C :execresult\n"
            "INSERT INTO t VALUES (1);\n"
            "-- name: End :exec\n"
        )

        queries, errors = get_queries(src, ALL)

        assert errors == []
        assert [(q.name, q.command, q.line) for q in queries] == [
            ("A", QueryCommand.ONE, 0),
            ("B", QueryCommand.MANY, 2),
            ("C", QueryCommand.EXEC_RESULT, 4),
        ]

    @pytest.mark.parametrize("disabled,line", [
        ("dash", "-- name: Hidden :one"),
        ("hash", "# name: Hidden :one"),
        ("slash_star", "/* name: Hidden :one */"),
    ])
    def test_disabled_dialect_is_plain_sql(self, disabled, line):
        """Annotations in a disabled dialect become part of the SQL text"""
        flags = {"dash": True, "hash": True, "slash_star": True}
        flags[disabled] = False
        syntax = CommentSyntax(**flags)
        opener = "# name:" if disabled != "hash" else "-- name:"
        src = f"{opener} Open :one\nSELECT 1;\n{line}\nSELECT 2;\n{opener} Close :exec\n"

        queries, errors = get_queries(src, syntax)

        assert errors == []
        assert [q.name for q in queries] == ["Open"]
        assert queries[0].sql == f" SELECT 1; {line} SELECT 2;"

    def test_idempotent(self):
        """Scanning the same input twice gives identical results"""
        src = "-- name: A :one\nSELECT 1;\n-- name: bad-name :one\nx\n-- name: B :many\nSELECT 2;\n-- name: C :exec\n"

        assert get_queries(src, ALL) == get_queries(src, ALL)

    def test_separate_scans_with_errors_compare_equal(self):
        """Errors from two independent scans of the same input are equal"""
        src = "-- name: bad-name :one\nx\n-- name: b\ny\n-- name: c :nope\n"

        first = QueryScanner(ALL).scan(src)
        second = QueryScanner(ALL).scan(src)

        assert first == second
        assert first[1][0] is not second[1][0]
        assert len(first[1]) == 3

    def test_records_are_immutable(self):
        """Returned queries cannot be modified"""
        queries, _ = get_queries("-- name: A :one\nSELECT 1;\n-- name: B :one\n", ALL)

        with pytest.raises(AttributeError):
            queries[0].name = "other"


class TestQueryScanner:
    """Test cases for the QueryScanner class"""

    def setup_method(self):
        """Set up test fixtures"""
        self.scanner = QueryScanner()

    def test_default_syntax(self):
        """The scanner defaults to '--' and '/* */' annotations"""
        assert self.scanner.syntax == CommentSyntax()

    def test_hash_disabled_by_default(self):
        """'#' lines are SQL text under the default syntax"""
        src = "-- name: A :one\n# name: B :one\n-- name: C :one\n"

        queries, _ = self.scanner.scan(src)

        assert queries == [Query(name="A", sql=" # name: B :one", line=0, command=QueryCommand.ONE)]

    def test_logs_errors(self, caplog):
        """Annotation errors are logged as warnings"""
        with caplog.at_level(logging.WARNING, logger="query_splitter.scanner"):
            self.scanner.scan("-- name: get_user\nSELECT 1;\n")

        assert "Invalid annotation at line 0" in caplog.text

    def test_line_error_string(self):
        """LineError renders as 'line N: message'"""
        _, errors = self.scanner.scan("-- name: x :nope\n")

        assert errors == [LineError(line=0, error=errors[0].error)]
        assert str(errors[0]) == "line 0: invalid query type: :nope"
