#!/usr/bin/env python3
"""
Command-line interface for SQL Query Splitter

Reads one .sql file, or every .sql file in a folder, and lists the annotated
queries found in each.

Usage:
    sql-query-splitter <input_path> [output_folder] [--dialect mysql] [--report]

Example:
    sql-query-splitter queries/ build/queries --dialect postgres
    sql-query-splitter queries/authors.sql --report
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .scanner import QueryScanner
from .syntax import CommentSyntax

logger = logging.getLogger(__name__)


def build_syntax(args: argparse.Namespace) -> CommentSyntax:
    """Apply the per-flag overrides on top of the dialect preset."""
    syntax = CommentSyntax.for_dialect(args.dialect)
    overrides = {
        field: getattr(args, field)
        for field in ("dash", "hash", "slash_star")
        if getattr(args, field) is not None
    }
    return dataclasses.replace(syntax, **overrides)


def collect_sql_files(input_path: Path) -> List[Path]:
    """Return the .sql files to process for a file or folder argument."""
    if input_path.is_file():
        return [input_path]
    if input_path.is_dir():
        return sorted(input_path.glob("*.sql"))
    raise FileNotFoundError(f"Input path does not exist: {input_path}")


def extract_file(file_path: Path, scanner: QueryScanner, flush_trailing: bool) -> Dict[str, Any]:
    """
    Scan a single SQL file.

    Args:
        file_path: Path to the .sql file
        scanner: Scanner configured with the comment syntax to use
        flush_trailing: Whether the last query of the file is emitted

    Returns:
        Dictionary with 'queries' and 'errors' lists ready for JSON output
    """
    with open(file_path, "r", encoding="utf-8") as f:
        content = f.read()
    logger.info(f"Successfully read file: {file_path}")

    queries, errors = scanner.scan(content, flush_trailing=flush_trailing)
    return {
        "queries": [
            {
                "name": query.name,
                "command": query.command.value if query.command else None,
                "line": query.line,
                "sql": query.sql,
            }
            for query in queries
        ],
        "errors": [
            {"line": error.line, "kind": error.kind, "message": str(error.error)}
            for error in errors
        ],
    }


def print_report(results: Dict[str, Dict[str, Any]]) -> None:
    """Print a readable listing of the extracted queries."""
    for file_name, result in results.items():
        print(f"\n📄 {file_name}")
        print(f"   Queries: {len(result['queries'])}")
        for query in result["queries"]:
            print(f"   - {query['name']} {query['command']} (line {query['line']})")
        if result["errors"]:
            print(f"   Errors: {len(result['errors'])}")
            for error in result["errors"]:
                print(f"   ❌ line {error['line']}: {error['message']}")


def write_results(results: Dict[str, Dict[str, Any]], output_folder: Path) -> None:
    """Write one <stem>.json file per input file."""
    output_folder.mkdir(parents=True, exist_ok=True)
    for file_name, result in results.items():
        output_file = output_folder / f"{Path(file_name).stem}.json"
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2)
        logger.info(f"Written {len(result['queries'])} queries to {output_file}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main function to handle command line arguments and run the scanner."""
    parser = argparse.ArgumentParser(
        description="Extract annotated queries from SQL files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Annotation format:
  -- name: GetAuthor :one
  /* name: ListAuthors :many */
  # name: DeleteAuthor :exec
        """,
    )

    parser.add_argument(
        "input_path",
        help="Path to a .sql file or a folder containing .sql files",
    )

    parser.add_argument(
        "output_folder",
        nargs="?",
        help="Output folder for one JSON file per input file",
    )

    parser.add_argument(
        "--dialect",
        default="postgres",
        help="SQL dialect whose comment syntax is used (default: postgres)",
    )

    parser.add_argument(
        "--dash", action=argparse.BooleanOptionalAction, default=None,
        help="Recognise '-- name:' annotations",
    )

    parser.add_argument(
        "--hash", action=argparse.BooleanOptionalAction, default=None,
        help="Recognise '# name:' annotations",
    )

    parser.add_argument(
        "--slash-star", action=argparse.BooleanOptionalAction, default=None,
        help="Recognise '/* name: ... */' annotations",
    )

    parser.add_argument(
        "--compat", action="store_true",
        help="Drop the last query of each file when no annotation follows it",
    )

    parser.add_argument(
        "--report", action="store_true",
        help="Show formatted report instead of JSON output",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        syntax = build_syntax(args)
        sql_files = collect_sql_files(Path(args.input_path))
    except FileNotFoundError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not sql_files:
        logger.warning(f"No .sql files found in: {args.input_path}")

    scanner = QueryScanner(syntax)
    results = {}
    error_count = 0
    for file_path in sql_files:
        result = extract_file(file_path, scanner, flush_trailing=not args.compat)
        results[file_path.name] = result
        for error in result["errors"]:
            # editor-style one-based line numbers
            print(f"{file_path}:{error['line'] + 1}: {error['message']}", file=sys.stderr)
        error_count += len(result["errors"])

    if args.output_folder:
        write_results(results, Path(args.output_folder))
    elif args.report:
        print_report(results)
    else:
        print(json.dumps(results, indent=2))

    if error_count:
        sys.exit(1)


if __name__ == "__main__":
    main()
