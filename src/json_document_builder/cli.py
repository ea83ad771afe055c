"""Command line interface for editing and inspecting JSON documents."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from typing import Optional

from .builder import JsonBuilder, RootKind
from .errors import JsonBuilderError
from .kinds import NodeKind
from .rules import verify


class CLIError(RuntimeError):
    """Raised when command line arguments cannot be interpreted."""


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="json-document-builder",
        description="Apply staged path edits to JSON documents and inspect their paths",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    edit = commands.add_parser("edit", help="Apply set/remove edits and print the result")
    _add_input_arguments(edit)
    edit.add_argument(
        "--set",
        dest="sets",
        action="append",
        default=[],
        metavar="PATH=VALUE",
        help="Set a text value at PATH",
    )
    edit.add_argument(
        "--typed",
        action="append",
        default=[],
        metavar="PATH=KIND:VALUE",
        help="Set VALUE coerced to KIND (e.g. Integer, Boolean, JsonArray) at PATH",
    )
    edit.add_argument(
        "--remove",
        dest="removals",
        action="append",
        default=[],
        metavar="PATH",
        help="Remove the node at PATH",
    )
    edit.add_argument("--output", help="Write the result to this file instead of stdout")
    edit.add_argument("--compact", action="store_true", help="Print compact JSON")

    paths = commands.add_parser("paths", help="List the leaf paths of a document")
    _add_input_arguments(paths)
    paths.add_argument("--values", action="store_true", help="Print each path with its value")

    check = commands.add_parser("verify", help="Check a document against a rule book")
    check.add_argument("rule_book", help="JSON or YAML rule book")
    check.add_argument("document", help="JSON document to check")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "verify":
            return _run_verify(args)
        builder = JsonBuilder(RootKind.ARRAY if args.array else RootKind.OBJECT)
        builder.from_file(args.input)
        if args.command == "paths":
            return _run_paths(args, builder)
        return _run_edit(args, builder)
    except (JsonBuilderError, CLIError) as exc:
        parser.error(str(exc))
        return 2


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="Path to a JSON document")
    parser.add_argument("--array", action="store_true", help="The document root is an array")


def _run_edit(args: argparse.Namespace, builder: JsonBuilder) -> int:
    for assignment in args.sets:
        path, value = _split_assignment(assignment)
        builder.update(path, value)
    for assignment in args.typed:
        path, typed_value = _split_assignment(assignment)
        kind_name, separator, value = typed_value.partition(":")
        if not separator:
            raise CLIError(f"Expected PATH=KIND:VALUE, got {assignment!r}")
        builder.update(path, value, NodeKind.from_name(kind_name))
    for path in args.removals:
        builder.remove(path)

    if args.output:
        builder.write_to(args.output)
        return 0
    print(builder.to_text() if args.compact else builder.to_pretty_text())
    return 0


def _run_paths(args: argparse.Namespace, builder: JsonBuilder) -> int:
    if args.values:
        for path, value in builder.extract_path_value_map().items():
            print(f"{path} : {value}")
    else:
        for path in builder.extract_paths():
            print(path)
    return 0


def _run_verify(args: argparse.Namespace) -> int:
    failures = verify(args.rule_book, args.document)
    for failure in failures:
        print(failure)
    return 1 if failures else 0


def _split_assignment(assignment: str) -> tuple[str, str]:
    path, separator, value = assignment.partition("=")
    if not separator or not path:
        raise CLIError(f"Expected PATH=VALUE, got {assignment!r}")
    return path, value


if __name__ == "__main__":
    raise SystemExit(main())
