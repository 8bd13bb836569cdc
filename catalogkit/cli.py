"""Command line tool for managing categories."""

from __future__ import annotations

import argparse
import sqlite3
import sys

from catalogkit.database import CategoryStore, create_schema

_DEFAULT_DATABASE = "./data.db"


def open_database(path: str = _DEFAULT_DATABASE) -> sqlite3.Connection:
    """Open the SQLite database at the path, creating its tables if needed."""
    connection = sqlite3.connect(path)
    create_schema(connection)
    return connection


def build_parser() -> argparse.ArgumentParser:
    """The argument parser with the category commands."""
    parser = argparse.ArgumentParser(prog="catalogkit", description="Manage course categories.")
    parser.add_argument("--database", default=_DEFAULT_DATABASE, help="path of the SQLite database")
    parser.add_argument("-t", "--toggle", action="store_true", help="toggle option")
    commands = parser.add_subparsers(dest="command")

    category = commands.add_parser("category", help="work with categories")
    category_commands = category.add_subparsers(dest="action")

    create = category_commands.add_parser(
        "create", help="create a new category", description="Create a new category"
    )
    create.add_argument("-n", "--name", help="name of the category")
    create.add_argument("-d", "--description", help="description of the category")

    category_commands.add_parser("list", help="list categories")
    return parser


def _run_create(args: argparse.Namespace) -> int:
    given = {"name": args.name, "description": args.description}
    missing = [flag for flag, value in given.items() if value is None]
    if missing and len(missing) < len(given):
        print(
            "Error: if any flags in the group [name description] are set they must all "
            f"be set; missing [{' '.join(missing)}]",
            file=sys.stderr,
        )
        return 1
    connection = open_database(args.database)
    try:
        CategoryStore(connection).create(args.name or "", args.description or "")
    except sqlite3.Error as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    finally:
        connection.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool and return its exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0
    if args.action is None:
        parser.parse_args([*(["--database", args.database]), "category", "--help"])
        return 0
    if args.action == "create":
        return _run_create(args)
    print("list called")
    return 0