"""prefkit CLI entry points.
This module exposes commands to inspect and edit a plist preferences file.
It maps argparse commands onto store calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import datetime
import json
from pathlib import Path
from typing import Any, Sequence

from core.config import PrefkitConfig
from core.constants import CLI_VALUE_TYPES, FALSE_FLAG_VALUES, STORE_PATH_ENV, TRUE_FLAG_VALUES
from core.errors import PrefkitError
from core.types import StorableValue
from store.plist_store import PlistFileStore


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="prefkit", description="prefkit preferences CLI")
    parser.add_argument("--store", help=f"Override {STORE_PATH_ENV} for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="Print every stored key and value")
    get_parser = subparsers.add_parser("get", help="Print one stored value")
    get_parser.add_argument("key", help="Preference key")
    set_parser = subparsers.add_parser("set", help="Store one value")
    set_parser.add_argument("key", help="Preference key")
    set_parser.add_argument("value", help="Value literal")
    set_parser.add_argument(
        "--type",
        dest="value_type",
        choices=CLI_VALUE_TYPES,
        default="str",
        help="Type the value literal is parsed as",
    )
    remove_parser = subparsers.add_parser("remove", help="Delete one stored value")
    remove_parser.add_argument("key", help="Preference key")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the prefkit CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        store = _build_store(args.store)
        if args.command == "list":
            return _run_list_command(store)
        if args.command == "get":
            return _run_get_command(store, args)
        if args.command == "set":
            return _run_set_command(store, args)
        if args.command == "remove":
            return _run_remove_command(store, args)
    except (PrefkitError, ValueError) as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_store(store_path: str | None) -> PlistFileStore:
    """Build the plist store from config with optional path override.

    Args:
        store_path: Optional override path.

    Returns:
        Store bound to the configured file.

    Raises:
        ValueError: If no store file is configured.
    """
    config = PrefkitConfig.from_env()
    if store_path:
        config = replace(config, store_path=Path(store_path).expanduser().resolve())
    if config.store_path is None:
        raise ValueError(f"No preferences file configured. Pass --store or set {STORE_PATH_ENV}.")
    return PlistFileStore(config.store_path, config.store_format)


def _run_list_command(store: PlistFileStore) -> int:
    for key, value in sorted(store.snapshot().items()):
        print(f"{key}={_format_value(value)}")
    return 0


def _run_get_command(store: PlistFileStore, args: argparse.Namespace) -> int:
    value = store.get(args.key)
    if value is None:
        print(f"error=key '{args.key}' is not set")
        return 1
    print(f"{args.key}={_format_value(value)}")
    return 0


def _run_set_command(store: PlistFileStore, args: argparse.Namespace) -> int:
    value = _parse_value(args.value, args.value_type)
    store.set(args.key, value)
    print(f"{args.key}={_format_value(value)}")
    return 0


def _run_remove_command(store: PlistFileStore, args: argparse.Namespace) -> int:
    store.remove(args.key)
    print(f"removed={args.key}")
    return 0


def _parse_value(literal: str, value_type: str) -> StorableValue:
    """Parse a command-line literal into a storable value.

    Raises:
        ValueError: If the literal does not parse as value_type.
    """
    if value_type == "int":
        return int(literal)
    if value_type == "float":
        return float(literal)
    if value_type == "bool":
        normalized = literal.strip().lower()
        if normalized in TRUE_FLAG_VALUES:
            return True
        if normalized in FALSE_FLAG_VALUES and normalized:
            return False
        raise ValueError(f"invalid bool literal '{literal}', expected true or false")
    return literal


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, (list, dict)):
        return json.dumps(value, sort_keys=True, default=_format_value)
    return str(value)
