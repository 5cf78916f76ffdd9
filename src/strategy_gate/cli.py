"""CLI entry-point for strategy admission.

Usage::

    strategy-gate validate strategy.json
    strategy-gate save strategy.json
    strategy-gate list
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from strategy_gate.exceptions import StrategyNotFoundError, StrategyValidationError
from strategy_gate.storage import StrategyRepository, get_database_connector
from strategy_gate.validation import ValidationResult, validate_strategy


def _load_strategy(path: str) -> dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


def _print_result(result: ValidationResult, as_json: bool) -> None:
    if as_json:
        print(result.model_dump_json(include={"valid", "errors"}, indent=2))
        return
    if result.valid:
        print("Strategy is valid")
        return
    print(f"Strategy is invalid ({len(result.errors)} error(s)):")
    for violation in result.violations:
        print(f"  - [{violation.kind}] {violation.field}: {violation.message}")


def _repository() -> StrategyRepository:
    db = get_database_connector()
    db.create_tables()
    return StrategyRepository(db)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate and catalogue trading strategies before activation",
        prog="strategy-gate",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable DEBUG logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate a JSON strategy file")
    validate.add_argument("file", help="Path to the strategy JSON file")
    validate.add_argument("--json", action="store_true", help="Print the verdict as JSON")

    save = sub.add_parser("save", help="Validate and store a JSON strategy file")
    save.add_argument("file", help="Path to the strategy JSON file")

    sub.add_parser("list", help="List stored strategies")

    show = sub.add_parser("show", help="Print a stored strategy")
    show.add_argument("strategy_id")

    delete = sub.add_parser("delete", help="Delete a stored strategy")
    delete.add_argument("strategy_id")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.command == "validate":
        result = validate_strategy(_load_strategy(args.file))
        _print_result(result, args.json)
        return 0 if result.valid else 1

    repo = _repository()

    if args.command == "save":
        try:
            stored = repo.save_strategy(_load_strategy(args.file))
        except StrategyValidationError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        print(f"Saved strategy {stored.strategy_id}")
        return 0

    if args.command == "list":
        for record in repo.list_strategies():
            print(f"{record.id}\t{record.type}\t{record.name}")
        return 0

    try:
        if args.command == "show":
            print(json.dumps(repo.get_strategy(args.strategy_id).to_payload(), indent=2))
        else:
            repo.delete_strategy(args.strategy_id)
            print(f"Deleted strategy {args.strategy_id}")
    except StrategyNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
