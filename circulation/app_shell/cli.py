import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from circulation.adapters.clock import FrozenClock, SystemClock
from circulation.app_shell.batch import due_window_to_dict, evaluate_batch, report_to_dict
from circulation.app_shell.config import configure_logging, resolve_rules
from circulation.components.temporal import Invalid, parse_instant
from circulation.domain import BookingRecord, LoanRecord
from circulation.ports import ClockPort

logger = logging.getLogger("cli")


def load_snapshot(path: Path) -> tuple[list[LoanRecord], list[BookingRecord]]:
    """
    Read a JSON snapshot of the form {"loans": [...], "bookings": [...]}.
    Raises ValueError when the file is not a valid snapshot.
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Snapshot must be a JSON object with 'loans' and/or 'bookings'")

    try:
        loans = [LoanRecord.model_validate(item) for item in data.get("loans") or []]
        bookings = [BookingRecord.model_validate(item) for item in data.get("bookings") or []]
    except ValidationError as e:
        raise ValueError(f"Snapshot records failed validation:\n{e}") from e

    return loans, bookings


def build_clock(now_arg: str | None) -> ClockPort:
    if now_arg is None:
        return SystemClock()
    now = parse_instant(now_arg)
    if isinstance(now, Invalid):
        raise ValueError(f"--now is not an ISO-8601 timestamp: {now_arg!r}")
    return FrozenClock(now)


def handle_evaluate(args: argparse.Namespace) -> dict[str, Any]:
    rules = resolve_rules(args.rules)
    configure_logging(rules)
    loans, bookings = load_snapshot(args.snapshot)
    report = evaluate_batch(
        loans, bookings, clock=build_clock(args.now), rules=rules, window_days=args.window_days
    )
    return report_to_dict(report)


def handle_due(args: argparse.Namespace) -> dict[str, Any]:
    rules = resolve_rules(args.rules)
    configure_logging(rules)
    loans, _ = load_snapshot(args.snapshot)
    report = evaluate_batch(
        loans, [], clock=build_clock(args.now), rules=rules, window_days=args.window_days
    )
    return {"now": report.now.isoformat(), **due_window_to_dict(report.due_window)}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Library status engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("snapshot", type=Path, help="JSON file with 'loans' and 'bookings'")
    common.add_argument("--now", help="Evaluate at this ISO-8601 instant instead of the clock")
    common.add_argument("--rules", type=Path, default=None, help="Path to rules.yaml")
    common.add_argument(
        "--window-days", type=int, default=None, help="Override the due-soon lookahead"
    )

    subparsers.add_parser(
        "evaluate", parents=[common], help="Derive status and settlement for every record"
    )
    subparsers.add_parser("due", parents=[common], help="List late and due-soon loan ids")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if not args.snapshot.exists():
        logger.error(f"Snapshot file {args.snapshot} not found.")
        sys.exit(1)

    try:
        if args.command == "evaluate":
            output = handle_evaluate(args)
        else:
            output = handle_due(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    print(json.dumps(output, indent=2, default=str))


if __name__ == "__main__":
    main()
