from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any
from uuid import UUID

from dotenv import load_dotenv
from pydantic import ValidationError

from planops.adapters.llm import OperationParseError, operation_tool_definitions, parse_operations
from planops.adapters.plan_document import PlanDocument
from planops.app import (
    apply_plan_operations,
    import_plan,
    load_plan_snapshot,
    preview_plan_operations,
    validate_plan_operations,
)
from planops.config import configure_logging, get_engine_settings
from planops.domain.operations import FallbackRequest
from planops.domain.operations.describe import day_name
from planops.domain.operations.references import format_slot

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from planops.domain.model import ScheduleSnapshot
    from planops.domain.operations import PlanOperation

log = logging.getLogger(__name__)


class CliUsageError(ValueError):
    """Raised for invalid command-line input."""


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit training plans with structured operations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("validate", "Validate an operations file against a plan"),
        ("preview", "Show what an operations file would change"),
        ("apply", "Apply an operations file to a plan"),
    ):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("plan_id", type=str, help="Id of the training plan")
        command.add_argument(
            "operations",
            type=Path,
            help="JSON file with a list of operation tool calls ({'op': ..., ...})",
        )

    plan = subparsers.add_parser("plan", help="Plan management commands")
    plan_sub = plan.add_subparsers(dest="plan_command", required=True)
    plan_show = plan_sub.add_parser("show", help="Print the current schedule of a plan")
    plan_show.add_argument("plan_id", type=str, help="Id of the training plan")
    plan_import = plan_sub.add_parser("import", help="Import a plan from a JSON document")
    plan_import.add_argument("document", type=Path, help="Path to the plan document")

    subparsers.add_parser("tools", help="Print the operation tool definitions as JSON")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise CliUsageError(f"Invalid UUID: {value}") from exc


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CliUsageError(f"Cannot read {path}: {exc}") from exc


def _load_operations(path: Path) -> list[PlanOperation]:
    try:
        parsed = parse_operations(_read_text(path))
    except OperationParseError as exc:
        raise CliUsageError(str(exc)) from exc
    if isinstance(parsed, FallbackRequest):
        raise CliUsageError(f"Operations file requests a full regeneration: {parsed.reason}")
    return parsed


def _load_plan_document(path: Path) -> PlanDocument:
    try:
        return PlanDocument.model_validate_json(_read_text(path))
    except ValidationError as exc:
        raise CliUsageError(f"Invalid plan document {path}: {exc}") from exc


def _emit(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, default=str) + "\n")


def format_schedule(snapshot: ScheduleSnapshot, *, week_starts_on: int | None = None) -> str:
    """Render a snapshot as one line per workout, keyed by slot."""

    start = snapshot.week_starts_on if week_starts_on is None else week_starts_on
    lines: list[str] = []
    for week in snapshot.weeks:
        phase = f" ({week.phase_name})" if week.phase_name else ""
        lines.append(f"Week {week.week_number}{phase}, starts {week.start_date.isoformat()}")
        for workout in week.workouts:
            distance = f" {workout.distance_km:.1f}km" if workout.distance_km else ""
            lines.append(
                f"  {format_slot(week.week_number, workout.day)} "
                f"{day_name(workout.day, start)[:3]} {workout.scheduled_date.isoformat()} "
                f"{workout.category}{distance}: {workout.description}"
            )
    return "\n".join(lines)


def _run(parsed_args: argparse.Namespace) -> int:
    if parsed_args.command == "tools":
        _emit([definition.as_dict() for definition in operation_tool_definitions()])
        return 0

    if parsed_args.command == "plan":
        if parsed_args.plan_command == "import":
            plan = import_plan(_load_plan_document(parsed_args.document))
            log.info("Created plan %s", plan.id)
            sys.stdout.write(f"{plan.id}\n")
            return 0
        snapshot = load_plan_snapshot(_parse_uuid(parsed_args.plan_id))
        sys.stdout.write(format_schedule(snapshot) + "\n")
        return 0

    plan_id = _parse_uuid(parsed_args.plan_id)
    operations = _load_operations(parsed_args.operations)
    settings = get_engine_settings()

    if parsed_args.command == "validate":
        validation = validate_plan_operations(plan_id, operations, settings=settings)
        _emit(
            {
                "valid": validation.valid,
                "errors": validation.errors,
                "warnings": validation.warnings,
            }
        )
        return 0 if validation.valid else 1
    if parsed_args.command == "preview":
        previews = preview_plan_operations(plan_id, operations, settings=settings)
        _emit(
            [
                {
                    "operation": preview.operation.OP.value,
                    "description": preview.description,
                    "affected": [asdict(affected) for affected in preview.affected],
                }
                for preview in previews
            ]
        )
        return 0
    if parsed_args.command == "apply":
        result = apply_plan_operations(plan_id, operations, settings=settings)
        _emit(asdict(result))
        return 0 if result.success else 1
    raise CliUsageError(f"Unsupported command: {parsed_args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        exit_code = _run(parsed_args)
    except CliUsageError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)
    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load ``.env``, install the SIGINT handler, run."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
