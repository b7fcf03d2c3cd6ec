#!/usr/bin/env python3
"""Terminal client for the scheduling core.

Usage:
    python -m hospital_scheduling slots --doctor 1 --date 2024-12-15
    python -m hospital_scheduling schedules --department 1 --status active
    python -m hospital_scheduling copy-last-week --today 2025-10-20
    python -m hospital_scheduling stats --today 2024-12-15

Runs against the seeded in-memory session.
"""
import argparse
import sys
from datetime import date
from typing import List, Optional

from hospital_scheduling import config
from hospital_scheduling.errors import SchedulingError
from hospital_scheduling.filters import ScheduleFilters, active_filter_count
from hospital_scheduling.logging_config import (
    generate_operation_id,
    get_logger,
    setup_structured_logging,
)
from hospital_scheduling.session import SchedulingSession
from hospital_scheduling.slots import format_slots


# ANSI color codes
class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


def print_colored(text: str, color: str = Colors.RESET):
    """Print colored text."""
    print(f"{color}{text}{Colors.RESET}")


def print_header(text: str) -> None:
    """Print section header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70 + "\n")


def iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', use YYYY-MM-DD") from None


def cmd_slots(session: SchedulingSession, args) -> int:
    doctor = session.registry.get_doctor(args.doctor)
    slots = session.slots.generate_slots(args.date, doctor.id)

    print_header(f"{doctor.name} - {args.date.strftime('%A, %B %d %Y')}")
    if session.leaves.is_on_leave(doctor.id, args.date):
        print_colored("⛔ Doctor is on leave this day\n", Colors.YELLOW)
    print(format_slots(slots))

    free = sum(1 for s in slots if s.available)
    print_colored(f"\n{free}/{len(slots)} slots available", Colors.GREEN)
    return 0


def cmd_schedules(session: SchedulingSession, args) -> int:
    filters = ScheduleFilters(
        doctor_id=args.doctor,
        department_id=args.department,
        day_of_week=args.day,
        status=args.status
    )
    schedules = session.schedules.filter(filters)

    print_header(f"Schedules ({len(schedules)}) - {active_filter_count(filters)} filter(s) active")
    for s in schedules:
        days = ", ".join(d.value[:3].title() for d in s.working_days)
        print(
            f"  {s.id:<8} {s.doctor_name:<22} {s.start_time}-{s.end_time}  "
            f"{days:<28} {s.status.value}"
        )
    return 0


def cmd_copy_last_week(session: SchedulingSession, args) -> int:
    result = session.schedules.copy_last_week(args.today)

    if not result.copied:
        print_colored(
            f"❌ No active schedules covered {result.last_week.isoformat()}",
            Colors.YELLOW
        )
        return 0

    print_colored(f"✅ Copied {len(result.schedules)} schedule(s)", Colors.GREEN)
    for s in result.schedules:
        print(f"  {s.id}  {s.doctor_name}  from {s.valid_from.isoformat()}")
    return 0


def cmd_stats(session: SchedulingSession, args) -> int:
    stats = session.appointments.get_stats(args.today)

    print_header(f"Appointments - {args.today.isoformat()}")
    print(f"  Today:     {stats.today_appointments}")
    print(f"  Pending:   {stats.pending}")
    print(f"  Completed: {stats.completed}")
    print(f"  Cancelled: {stats.cancelled}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hospital_scheduling",
        description="Doctor schedules, leave days and appointment slots"
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    slots = sub.add_parser("slots", help="Show the slot grid for a doctor and day")
    slots.add_argument("--doctor", required=True)
    slots.add_argument("--date", type=iso_date, default=date.today())
    slots.set_defaults(handler=cmd_slots)

    schedules = sub.add_parser("schedules", help="List schedules matching filters")
    schedules.add_argument("--doctor", default=config.WILDCARD)
    schedules.add_argument("--department", default=config.WILDCARD)
    schedules.add_argument(
        "--day", default=config.WILDCARD, choices=[config.WILDCARD] + config.DAYS_OF_WEEK
    )
    schedules.add_argument(
        "--status", default=config.WILDCARD, choices=[config.WILDCARD, "active", "inactive"]
    )
    schedules.set_defaults(handler=cmd_schedules)

    copy = sub.add_parser("copy-last-week", help="Copy last week's active schedules")
    copy.add_argument("--today", type=iso_date, default=date.today())
    copy.set_defaults(handler=cmd_copy_last_week)

    stats = sub.add_parser("stats", help="Appointment counters")
    stats.add_argument("--today", type=iso_date, default=date.today())
    stats.set_defaults(handler=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run one command against a freshly seeded session."""
    args = build_parser().parse_args(argv)
    setup_structured_logging(args.log_level)
    logger = get_logger(__name__).bind(operation_id=generate_operation_id())

    session = SchedulingSession(seed=True)
    logger.debug("command_started", command=args.command)

    try:
        code = args.handler(session, args)
    except SchedulingError as e:
        logger.warning("command_failed", command=args.command, error=str(e))
        print_colored(f"❌ {e}", Colors.RED)
        code = 1

    if argv is None:
        sys.exit(code)
    return code


if __name__ == "__main__":
    main()
