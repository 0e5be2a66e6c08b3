from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys


_DATE_RE = re.compile(r"^(?P<year>[+-]?\d+)(?:-(?P<month>[^-]+?)(?:-(?P<day>\d+))?)?(?:T(?P<time>\d+:\d+(?::\d+)?))?$")


def _parse_date(s: str):
    """YEAR[-MONTH[-DAY]][THH:MM[:SS]]; MONTH is a number or a month name."""
    from storycal.core.types import CalendarDate

    m = _DATE_RE.match(s)
    if m is None:
        raise SystemExit(f"Cannot parse date {s!r}; expected YEAR-MONTH-DAY[THH:MM[:SS]]")
    month = m["month"] or 0
    if isinstance(month, str) and month.isdigit():
        month = int(month)
    return CalendarDate(int(m["year"]), month, int(m["day"] or 0), m["time"])


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _print_diag(diag) -> None:
    for rec in diag.warnings:
        print(f"  [{rec.level}] {rec.message}")


def cmd_convert(argv: list[str]) -> int:
    import storycal
    from storycal.api import open_calendar

    p = argparse.ArgumentParser(prog="storycal convert", description="Convert a date between two calendars")
    p.add_argument("date", help="YEAR-MONTH-DAY[THH:MM[:SS]]")
    p.add_argument("--from", dest="source", default="gregorian", help="source calendar (name or file)")
    p.add_argument("--to", dest="target", default="gregorian", help="target calendar (name or file)")
    args = p.parse_args(argv)

    source = open_calendar(args.source)
    target = open_calendar(args.target)
    diag = storycal.Diagnostics()
    res = storycal.convert(_parse_date(args.date), source, target, diag=diag)

    print(f"{storycal.format_date(res.source_date, source, 'full')}  ->  {storycal.format_date(res.target_date, target, 'full')}")
    print(f"  timestamp = {res.timestamp}")
    print(f"  precision = {res.precision}")
    _print_diag(diag)
    return 0


def cmd_timestamp(argv: list[str]) -> int:
    import storycal
    from storycal.api import open_calendar

    p = argparse.ArgumentParser(prog="storycal timestamp", description="Calendar date -> Unix milliseconds")
    p.add_argument("date", help="YEAR-MONTH-DAY[THH:MM[:SS]]")
    p.add_argument("--calendar", default="gregorian")
    args = p.parse_args(argv)

    cal = open_calendar(args.calendar)
    diag = storycal.Diagnostics()
    print(storycal.date_to_timestamp(_parse_date(args.date), cal, diag=diag))
    _print_diag(diag)
    return 0


def cmd_from_timestamp(argv: list[str]) -> int:
    import storycal
    from storycal.api import open_calendar

    p = argparse.ArgumentParser(prog="storycal from-timestamp", description="Unix milliseconds -> calendar date")
    p.add_argument("ms", type=int, help="Unix milliseconds")
    p.add_argument("--calendar", default="gregorian")
    args = p.parse_args(argv)

    cal = open_calendar(args.calendar)
    diag = storycal.Diagnostics()
    d = storycal.from_timestamp(args.ms, cal, diag=diag)
    print(storycal.format_date(d, cal, "full"))
    _print_diag(diag)
    return 0


def cmd_validate(argv: list[str]) -> int:
    import storycal
    from storycal.api import open_calendar

    p = argparse.ArgumentParser(prog="storycal validate", description="Check a calendar definition")
    p.add_argument("calendar", help="calendar name or file")
    args = p.parse_args(argv)

    warnings = storycal.validate_calendar(open_calendar(args.calendar))
    for w in warnings:
        print(f"- {w}")
    if not warnings:
        print("OK")
    return 1 if warnings else 0


def cmd_table(argv: list[str]) -> int:
    from storycal.api import open_calendar
    from storycal.tables import build_lookup_table, export_json

    p = argparse.ArgumentParser(prog="storycal table", description="Print a lookup table (JSON) for a calendar")
    p.add_argument("calendar", help="calendar name or file")
    p.add_argument("--start", type=int, required=True, help="first year")
    p.add_argument("--end", type=int, required=True, help="last year")
    p.add_argument("--intercalary", action="store_true", help="include counted intercalary days")
    p.add_argument("--align", action="store_true", help="offset 0 on the reference year's first day")
    args = p.parse_args(argv)

    if args.end < args.start:
        raise SystemExit("--end must be >= --start")

    cal = open_calendar(args.calendar)
    entries = build_lookup_table(
        cal, args.start, args.end, include_intercalary=args.intercalary, align_to_reference=args.align
    )
    print(export_json(entries))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="storycal", description="Custom calendar conversion toolkit CLI.")
    p.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, WARNING, ...)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("convert", help="Convert a date between calendars")
    sub.add_parser("timestamp", help="Calendar date -> Unix milliseconds")
    sub.add_parser("from-timestamp", help="Unix milliseconds -> calendar date")
    sub.add_parser("validate", help="Check a calendar definition")
    sub.add_parser("table", help="Generate a lookup table for a calendar")
    sub.add_parser("list", help="List registered calendars")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["round-trip"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "convert":
        return cmd_convert(rest)

    if args.cmd == "timestamp":
        return cmd_timestamp(rest)

    if args.cmd == "from-timestamp":
        return cmd_from_timestamp(rest)

    if args.cmd == "validate":
        return cmd_validate(rest)

    if args.cmd == "table":
        return cmd_table(rest)

    if args.cmd == "list":
        import storycal
        for name in storycal.list_calendars():
            print(name)
        return 0

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "storycal.diagnostics.round_trip",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
