from __future__ import annotations

import argparse
import random

import storycal
from storycal.api import open_calendar
from storycal.core.types import Calendar, CalendarDate, NamedMonth


def random_date(calendar: Calendar, year_lo: int, year_hi: int) -> CalendarDate:
    year = random.randint(year_lo, year_hi)
    if not calendar.months:
        return CalendarDate(year, random.randint(1, 12), random.randint(1, 30))
    i = random.randrange(len(calendar.months))
    m = calendar.months[i]
    return CalendarDate(year, NamedMonth(m.name), random.randint(1, max(1, m.days)))


def roundtrip_test(
    calendar: Calendar,
    N: int,
    span: int,
    seed: int,
    *,
    max_failures: int,
    verbose: bool = True,
) -> int:
    random.seed(seed)
    failures = 0
    y0 = calendar.epoch_year

    for _ in range(N):
        d0 = random_date(calendar, y0 - span, y0 + span)
        diag = storycal.Diagnostics()
        offset = storycal.to_absolute_offset(d0, calendar, diag=diag)
        back = storycal.from_absolute_offset(offset, calendar, diag=diag)

        if back != d0:
            failures += 1
            if verbose:
                print("\nFAIL")
                print("calendar:", calendar.name)
                print("d0:", d0)
                print("offset:", offset)
                print("back:", back)
                for rec in diag:
                    print("  ", rec.level, rec.code, rec.message)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: date -> offset -> date.")
    p.add_argument("calendar", help="Registered calendar name or path to a YAML/Markdown calendar.")
    p.add_argument("--N", type=int, default=2000, help="Trials.")
    p.add_argument("--span", type=int, default=500, help="Years either side of the reference year.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures.")
    args = p.parse_args(argv)

    cal = open_calendar(args.calendar)
    if cal.uses_lookup_table:
        raise SystemExit("Round-trip checks only apply to arithmetic calendars")

    print(f"Testing {cal.name or args.calendar} ...")
    failures = roundtrip_test(cal, N=args.N, span=args.span, seed=args.seed, max_failures=args.max_failures)
    if failures == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {failures}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
