# -*- coding: utf-8 -*-
"""
Audit raw check-in strings stored in attendance_logs.

Prints how many values carry an AM/PM marker, how many are bare 24-hour
digits, how many bare values have an hour below 12 (ambiguous if the clock
actually exports 12-hour times) and lists the unreadable ones.

Usage:
    python -m scripts.check_check_in_formats [--limit 20]
"""
import argparse
import asyncio
import re
from collections import Counter

from sqlalchemy import select

from attendscore.db.models import AttendanceLog
from attendscore.db.session import AsyncSessionLocal
from attendscore.scoring.timeparse import ParseFailure, parse_check_in

_marker_re = re.compile(r"(am|pm)", re.IGNORECASE)


async def main(limit: int) -> None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(
            select(AttendanceLog.employee_key, AttendanceLog.date, AttendanceLog.check_in)
            .where(AttendanceLog.check_in.is_not(None))
        )
        rows = result.all()

    kinds: Counter[str] = Counter()
    unreadable = []
    for employee_key, day, check_in in rows:
        parsed = parse_check_in(check_in)
        if isinstance(parsed, ParseFailure):
            kinds["unreadable"] += 1
            unreadable.append((employee_key, day, check_in, parsed.reason))
        elif _marker_re.search(check_in):
            kinds["with marker"] += 1
        elif parsed.hour < 12:
            kinds["bare, hour < 12"] += 1
        else:
            kinds["bare, hour >= 12"] += 1

    print(f"Check-in values: {len(rows)}")
    for kind, count in kinds.most_common():
        print(f"  {kind:<18} {count}")
    if unreadable:
        print(f"First {min(limit, len(unreadable))} unreadable values:")
        for employee_key, day, check_in, reason in unreadable[:limit]:
            print(f"  {day} {employee_key}: {check_in!r} ({reason})")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--limit", type=int, default=20)
    args = parser.parse_args()
    asyncio.run(main(args.limit))
