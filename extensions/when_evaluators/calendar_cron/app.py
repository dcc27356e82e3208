#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Sequence

from cronspec import InvalidDayOfMonth, ParseError, Schedule
from cronspec import schedule_common
from cronspec.log import configure_logging
from cronspec.settings import EvaluatorSettings

logger = logging.getLogger("cronspec.evaluator")


def print_usage(argv0: str) -> None:
    print(f"Usage: {Path(argv0).name} <EXPRESSION> <BASE_DATETIME> <TIMEZONE|null> <JITTER> [COUNT]",
          file=sys.stderr)


def parse_count(count_str: str) -> int:
    count = int(count_str)
    if count < 1:
        raise ValueError(f"COUNT must be at least 1, got {count}")
    return count


def upcoming_after(schedule: Schedule, base_dt: datetime, count: int) -> List[datetime]:
    # the schedule counts minutes on the local wall clock of the base
    base_epoch = base_dt.timestamp()
    upcoming: List[datetime] = []

    for local in schedule.occurrences_from(schedule_common.to_wall_clock(base_dt)):
        candidate = schedule_common.from_wall_clock(local, base_dt)

        # the repeated hour after a DST switch: prefer its second pass
        if candidate.timestamp() <= base_epoch:
            candidate = candidate.replace(fold=1)

        if candidate.timestamp() <= base_epoch:
            continue

        upcoming.append(candidate)
        if len(upcoming) == count:
            return upcoming

    return upcoming


def main(argv: Sequence[str]) -> int:
    if len(argv) not in (5, 6):
        print_usage(argv[0])
        return 1

    try:
        count = parse_count(argv[5]) if len(argv) == 6 else 1
    except ValueError as e:
        print(f"Error: Invalid COUNT: {e}", file=sys.stderr)
        print_usage(argv[0])
        return 1

    configure_logging(EvaluatorSettings.from_env())

    expr = argv[1]
    base_str = argv[2]
    tz_name = argv[3]
    jitter_spec = argv[4]

    try:
        base_dt = schedule_common.parse_dt_with_tz(base_str, tz_name)
        schedule = Schedule(expr)
        upcoming = upcoming_after(schedule, base_dt, count)
        jitter = schedule_common.compute_jitter(jitter_spec)

        logger.debug("evaluated %r from %s: %s", expr, base_dt.isoformat(), [dt.isoformat() for dt in upcoming])
        print(schedule_common.finalize_result(base_dt, upcoming, jitter))
        return 0

    except (ParseError, InvalidDayOfMonth) as e:
        print(f"Error: Invalid cron expression \"{expr}\": {e}", file=sys.stderr)
        return 3

    except Exception as e:
        print(f"Error: Failed to compute next occurrence for cron expression \"{expr}\": {e}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    sys.exit(main(sys.argv))
