# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later

"""Four-field schedules: ``minute hour day-of-month month``.

Each field is either ``*`` or a fixed integer. A schedule answers one question,
when does it fire next after a given moment, at minute resolution.
"""

import calendar
import itertools
import logging
from datetime import MAXYEAR, datetime, timedelta
from typing import Iterable, Iterator, List

from .constraints import ConstraintChain, SingleConstraint
from .errors import InvalidDayOfMonth, OccurrenceOutOfRange, ParseError
from .units import Unit

logger = logging.getLogger(__name__)

FIELD_UNITS = (Unit.MINUTE, Unit.HOUR, Unit.DAY, Unit.MONTH)
RESOLUTION = timedelta(minutes=1)

# any leap year will do, it only decides whether a month/day pair can ever occur
_LEAP_YEAR = 2000


def truncate(ts: datetime) -> datetime:
    return ts.replace(second=0, microsecond=0)


class Schedule:
    def __init__(self, spec: str) -> None:
        tokens = spec.split(" ")
        if len(tokens) != len(FIELD_UNITS):
            raise ParseError(
                f"Invalid spec {spec!r}: wrong field count, expected {len(FIELD_UNITS)} but got {len(tokens)}"
            )

        self._spec = spec
        self._minute, self._hour, self._day, self._month = (
            SingleConstraint.parse(unit, token) for unit, token in zip(FIELD_UNITS, tokens)
        )
        self._chain = ConstraintChain(self._minute, self._hour, self._day, self._month)

        self._validate_day_of_month()

    def _validate_day_of_month(self) -> None:
        if self.day.is_any:
            return

        day = self.day.fixed

        if self.month.is_any:
            if not Unit.DAY.minimum() <= day <= Unit.DAY.maximum():
                raise InvalidDayOfMonth(f"Day {day} is not valid in any month")
            return

        month = self.month.fixed
        if not Unit.DAY.minimum() <= day <= calendar.monthrange(_LEAP_YEAR, month)[1]:
            raise InvalidDayOfMonth(f"Day {day} is never valid for month {month}")

    @property
    def spec(self) -> str:
        return self._spec

    @property
    def minute(self) -> SingleConstraint:
        return self._minute

    @property
    def hour(self) -> SingleConstraint:
        return self._hour

    @property
    def day(self) -> SingleConstraint:
        return self._day

    @property
    def month(self) -> SingleConstraint:
        return self._month

    def matches(self, ts: datetime) -> bool:
        return self._chain.is_aligned(truncate(ts))

    def next_occurrence(self, after: datetime) -> datetime:
        """Return the earliest matching minute strictly after ``after``.

        Seconds and microseconds of ``after`` are discarded, not rounded.
        Raises :class:`OccurrenceOutOfRange` when the next match would lie
        past year 9999.
        """
        try:
            start = truncate(after) + RESOLUTION
            result = self._chain.align(start)
        except (OverflowError, ValueError) as e:
            # datetime cannot represent anything past MAXYEAR
            raise OccurrenceOutOfRange(
                f"No occurrence of {self._spec!r} after {after.isoformat()} up to year {MAXYEAR}"
            ) from e
        logger.debug("next occurrence of %r after %s is %s", self._spec, after, result)
        return result

    def occurrences_from(self, after: datetime) -> Iterator[datetime]:
        """Yield successive occurrences after ``after``, without end."""
        current = after
        while True:
            current = self.next_occurrence(current)
            yield current

    def occurrences(self, after: datetime) -> Iterable[datetime]:
        """Like :meth:`occurrences_from`, but every ``iter()`` starts over at ``after``."""
        return _Occurrences(self, after)

    def take(self, after: datetime, count: int) -> List[datetime]:
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        return list(itertools.islice(self.occurrences_from(after), count))

    def _key(self) -> tuple:
        return (self.minute.value, self.hour.value, self.day.value, self.month.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Schedule({self._spec!r})"


class _Occurrences:
    def __init__(self, schedule: Schedule, after: datetime) -> None:
        self._schedule = schedule
        self._after = after

    def __iter__(self) -> Iterator[datetime]:
        return self._schedule.occurrences_from(self._after)
