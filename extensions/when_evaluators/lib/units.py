# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later

import calendar
from datetime import MAXYEAR, MINYEAR, datetime
from enum import Enum

from dateutil.relativedelta import relativedelta


class Unit(Enum):
    # ordered from finest to coarsest, the value names the datetime attribute
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    def value_of(self, ts: datetime) -> int:
        return getattr(ts, self.value)

    def minimum(self) -> int:
        return _MINIMUM[self]

    def maximum(self) -> int:
        return _MAXIMUM[self]

    def maximum_in_context(self, ts: datetime) -> int:
        if self is Unit.DAY:
            return calendar.monthrange(ts.year, ts.month)[1]
        return self.maximum()

    def with_value(self, ts: datetime, value: int) -> datetime:
        # relativedelta clamps the day of month, e.g. setting April on Jan 31 gives Apr 30
        return ts + relativedelta(**{self.value: value})

    def next_coarser(self) -> "Unit":
        members = list(Unit)
        index = members.index(self)
        if index + 1 == len(members):
            raise ValueError(f"{self.name} has no coarser unit")
        return members[index + 1]

    def increment(self, ts: datetime) -> datetime:
        return ts + relativedelta(**{self.value + "s": 1})

    def increment_next_coarser(self, ts: datetime) -> datetime:
        return self.next_coarser().increment(ts)


_MINIMUM = {
    Unit.MINUTE: 0,
    Unit.HOUR: 0,
    Unit.DAY: 1,
    Unit.MONTH: 1,
    Unit.YEAR: MINYEAR,
}

_MAXIMUM = {
    Unit.MINUTE: 59,
    Unit.HOUR: 23,
    Unit.DAY: 31,
    Unit.MONTH: 12,
    Unit.YEAR: MAXYEAR,
}
