# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later

from .constraints import Constraint, ConstraintChain, SingleConstraint
from .errors import InvalidDayOfMonth, OccurrenceOutOfRange, ParseError, ScheduleError
from .schedule import Schedule
from .units import Unit

__all__ = [
    "Constraint",
    "ConstraintChain",
    "InvalidDayOfMonth",
    "OccurrenceOutOfRange",
    "ParseError",
    "Schedule",
    "ScheduleError",
    "SingleConstraint",
    "Unit",
]
