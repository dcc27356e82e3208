# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later


class ScheduleError(ValueError):
    pass


class ParseError(ScheduleError):
    """The expression or one of its fields cannot be parsed."""


class InvalidDayOfMonth(ScheduleError):
    """The fixed day of month can never occur given the month field."""


class OccurrenceOutOfRange(ScheduleError):
    """The next occurrence lies beyond the last representable year."""
