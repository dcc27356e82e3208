# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence, Tuple

from .errors import ParseError
from .units import Unit

logger = logging.getLogger(__name__)

ANY_TOKEN = "*"
_INTEGER_RE = re.compile(r"[0-9]+")


class Constraint(Protocol):
    def is_aligned(self, ts: datetime) -> bool:
        ...

    def align(self, ts: datetime) -> datetime:
        ...

    def reset(self, ts: datetime) -> datetime:
        ...


@dataclass(frozen=True)
class SingleConstraint:
    unit: Unit
    value: Optional[int] = None

    @classmethod
    def parse(cls, unit: Unit, token: str) -> "SingleConstraint":
        if token == ANY_TOKEN:
            return cls(unit)

        if not _INTEGER_RE.fullmatch(token):
            raise ParseError(f"Invalid {unit.value} field: {token!r} is neither '*' nor an integer")

        value = int(token)

        # day bounds depend on the month field and are checked by the schedule
        if unit is not Unit.DAY and not unit.minimum() <= value <= unit.maximum():
            raise ParseError(
                f"Invalid {unit.value} field: {value} is outside {unit.minimum()}..{unit.maximum()}"
            )

        return cls(unit, value)

    @property
    def is_any(self) -> bool:
        return self.value is None

    @property
    def fixed(self) -> int:
        if self.value is None:
            raise ValueError(f"{self.unit.value} field is not fixed")
        return self.value

    def is_aligned(self, ts: datetime) -> bool:
        return self.is_any or self.unit.value_of(ts) == self.value

    def align(self, ts: datetime) -> datetime:
        if self.is_any:
            return ts

        target = self.fixed

        # the field only reaches the target again within the next coarser unit
        if self.unit.value_of(ts) > target:
            ts = self.unit.increment_next_coarser(ts)

        # skips Feb 29 in common years and day 31 in short months
        while self.unit.maximum_in_context(ts) < target:
            ts = self.unit.increment_next_coarser(ts)

        return self.unit.with_value(ts, target)

    def reset(self, ts: datetime) -> datetime:
        return self.unit.with_value(ts, self.unit.minimum())

    def __str__(self) -> str:
        return ANY_TOKEN if self.value is None else str(self.value)


class ConstraintChain:
    """Aligns a timestamp to several constraints at once.

    The constraints must be ordered from the finest to the coarsest unit. Each
    round aligns the coarsest misaligned constraint and resets all finer ones,
    until every constraint holds.
    """

    def __init__(self, *constraints: Constraint) -> None:
        self._constraints: Tuple[Constraint, ...] = tuple(constraints)

    @property
    def constraints(self) -> Sequence[Constraint]:
        return self._constraints

    def is_aligned(self, ts: datetime) -> bool:
        return all(constraint.is_aligned(ts) for constraint in self._constraints)

    def align(self, ts: datetime) -> datetime:
        rounds = 0
        while True:
            index = self._coarsest_misaligned(ts)
            if index is None:
                logger.debug("aligned %s after %d rounds", ts, rounds)
                return ts

            ts = self._constraints[index].align(ts)
            ts = self._reset_finer(ts, index)
            rounds += 1

    def reset(self, ts: datetime) -> datetime:
        for constraint in self._constraints:
            ts = constraint.reset(ts)
        return ts

    def _coarsest_misaligned(self, ts: datetime) -> Optional[int]:
        found = None
        for index, constraint in enumerate(self._constraints):
            if not constraint.is_aligned(ts):
                found = index
        return found

    def _reset_finer(self, ts: datetime, index: int) -> datetime:
        for constraint in self._constraints[:index]:
            ts = constraint.reset(ts)
        return ts
