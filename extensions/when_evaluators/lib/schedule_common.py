# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later

import json
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

_SPAN_ITEM_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([a-z]*)")

_SPAN_UNITS = {
    "us": 1e-6, "usec": 1e-6,
    "ms": 1e-3, "msec": 1e-3,
    "": 1, "s": 1, "sec": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hour": 3600, "hours": 3600,
    "d": 86400, "day": 86400, "days": 86400,
    "w": 604800, "week": 604800, "weeks": 604800,
}


def parse_dt_with_tz(td_str: str, tz_name: Optional[str]) -> datetime:
    # datetime.fromisoformat does not accept 'Z', so mapping to '+00:00' is needed
    dt = datetime.fromisoformat(re.sub(r'Z$', '+00:00', td_str))

    if tz_name and tz_name != "null":
        target_tz = ZoneInfo(tz_name)

        # if no offset is present, use target_tz
        if dt.tzinfo is None:
            return dt.replace(tzinfo=target_tz)

        # convert to desired time zone
        return dt.astimezone(target_tz)

    # if no offset is present, interpret as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt


def to_wall_clock(dt: datetime) -> datetime:
    return dt.replace(tzinfo=None)


def from_wall_clock(local: datetime, like: datetime) -> datetime:
    return local.replace(tzinfo=like.tzinfo)


def duration2seconds(spec: str) -> int:
    text = spec.strip().lower()
    if not text:
        raise ValueError("Empty time span")

    total = 0.0
    pos = 0
    for match in _SPAN_ITEM_RE.finditer(text):
        # only whitespace may separate the items
        if text[pos:match.start()].strip():
            break
        number, unit = match.groups()
        if unit not in _SPAN_UNITS:
            raise ValueError(f"Unknown time span unit {unit!r} in {spec!r}")
        total += float(number) * _SPAN_UNITS[unit]
        pos = match.end()

    if pos == 0 or text[pos:].strip():
        raise ValueError(f"Invalid time span {spec!r}")

    return int(total)


@dataclass(frozen=True)
class Jitter:
    max_s: int
    offset_s: int

    @property
    def is_active(self) -> bool:
        return self.max_s > 0


def compute_jitter(jitter_spec: str) -> Jitter:
    total = duration2seconds(jitter_spec)
    if total > 0:
        offset = secrets.randbelow(total + 1)
    else:
        offset = 0
    return Jitter(max_s=total, offset_s=offset)


def _to_epoch_s(dt: datetime, jitter: Jitter) -> int:
    epoch_s = int(dt.astimezone(timezone.utc).timestamp())
    if jitter.is_active:
        epoch_s += jitter.offset_s
    return epoch_s


def finalize_result(base_local: datetime, upcoming_local: Sequence[datetime], jitter: Jitter) -> str:
    base_epoch_s = int(base_local.astimezone(timezone.utc).timestamp())
    upcoming_epoch_s = [_to_epoch_s(dt, jitter) for dt in upcoming_local]
    next_epoch_s = upcoming_epoch_s[0] if upcoming_epoch_s else None

    result = {
        "base_epoch_s": base_epoch_s,
        "next_epoch_s": next_epoch_s,
        "jitter_s": jitter.max_s,
        "jitter_offset_s": jitter.offset_s,
        "delta_s": (base_epoch_s - next_epoch_s) if (next_epoch_s is not None) else None
    }

    if len(upcoming_epoch_s) > 1:
        result["upcoming_epoch_s"] = upcoming_epoch_s

    return json.dumps(result, ensure_ascii=False, separators=(",", ":"))
