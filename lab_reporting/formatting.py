from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal
from typing import List, Sequence

import pytz


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, matching how counts are shown elsewhere."""
    return int(math.floor(value + 0.5))


def fmt_number(value: float) -> str:
    """Shortest exact decimal for ``value``, never in exponent notation."""
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def completion_rate(completed: float, total: float) -> int:
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)


def share_of(value: float, total: float) -> str:
    """Percentage with one decimal, or ``0`` when there is nothing to divide by."""
    if total <= 0:
        return "0"
    return f"{value / total * 100:.1f}"


def percent_shares(values: Sequence[float], decimals: int = 1) -> List[float]:
    """Largest-remainder percentages that add up to exactly 100 at the given precision."""
    total = float(sum(values))
    if not values or total <= 0:
        return [0.0 for _ in values]

    scale = 10 ** decimals
    exact = [v / total * 100 * scale for v in values]
    floors = [math.floor(x) for x in exact]
    remaining = 100 * scale - sum(floors)
    order = sorted(range(len(values)), key=lambda i: (exact[i] - floors[i], -i), reverse=True)
    for i in order[: max(0, remaining)]:
        floors[i] += 1
    return [f / scale for f in floors]


def to_local(dt: datetime, tz_name: str) -> datetime:
    tz = pytz.timezone(tz_name)
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)
    return dt.astimezone(tz)


def fmt_generated(dt: datetime, tz_name: str) -> str:
    local = to_local(dt, tz_name)
    return local.strftime("%d %b %Y, %H:%M %Z")
