from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List

from glucoview.models.forecast import InsulinEvent
from glucoview.models.iob import IOBPoint
from glucoview.services.math.curves import InsulinCurves
from glucoview.utils.timezone import ensure_utc


@dataclass(frozen=True)
class InsulinActionProfile:
    """Rapid-acting insulin (Humalog/Novolog style) defaults."""

    peak_minutes: float = 60.0
    duration_minutes: float = 300.0
    decay_rate: float = 0.8


def insulin_on_board_fraction(t_minutes: float, profile: InsulinActionProfile) -> float:
    return InsulinCurves.rise_decay_on_board(
        t_minutes,
        profile.peak_minutes,
        profile.duration_minutes,
        profile.decay_rate,
    )


def compute_iob(now: datetime, events: Iterable, profile: InsulinActionProfile | None = None) -> float:
    profile = profile or InsulinActionProfile()
    now = ensure_utc(now)
    total = 0.0
    for event in events:
        if not isinstance(event, InsulinEvent) or event.units_delivered <= 0:
            continue
        elapsed = (now - event.timestamp).total_seconds() / 60
        total += event.units_delivered * insulin_on_board_fraction(elapsed, profile)
    return max(total, 0.0)


def project_iob(
    events: Iterable,
    start: datetime,
    end: datetime,
    interval_minutes: int = 15,
    profile: InsulinActionProfile | None = None,
) -> List[IOBPoint]:
    events = list(events)
    start = ensure_utc(start)
    end = ensure_utc(end)
    if end < start:
        end = start

    span_minutes = (end - start).total_seconds() / 60
    steps = int(math.floor(round(span_minutes / interval_minutes, 9))) + 1

    points: List[IOBPoint] = []
    for i in range(steps):
        t = start + timedelta(minutes=i * interval_minutes)
        points.append(IOBPoint(time=t, iob=round(compute_iob(t, events, profile), 2)))
    return points


__all__ = ["InsulinActionProfile", "compute_iob", "project_iob", "insulin_on_board_fraction"]
