"""
Current tide height and trend from discrete predictions.
"""

import time
from typing import Optional

from .models import PredictionPoint, PredictionSet

PLACEHOLDER = "?.???"
RISING = "↑"
FALLING = "↓"


def _now(now: Optional[int]) -> int:
    return int(time.time()) if now is None else now


def _bracket(predictions: PredictionSet, now: int):
    before: Optional[PredictionPoint] = None
    after: Optional[PredictionPoint] = None

    for point in predictions:
        if point.timestamp <= now:
            if before is None or point.timestamp >= before.timestamp:
                before = point
        elif after is None or point.timestamp < after.timestamp:
            after = point

    return before, after


def interpolate(predictions: PredictionSet, now: Optional[int] = None) -> float:
    """
    Estimate the water level at ``now``.

    Heights are interpolated linearly between the latest point at or before
    ``now`` and the earliest point after it. With only one side available
    that side's height is returned; an empty set gives ``0.0``.
    """
    now = _now(now)
    before, after = _bracket(predictions, now)

    if before is not None and after is not None:
        span = after.timestamp - before.timestamp
        if span == 0:
            return before.height
        ratio = (now - before.timestamp) / span
        return before.height + (after.height - before.height) * ratio
    if before is not None:
        return before.height
    if after is not None:
        return after.height
    return 0.0


def trend(predictions: PredictionSet, now: Optional[int] = None) -> Optional[str]:
    """
    Direction glyph, or None when there is no future prediction.

    A next point at exactly the current height reports FALLING.
    """
    now = _now(now)
    current = interpolate(predictions, now)

    for point in predictions:
        if point.timestamp > now:
            return RISING if point.height > current else FALLING

    return None


def status(predictions: PredictionSet, now: Optional[int] = None) -> str:
    """Prompt-ready status such as ``3.142↑``, or PLACEHOLDER."""
    now = _now(now)
    direction = trend(predictions, now)
    if direction is None:
        return PLACEHOLDER
    return f"{interpolate(predictions, now):.3f}{direction}"
