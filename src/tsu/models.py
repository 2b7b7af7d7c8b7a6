"""
Data models for tide predictions.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, List, Tuple

from .exceptions import InvalidFormat

DAYS_IN_MONTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
DAYS_IN_MONTHS_LEAP = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def month_lengths(year: int) -> Tuple[int, ...]:
    return DAYS_IN_MONTHS_LEAP if is_leap_year(year) else DAYS_IN_MONTHS


@dataclass(frozen=True)
class CalendarDate:
    """A proleptic Gregorian calendar date, always interpreted as UTC."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidFormat(f"Month out of range: {self.month}")
        if not 1 <= self.day <= month_lengths(self.year)[self.month - 1]:
            raise InvalidFormat(
                f"Day out of range for {self.year:04}-{self.month:02}: {self.day}"
            )

    @classmethod
    def parse(cls, text: str) -> "CalendarDate":
        """Parse a date in YYYY-MM-DD format."""
        parts = text.strip().split("-")
        if len(parts) != 3:
            raise InvalidFormat(f"Expected YYYY-MM-DD, got {text!r}")
        try:
            year, month, day = (int(part) for part in parts)
        except ValueError as e:
            raise InvalidFormat(f"Non-numeric date field in {text!r}") from e
        return cls(year, month, day)

    @classmethod
    def from_epoch_seconds(cls, seconds: int) -> "CalendarDate":
        """Return the UTC date containing the given epoch second."""
        # Imported here to avoid circular imports
        from .dates import epoch_days_to_date

        return epoch_days_to_date(int(seconds) // 86400)

    def isoformat(self) -> str:
        return f"{self.year:04}-{self.month:02}-{self.day:02}"

    def compact(self) -> str:
        """Date as YYYYMMDD, the form the NOAA API expects."""
        return f"{self.year:04}{self.month:02}{self.day:02}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class PredictionPoint:
    """A single predicted water level."""

    timestamp: int  # UTC seconds since epoch; 0 means missing
    height: float

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


class PredictionSet:
    """
    Time-ordered sequence of prediction points.

    Points are sorted by timestamp on construction, so a single forward scan
    is always enough to find the bracket around a given moment.
    """

    def __init__(self, points: Iterable[PredictionPoint] = ()):
        self._points: List[PredictionPoint] = sorted(
            points, key=lambda p: p.timestamp
        )

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[PredictionPoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> PredictionPoint:
        return self._points[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PredictionSet):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"PredictionSet({len(self._points)} points)"

    @property
    def points(self) -> List[PredictionPoint]:
        return list(self._points)

    def is_usable(self, now: int) -> bool:
        """
        Check whether ``now`` falls strictly inside the predicted window.

        A set is usable only if it has at least one point at or before
        ``now``, at least one point after it, and no point carries the
        zero-timestamp sentinel.
        """
        has_past = False
        has_future = False

        for point in self._points:
            if point.timestamp == 0:
                return False
            if point.timestamp <= now:
                has_past = True
            else:
                has_future = True

        return has_past and has_future

    def to_pandas(self) -> Any:
        """Convert to a pandas DataFrame with ``time`` and ``height`` columns."""
        try:
            import pandas as pd
        except ImportError:
            raise ImportError(
                "pandas is required for DataFrame conversion. Install with: pip install pandas"
            ) from None

        return pd.DataFrame(
            {
                "time": pd.to_datetime(
                    [p.timestamp for p in self._points], unit="s", utc=True
                ),
                "height": [p.height for p in self._points],
            }
        )
