"""
Tests for prediction data models.
"""

from datetime import datetime, timezone

import pytest

from tsu.exceptions import InvalidFormat
from tsu.models import CalendarDate, PredictionPoint, PredictionSet


class TestCalendarDate:
    """Test CalendarDate construction and formatting."""

    def test_formatting(self):
        d = CalendarDate(2024, 2, 9)
        assert d.isoformat() == "2024-02-09"
        assert d.compact() == "20240209"
        assert str(d) == "2024-02-09"

    def test_parse(self):
        assert CalendarDate.parse("2024-02-29") == CalendarDate(2024, 2, 29)

    @pytest.mark.parametrize("text", ["2024-02", "2024-ab-01", "", "2023-02-29"])
    def test_parse_invalid(self, text):
        with pytest.raises(InvalidFormat):
            CalendarDate.parse(text)

    def test_month_validated(self):
        with pytest.raises(InvalidFormat):
            CalendarDate(2024, 13, 1)

    def test_from_epoch_seconds(self, now):
        assert CalendarDate.from_epoch_seconds(now) == CalendarDate(2026, 2, 25)


class TestPredictionPoint:
    def test_immutable(self):
        point = PredictionPoint(timestamp=10, height=1.5)
        with pytest.raises(AttributeError):
            point.height = 2.0  # type: ignore[misc]

    def test_time(self):
        point = PredictionPoint(timestamp=86400, height=0.0)
        assert point.time == datetime(1970, 1, 2, tzinfo=timezone.utc)


class TestPredictionSet:
    """Test ordering and the usability check."""

    def test_sorted_on_construction(self):
        predictions = PredictionSet(
            [
                PredictionPoint(300, 3.0),
                PredictionPoint(100, 1.0),
                PredictionPoint(200, 2.0),
            ]
        )
        assert [p.timestamp for p in predictions] == [100, 200, 300]
        assert predictions[0].height == 1.0
        assert len(predictions) == 3

    def test_equality(self):
        a = PredictionSet([PredictionPoint(2, 1.0), PredictionPoint(1, 0.5)])
        b = PredictionSet([PredictionPoint(1, 0.5), PredictionPoint(2, 1.0)])
        assert a == b

    def test_usable_window(self, now):
        predictions = PredictionSet(
            [PredictionPoint(now - 300, 1.0), PredictionPoint(now + 300, 2.0)]
        )
        assert predictions.is_usable(now)

    def test_point_at_now_counts_as_past(self, now):
        predictions = PredictionSet(
            [PredictionPoint(now, 1.0), PredictionPoint(now + 300, 2.0)]
        )
        assert predictions.is_usable(now)

    def test_all_future_unusable(self, now):
        predictions = PredictionSet(
            [PredictionPoint(now + 300, 1.0), PredictionPoint(now + 600, 2.0)]
        )
        assert not predictions.is_usable(now)

    def test_all_past_unusable(self, now):
        predictions = PredictionSet(
            [PredictionPoint(now - 600, 1.0), PredictionPoint(now - 300, 2.0)]
        )
        assert not predictions.is_usable(now)

    def test_zero_timestamp_unusable(self, now):
        """The zero-timestamp sentinel poisons the whole set."""
        predictions = PredictionSet(
            [
                PredictionPoint(0, 1.0),
                PredictionPoint(now - 300, 1.0),
                PredictionPoint(now + 300, 2.0),
            ]
        )
        assert not predictions.is_usable(now)

    def test_empty_unusable(self, now):
        assert not PredictionSet().is_usable(now)

    def test_to_pandas(self, window):
        pd = pytest.importorskip("pandas")

        df = window.to_pandas()
        assert list(df.columns) == ["time", "height"]
        assert len(df) == len(window)
        assert df["time"].iloc[0] == pd.Timestamp(window[0].timestamp, unit="s", tz="UTC")
        assert df["height"].iloc[1] == window[1].height
