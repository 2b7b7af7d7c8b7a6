"""
NOAA CO-OPS tide prediction client for tsu.
"""

import logging
from typing import Any, Dict, List

import httpx

from .dates import add_days_to_date, parse_timestamp
from .exceptions import DateError, FetchFailed, NOAAError, ParseFailed
from .models import CalendarDate, PredictionPoint, PredictionSet

logger = logging.getLogger(__name__)


def parse_predictions(payload: Any) -> PredictionSet:
    """
    Turn a decoded datagetter response into a sorted PredictionSet.

    A height that is not numeric becomes ``0.0``. A point whose time cannot
    be parsed is dropped. A response without a ``predictions`` list yields
    an empty set.

    Raises:
        ParseFailed: If the payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise ParseFailed(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    predictions = payload.get("predictions")
    if predictions is None:
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            logger.warning(f"NOAA API returned an error: {error['message']}")
        return PredictionSet()

    if not isinstance(predictions, list):
        logger.warning("Ignoring non-list 'predictions' field")
        return PredictionSet()

    points: List[PredictionPoint] = []
    dropped = 0
    for item in predictions:
        if not isinstance(item, dict):
            dropped += 1
            continue

        try:
            height = float(item.get("v"))
        except (TypeError, ValueError):
            height = 0.0

        try:
            timestamp = parse_timestamp(str(item.get("t", "")))
        except DateError:
            # Skip the point but keep the rest of the response
            dropped += 1
            continue

        points.append(PredictionPoint(timestamp=timestamp, height=height))

    if dropped:
        logger.debug(f"Dropped {dropped} unparseable prediction(s)")

    return PredictionSet(points)


class NOAAClient:
    """
    Client for the NOAA CO-OPS datagetter API.

    Only the ``predictions`` product is used. All times are requested and
    returned in GMT.
    """

    BASE_URL = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"

    def __init__(
        self,
        timeout: float = 30,
        datum: str = "MLLW",
        units: str = "english",
        interval: str = "6",
    ):
        self.timeout = timeout
        self.datum = datum
        self.units = units
        self.interval = interval
        self._client = httpx.Client(
            timeout=timeout,
            headers={
                "User-Agent": "tsu/0.1.0",
                "Accept": "application/json",
            },
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "NOAAClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def build_params(
        self, station_id: str, begin: CalendarDate, end: CalendarDate
    ) -> Dict[str, str]:
        """Query parameters for a predictions request covering begin..end."""
        return {
            "station": station_id,
            "product": "predictions",
            "datum": self.datum,
            "interval": self.interval,
            "begin_date": begin.compact(),
            "end_date": end.compact(),
            "time_zone": "gmt",
            "units": self.units,
            "format": "json",
            "application": "tsu",
        }

    def _make_request(self, params: Dict[str, str]) -> Any:
        """Make a request to the datagetter with error handling."""
        try:
            response = self._client.get(self.BASE_URL, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            raise FetchFailed(f"Request timeout after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise FetchFailed(
                f"HTTP error {e.response.status_code}: {e}"
            ) from e
        except httpx.RequestError as e:
            raise FetchFailed(f"Network error: {e}") from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise ParseFailed(f"Invalid JSON response: {e}") from e

    def get_predictions(
        self, station_id: str, begin: CalendarDate, end: CalendarDate
    ) -> PredictionSet:
        """
        Fetch predictions for an inclusive date range in a single call.

        Raises:
            FetchFailed: On transport errors or non-success status
            ParseFailed: If the body is not a JSON object
        """
        params = self.build_params(station_id, begin, end)
        logger.debug(f"Requesting predictions for {station_id} {begin}..{end}")
        predictions = parse_predictions(self._make_request(params))
        logger.debug(f"Received {len(predictions)} predictions")
        return predictions

    def fetch_predictions(
        self,
        station_id: str,
        center: CalendarDate,
        per_day: bool = False,
    ) -> PredictionSet:
        """
        Fetch the three-day window of predictions around ``center``.

        Args:
            station_id: NOAA station identifier (e.g. '9414290')
            center: Date in the middle of the window
            per_day: Issue one request per day instead of a single
                multi-day request. A failing day is skipped.

        Returns:
            Predictions sorted by timestamp

        Raises:
            DateOutOfRange: If the window starts before 1970-01-01
            FetchFailed: If the single multi-day request fails
            ParseFailed: If the multi-day response is malformed
        """
        begin = add_days_to_date(center, -1)
        end = add_days_to_date(center, 1)

        if not per_day:
            return self.get_predictions(station_id, begin, end)

        points: List[PredictionPoint] = []
        for day in (begin, center, end):
            try:
                points.extend(self.get_predictions(station_id, day, day))
            except NOAAError as e:
                logger.warning(f"Skipping {day} for station {station_id}: {e}")

        return PredictionSet(points)
