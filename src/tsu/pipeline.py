"""
Daily pipeline: cached predictions first, NOAA second, status string always.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from .cache import CacheStore
from .client import NOAAClient
from .config import Settings
from .dates import today
from .estimator import PLACEHOLDER, status
from .exceptions import CacheError, TsuError
from .models import PredictionSet

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    TRY_CACHE = "try_cache"
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    FETCHING = "fetching"
    FETCH_OK = "fetch_ok"
    FETCH_FAILED = "fetch_failed"
    DONE = "done"


class DayPipeline:
    """
    Produce the tide status for one station on the current UTC day.

    ``run()`` never raises: every failure below it resolves to either a real
    status or PLACEHOLDER, so a shell prompt never shows a traceback.
    """

    def __init__(
        self,
        station_id: str,
        cache: CacheStore,
        client: NOAAClient,
        clock: Callable[[], float] = time.time,
        per_day: bool = False,
    ):
        self.station_id = station_id
        self.cache = cache
        self.client = client
        self.clock = clock
        self.per_day = per_day
        self.state = PipelineState.TRY_CACHE

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state

    def _reset_cache(self) -> None:
        try:
            self.cache.clear()
        except OSError as e:
            logger.warning(f"Could not clear cache {self.cache.root}: {e}")

    def run(self, refresh: bool = False) -> str:
        """
        Return the status string for now.

        Args:
            refresh: Skip the cache read and go straight to NOAA
        """
        now = int(self.clock())
        self.state = PipelineState.TRY_CACHE

        try:
            day = today(now)
            path = self.cache.path_for(self.station_id, day)

            if not refresh:
                cached = self._try_cache(path, now)
                if cached is not None:
                    self._enter(PipelineState.DONE)
                    return status(cached, now)
            self._reset_cache()

            self._enter(PipelineState.FETCHING)
            predictions = self.client.fetch_predictions(
                self.station_id, day, per_day=self.per_day
            )
        except (TsuError, OSError) as e:
            logger.warning(f"Fetch failed for station {self.station_id}: {e}")
            self._enter(PipelineState.FETCH_FAILED)
            self._reset_cache()
            self._enter(PipelineState.DONE)
            return PLACEHOLDER

        if not predictions.is_usable(now):
            logger.warning(
                f"Fetched {len(predictions)} predictions for station "
                f"{self.station_id} do not bracket the current time"
            )
            self._enter(PipelineState.FETCH_FAILED)
            self._reset_cache()
            self._enter(PipelineState.DONE)
            return PLACEHOLDER

        self._enter(PipelineState.FETCH_OK)
        try:
            self.cache.write(path, predictions)
        except OSError as e:
            logger.warning(f"Could not write cache {path}: {e}")

        self._enter(PipelineState.DONE)
        return status(predictions, now)

    def _try_cache(self, path, now: int) -> Optional[PredictionSet]:
        try:
            cached = self.cache.read(path)
        except CacheError as e:
            logger.debug(f"Cache miss: {e}")
            self._enter(PipelineState.CACHE_MISS)
            return None

        if not cached.is_usable(now):
            logger.info(f"Cached predictions in {path} are stale")
            self._enter(PipelineState.CACHE_MISS)
            return None

        self._enter(PipelineState.CACHE_HIT)
        return cached


def current_status(
    settings: Settings,
    clock: Callable[[], float] = time.time,
    refresh: bool = False,
) -> str:
    """Run the pipeline for the configured station with a fresh client."""
    cache = CacheStore(settings.cache_root)
    try:
        cache.ensure_root()
    except OSError as e:
        logger.warning(f"Could not create cache directory {cache.root}: {e}")

    with NOAAClient(
        timeout=settings.timeout, datum=settings.datum, units=settings.units
    ) as client:
        return DayPipeline(settings.station_id, cache, client, clock=clock).run(
            refresh=refresh
        )
