"""
On-disk cache of prediction sets.

Each file holds the predictions for one station and one UTC day:

    u32 count (little-endian)
    count x { i64 timestamp, u64 IEEE-754 bits of height } (little-endian)

Any validation failure clears the whole cache directory, since a bad file
usually means the format changed and neighbouring files are stale too.
"""

import logging
import os
import shutil
import struct
import tempfile
from pathlib import Path
from typing import Union

from .exceptions import CacheNotFound, InvalidCache
from .models import CalendarDate, PredictionPoint, PredictionSet

logger = logging.getLogger(__name__)

HEADER = struct.Struct("<I")
POINT = struct.Struct("<qd")
BYTES_PER_POINT = POINT.size
MAX_POINTS = 10_000


def encode_predictions(predictions: PredictionSet) -> bytes:
    """Serialize predictions into the cache record layout."""
    parts = [HEADER.pack(len(predictions))]
    for point in predictions:
        parts.append(POINT.pack(point.timestamp, point.height))
    return b"".join(parts)


def decode_predictions(data: bytes) -> PredictionSet:
    """
    Deserialize a cache record.

    Raises:
        InvalidCache: If the header is short, the count is zero or above
            MAX_POINTS, or the body length disagrees with the count
    """
    if len(data) < HEADER.size:
        raise InvalidCache(f"Cache record too short: {len(data)} bytes")

    (count,) = HEADER.unpack_from(data)
    if count == 0 or count > MAX_POINTS:
        raise InvalidCache(f"Implausible point count: {count}")

    body = len(data) - HEADER.size
    if count * BYTES_PER_POINT != body:
        raise InvalidCache(
            f"Expected {count * BYTES_PER_POINT} bytes of points, found {body}"
        )

    return PredictionSet(
        PredictionPoint(timestamp=timestamp, height=height)
        for timestamp, height in POINT.iter_unpack(data[HEADER.size :])
    )


class CacheStore:
    """Prediction cache rooted at a single directory (usually ~/.cache/tsu)."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path_for(self, station_id: str, date: CalendarDate) -> Path:
        """Cache file for a station on a given UTC day."""
        return self.root / f"{station_id}_{date.isoformat()}.bin"

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def read(self, path: Union[str, Path]) -> PredictionSet:
        """
        Load a cached prediction set.

        Raises:
            CacheNotFound: If the file does not exist
            InvalidCache: If the file is truncated or malformed
        """
        try:
            data = Path(path).read_bytes()
        except FileNotFoundError as e:
            raise CacheNotFound(f"No cache file at {path}") from e
        except OSError as e:
            raise InvalidCache(f"Unreadable cache file {path}: {e}") from e

        predictions = decode_predictions(data)
        logger.debug(f"Read {len(predictions)} predictions from {path}")
        return predictions

    def write(self, path: Union[str, Path], predictions: PredictionSet) -> None:
        """
        Write a prediction set, replacing any existing file.

        The record is written to a temporary file in the same directory and
        renamed over the target, so concurrent readers see either the old or
        the new content.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(encode_predictions(predictions))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Wrote {len(predictions)} predictions to {path}")

    def clear(self) -> None:
        """Delete the whole cache directory and recreate it empty."""
        logger.info(f"Clearing cache directory {self.root}")
        shutil.rmtree(self.root, ignore_errors=True)
        self.ensure_root()
