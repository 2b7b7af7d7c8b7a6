"""
Current tide height and trend for shell prompts.

Predictions come from the NOAA CO-OPS API and are cached per station and
day under ~/.cache/tsu.
"""

import logging

try:
    from importlib import metadata

    __version__ = metadata.version(__name__)
except Exception:
    __version__ = "unknown"

from .cache import CacheStore, decode_predictions, encode_predictions
from .client import NOAAClient, parse_predictions
from .config import Settings
from .dates import (
    add_days_to_date,
    date_to_epoch_days,
    epoch_days_to_date,
    is_leap_year,
    parse_timestamp,
    today,
)
from .estimator import FALLING, PLACEHOLDER, RISING, interpolate, status, trend
from .exceptions import (
    CacheError,
    CacheNotFound,
    ConfigError,
    ConfigInvalid,
    ConfigMissing,
    DateError,
    DateOutOfRange,
    FetchFailed,
    InvalidCache,
    InvalidFormat,
    NOAAError,
    ParseFailed,
    TsuError,
)
from .models import CalendarDate, PredictionPoint, PredictionSet
from .pipeline import DayPipeline, PipelineState, current_status

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Models
    "CalendarDate",
    "PredictionPoint",
    "PredictionSet",
    # Calendar
    "add_days_to_date",
    "date_to_epoch_days",
    "epoch_days_to_date",
    "is_leap_year",
    "parse_timestamp",
    "today",
    # Components
    "CacheStore",
    "decode_predictions",
    "encode_predictions",
    "NOAAClient",
    "parse_predictions",
    "interpolate",
    "status",
    "trend",
    "PLACEHOLDER",
    "RISING",
    "FALLING",
    "DayPipeline",
    "PipelineState",
    "current_status",
    "Settings",
    # Exceptions
    "TsuError",
    "ConfigError",
    "ConfigMissing",
    "ConfigInvalid",
    "DateError",
    "DateOutOfRange",
    "InvalidFormat",
    "CacheError",
    "CacheNotFound",
    "InvalidCache",
    "NOAAError",
    "FetchFailed",
    "ParseFailed",
]
