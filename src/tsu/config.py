"""
Process configuration read from the environment.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConfigInvalid, ConfigMissing

STATION_ENV = "NOAA_GOV_STATION_ID"


@dataclass
class Settings:
    """Everything a tsu invocation needs to know about its environment."""

    station_id: str
    cache_root: Path
    timeout: float = 30.0
    datum: str = "MLLW"
    units: str = "english"
    log_level: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        station_id: Optional[str] = None,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)
            station_id: Explicit station, overriding NOAA_GOV_STATION_ID

        Raises:
            ConfigMissing: If no station identifier is available
            ConfigInvalid: If TSU_TIMEOUT is not a positive number or
                TSU_LOG_LEVEL is not a logging level name
        """
        if environ is None:
            environ = os.environ

        station = (station_id or environ.get(STATION_ENV, "")).strip()
        if not station:
            raise ConfigMissing(f"{STATION_ENV} environment variable is required")

        home = environ.get("HOME")
        cache_root = (Path(home) if home else Path.home()) / ".cache" / "tsu"

        raw_timeout = environ.get("TSU_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigInvalid(f"TSU_TIMEOUT must be a number, got {raw_timeout!r}") from e
        if timeout <= 0:
            raise ConfigInvalid(f"TSU_TIMEOUT must be positive, got {raw_timeout!r}")

        log_level = environ.get("TSU_LOG_LEVEL", "").strip().upper() or None
        if log_level is not None and not isinstance(logging.getLevelName(log_level), int):
            raise ConfigInvalid(f"TSU_LOG_LEVEL is not a logging level: {log_level!r}")

        return cls(
            station_id=station,
            cache_root=cache_root,
            timeout=timeout,
            datum=environ.get("TSU_DATUM", "MLLW"),
            units=environ.get("TSU_UNITS", "english"),
            log_level=log_level,
        )
