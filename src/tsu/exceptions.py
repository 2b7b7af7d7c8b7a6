"""
Exceptions for tsu operations.
"""


class TsuError(Exception):
    """Base exception for tsu-related errors."""

    pass


class ConfigError(TsuError):
    """Error in process configuration."""

    pass


class ConfigMissing(ConfigError):
    """A required environment variable is not set."""

    pass


class ConfigInvalid(ConfigError):
    """An environment variable is set to an unusable value."""

    pass


class DateError(TsuError):
    """Error in calendar arithmetic or date parsing."""

    pass


class DateOutOfRange(DateError):
    """Date falls before 1970-01-01."""

    pass


class InvalidFormat(DateError):
    """Date or timestamp text could not be parsed."""

    pass


class CacheError(TsuError):
    """Error reading the prediction cache."""

    pass


class CacheNotFound(CacheError):
    """No cache file exists for the requested station and date."""

    pass


class InvalidCache(CacheError):
    """Cache file is truncated or not in the expected format."""

    pass


class NOAAError(TsuError):
    """Error talking to the NOAA tide prediction API."""

    pass


class FetchFailed(NOAAError):
    """Transport error or non-success HTTP status."""

    pass


class ParseFailed(NOAAError):
    """Response body is not well-formed JSON at the top level."""

    pass
