"""
Numeric transforms from raw WMI counters to metric values.

Raw performance counters come in three shapes that matter here:

- cumulative counters (``...Persec`` fields) passed through as-is,
- tick counts that need dividing by a frequency to become seconds,
- FILETIME timestamps counted in 100 ns ticks since 1601-01-01 UTC.

All offset arithmetic is done on Python ints so nothing is lost before the
single final float division.
"""

from .exceptions import DivideByZeroError, InvalidFieldError, MissingFieldError


# 100 ns intervals between 1601-01-01 and 1970-01-01 (369 years, 89 leap days)
WINDOWS_EPOCH_OFFSET_TICKS = 116_444_736_000_000_000

# FILETIME and PerfTime counters on Windows tick every 100 ns
TICKS_PER_SECOND = 10_000_000

BYTES_PER_MEGABYTE = 1024 * 1024


def as_float(value: int) -> float:
    """Pass-through cast for direct gauges and cumulative counters."""
    return float(value)


def ticks_to_seconds(ticks: int, frequency: int | None, field_name: str = "Frequency") -> float:
    """
    Convert a tick count to seconds.

    Args:
        ticks: Raw tick count
        frequency: Ticks per second
        field_name: Name of the divisor field, for error context

    Returns:
        Seconds as float

    Raises:
        MissingFieldError: If the frequency is None
        DivideByZeroError: If the frequency is zero

    Examples:
        >>> ticks_to_seconds(25_000_000, 10_000_000)
        2.5
    """
    if frequency is None:
        raise MissingFieldError("Frequency divisor is missing", field_name=field_name)
    if frequency == 0:
        raise DivideByZeroError("Frequency divisor is zero", context={"field": field_name})
    return ticks / frequency


def filetime_to_unix_seconds(
    ticks: int,
    frequency: int | None,
    field_name: str = "Timestamp",
    frequency_field: str = "Frequency",
) -> float:
    """
    Convert a FILETIME-based tick value to seconds since the Unix epoch.

    The epoch offset is subtracted in the raw tick unit before scaling by the
    frequency divisor.

    Args:
        ticks: Ticks since 1601-01-01 UTC
        frequency: Ticks per second
        field_name: Name of the timestamp field, for error context
        frequency_field: Name of the divisor field, for error context

    Raises:
        InvalidFieldError: If the value precedes the Unix epoch
        MissingFieldError: If the frequency is None
        DivideByZeroError: If the frequency is zero

    Examples:
        >>> filetime_to_unix_seconds(WINDOWS_EPOCH_OFFSET_TICKS + 3_153_600_000_000, 10_000_000)
        315360.0
    """
    if ticks < WINDOWS_EPOCH_OFFSET_TICKS:
        raise InvalidFieldError(
            "Timestamp precedes the Unix epoch",
            field_name=field_name,
            context={"value": ticks},
        )
    return ticks_to_seconds(ticks - WINDOWS_EPOCH_OFFSET_TICKS, frequency, frequency_field)


def megabytes_to_bytes(megabytes: int) -> float:
    """Convert a raw megabyte count to bytes."""
    return float(megabytes * BYTES_PER_MEGABYTE)


__all__ = [
    "WINDOWS_EPOCH_OFFSET_TICKS",
    "TICKS_PER_SECOND",
    "BYTES_PER_MEGABYTE",
    "as_float",
    "ticks_to_seconds",
    "filetime_to_unix_seconds",
    "megabytes_to_bytes",
]
