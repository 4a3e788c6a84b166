"""Unit tests for raw counter transforms."""

from datetime import datetime, timezone

import pytest

from wmi_exporter.convert import (
    TICKS_PER_SECOND,
    WINDOWS_EPOCH_OFFSET_TICKS,
    as_float,
    filetime_to_unix_seconds,
    megabytes_to_bytes,
    ticks_to_seconds,
)
from wmi_exporter.exceptions import DivideByZeroError, InvalidFieldError, MissingFieldError


class TestEpochOffset:
    """Test the FILETIME to Unix epoch constant."""

    def test_offset_matches_calendar(self):
        """The offset equals the 100 ns ticks between 1601 and 1970."""
        delta = datetime(1970, 1, 1, tzinfo=timezone.utc) - datetime(1601, 1, 1, tzinfo=timezone.utc)
        ticks = (delta.days * 86_400 + delta.seconds) * TICKS_PER_SECOND
        assert ticks == WINDOWS_EPOCH_OFFSET_TICKS == 116_444_736_000_000_000


class TestTicksToSeconds:
    """Test frequency-scaled durations."""

    def test_divides_by_frequency(self):
        assert ticks_to_seconds(25_000_000, 10_000_000) == 2.5

    def test_zero_frequency_is_an_error(self):
        with pytest.raises(DivideByZeroError):
            ticks_to_seconds(100, 0)

    def test_missing_frequency_is_an_error(self):
        with pytest.raises(MissingFieldError) as exc_info:
            ticks_to_seconds(100, None, field_name="Frequency_Object")
        assert exc_info.value.field_name == "Frequency_Object"


class TestFiletimeToUnixSeconds:
    """Test platform-epoch timestamp conversion."""

    @pytest.mark.parametrize(
        "n, frequency",
        [
            (0, 10_000_000),
            (1, 10_000_000),
            (3_153_600_000_000, 10_000_000),
            (17_000_000_000_000_000, 10_000_000),
            (12_345, 1),
            (2**64 - 1 - WINDOWS_EPOCH_OFFSET_TICKS, 3_579_545),
        ],
    )
    def test_offset_then_scale(self, n, frequency):
        """offset + N ticks at frequency F converts to exactly N / F seconds."""
        assert filetime_to_unix_seconds(WINDOWS_EPOCH_OFFSET_TICKS + n, frequency) == n / frequency

    def test_worked_example(self):
        assert filetime_to_unix_seconds(
            WINDOWS_EPOCH_OFFSET_TICKS + 3_153_600_000_000, 10_000_000
        ) == 315360.0

    def test_off_by_one_tick_is_visible(self):
        """A single tick of error changes the result at 1 Hz."""
        assert filetime_to_unix_seconds(WINDOWS_EPOCH_OFFSET_TICKS + 1, 1) == 1.0
        assert filetime_to_unix_seconds(WINDOWS_EPOCH_OFFSET_TICKS, 1) == 0.0

    def test_before_unix_epoch_is_an_error(self):
        with pytest.raises(InvalidFieldError):
            filetime_to_unix_seconds(WINDOWS_EPOCH_OFFSET_TICKS - 1, 10_000_000)

    def test_zero_frequency_is_an_error(self):
        with pytest.raises(DivideByZeroError):
            filetime_to_unix_seconds(WINDOWS_EPOCH_OFFSET_TICKS + 10, 0)


class TestPassThrough:
    """Test direct casts."""

    def test_as_float(self):
        assert as_float(2**32 - 1) == 4294967295.0

    def test_megabytes_to_bytes(self):
        assert megabytes_to_bytes(3) == 3 * 1024 * 1024
