"""Unit tests for raw snapshot schemas."""

import pytest

from wmi_exporter.exceptions import InvalidFieldError, MissingFieldError
from wmi_exporter.wmi import PerfDiskLogicalDisk, PerfOSSystem


class TestPerfOSSystem:
    """Test Win32_PerfRawData_PerfOS_System row validation."""

    def test_field_names_follow_declaration_order(self):
        assert PerfOSSystem.field_names() == [
            "ContextSwitchesPersec",
            "ExceptionDispatchesPersec",
            "Frequency_Object",
            "ProcessorQueueLength",
            "SystemCallsPersec",
            "SystemUpTime",
            "Threads",
        ]

    def test_from_row(self, system_row):
        snapshot = PerfOSSystem.from_row(system_row)
        assert snapshot.Threads == 450
        assert snapshot.Frequency_Object == 10_000_000

    def test_extra_fields_are_ignored(self, system_row):
        system_row["Caption"] = "ignored"
        assert PerfOSSystem.from_row(system_row).ContextSwitchesPersec == 1000

    @pytest.mark.parametrize("field_name", ["Frequency_Object", "Threads"])
    def test_missing_field(self, system_row, field_name):
        del system_row[field_name]
        with pytest.raises(MissingFieldError) as exc_info:
            PerfOSSystem.from_row(system_row)
        assert exc_info.value.field_name == field_name
        assert exc_info.value.wmi_class == "Win32_PerfRawData_PerfOS_System"

    def test_none_is_missing(self, system_row):
        system_row["Frequency_Object"] = None
        with pytest.raises(MissingFieldError):
            PerfOSSystem.from_row(system_row)

    def test_uint64_decimal_strings_are_accepted(self, system_row):
        system_row["SystemUpTime"] = str(system_row["SystemUpTime"])
        assert isinstance(PerfOSSystem.from_row(system_row).SystemUpTime, int)

    @pytest.mark.parametrize(
        "field_name, value",
        [
            ("Threads", 2**32),
            ("Threads", -1),
            ("SystemUpTime", 2**64),
            ("Threads", 1.5),
            ("Threads", True),
            ("Threads", "many"),
            ("Threads", "²"),
            ("SystemUpTime", "12e3"),
        ],
    )
    def test_invalid_values(self, system_row, field_name, value):
        system_row[field_name] = value
        with pytest.raises(InvalidFieldError):
            PerfOSSystem.from_row(system_row)

    def test_width_boundaries(self, system_row):
        system_row["Threads"] = 2**32 - 1
        system_row["SystemUpTime"] = 2**64 - 1
        snapshot = PerfOSSystem.from_row(system_row)
        assert snapshot.Threads == 2**32 - 1
        assert snapshot.SystemUpTime == 2**64 - 1


class TestPerfDiskLogicalDisk:
    """Test logical disk rows, which carry a string instance name."""

    def test_name_must_be_string(self, disk_rows):
        row = disk_rows[0]
        row["Name"] = 3
        with pytest.raises(InvalidFieldError):
            PerfDiskLogicalDisk.from_row(row)

    def test_from_row(self, disk_rows):
        snapshot = PerfDiskLogicalDisk.from_row(disk_rows[0])
        assert snapshot.Name == "C:"
        assert snapshot.PercentDiskReadTime == 25_000_000
