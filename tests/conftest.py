"""Pytest configuration and shared fixtures for WMI exporter tests."""

import sys
from pathlib import Path
from typing import Any

import pytest


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from fakes import FakeQuerySource
from wmi_exporter.collector import CollectorRegistry
from wmi_exporter.convert import WINDOWS_EPOCH_OFFSET_TICKS
from wmi_exporter.log_config import clear_context


# ==================== Row Fixtures ====================


@pytest.fixture
def system_row() -> dict[str, int]:
    """Win32_PerfRawData_PerfOS_System row with 315360 seconds since 1970."""
    return {
        "ContextSwitchesPersec": 1000,
        "ExceptionDispatchesPersec": 5,
        "Frequency_Object": 10_000_000,
        "ProcessorQueueLength": 2,
        "SystemCallsPersec": 20000,
        "SystemUpTime": WINDOWS_EPOCH_OFFSET_TICKS + 3_153_600_000_000,
        "Threads": 450,
    }


@pytest.fixture
def cs_row() -> dict[str, int]:
    """Win32_ComputerSystem row."""
    return {
        "NumberOfLogicalProcessors": 8,
        "TotalPhysicalMemory": 17_179_869_184,
    }


def make_disk_row(name: str, **overrides: Any) -> dict[str, Any]:
    row = {
        "Name": name,
        "CurrentDiskQueueLength": 3,
        "DiskReadBytesPerSec": 4096,
        "DiskReadsPerSec": 10,
        "DiskWriteBytesPerSec": 8192,
        "DiskWritesPerSec": 20,
        "PercentDiskReadTime": 25_000_000,
        "PercentDiskWriteTime": 5_000_000,
        "PercentFreeSpace": 1024,
        "PercentFreeSpace_Base": 4096,
        "PercentIdleTime": 100_000_000,
        "SplitIOPerSec": 7,
    }
    row.update(overrides)
    return row


@pytest.fixture
def disk_rows() -> list[dict[str, Any]]:
    """Two volumes plus the aggregate _Total instance."""
    return [
        make_disk_row("C:"),
        make_disk_row("D:", DiskReadsPerSec=99),
        make_disk_row("_Total"),
    ]


# ==================== Source Fixtures ====================


@pytest.fixture
def fake_source(system_row, cs_row, disk_rows) -> FakeQuerySource:
    """Fake source answering every built-in WMI class."""
    return FakeQuerySource(
        {
            "Win32_PerfRawData_PerfOS_System": [system_row],
            "Win32_ComputerSystem": [cs_row],
            "Win32_PerfRawData_PerfDisk_LogicalDisk": disk_rows,
        }
    )


@pytest.fixture
def registry() -> CollectorRegistry:
    """Fresh, empty collector registry."""
    return CollectorRegistry()


@pytest.fixture(autouse=True)
def _clear_logging_context():
    yield
    clear_context()
