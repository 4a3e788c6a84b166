"""Unit tests for WMI query sources."""

import sys
import types

import pytest

from wmi_exporter.exceptions import ConstructionError, QueryFailedError
from wmi_exporter.wmi import WmiQuerySource, create_query


class TestCreateQuery:
    """Test WQL generation."""

    def test_fields(self):
        assert (
            create_query("Win32_PerfRawData_PerfOS_System", ["Threads", "SystemUpTime"])
            == "SELECT Threads, SystemUpTime FROM Win32_PerfRawData_PerfOS_System"
        )

    def test_all_fields(self):
        assert create_query("Win32_ComputerSystem", []) == "SELECT * FROM Win32_ComputerSystem"

    def test_empty_class(self):
        with pytest.raises(ValueError):
            create_query("", ["Name"])


class FakeConnection:
    def __init__(self, rows, error=None):
        self.rows = rows
        self.error = error
        self.queries = []

    def query(self, wql):
        self.queries.append(wql)
        if self.error is not None:
            raise self.error
        return [types.SimpleNamespace(**row) for row in self.rows]


@pytest.fixture
def fake_wmi(monkeypatch):
    """Install stand-in pythoncom and wmi modules for one test."""
    state = {"connection": FakeConnection([]), "co_init": 0, "co_uninit": 0, "connect_kwargs": None}

    pythoncom = types.ModuleType("pythoncom")

    def co_initialize():
        state["co_init"] += 1

    def co_uninitialize():
        state["co_uninit"] += 1

    pythoncom.CoInitialize = co_initialize
    pythoncom.CoUninitialize = co_uninitialize

    wmi = types.ModuleType("wmi")

    def connect(**kwargs):
        state["connect_kwargs"] = kwargs
        return state["connection"]

    wmi.WMI = connect

    monkeypatch.setitem(sys.modules, "pythoncom", pythoncom)
    monkeypatch.setitem(sys.modules, "wmi", wmi)
    return state


class TestWmiQuerySource:
    """Test the wmi package adapter."""

    def test_missing_package_is_construction_error(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "wmi", None)

        with pytest.raises(ConstructionError) as exc_info:
            WmiQuerySource()
        assert isinstance(exc_info.value.cause, ImportError)

    def test_query_rows(self, fake_wmi):
        fake_wmi["connection"] = FakeConnection(
            [{"Name": "C:", "PercentIdleTime": 5}, {"Name": "D:", "PercentIdleTime": 6}]
        )
        source = WmiQuerySource(namespace="root\\cimv2")

        rows = source.query("Win32_PerfRawData_PerfDisk_LogicalDisk", ["Name", "PercentIdleTime"])

        assert rows == [
            {"Name": "C:", "PercentIdleTime": 5},
            {"Name": "D:", "PercentIdleTime": 6},
        ]
        assert fake_wmi["connection"].queries == [
            "SELECT Name, PercentIdleTime FROM Win32_PerfRawData_PerfDisk_LogicalDisk"
        ]
        assert fake_wmi["connect_kwargs"] == {"computer": "", "namespace": "root\\cimv2"}
        assert fake_wmi["co_init"] == fake_wmi["co_uninit"] == 1

    def test_absent_property_is_none(self, fake_wmi):
        fake_wmi["connection"] = FakeConnection([{"Name": "C:"}])
        rows = WmiQuerySource().query("Win32_PerfRawData_PerfDisk_LogicalDisk", ["Name", "SplitIOPerSec"])
        assert rows == [{"Name": "C:", "SplitIOPerSec": None}]

    def test_driver_error_is_query_failed(self, fake_wmi):
        fake_wmi["connection"] = FakeConnection([], error=OSError("RPC server unavailable"))
        source = WmiQuerySource()

        with pytest.raises(QueryFailedError) as exc_info:
            source.query("Win32_ComputerSystem", ["TotalPhysicalMemory"])

        assert exc_info.value.wmi_class == "Win32_ComputerSystem"
        assert isinstance(exc_info.value.cause, OSError)
        assert fake_wmi["co_uninit"] == 1
