"""Computer system collector, reading Win32_ComputerSystem."""

from ..convert import as_float
from ..metrics import NAMESPACE, MetricDesc, new_desc, new_gauge
from ..wmi import ComputerSystem, QuerySource
from .base import Collector, Sink, emit_all, query_snapshots


class CSCollector(Collector):
    """Collector for processor count and installed memory."""

    subsystem = "cs"

    def __init__(self, source: QuerySource) -> None:
        self.source = source

        self.logical_processors = new_desc(
            NAMESPACE, self.subsystem, "logical_processors",
            "ComputerSystem.NumberOfLogicalProcessors",
        )
        self.physical_memory_bytes = new_desc(
            NAMESPACE, self.subsystem, "physical_memory_bytes",
            "ComputerSystem.TotalPhysicalMemory",
        )

    def describe(self) -> tuple[MetricDesc, ...]:
        return (self.logical_processors, self.physical_memory_bytes)

    def collect(self, sink: Sink) -> None:
        snapshot = query_snapshots(self.source, ComputerSystem)[0]
        emit_all(sink, [
            new_gauge(self.logical_processors, as_float(snapshot.NumberOfLogicalProcessors)),
            new_gauge(self.physical_memory_bytes, as_float(snapshot.TotalPhysicalMemory)),
        ])


__all__ = ["CSCollector"]
