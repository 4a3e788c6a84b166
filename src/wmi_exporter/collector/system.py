"""
System collector.

Returns data points from the Win32_PerfRawData_PerfOS_System class:
https://web.archive.org/web/20050830140516/http://msdn.microsoft.com/library/en-us/wmisdk/wmi/win32_perfrawdata_perfos_system.asp
"""

from ..convert import as_float, filetime_to_unix_seconds
from ..metrics import NAMESPACE, MetricDesc, new_desc, new_gauge
from ..wmi import PerfOSSystem, QuerySource
from .base import Collector, Sink, emit_all, query_snapshots


class SystemCollector(Collector):
    """
    Collector for system-wide scheduler and uptime counters.

    The ``..._total`` metrics expose the raw cumulative counters behind the
    ``Persec`` fields; rates are left to the consumer. They are gauge-typed
    and keep the ``_total`` suffix for compatibility with existing dashboards.
    """

    subsystem = "system"

    def __init__(self, source: QuerySource) -> None:
        self.source = source

        self.context_switches_total = new_desc(
            NAMESPACE, self.subsystem, "context_switches_total",
            "PerfOS_System.ContextSwitchesPersec",
        )
        self.exception_dispatches_total = new_desc(
            NAMESPACE, self.subsystem, "exception_dispatches_total",
            "PerfOS_System.ExceptionDispatchesPersec",
        )
        self.processor_queue_length = new_desc(
            NAMESPACE, self.subsystem, "processor_queue_length",
            "PerfOS_System.ProcessorQueueLength",
        )
        self.system_calls_total = new_desc(
            NAMESPACE, self.subsystem, "system_calls_total",
            "PerfOS_System.SystemCallsPersec",
        )
        self.system_up_time = new_desc(
            NAMESPACE, self.subsystem, "system_up_time",
            "SystemUpTime/Frequency_Object",
        )
        self.threads = new_desc(
            NAMESPACE, self.subsystem, "threads",
            "PerfOS_System.Threads",
        )

        self._descriptors = (
            self.context_switches_total,
            self.exception_dispatches_total,
            self.processor_queue_length,
            self.system_calls_total,
            self.system_up_time,
            self.threads,
        )

    def describe(self) -> tuple[MetricDesc, ...]:
        return self._descriptors

    def collect(self, sink: Sink) -> None:
        # Only the first row is meaningful for this singleton class
        snapshot = query_snapshots(self.source, PerfOSSystem)[0]

        # Convert everything before pushing anything
        samples = [
            new_gauge(self.context_switches_total, as_float(snapshot.ContextSwitchesPersec)),
            new_gauge(self.exception_dispatches_total, as_float(snapshot.ExceptionDispatchesPersec)),
            new_gauge(self.processor_queue_length, as_float(snapshot.ProcessorQueueLength)),
            new_gauge(self.system_calls_total, as_float(snapshot.SystemCallsPersec)),
            new_gauge(
                self.system_up_time,
                filetime_to_unix_seconds(
                    snapshot.SystemUpTime,
                    snapshot.Frequency_Object,
                    field_name="SystemUpTime",
                    frequency_field="Frequency_Object",
                ),
            ),
            new_gauge(self.threads, as_float(snapshot.Threads)),
        ]
        emit_all(sink, samples)


__all__ = ["SystemCollector"]
