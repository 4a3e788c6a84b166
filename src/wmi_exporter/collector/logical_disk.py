"""
Logical disk collector.

Returns data points from the Win32_PerfRawData_PerfDisk_LogicalDisk class,
one series per volume:
https://msdn.microsoft.com/en-us/library/aa394307(v=vs.85).aspx
"""

import re

from ..convert import TICKS_PER_SECOND, as_float, megabytes_to_bytes, ticks_to_seconds
from ..metrics import NAMESPACE, MetricDesc, MetricLabels, Sample, new_desc, new_gauge
from ..wmi import PerfDiskLogicalDisk, QuerySource
from .base import Collector, Sink, emit_all, query_snapshots


DEFAULT_VOLUME_INCLUDE = ".+"
DEFAULT_VOLUME_EXCLUDE = "_Total"


class LogicalDiskCollector(Collector):
    """
    Collector for per-volume I/O counters and capacity.

    Time counters (``PercentDisk*Time``, ``PercentIdleTime``) are raw 100 ns
    tick totals and are exposed in seconds. ``PercentFreeSpace`` and its base
    hold free and total megabytes in their raw form and are exposed in bytes.

    Volumes are kept when their name fully matches ``volume_include`` and
    does not fully match ``volume_exclude``.
    """

    subsystem = "logical_disk"

    def __init__(
        self,
        source: QuerySource,
        volume_include: str = DEFAULT_VOLUME_INCLUDE,
        volume_exclude: str = DEFAULT_VOLUME_EXCLUDE,
    ) -> None:
        self.source = source
        self.volume_include = re.compile(f"^(?:{volume_include})$")
        self.volume_exclude = re.compile(f"^(?:{volume_exclude})$")

        labels = [MetricLabels.VOLUME]

        def desc(name: str, help: str) -> MetricDesc:
            return new_desc(NAMESPACE, self.subsystem, name, help, labels)

        self.requests_queued = desc(
            "requests_queued", "The number of requests queued to the disk (LogicalDisk.CurrentDiskQueueLength)"
        )
        self.read_bytes_total = desc(
            "read_bytes_total", "The number of bytes transferred from the disk during read operations (LogicalDisk.DiskReadBytesPerSec)"
        )
        self.reads_total = desc(
            "reads_total", "The number of read operations on the disk (LogicalDisk.DiskReadsPerSec)"
        )
        self.write_bytes_total = desc(
            "write_bytes_total", "The number of bytes transferred to the disk during write operations (LogicalDisk.DiskWriteBytesPerSec)"
        )
        self.writes_total = desc(
            "writes_total", "The number of write operations on the disk (LogicalDisk.DiskWritesPerSec)"
        )
        self.read_seconds_total = desc(
            "read_seconds_total", "Seconds that the disk was busy servicing read requests (LogicalDisk.PercentDiskReadTime)"
        )
        self.write_seconds_total = desc(
            "write_seconds_total", "Seconds that the disk was busy servicing write requests (LogicalDisk.PercentDiskWriteTime)"
        )
        self.free_bytes = desc(
            "free_bytes", "Free space in bytes (LogicalDisk.PercentFreeSpace)"
        )
        self.size_bytes = desc(
            "size_bytes", "Total space in bytes (LogicalDisk.PercentFreeSpace_Base)"
        )
        self.idle_seconds_total = desc(
            "idle_seconds_total", "Seconds that the disk was idle (LogicalDisk.PercentIdleTime)"
        )
        self.split_ios_total = desc(
            "split_ios_total", "The number of I/Os to the disk were split into multiple I/Os (LogicalDisk.SplitIOPerSec)"
        )

        self._descriptors = (
            self.requests_queued,
            self.read_bytes_total,
            self.reads_total,
            self.write_bytes_total,
            self.writes_total,
            self.read_seconds_total,
            self.write_seconds_total,
            self.free_bytes,
            self.size_bytes,
            self.idle_seconds_total,
            self.split_ios_total,
        )

    def describe(self) -> tuple[MetricDesc, ...]:
        return self._descriptors

    def volume_selected(self, name: str) -> bool:
        return bool(self.volume_include.match(name)) and not self.volume_exclude.match(name)

    def collect(self, sink: Sink) -> None:
        volumes = query_snapshots(self.source, PerfDiskLogicalDisk)

        samples: list[Sample] = []
        for volume in volumes:
            if not self.volume_selected(volume.Name):
                continue
            samples.extend(self._convert(volume))

        emit_all(sink, samples)

    def _convert(self, volume: PerfDiskLogicalDisk) -> list[Sample]:
        name = volume.Name
        return [
            new_gauge(self.requests_queued, as_float(volume.CurrentDiskQueueLength), name),
            new_gauge(self.read_bytes_total, as_float(volume.DiskReadBytesPerSec), name),
            new_gauge(self.reads_total, as_float(volume.DiskReadsPerSec), name),
            new_gauge(self.write_bytes_total, as_float(volume.DiskWriteBytesPerSec), name),
            new_gauge(self.writes_total, as_float(volume.DiskWritesPerSec), name),
            new_gauge(
                self.read_seconds_total,
                ticks_to_seconds(volume.PercentDiskReadTime, TICKS_PER_SECOND),
                name,
            ),
            new_gauge(
                self.write_seconds_total,
                ticks_to_seconds(volume.PercentDiskWriteTime, TICKS_PER_SECOND),
                name,
            ),
            new_gauge(self.free_bytes, megabytes_to_bytes(volume.PercentFreeSpace), name),
            new_gauge(self.size_bytes, megabytes_to_bytes(volume.PercentFreeSpace_Base), name),
            new_gauge(
                self.idle_seconds_total,
                ticks_to_seconds(volume.PercentIdleTime, TICKS_PER_SECOND),
                name,
            ),
            new_gauge(self.split_ios_total, as_float(volume.SplitIOPerSec), name),
        ]


__all__ = ["LogicalDiskCollector", "DEFAULT_VOLUME_INCLUDE", "DEFAULT_VOLUME_EXCLUDE"]
