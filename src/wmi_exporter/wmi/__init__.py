"""WMI data source access and raw snapshot schemas."""

from .schema import ComputerSystem, FieldType, PerfDiskLogicalDisk, PerfOSSystem, RawSnapshot
from .source import DEFAULT_NAMESPACE, QuerySource, WmiQuerySource, create_query


__all__ = [
    "DEFAULT_NAMESPACE",
    "QuerySource",
    "WmiQuerySource",
    "create_query",
    "FieldType",
    "RawSnapshot",
    "PerfOSSystem",
    "ComputerSystem",
    "PerfDiskLogicalDisk",
]
