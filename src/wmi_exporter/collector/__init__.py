"""
Collectors for the WMI exporter.

Each collector reads one WMI class and turns its raw counters into gauge
samples. Collectors are made available to hosts through a
``CollectorRegistry``.

Example:
    >>> from wmi_exporter.collector import CollectorRegistry, register_builtin_collectors
    >>>
    >>> registry = register_builtin_collectors(CollectorRegistry())
    >>> registry.names()
    ['cs', 'logical_disk', 'system']
"""

from .base import Collector, Sink, emit_all, query_snapshots
from .builtin import register_builtin_collectors
from .cs import CSCollector
from .logical_disk import LogicalDiskCollector
from .registry import CollectorRegistry, InstantiationResult
from .system import SystemCollector

__all__ = [
    "Collector",
    "Sink",
    "emit_all",
    "query_snapshots",
    "CollectorRegistry",
    "InstantiationResult",
    "register_builtin_collectors",
    "SystemCollector",
    "CSCollector",
    "LogicalDiskCollector",
]
