"""
WMI Exporter Package

Collects Windows performance counters through WMI and republishes them as
Prometheus metrics.

This package provides:
- Collector: the describe/collect contract every counter source implements
- CollectorRegistry: pluggable mapping from collector names to constructors
- SystemCollector, CSCollector, LogicalDiskCollector: built-in collectors
- ScrapeOrchestrator: runs the active collectors once per scrape
- WmiCollector: prometheus_client bridge serving the scrape results

Usage:
    from wmi_exporter import CollectorRegistry, ScrapeOrchestrator, register_builtin_collectors

    registry = register_builtin_collectors(CollectorRegistry())
    result = registry.instantiate({"system", "cs"})
    orchestrator = ScrapeOrchestrator(result.collectors, timeout=10.0)
    scrape = orchestrator.scrape()
"""

__version__ = "0.1.0"

from .collector import (
    Collector,
    CollectorRegistry,
    CSCollector,
    InstantiationResult,
    LogicalDiskCollector,
    SystemCollector,
    register_builtin_collectors,
)
from .exceptions import (
    CollectError,
    ConstructionError,
    DivideByZeroError,
    EmptyResultError,
    ExporterError,
    MissingFieldError,
    QueryFailedError,
)
from .metrics import MetricDesc, Sample, SampleBuffer, new_desc
from .scrape import CollectorOutcome, ScrapeMode, ScrapeOrchestrator, ScrapeResult

__all__ = [
    "__version__",
    # Collectors
    "Collector",
    "CollectorRegistry",
    "InstantiationResult",
    "register_builtin_collectors",
    "SystemCollector",
    "CSCollector",
    "LogicalDiskCollector",
    # Metrics
    "MetricDesc",
    "Sample",
    "SampleBuffer",
    "new_desc",
    # Scraping
    "ScrapeOrchestrator",
    "ScrapeMode",
    "ScrapeResult",
    "CollectorOutcome",
    # Errors
    "ExporterError",
    "ConstructionError",
    "CollectError",
    "QueryFailedError",
    "EmptyResultError",
    "MissingFieldError",
    "DivideByZeroError",
]
