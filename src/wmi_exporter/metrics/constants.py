"""
Metric name constants for the WMI exporter.

Provides the shared namespace and the exporter's own meta metric names,
keeping them consistent across the bridge, tests and dashboards.
"""


NAMESPACE = "wmi"


class ExporterMetrics:
    """Meta metric names describing the exporter's own scrapes."""

    COLLECTOR_DURATION_SECONDS = "wmi_exporter_collector_duration_seconds"
    COLLECTOR_SUCCESS = "wmi_exporter_collector_success"


class MetricLabels:
    """Standard label names for metrics."""

    COLLECTOR = "collector"  # system, cs, logical_disk, ...
    VOLUME = "volume"  # C:, D:, HarddiskVolume1, ...


__all__ = ["NAMESPACE", "ExporterMetrics", "MetricLabels"]
