"""
Metric identities and samples for the WMI exporter.

Example:
    >>> from wmi_exporter.metrics import NAMESPACE, new_desc, new_gauge
    >>>
    >>> threads = new_desc(NAMESPACE, "system", "threads", "PerfOS_System.Threads")
    >>> threads.fq_name
    'wmi_system_threads'
    >>> new_gauge(threads, 450).value
    450.0
"""

from .constants import NAMESPACE, ExporterMetrics, MetricLabels
from .descriptor import MetricDesc, ValueKind, build_fq_name, new_desc
from .sample import Sample, SampleBuffer, new_gauge

__all__ = [
    "NAMESPACE",
    "ExporterMetrics",
    "MetricLabels",
    "MetricDesc",
    "ValueKind",
    "build_fq_name",
    "new_desc",
    "Sample",
    "SampleBuffer",
    "new_gauge",
]
