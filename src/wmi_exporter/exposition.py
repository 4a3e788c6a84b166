"""
Prometheus exposition bridge.

Adapts the scrape orchestrator to ``prometheus_client``'s custom collector
protocol, so every request to /metrics triggers exactly one scrape.
"""

from collections.abc import Iterator

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import Collector

from .metrics import ExporterMetrics, MetricDesc, MetricLabels, Sample
from .scrape import ScrapeOrchestrator, ScrapeResult


DURATION_HELP = "wmi_exporter: Duration of a collection."
SUCCESS_HELP = "wmi_exporter: Whether the collector was successful."


class WmiCollector(Collector):
    """
    Prometheus collector exposing the samples of one scrape.

    Families are emitted in descriptor order. Descriptors without samples
    in the current scrape (failed collectors, filtered volumes) are left
    out entirely rather than exposed with placeholder values. Two meta
    families report each collector's duration and success.
    """

    def __init__(self, orchestrator: ScrapeOrchestrator):
        """
        Initialize the bridge.

        Args:
            orchestrator: Orchestrator holding the active collectors
        """
        self._orchestrator = orchestrator

    def describe(self) -> Iterator[Metric]:
        """Yield empty families so registration never triggers a scrape."""
        for desc in self._orchestrator.describe():
            yield GaugeMetricFamily(desc.fq_name, desc.help, labels=desc.label_names)
        yield from self._meta_families()

    def collect(self) -> Iterator[Metric]:
        """Run one scrape and yield its metric families."""
        result = self._orchestrator.scrape()
        yield from self.families(result)

    def families(self, result: ScrapeResult) -> Iterator[Metric]:
        """Convert a scrape result into metric families."""
        by_desc: dict[MetricDesc, list[Sample]] = {}
        for sample in result.samples:
            by_desc.setdefault(sample.desc, []).append(sample)

        for desc in self._orchestrator.describe():
            samples = by_desc.get(desc)
            if not samples:
                continue
            family = GaugeMetricFamily(desc.fq_name, desc.help, labels=desc.label_names)
            for sample in samples:
                family.add_metric(list(sample.label_values), sample.value)
            yield family

        duration, success = self._meta_families()
        for name, outcome in result.outcomes.items():
            duration.add_metric([name], outcome.duration)
            success.add_metric([name], 1.0 if outcome.success else 0.0)
        yield duration
        yield success

    @staticmethod
    def _meta_families() -> tuple[GaugeMetricFamily, GaugeMetricFamily]:
        return (
            GaugeMetricFamily(
                ExporterMetrics.COLLECTOR_DURATION_SECONDS,
                DURATION_HELP,
                labels=[MetricLabels.COLLECTOR],
            ),
            GaugeMetricFamily(
                ExporterMetrics.COLLECTOR_SUCCESS,
                SUCCESS_HELP,
                labels=[MetricLabels.COLLECTOR],
            ),
        )


__all__ = ["WmiCollector"]
