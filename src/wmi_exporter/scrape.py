"""
Scrape Orchestrator

Runs every active collector once per scrape, isolates their failures and
accumulates the samples of the collectors that succeeded.
"""

import threading
import time
from concurrent.futures import Future, wait
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from .collector.base import Collector
from .events import ExporterEvents
from .exceptions import CollectError, DuplicateDescriptorError, QueryFailedError
from .log_config import ScrapeContext, get_context_logger
from .metrics import MetricDesc, Sample, SampleBuffer


class ScrapeMode(str, Enum):
    """How collectors are scheduled within one scrape."""

    PARALLEL = "parallel"  # One worker thread per collector
    SEQUENTIAL = "sequential"  # One after another in the calling thread


@dataclass
class CollectorOutcome:
    """Result of running one collector in one scrape."""

    name: str
    success: bool
    duration: float
    sample_count: int = 0
    error: Exception | None = None


@dataclass
class ScrapeResult:
    """
    Result of one scrape.

    Attributes:
        samples: Samples of successful collectors, grouped by collector name
            order, insertion order within a collector
        outcomes: Per-collector outcome keyed by collector name
    """

    scrape_id: str
    samples: list[Sample] = field(default_factory=list)
    outcomes: dict[str, CollectorOutcome] = field(default_factory=dict)

    @property
    def failed(self) -> list[str]:
        return [name for name, outcome in self.outcomes.items() if not outcome.success]


class ScrapeOrchestrator:
    """
    Fans a scrape out to the active collectors.

    Each collector writes into its own buffer. Only the buffers of
    collectors that returned without error are merged into the result, so
    a failed or timed-out collector contributes no series at all.

    A collector instance never runs concurrently with itself: if a previous
    invocation is still running when the next scrape starts, that collector
    is reported as failed for the new scrape.

    Note:
        In parallel mode a collector that exceeds ``timeout`` is abandoned,
        not cancelled. Its worker thread keeps running until the underlying
        WMI query returns, and the collector stays busy until then. Any
        samples it produces afterwards are discarded. Worker threads are
        daemon threads, so an abandoned query does not keep the process
        alive at shutdown.

    Examples:
        >>> orchestrator = ScrapeOrchestrator({"system": SystemCollector(source)}, timeout=5.0)
        >>> result = orchestrator.scrape()
        >>> result.outcomes["system"].success
        True
    """

    def __init__(
        self,
        collectors: Mapping[str, Collector],
        mode: ScrapeMode = ScrapeMode.PARALLEL,
        timeout: float | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            collectors: Active collectors keyed by name
            mode: Parallel or sequential scheduling
            timeout: Seconds to wait for all collectors in parallel mode,
                None to wait indefinitely

        Raises:
            DuplicateDescriptorError: If two collectors declare the same
                metric name
        """
        self.logger = get_context_logger("scrape_orchestrator")
        self.collectors = dict(sorted(collectors.items()))
        self.mode = mode
        self.timeout = timeout
        self._locks = {name: threading.Lock() for name in self.collectors}

        self._check_descriptors()

    def _check_descriptors(self) -> None:
        owners: dict[str, str] = {}
        for name, collector in self.collectors.items():
            for desc in collector.describe():
                if desc.fq_name in owners:
                    raise DuplicateDescriptorError(
                        "Metric name declared by more than one collector",
                        metric_name=desc.fq_name,
                        context={"collectors": f"{owners[desc.fq_name]},{name}"},
                    )
                owners[desc.fq_name] = name

    def describe(self) -> list[MetricDesc]:
        """All descriptors of the active collectors, in collector name order."""
        return [desc for collector in self.collectors.values() for desc in collector.describe()]

    def scrape(self) -> ScrapeResult:
        """
        Run every active collector once.

        Returns:
            ScrapeResult with the merged samples and per-collector outcomes.
            Never raises for collector failures.
        """
        with ScrapeContext() as ctx:
            self.logger.debug(
                ExporterEvents.SCRAPE_STARTED,
                collector_count=len(self.collectors),
                mode=self.mode.value,
            )

            if self.mode == ScrapeMode.SEQUENTIAL:
                runs = {
                    name: self._run(name, collector, ctx.scrape_id)
                    for name, collector in self.collectors.items()
                }
            else:
                runs = self._scrape_parallel(ctx.scrape_id)

            result = ScrapeResult(scrape_id=ctx.scrape_id)
            for name in self.collectors:
                outcome, samples = runs[name]
                result.outcomes[name] = outcome
                if outcome.success:
                    result.samples.extend(samples)

            self.logger.info(
                ExporterEvents.SCRAPE_COMPLETED,
                duration=ctx.get_duration(),
                sample_count=len(result.samples),
                failed=result.failed,
            )
            return result

    def _scrape_parallel(self, scrape_id: str) -> dict[str, tuple[CollectorOutcome, list[Sample]]]:
        runs: dict[str, tuple[CollectorOutcome, list[Sample]]] = {}
        if not self.collectors:
            return runs

        started = time.perf_counter()
        futures: dict[str, Future] = {}
        for name, collector in self.collectors.items():
            future: Future = Future()
            futures[name] = future
            # Abandoned workers must not block interpreter exit
            threading.Thread(
                target=self._run_into,
                args=(future, name, collector, scrape_id),
                name=f"collector-{name}",
                daemon=True,
            ).start()

        wait(futures.values(), timeout=self.timeout)

        for name, future in futures.items():
            if future.done():
                runs[name] = future.result()
                continue

            error = QueryFailedError(
                "Collector timed out", context={"collector": name, "timeout": self.timeout}
            )
            self.logger.error(
                ExporterEvents.COLLECTOR_TIMEOUT,
                collector=name,
                timeout=self.timeout,
            )
            runs[name] = (
                CollectorOutcome(
                    name=name,
                    success=False,
                    duration=time.perf_counter() - started,
                    error=error,
                ),
                [],
            )

        return runs

    def _run_into(self, future: Future, name: str, collector: Collector, scrape_id: str) -> None:
        future.set_result(self._run(name, collector, scrape_id))

    def _run(
        self, name: str, collector: Collector, scrape_id: str
    ) -> tuple[CollectorOutcome, list[Sample]]:
        """Run one collector. Never raises."""
        lock = self._locks[name]
        if not lock.acquire(blocking=False):
            error = QueryFailedError(
                "Previous collection still running", context={"collector": name}
            )
            with ScrapeContext(scrape_id=scrape_id, collector=name):
                self.logger.error(ExporterEvents.COLLECTOR_BUSY, error=str(error))
            return CollectorOutcome(name=name, success=False, duration=0.0, error=error), []

        try:
            with ScrapeContext(scrape_id=scrape_id, collector=name) as ctx:
                buffer = SampleBuffer()
                try:
                    collector.collect(buffer)
                except Exception as e:
                    # Unexpected errors are isolated like CollectError
                    return self._failed(name, ctx.get_duration(), e), []

                samples = buffer.drain()
                duration = ctx.get_duration()
                self.logger.debug(
                    ExporterEvents.COLLECTOR_SUCCESS,
                    duration=duration,
                    sample_count=len(samples),
                )
                return (
                    CollectorOutcome(
                        name=name, success=True, duration=duration, sample_count=len(samples)
                    ),
                    samples,
                )
        finally:
            lock.release()

    def _failed(self, name: str, duration: float, error: Exception) -> CollectorOutcome:
        self.logger.error(
            ExporterEvents.COLLECTOR_FAILED,
            collector=name,
            duration=duration,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=not isinstance(error, CollectError),
        )
        return CollectorOutcome(name=name, success=False, duration=duration, error=error)


__all__ = ["ScrapeMode", "ScrapeOrchestrator", "ScrapeResult", "CollectorOutcome"]
