"""Metric samples produced by collectors."""

import threading
from dataclasses import dataclass

from .descriptor import MetricDesc, ValueKind


@dataclass(frozen=True)
class Sample:
    """One concrete value for a descriptor at scrape time.

    The value is always final and unit-correct; no consumer re-derives units.
    """

    desc: MetricDesc
    value: float
    label_values: tuple[str, ...] = ()
    kind: ValueKind = ValueKind.GAUGE

    def __post_init__(self) -> None:
        if len(self.label_values) != len(self.desc.label_names):
            raise ValueError(
                f"{self.desc.fq_name}: expected {len(self.desc.label_names)} "
                f"label values, got {len(self.label_values)}"
            )


def new_gauge(desc: MetricDesc, value: float, *label_values: str) -> Sample:
    """Build a gauge sample, casting the value to float."""
    return Sample(desc=desc, value=float(value), label_values=tuple(label_values))


class SampleBuffer:
    """
    Thread-safe, append-only sample sink.

    Satisfies the ``Sink`` protocol. Insertion order is preserved.
    """

    def __init__(self) -> None:
        self._samples: list[Sample] = []
        self._lock = threading.Lock()

    def put(self, sample: Sample) -> None:
        with self._lock:
            self._samples.append(sample)

    def drain(self) -> list[Sample]:
        """Remove and return all buffered samples."""
        with self._lock:
            samples, self._samples = self._samples, []
        return samples

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)


__all__ = ["Sample", "SampleBuffer", "new_gauge"]
