"""
Collector contract.

Every collector implements two operations:

- ``describe()`` returns the fixed descriptors declared at construction,
- ``collect(sink)`` runs one query against its data source, converts the
  row(s) and pushes the resulting samples onto ``sink``.

Collectors share no state with each other. A failed ``collect`` raises a
``CollectError`` subclass and pushes nothing.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Protocol, Sequence, TypeVar

from ..exceptions import CollectError, EmptyResultError, QueryFailedError
from ..metrics import MetricDesc, Sample
from ..wmi import QuerySource, RawSnapshot, create_query


S = TypeVar("S", bound=RawSnapshot)


class Sink(Protocol):
    """Anything samples can be pushed onto (``queue.Queue``, ``SampleBuffer``)."""

    def put(self, sample: Sample) -> None: ...


class Collector(ABC):
    """Abstract base class for collectors."""

    @abstractmethod
    def describe(self) -> tuple[MetricDesc, ...]:
        """
        Return the descriptors this collector owns.

        The same descriptor objects are returned on every call.
        """
        pass

    @abstractmethod
    def collect(self, sink: Sink) -> None:
        """
        Query the data source once and push one sample per descriptor.

        Args:
            sink: Destination for the samples

        Raises:
            CollectError: On any failure; no samples are pushed in that case
        """
        pass


def emit_all(sink: Sink, samples: Iterable[Sample]) -> None:
    """Push a fully built batch onto the sink in insertion order."""
    for sample in samples:
        sink.put(sample)


def query_snapshots(source: QuerySource, snapshot_cls: type[S]) -> list[S]:
    """
    Run one query for a snapshot class and validate every row.

    Args:
        source: Data source to query
        snapshot_cls: Snapshot dataclass describing the WMI class

    Returns:
        One snapshot per row, in the order returned

    Raises:
        QueryFailedError: If the source fails
        EmptyResultError: If the query returns no rows
        MissingFieldError: If a row lacks a declared field
        InvalidFieldError: If a row holds a malformed value
    """
    fields = snapshot_cls.field_names()
    try:
        rows: Sequence = source.query(snapshot_cls.wmi_class, fields)
    except CollectError:
        raise
    except Exception as e:
        raise QueryFailedError(
            "Query raised an unexpected error",
            wmi_class=snapshot_cls.wmi_class,
            query=create_query(snapshot_cls.wmi_class, fields),
            cause=e,
        ) from e

    if not rows:
        raise EmptyResultError("Query returned no rows", wmi_class=snapshot_cls.wmi_class)

    return [snapshot_cls.from_row(row) for row in rows]


__all__ = ["Collector", "Sink", "emit_all", "query_snapshots"]
