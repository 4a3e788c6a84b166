"""
Metric descriptors.

A descriptor is the immutable identity of one metric series family:
fully-qualified name, help text, label schema and value kind. Collectors
build their descriptors once at construction and hand out the same
objects from ``describe`` for their whole lifetime.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from ..exceptions import InvalidDescriptorError


METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
LABEL_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ValueKind(str, Enum):
    """Value kind of a metric. Only gauges are emitted."""

    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricDesc:
    """Immutable metric identity.

    Attributes:
        fq_name: Fully-qualified metric name (namespace_subsystem_name)
        help: Human-readable help text
        label_names: Ordered label names, possibly empty
        kind: Value kind
    """

    fq_name: str
    help: str
    label_names: tuple[str, ...] = ()
    kind: ValueKind = ValueKind.GAUGE


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """
    Join namespace, subsystem and name with underscores.

    Empty namespace or subsystem parts are skipped. An empty name yields
    an empty string.

    Examples:
        >>> build_fq_name("wmi", "system", "threads")
        'wmi_system_threads'
        >>> build_fq_name("", "system", "threads")
        'system_threads'
        >>> build_fq_name("wmi", "system", "")
        ''
    """
    if not name:
        return ""
    return "_".join(part for part in (namespace, subsystem, name) if part)


def new_desc(
    namespace: str,
    subsystem: str,
    name: str,
    help: str,
    label_names: Iterable[str] = (),
) -> MetricDesc:
    """
    Build a gauge descriptor.

    Args:
        namespace: Metric namespace (e.g. "wmi")
        subsystem: Collector subsystem (e.g. "system")
        name: Short metric name (e.g. "threads")
        help: Help text
        label_names: Ordered label names

    Returns:
        MetricDesc

    Raises:
        InvalidDescriptorError: If the name or any label name is malformed.
            This is a programming error surfaced at collector construction.
    """
    fq_name = build_fq_name(namespace, subsystem, name)
    if not fq_name or not METRIC_NAME_RE.match(fq_name):
        raise InvalidDescriptorError(
            "Invalid metric name",
            metric_name=fq_name,
            context={"namespace": namespace, "subsystem": subsystem, "name": name},
        )

    labels = tuple(label_names)
    seen: set[str] = set()
    for label in labels:
        if not LABEL_NAME_RE.match(label) or label.startswith("__"):
            raise InvalidDescriptorError(
                "Invalid label name", metric_name=fq_name, context={"label": label}
            )
        if label in seen:
            raise InvalidDescriptorError(
                "Duplicate label name", metric_name=fq_name, context={"label": label}
            )
        seen.add(label)

    return MetricDesc(fq_name=fq_name, help=help, label_names=labels)


__all__ = ["MetricDesc", "ValueKind", "build_fq_name", "new_desc"]
