"""WMI exporter custom exception hierarchy.

Provides specific exception types for registry, descriptor, construction
and collection failures. Every collection error is caught at the scrape
boundary and turned into a logged, non-fatal event.

Exception Hierarchy:
    ExporterError (base)
    ├── ConfigError
    ├── RegistryError
    │   ├── DuplicateCollectorError
    │   └── UnknownCollectorError
    ├── DescriptorError
    │   ├── InvalidDescriptorError
    │   └── DuplicateDescriptorError
    ├── ConstructionError
    └── CollectError
        ├── QueryFailedError
        ├── EmptyResultError
        ├── MissingFieldError
        ├── InvalidFieldError
        └── DivideByZeroError
"""

from typing import Optional


class ExporterError(Exception):
    """Base exception for all WMI exporter errors.

    All exporter-specific exceptions inherit from this class to allow
    catching them with a single except clause.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize exporter exception.

        Args:
            message: Error message
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(ExporterError):
    """Raised when settings cannot be loaded or are invalid."""

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if config_path:
            context["config_path"] = config_path
        super().__init__(message, context)
        self.config_path = config_path


# Registry Errors

class RegistryError(ExporterError):
    """Base exception for collector registry errors."""

    def __init__(
        self,
        message: str,
        collector: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if collector:
            context["collector"] = collector
        super().__init__(message, context)
        self.collector = collector


class DuplicateCollectorError(RegistryError):
    """Raised when two constructors are registered under the same name.

    This is a programming error, never a runtime condition.
    """

    pass


class UnknownCollectorError(RegistryError):
    """Raised when a requested collector name was never registered."""

    pass


# Descriptor Errors

class DescriptorError(ExporterError):
    """Base exception for metric descriptor errors.

    Attributes:
        metric_name: Fully-qualified metric name involved
    """

    def __init__(
        self,
        message: str,
        metric_name: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if metric_name is not None:
            context["metric_name"] = metric_name
        super().__init__(message, context)
        self.metric_name = metric_name


class InvalidDescriptorError(DescriptorError):
    """Raised when a descriptor is built from malformed identifiers."""

    pass


class DuplicateDescriptorError(DescriptorError):
    """Raised when two active collectors declare the same metric name."""

    pass


# Construction Errors

class ConstructionError(ExporterError):
    """Raised when a collector cannot be built on this host.

    Typical causes are a missing capability (no WMI driver) or bad
    configuration. The collector is excluded from the active set and the
    process continues.

    Attributes:
        collector: Name of the collector that failed to construct
        cause: The underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        collector: Optional[str] = None,
        cause: Optional[BaseException] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if collector:
            context["collector"] = collector
        if cause is not None:
            context["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(message, context)
        self.collector = collector
        self.cause = cause


# Collection Errors

class CollectError(ExporterError):
    """Base exception for errors raised by ``Collector.collect``.

    When one of these is raised, the collector has pushed no samples.

    Attributes:
        wmi_class: WMI class that was being read
    """

    def __init__(
        self,
        message: str,
        wmi_class: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if wmi_class:
            context["wmi_class"] = wmi_class
        super().__init__(message, context)
        self.wmi_class = wmi_class


class QueryFailedError(CollectError):
    """Raised when the data source is unreachable or rejects the query.

    Also used for scrape timeouts.

    Attributes:
        query: Query text that failed
        cause: The underlying driver exception, if any
    """

    def __init__(
        self,
        message: str,
        wmi_class: Optional[str] = None,
        query: Optional[str] = None,
        cause: Optional[BaseException] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if query:
            context["query"] = query
        if cause is not None:
            context["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(message, wmi_class, context)
        self.query = query
        self.cause = cause


class EmptyResultError(CollectError):
    """Raised when a query succeeds but returns no rows.

    Usually means the counter class is not supported on this host.
    """

    pass


class MissingFieldError(CollectError):
    """Raised when a required field is absent from a row.

    Attributes:
        field_name: Name of the missing field
    """

    def __init__(
        self,
        message: str,
        wmi_class: Optional[str] = None,
        field_name: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if field_name:
            context["field"] = field_name
        super().__init__(message, wmi_class, context)
        self.field_name = field_name


class InvalidFieldError(MissingFieldError):
    """Raised when a field is present but cannot be interpreted.

    Covers wrong types, values outside the declared unsigned width and
    timestamps that precede their epoch.
    """

    pass


class DivideByZeroError(CollectError):
    """Raised when a frequency divisor is zero."""

    pass


__all__ = [
    "ExporterError",
    "ConfigError",
    "RegistryError",
    "DuplicateCollectorError",
    "UnknownCollectorError",
    "DescriptorError",
    "InvalidDescriptorError",
    "DuplicateDescriptorError",
    "ConstructionError",
    "CollectError",
    "QueryFailedError",
    "EmptyResultError",
    "MissingFieldError",
    "InvalidFieldError",
    "DivideByZeroError",
]
