"""Exporter event type constants."""

from enum import Enum


class ExporterEvents(str, Enum):
    """Event type constants for structured logging."""

    # Registry events
    COLLECTOR_REGISTERED = "collector.registered"
    COLLECTOR_ENABLED = "collector.enabled"
    COLLECTOR_DISABLED = "collector.disabled"

    # Scrape events
    SCRAPE_STARTED = "scrape.started"
    SCRAPE_COMPLETED = "scrape.completed"

    # Per-collector events
    COLLECTOR_SUCCESS = "collector.success"
    COLLECTOR_FAILED = "collector.failed"
    COLLECTOR_TIMEOUT = "collector.timeout"
    COLLECTOR_BUSY = "collector.busy"

    # Data source events
    QUERY_STARTED = "wmi.query.started"
    QUERY_FAILED = "wmi.query.failed"

    # Server events
    STARTUP_FAILED = "startup.failed"
    SERVER_STARTED = "server.started"
    SERVER_STOPPED = "server.stopped"

    def __str__(self) -> str:
        return self.value


__all__ = ["ExporterEvents"]
