"""Scrape logging context with scrape IDs and per-collector binding."""

import contextlib
import contextvars
import secrets
import time
from dataclasses import dataclass, field
from typing import Any

import structlog


# Context variables for propagation into worker threads
_scrape_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scrape_id", default=None
)
_collector_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "collector", default=None
)


def _generate_id() -> str:
    """Generate a unique ID for scrape tracking.

    Returns:
        12-character hexadecimal ID
    """
    return secrets.token_hex(6)


@dataclass
class ScrapeContext:
    """Logging context for one scrape or one collector run inside a scrape.

    A root context generates a scrape_id. A nested context created with a
    collector name inherits the scrape_id of the enclosing context. Worker
    threads do not inherit contextvars, so the orchestrator passes the
    scrape_id explicitly.

    Example:
        ```python
        with ScrapeContext() as scrape:
            logger.info("scrape.started", **scrape.to_log_dict())

            with ScrapeContext(scrape_id=scrape.scrape_id, collector="system"):
                logger.info("collector.success")
        ```
    """

    scrape_id: str | None = None
    collector: str | None = None

    # Free-form fields, e.g. sample counts or durations
    result: dict[str, Any] = field(default_factory=dict)

    _start_time: float = field(default_factory=time.perf_counter)
    _token_scrape_id: contextvars.Token | None = field(default=None, init=False, repr=False)
    _token_collector: contextvars.Token | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize IDs if not provided."""
        if self.scrape_id is None:
            parent_scrape_id = _scrape_id_var.get()
            if parent_scrape_id:
                self.scrape_id = parent_scrape_id
            else:
                self.scrape_id = _generate_id()

    def __enter__(self) -> "ScrapeContext":
        """Enter context and bind to contextvars."""
        self._token_scrape_id = _scrape_id_var.set(self.scrape_id)
        self._token_collector = _collector_var.set(self.collector)

        bound: dict[str, Any] = {"scrape_id": self.scrape_id}
        if self.collector:
            bound["collector"] = self.collector
        structlog.contextvars.bind_contextvars(**bound)

        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context and restore the enclosing binding."""
        if self._token_scrape_id:
            _scrape_id_var.reset(self._token_scrape_id)
        if self._token_collector:
            _collector_var.reset(self._token_collector)

        # Rebind whatever the enclosing context had
        structlog.contextvars.unbind_contextvars("scrape_id", "collector")
        outer: dict[str, Any] = {}
        if _scrape_id_var.get():
            outer["scrape_id"] = _scrape_id_var.get()
        if _collector_var.get():
            outer["collector"] = _collector_var.get()
        if outer:
            structlog.contextvars.bind_contextvars(**outer)

    def to_log_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging.

        Returns:
            Dictionary with context fields suitable for structured logging
        """
        log_dict: dict[str, Any] = {"scrape_id": self.scrape_id}
        if self.collector:
            log_dict["collector"] = self.collector
        if self.result:
            log_dict["result"] = self.result
        return log_dict

    def get_duration(self) -> float:
        """Get elapsed time since context creation.

        Returns:
            Duration in seconds
        """
        return time.perf_counter() - self._start_time


def get_current_context() -> ScrapeContext | None:
    """Get current scrape context from contextvars.

    Returns:
        Current ScrapeContext if in a context, None otherwise
    """
    scrape_id = _scrape_id_var.get()
    if scrape_id is None:
        return None

    return ScrapeContext(scrape_id=scrape_id, collector=_collector_var.get())


def clear_context() -> None:
    """Clear all scrape context from contextvars.

    Useful for testing or explicit context cleanup.
    """
    _scrape_id_var.set(None)
    _collector_var.set(None)

    with contextlib.suppress(KeyError):
        structlog.contextvars.unbind_contextvars("scrape_id", "collector")


__all__ = [
    "ScrapeContext",
    "get_current_context",
    "clear_context",
]
