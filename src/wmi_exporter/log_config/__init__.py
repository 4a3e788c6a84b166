"""Logging configuration package."""

from .context import ScrapeContext, clear_context, get_current_context
from .main import configure_logging, get_context_logger


__all__ = [
    "get_context_logger",
    "configure_logging",
    "ScrapeContext",
    "get_current_context",
    "clear_context",
]
