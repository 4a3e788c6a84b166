"""
Command-line entry point.

Usage:
    wmi-exporter --config wmi_exporter.yaml --collectors system,cs
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

from prometheus_client import CollectorRegistry as PrometheusRegistry
from prometheus_client import start_http_server

from . import __version__
from .collector import CollectorRegistry, register_builtin_collectors
from .collector.builtin import SourceFactory
from .config import Settings, get_settings
from .events import ExporterEvents
from .exceptions import ExporterError
from .exposition import WmiCollector
from .log_config import configure_logging, get_context_logger
from .scrape import ScrapeOrchestrator


logger = get_context_logger("wmi_exporter")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wmi-exporter",
        description="Prometheus exporter for Windows WMI performance counters.",
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--listen-address", help="Address to bind the HTTP server to")
    parser.add_argument("--listen-port", type=int, help="Port to bind the HTTP server to")
    parser.add_argument(
        "--collectors",
        help="Comma-separated list of collectors to enable",
    )
    parser.add_argument(
        "--list-collectors",
        action="store_true",
        help="Print the available collectors and exit",
    )
    parser.add_argument("--log-level", help="Minimum log level (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with command-line flags applied on top."""
    overrides: dict[str, Any] = {}
    if args.listen_address:
        overrides["listen_address"] = args.listen_address
    if args.listen_port is not None:
        overrides["listen_port"] = args.listen_port
    if args.collectors:
        overrides["enabled_collectors"] = [
            name.strip() for name in args.collectors.split(",") if name.strip()
        ]
    if args.log_level:
        overrides["log_level"] = args.log_level
    return settings.model_copy(update=overrides) if overrides else settings


def build_exporter(
    settings: Settings,
    registry: CollectorRegistry | None = None,
    source_factory: SourceFactory | None = None,
) -> tuple[PrometheusRegistry, ScrapeOrchestrator]:
    """
    Instantiate the enabled collectors and wire them to a Prometheus registry.

    Args:
        settings: Exporter settings
        registry: Collector registry (builtins registered if None)
        source_factory: Data source factory passed to the builtins

    Returns:
        (prometheus registry, orchestrator)

    Raises:
        ExporterError: If no enabled collector could be constructed
    """
    if registry is None:
        registry = register_builtin_collectors(
            CollectorRegistry(), settings=settings, source_factory=source_factory
        )

    result = registry.instantiate(settings.enabled_collectors)
    if not result.collectors:
        raise ExporterError(
            "No collector could be enabled",
            context={"requested": ",".join(settings.enabled_collectors)},
        )

    orchestrator = ScrapeOrchestrator(
        result.collectors,
        mode=settings.scrape_mode,
        timeout=settings.effective_timeout,
    )
    prometheus_registry = PrometheusRegistry(auto_describe=True)
    prometheus_registry.register(WmiCollector(orchestrator))
    return prometheus_registry, orchestrator


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = apply_overrides(get_settings(args.config), args)
        configure_logging(settings.log_level, settings.log_json)

        if args.list_collectors:
            for name in register_builtin_collectors(CollectorRegistry(), settings).names():
                print(name)
            return 0

        prometheus_registry, orchestrator = build_exporter(settings)
    except (ExporterError, ValueError) as e:
        logger.error(ExporterEvents.STARTUP_FAILED, error=str(e), error_type=type(e).__name__)
        return 1

    server, thread = start_http_server(
        settings.listen_port,
        addr=settings.listen_address,
        registry=prometheus_registry,
    )
    logger.info(
        ExporterEvents.SERVER_STARTED,
        address=settings.listen_address,
        port=server.server_port,
        collectors=list(orchestrator.collectors),
    )

    try:
        # join with a timeout so Ctrl+C is delivered on Windows too
        while thread.is_alive():
            thread.join(1.0)
    except KeyboardInterrupt:
        pass
    finally:
        server.shutdown()
        logger.info(ExporterEvents.SERVER_STOPPED)
    return 0


if __name__ == "__main__":
    sys.exit(main())
