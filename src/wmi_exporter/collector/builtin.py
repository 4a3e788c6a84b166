"""Registration of the collectors shipped with the exporter."""

from typing import TYPE_CHECKING, Callable

from ..wmi import QuerySource, WmiQuerySource
from .cs import CSCollector
from .logical_disk import LogicalDiskCollector
from .registry import CollectorRegistry
from .system import SystemCollector


if TYPE_CHECKING:
    from ..config import Settings


SourceFactory = Callable[[], QuerySource]


def register_builtin_collectors(
    registry: CollectorRegistry,
    settings: "Settings | None" = None,
    source_factory: SourceFactory | None = None,
) -> CollectorRegistry:
    """
    Register the system, cs and logical_disk collectors.

    Constructors close over the settings and the source factory, so they
    stay zero-argument callables. The data source is created when a
    collector is instantiated; on hosts without WMI that raises
    ConstructionError and the collector is reported as disabled.

    Args:
        registry: Registry to populate
        settings: Exporter settings (defaults if None)
        source_factory: Creates the data source (WmiQuerySource if None)

    Returns:
        The same registry, for chaining
    """
    if settings is None:
        from ..config import Settings

        settings = Settings()

    if source_factory is None:
        namespace = settings.wmi_namespace

        def source_factory() -> QuerySource:
            return WmiQuerySource(namespace=namespace)

    disk = settings.logical_disk

    registry.register("system", lambda: SystemCollector(source_factory()))
    registry.register("cs", lambda: CSCollector(source_factory()))
    registry.register(
        "logical_disk",
        lambda: LogicalDiskCollector(
            source_factory(),
            volume_include=disk.volume_include,
            volume_exclude=disk.volume_exclude,
        ),
    )
    return registry


__all__ = ["register_builtin_collectors", "SourceFactory"]
