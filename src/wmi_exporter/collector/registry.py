"""
Collector Registry

Maps collector names to zero-argument constructors. The registry is an
explicit object: hosts create one, populate it at startup (see
``register_builtin_collectors``) and instantiate the subset they want.
Tests create a fresh registry each time.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable

from ..events import ExporterEvents
from ..exceptions import (
    ConstructionError,
    DuplicateCollectorError,
    ExporterError,
    UnknownCollectorError,
)
from ..log_config import get_context_logger
from .base import Collector


CollectorConstructor = Callable[[], Collector]


@dataclass
class InstantiationResult:
    """
    Outcome of ``CollectorRegistry.instantiate``.

    Attributes:
        collectors: Successfully built collectors, keyed by name
        failures: (name, error) for every collector that could not be built
    """

    collectors: dict[str, Collector] = field(default_factory=dict)
    failures: list[tuple[str, ExporterError]] = field(default_factory=list)

    @property
    def failed_names(self) -> list[str]:
        return [name for name, _ in self.failures]


class CollectorRegistry:
    """
    Registry of collector constructors.

    Examples:
        >>> registry = CollectorRegistry()
        >>> registry.register("system", lambda: SystemCollector(source))
        >>> result = registry.instantiate({"system", "missing"})
        >>> sorted(result.collectors)
        ['system']
        >>> result.failed_names
        ['missing']
    """

    def __init__(self) -> None:
        self._constructors: dict[str, CollectorConstructor] = {}
        self.logger = get_context_logger("collector_registry")

    def register(self, name: str, constructor: CollectorConstructor) -> None:
        """
        Associate a unique name with a constructor.

        Args:
            name: Collector name (e.g. "system")
            constructor: Zero-argument callable returning a Collector

        Raises:
            ValueError: If the name is empty
            DuplicateCollectorError: If the name is already registered
        """
        if not name:
            raise ValueError("Collector name must not be empty")
        if name in self._constructors:
            raise DuplicateCollectorError("Collector already registered", collector=name)

        self._constructors[name] = constructor
        self.logger.debug(ExporterEvents.COLLECTOR_REGISTERED, collector=name)

    def names(self) -> list[str]:
        """Registered collector names, sorted."""
        return sorted(self._constructors)

    def __contains__(self, name: object) -> bool:
        return name in self._constructors

    def __len__(self) -> int:
        return len(self._constructors)

    def instantiate(self, names: Iterable[str]) -> InstantiationResult:
        """
        Build the requested collectors.

        A failure to build one collector never prevents the others from
        being built. Every failure is reported in the result and logged
        as a disabled collector.

        Args:
            names: Collector names to build

        Returns:
            InstantiationResult with built collectors and failures
        """
        result = InstantiationResult()

        for name in sorted(set(names)):
            constructor = self._constructors.get(name)
            if constructor is None:
                error: ExporterError = UnknownCollectorError(
                    "Collector is not registered", collector=name
                )
                self._record_failure(result, name, error)
                continue

            try:
                collector = constructor()
            except ConstructionError as e:
                if e.collector is None:
                    e.collector = name
                    e.context["collector"] = name
                self._record_failure(result, name, e)
                continue
            except Exception as e:
                self._record_failure(
                    result,
                    name,
                    ConstructionError("Collector constructor failed", collector=name, cause=e),
                )
                continue

            result.collectors[name] = collector
            self.logger.info(ExporterEvents.COLLECTOR_ENABLED, collector=name)

        return result

    def _record_failure(
        self, result: InstantiationResult, name: str, error: ExporterError
    ) -> None:
        result.failures.append((name, error))
        self.logger.warning(
            ExporterEvents.COLLECTOR_DISABLED,
            collector=name,
            error=str(error),
            error_type=type(error).__name__,
        )


__all__ = ["CollectorRegistry", "CollectorConstructor", "InstantiationResult"]
