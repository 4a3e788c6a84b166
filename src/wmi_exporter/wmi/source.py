"""
Raw data sources.

A ``QuerySource`` answers one synchronous WQL query with zero or more rows.
Collectors issue exactly one query per ``collect`` call, request the fields
of their snapshot schema and take the rows as returned; there is no
server-side filtering.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from ..events import ExporterEvents
from ..exceptions import ConstructionError, QueryFailedError
from ..log_config import get_context_logger


DEFAULT_NAMESPACE = "root\\cimv2"


def create_query(wmi_class: str, fields: Sequence[str]) -> str:
    """
    Build a WQL SELECT statement for the given class and fields.

    Args:
        wmi_class: WMI class name
        fields: Property names to select (all properties if empty)

    Returns:
        WQL query text

    Examples:
        >>> create_query("Win32_ComputerSystem", ["NumberOfLogicalProcessors"])
        'SELECT NumberOfLogicalProcessors FROM Win32_ComputerSystem'
        >>> create_query("Win32_Process", [])
        'SELECT * FROM Win32_Process'
    """
    if not wmi_class:
        raise ValueError("wmi_class must not be empty")
    columns = ", ".join(fields) if fields else "*"
    return f"SELECT {columns} FROM {wmi_class}"


class QuerySource(ABC):
    """
    Abstract synchronous WMI query source.

    Implementations must be safe to call from several threads at once;
    each call is independent.
    """

    @abstractmethod
    def query(
        self, wmi_class: str, fields: Sequence[str]
    ) -> list[Mapping[str, Any]]:
        """
        Run one query and return all rows.

        Args:
            wmi_class: WMI class name
            fields: Property names to fetch

        Returns:
            Rows as mappings of property name to raw value

        Raises:
            QueryFailedError: If the source is unreachable or rejects the query
        """
        pass


class WmiQuerySource(QuerySource):
    """
    Query source backed by the ``wmi`` package (Windows only).

    A COM apartment and a WMI connection are opened per query so the source
    can be used from scrape worker threads.

    Note: the ``wmi`` package depends on pywin32. On other platforms
    construction raises ConstructionError, which disables the collectors
    that need it.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE, computer: str = "") -> None:
        """
        Initialize the WMI source.

        Args:
            namespace: WMI namespace
            computer: Remote computer name, empty for the local host

        Raises:
            ConstructionError: If the wmi package cannot be imported
        """
        try:
            import pythoncom
            import wmi
        except ImportError as e:
            raise ConstructionError(
                "The wmi package is required for WmiQuerySource. "
                "Install with: pip install WMI (Windows only)",
                cause=e,
            ) from e

        self._pythoncom = pythoncom
        self._wmi = wmi
        self.namespace = namespace
        self.computer = computer
        self.logger = get_context_logger("wmi_query_source")

    def query(
        self, wmi_class: str, fields: Sequence[str]
    ) -> list[Mapping[str, Any]]:
        wql = create_query(wmi_class, fields)
        self.logger.debug(ExporterEvents.QUERY_STARTED, query=wql, namespace=self.namespace)

        self._pythoncom.CoInitialize()
        try:
            connection = self._wmi.WMI(computer=self.computer, namespace=self.namespace)
            results = connection.query(wql)
            return [
                {name: getattr(item, name, None) for name in fields}
                for item in results
            ]
        except Exception as e:
            self.logger.warning(
                ExporterEvents.QUERY_FAILED,
                query=wql,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise QueryFailedError(
                "WMI query failed", wmi_class=wmi_class, query=wql, cause=e
            ) from e
        finally:
            self._pythoncom.CoUninitialize()


__all__ = ["DEFAULT_NAMESPACE", "QuerySource", "WmiQuerySource", "create_query"]
