"""
Typed raw counter snapshots.

Each WMI class the exporter reads is described by a frozen dataclass whose
fields carry their declared wire type in the dataclass field metadata.
``from_row`` validates a driver row against that schema: every field must be
present, integers must be ints within their unsigned width, and strings must
be strings. A row that fails validation is rejected whole; no snapshot is
ever assembled from partially valid data.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Mapping, TypeVar

from ..exceptions import InvalidFieldError, MissingFieldError


class FieldType(str, Enum):
    """Declared CIM type of a raw field."""

    UINT32 = "uint32"
    UINT64 = "uint64"
    STRING = "string"


_MAX_VALUE = {
    FieldType.UINT32: 2**32 - 1,
    FieldType.UINT64: 2**64 - 1,
}


def uint32() -> Any:
    return field(metadata={"wmi_type": FieldType.UINT32})


def uint64() -> Any:
    return field(metadata={"wmi_type": FieldType.UINT64})


def string() -> Any:
    return field(metadata={"wmi_type": FieldType.STRING})


S = TypeVar("S", bound="RawSnapshot")


@dataclass(frozen=True)
class RawSnapshot:
    """Base for one point-in-time row of a WMI class."""

    wmi_class: ClassVar[str] = ""

    @classmethod
    def field_names(cls) -> list[str]:
        """Names of the fields to request, in declaration order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def from_row(cls: type[S], row: Mapping[str, Any]) -> S:
        """
        Build a snapshot from one driver row.

        Args:
            row: Mapping of field name to raw value

        Returns:
            Validated snapshot instance

        Raises:
            MissingFieldError: If a declared field is absent or None
            InvalidFieldError: If a value has the wrong type or width
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            values[f.name] = _coerce(cls.wmi_class, f.name, f.metadata["wmi_type"], row)
        return cls(**values)


def _coerce(wmi_class: str, name: str, wmi_type: FieldType, row: Mapping[str, Any]) -> Any:
    if name not in row or row[name] is None:
        raise MissingFieldError("Required field is missing", wmi_class=wmi_class, field_name=name)

    value = row[name]
    if wmi_type == FieldType.STRING:
        if not isinstance(value, str):
            raise InvalidFieldError(
                "Expected a string",
                wmi_class=wmi_class,
                field_name=name,
                context={"value": repr(value)},
            )
        return value

    # The COM layer returns uint64 properties as decimal strings
    if isinstance(value, str) and value.isascii() and value.isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldError(
            "Expected an unsigned integer",
            wmi_class=wmi_class,
            field_name=name,
            context={"value": repr(value)},
        )
    if value < 0 or value > _MAX_VALUE[wmi_type]:
        raise InvalidFieldError(
            f"Value out of range for {wmi_type.value}",
            wmi_class=wmi_class,
            field_name=name,
            context={"value": value},
        )
    return value


@dataclass(frozen=True)
class PerfOSSystem(RawSnapshot):
    """Win32_PerfRawData_PerfOS_System row."""

    wmi_class: ClassVar[str] = "Win32_PerfRawData_PerfOS_System"

    ContextSwitchesPersec: int = uint32()
    ExceptionDispatchesPersec: int = uint32()
    Frequency_Object: int = uint64()
    ProcessorQueueLength: int = uint32()
    SystemCallsPersec: int = uint32()
    SystemUpTime: int = uint64()
    Threads: int = uint32()


@dataclass(frozen=True)
class ComputerSystem(RawSnapshot):
    """Win32_ComputerSystem row."""

    wmi_class: ClassVar[str] = "Win32_ComputerSystem"

    NumberOfLogicalProcessors: int = uint32()
    TotalPhysicalMemory: int = uint64()


@dataclass(frozen=True)
class PerfDiskLogicalDisk(RawSnapshot):
    """Win32_PerfRawData_PerfDisk_LogicalDisk row, one per volume."""

    wmi_class: ClassVar[str] = "Win32_PerfRawData_PerfDisk_LogicalDisk"

    Name: str = string()
    CurrentDiskQueueLength: int = uint32()
    DiskReadBytesPerSec: int = uint64()
    DiskReadsPerSec: int = uint32()
    DiskWriteBytesPerSec: int = uint64()
    DiskWritesPerSec: int = uint32()
    PercentDiskReadTime: int = uint64()
    PercentDiskWriteTime: int = uint64()
    PercentFreeSpace: int = uint32()
    PercentFreeSpace_Base: int = uint32()
    PercentIdleTime: int = uint64()
    SplitIOPerSec: int = uint32()


__all__ = [
    "FieldType",
    "RawSnapshot",
    "PerfOSSystem",
    "ComputerSystem",
    "PerfDiskLogicalDisk",
]
