"""Core types shared across the SDRF, metadata and mzML layers."""

from .exceptions import (
    ColumnFormatError,
    ContainerMetadataError,
    MissingAssociationError,
    MzSdrfError,
    StreamIOError,
    TableFormatError,
)
from .value import Value, ValueKind

__all__ = [
    "ColumnFormatError",
    "ContainerMetadataError",
    "MissingAssociationError",
    "MzSdrfError",
    "StreamIOError",
    "TableFormatError",
    "Value",
    "ValueKind",
]
