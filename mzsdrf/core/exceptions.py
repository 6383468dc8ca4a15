# mzsdrf/core/exceptions.py
"""
Exception hierarchy for the SDRF annotation pipeline.

Every error raised by the pipeline derives from MzSdrfError so the CLI can
report it and exit with a non-zero status.
"""
from typing import Optional


class MzSdrfError(Exception):
    """Base exception for all mzsdrf errors."""


class TableFormatError(MzSdrfError):
    """Raised when the SDRF table cannot be read or a row/header is malformed."""

    def __init__(
        self,
        message: str,
        row_index: Optional[int] = None,
        column: Optional[str] = None,
    ) -> None:
        """
        Initialize the TableFormatError.

        Args:
            message: Description of the problem
            row_index: 0-based data row index, if the error is tied to a row
            column: Offending column header, if known
        """
        self.message = message
        self.row_index = row_index
        self.column = column

        details = []
        if row_index is not None:
            details.append(f"row {row_index}")
        if column is not None:
            details.append(f"column '{column}'")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class ColumnFormatError(MzSdrfError):
    """Raised when a bracketed column header has no closing bracket."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Malformed column header, missing closing bracket: '{column}'")


class MissingAssociationError(MzSdrfError):
    """Raised when an SDRF row has no 'data file' comment to group it by."""

    def __init__(self, row_index: int, sample_name: Optional[str] = None) -> None:
        self.row_index = row_index
        self.sample_name = sample_name
        label = f" ('{sample_name}')" if sample_name else ""
        super().__init__(
            f"Row {row_index}{label} has no comment[data file] value"
        )


class ContainerMetadataError(MzSdrfError):
    """Raised when the mzML header lacks what is needed to pick samples."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message)


class StreamIOError(MzSdrfError):
    """Raised when reading or writing the mzML stream fails mid-way."""
