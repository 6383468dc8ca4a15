"""
mzsdrf - Annotate mzML files with SDRF sample metadata.

Reads an SDRF sample table, maps its columns onto controlled vocabulary terms
and replaces the sample list of a streamed mzML document with the samples
describing that document's source file. Spectra are passed through untouched.
"""

from .annotate import annotate_mzml
from .core.exceptions import (
    ContainerMetadataError,
    MissingAssociationError,
    MzSdrfError,
    StreamIOError,
    TableFormatError,
)
from .patcher import PatchContext, PatchSummary, StreamPatcher

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "annotate_mzml",
    "ContainerMetadataError",
    "MissingAssociationError",
    "MzSdrfError",
    "PatchContext",
    "PatchSummary",
    "StreamIOError",
    "StreamPatcher",
    "TableFormatError",
]
