"""
Streaming mzML reading and writing.

Spectra are never decoded: the reader splits the input into header, spectrum
groups and trailer as raw bytes, and the writer re-emits them with a new
sample list.
"""

from .reader import MzMLHeader, MzMLStreamReader, SpectrumGroup, SpectrumRecord
from .sample_list import parse_sample_list, parse_source_files, render_sample_list
from .writer import MzMLStreamWriter

__all__ = [
    "MzMLHeader",
    "MzMLStreamReader",
    "MzMLStreamWriter",
    "SpectrumGroup",
    "SpectrumRecord",
    "parse_sample_list",
    "parse_source_files",
    "render_sample_list",
]
