# mzsdrf/annotate.py
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .metadata.aggregator import organize_by_data_file
from .mzml.reader import DEFAULT_CHUNK_SIZE, MzMLStreamReader
from .mzml.writer import MzMLStreamWriter
from .patcher import PatchContext, PatchSummary, StreamPatcher
from .sdrf.reader import read_sdrf

logger = logging.getLogger(__name__)


def annotate_mzml(
    sdrf_path: Union[str, Path],
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    context: Optional[PatchContext] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> PatchSummary:
    """
    Write ``input_stream`` to ``output_stream`` with its sample list replaced
    by the SDRF rows describing the mzML's source file.

    The SDRF is fully read and grouped before the mzML is touched, so table
    problems are reported without consuming any input.

    Args:
        sdrf_path: Path to the SDRF table
        input_stream: Binary mzML input
        output_stream: Binary mzML output
        context: Logging and progress settings
        chunk_size: Read size for the mzML input

    Returns:
        Summary of the run

    Raises:
        MzSdrfError: Any table, grouping, metadata or stream error
    """
    rows = read_sdrf(sdrf_path)
    samples_by_data_file = organize_by_data_file(rows)
    logger.info(f"SDRF describes {len(samples_by_data_file)} data files")

    reader = MzMLStreamReader(input_stream, chunk_size=chunk_size)
    writer = MzMLStreamWriter(output_stream)
    return StreamPatcher(reader, writer, samples_by_data_file, context).run()
