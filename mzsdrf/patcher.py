# mzsdrf/patcher.py
import logging
import sys
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from tqdm import tqdm

from .core.base_container import BaseContainerReader, BaseContainerWriter
from .core.exceptions import ContainerMetadataError
from .metadata.mapper import build_sample
from .sdrf.model import SampleRow

DEFAULT_PROGRESS_INTERVAL = 500


@dataclass
class PatchContext:
    """
    Logging and progress settings for a patch run.

    Attributes:
        logger: Logger receiving progress and summary messages
        progress_interval: Log a progress line every this many groups
        show_progress: Display a tqdm progress bar on stderr
    """

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    show_progress: bool = False


@dataclass(frozen=True)
class PatchSummary:
    """Outcome of a completed patch run."""

    source_file: str
    n_samples: int
    n_groups: int
    n_spectra: int


class StreamPatcher:
    """
    Replace a container's sample list with SDRF samples and stream the rest.

    The samples are the SDRF rows whose data file matches the first source
    file declared by the container.
    """

    def __init__(
        self,
        reader: BaseContainerReader,
        writer: BaseContainerWriter,
        samples_by_data_file: Mapping[str, List[SampleRow]],
        context: Optional[PatchContext] = None,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.samples_by_data_file = samples_by_data_file
        self.context = context or PatchContext()

    def select_samples(self) -> Tuple[str, List[SampleRow]]:
        """
        Find the SDRF rows for the container's primary source file.

        Raises:
            ContainerMetadataError: If no source file is declared or no rows
                reference it
        """
        source_files = self.reader.source_files
        if not source_files:
            raise ContainerMetadataError("No source file declared", key="sourceFile")

        source_file = source_files[0]
        if len(source_files) > 1:
            self.context.logger.warning(
                f"{len(source_files)} source files declared, using the first: {source_file}"
            )
        self.context.logger.info(f"Extracting samples associated with {source_file}")

        rows = self.samples_by_data_file.get(source_file)
        if rows is None:
            raise ContainerMetadataError(
                f"No samples for source file {source_file}", key=source_file
            )
        self.context.logger.info(f"Found {len(rows)} samples")
        return source_file, rows

    def update_sample_list(self, rows: List[SampleRow]) -> None:
        """Replace, rather than merge with, any samples already declared."""
        samples = self.reader.samples
        if samples:
            self.context.logger.debug(f"Discarding {len(samples)} declared samples")
        samples.clear()
        samples.extend(build_sample(row) for row in rows)
        self.context.logger.info("Updated sample list metadata")

    def write_passthrough(self) -> Tuple[int, int]:
        """
        Copy the header once, then every content group in order.

        Returns:
            Tuple of (groups written, spectra written)
        """
        log = self.context.logger
        interval = self.context.progress_interval
        self.writer.copy_metadata_from(self.reader)

        n_groups = 0
        n_spectra = 0
        with tqdm(
            desc="Writing spectra",
            unit="spectrum",
            file=sys.stderr,
            disable=not self.context.show_progress,
        ) as pbar:
            for group in self.reader.iter_groups():
                if interval > 0 and n_groups > 0 and n_groups % interval == 0:
                    log.info(f"Writing group {n_groups}, {n_spectra} spectra written")
                count = group.total_spectra()
                self.writer.write_group(group)
                n_groups += 1
                n_spectra += count
                pbar.update(count)

        self.writer.finish(self.reader)
        log.info(f"Wrote {n_spectra} spectra")
        return n_groups, n_spectra

    def run(self) -> PatchSummary:
        """Select samples, patch the sample list and stream the content."""
        source_file, rows = self.select_samples()
        self.update_sample_list(rows)
        n_groups, n_spectra = self.write_passthrough()
        return PatchSummary(
            source_file=source_file,
            n_samples=len(rows),
            n_groups=n_groups,
            n_spectra=n_spectra,
        )
