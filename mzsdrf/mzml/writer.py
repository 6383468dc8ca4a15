# mzsdrf/mzml/writer.py
import hashlib
import logging
import re
from typing import BinaryIO

from ..core.base_container import BaseContainerReader, BaseContainerWriter
from ..core.exceptions import StreamIOError
from .reader import MzMLStreamReader, SpectrumGroup
from .sample_list import render_sample_list

logger = logging.getLogger(__name__)

INDEX_LIST_START = re.compile(rb"<indexList[\s>]")
OFFSET = re.compile(rb"(<offset\b[^>]*>)\s*(\d+)\s*(</offset>)")
INDEX_LIST_OFFSET = re.compile(rb"(<indexListOffset>)\s*(\d+)\s*(</indexListOffset>)")
FILE_CHECKSUM = re.compile(rb"(<fileChecksum>)[^<]*(</fileChecksum>)")

_PENDING_OVERLAP = 32


class MzMLStreamWriter(BaseContainerWriter):
    """
    Forward-only mzML writer that re-emits a reader's bytes.

    Only the sample list is rendered anew. For indexedmzML documents every
    index offset is shifted by the size change of the header and the file
    checksum is recomputed, since both depend on the bytes before them.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.bytes_written = 0
        self._sha1 = hashlib.sha1()
        self._offset_delta = 0
        self._indexed = False
        self._metadata_written = False

    def _write(self, data: bytes) -> None:
        if not data:
            return
        try:
            self.stream.write(data)
        except OSError as e:
            raise StreamIOError(f"Failed to write mzML output: {e}") from e
        self._sha1.update(data)
        self.bytes_written += len(data)

    def copy_metadata_from(self, reader: BaseContainerReader) -> None:
        """Write the reader's header with its current sample list spliced in."""
        if self._metadata_written:
            raise RuntimeError("Metadata has already been written")
        if not isinstance(reader, MzMLStreamReader):
            raise TypeError(f"Cannot copy mzML metadata from {type(reader).__name__}")

        header = reader.header
        sample_list = render_sample_list(reader.samples, indent=header.indent.decode("utf-8"))
        if header.has_sample_list:
            patched = sample_list
        else:
            patched = b"\n" + header.indent + sample_list
        raw = header.raw
        data = raw[: header.sample_list_start] + patched + raw[header.sample_list_end :]

        self._offset_delta = len(data) - len(raw)
        self._indexed = header.is_indexed
        self._metadata_written = True
        self._write(data)
        logger.debug(
            f"Wrote mzML header with {len(reader.samples)} samples "
            f"({self._offset_delta:+d} bytes)"
        )

    def write_group(self, group: SpectrumGroup) -> None:
        for spectrum in group:
            self._write(spectrum.data)

    def finish(self, reader: BaseContainerReader) -> None:
        """Copy the trailer, rewriting the index of indexedmzML documents."""
        pending = bytearray()
        index_found = False
        for chunk in reader.iter_trailer():
            if not self._indexed:
                self._write(chunk)
                continue
            pending += chunk
            if not index_found:
                match = INDEX_LIST_START.search(pending)
                if match is not None:
                    self._write(bytes(pending[: match.start()]))
                    del pending[: match.start()]
                    index_found = True
                elif len(pending) > _PENDING_OVERLAP:
                    self._write(bytes(pending[:-_PENDING_OVERLAP]))
                    del pending[:-_PENDING_OVERLAP]

        if index_found:
            self._write_index(bytes(pending))
        else:
            if self._indexed:
                logger.warning("indexedmzML input has no <indexList>; copied as is")
            self._write(bytes(pending))

        try:
            self.stream.flush()
        except OSError as e:
            raise StreamIOError(f"Failed to flush mzML output: {e}") from e
        logger.debug(f"Wrote {self.bytes_written} bytes of mzML")

    def _shift(self, match: "re.Match[bytes]") -> bytes:
        offset = int(match.group(2)) + self._offset_delta
        return match.group(1) + str(offset).encode("ascii") + match.group(3)

    def _write_index(self, tail: bytes) -> None:
        tail = OFFSET.sub(self._shift, tail)
        tail = INDEX_LIST_OFFSET.sub(self._shift, tail)

        checksum = FILE_CHECKSUM.search(tail)
        if checksum is None:
            self._write(tail)
            return
        # The checksum covers everything up to and including <fileChecksum>
        self._write(tail[: checksum.end(1)])
        self._write(self._sha1.hexdigest().encode("ascii"))
        self._write(tail[checksum.start(2) :])
