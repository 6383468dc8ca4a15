# mzsdrf/mzml/reader.py
import logging
import re
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, Pattern

from ..core.base_container import BaseContainerReader
from ..core.exceptions import ContainerMetadataError, StreamIOError
from ..metadata.mapper import ExportedSample
from .sample_list import parse_sample_list, parse_source_files

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

# Longest marker we search for; bytes kept when re-scanning a grown buffer
_MARKER_OVERLAP = 64

RUN_START = re.compile(rb"<run[\s>]")
FILE_DESCRIPTION = re.compile(rb"<fileDescription[\s>].*?</fileDescription\s*>", re.S)
PARAM_GROUP_LIST_END = re.compile(rb"</referenceableParamGroupList\s*>")
SAMPLE_LIST = re.compile(
    rb"<sampleList\b[^>]*/>|<sampleList[\s>].*?</sampleList\s*>", re.S
)
LINE_INDENT = re.compile(rb"[ \t]*$")

# A spectrum starts, or the spectrum section is over
_BODY_MARKER = re.compile(
    rb"(?P<spectrum><spectrum[\s/>])"
    rb"|(?P<end></spectrumList\s*>|<chromatogramList[\s>]|</run\s*>)"
)
SPECTRUM_END = re.compile(rb"</spectrum\s*>")
SPECTRUM_ID = re.compile(rb'\bid="([^"]*)"')
MS_LEVEL_PARAM = re.compile(rb'<cvParam\b[^>]*\baccession="MS:1000511"[^>]*>')
VALUE_ATTR = re.compile(rb'\bvalue="([^"]*)"')


@dataclass
class MzMLHeader:
    """
    Everything before the ``<run>`` start tag.

    ``raw`` is kept untouched; the writer splices a rendered sample list into
    it at ``sample_list_start:sample_list_end`` (an empty span when the
    document has no sample list yet).
    """

    raw: bytes
    source_files: List[str] = field(default_factory=list)
    samples: List[ExportedSample] = field(default_factory=list)
    sample_list_start: int = 0
    sample_list_end: int = 0
    has_sample_list: bool = False
    indent: bytes = b"  "
    is_indexed: bool = False

    @classmethod
    def parse(cls, raw: bytes) -> "MzMLHeader":
        header = cls(raw=raw, is_indexed=b"<indexedmzML" in raw)

        file_description = FILE_DESCRIPTION.search(raw)
        if file_description is None:
            logger.warning("mzML header has no <fileDescription>")
            return header
        header.source_files = parse_source_files(file_description.group(0))

        line_start = raw.rfind(b"\n", 0, file_description.start()) + 1
        indent = LINE_INDENT.search(raw, line_start, file_description.start())
        if indent is not None and indent.group(0):
            header.indent = indent.group(0)

        sample_list = SAMPLE_LIST.search(raw, file_description.end())
        if sample_list is not None:
            header.samples = parse_sample_list(sample_list.group(0))
            header.sample_list_start = sample_list.start()
            header.sample_list_end = sample_list.end()
            header.has_sample_list = True
        else:
            # Schema order: fileDescription, referenceableParamGroupList?, sampleList?
            param_groups = PARAM_GROUP_LIST_END.search(raw, file_description.end())
            anchor = param_groups.end() if param_groups else file_description.end()
            header.sample_list_start = header.sample_list_end = anchor
        return header


@dataclass
class SpectrumRecord:
    """
    Raw bytes of one ``<spectrum>`` element.

    ``data`` also holds whatever preceded the element since the previous
    spectrum (whitespace, the ``<run>`` and ``<spectrumList>`` start tags), so
    concatenating records reproduces the input exactly.
    """

    data: bytes
    id: str = ""
    ms_level: int = 1


@dataclass
class SpectrumGroup:
    """An MS1 spectrum and the MSn spectra that follow it."""

    spectra: List[SpectrumRecord] = field(default_factory=list)

    def total_spectra(self) -> int:
        return len(self.spectra)

    def __iter__(self) -> Iterator[SpectrumRecord]:
        return iter(self.spectra)


def _parse_spectrum(data: bytes, start: int) -> SpectrumRecord:
    tag_end = data.find(b">", start)
    spectrum_id = SPECTRUM_ID.search(data, start, tag_end)
    ms_level = 1
    level_param = MS_LEVEL_PARAM.search(data, start)
    if level_param is not None:
        value = VALUE_ATTR.search(level_param.group(0))
        if value is not None and value.group(1).strip().isdigit():
            ms_level = int(value.group(1))
    raw_id = spectrum_id.group(1) if spectrum_id else b""
    return SpectrumRecord(
        data=data,
        id=raw_id.decode("utf-8", errors="replace"),
        ms_level=ms_level,
    )


class MzMLStreamReader(BaseContainerReader):
    """
    Forward-only mzML reader over a binary stream.

    The header is read and parsed on construction. Spectra are then yielded
    as raw byte groups without decoding, followed by the trailer in chunks.
    Only the current group and the read buffer are held in memory.
    """

    def __init__(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.stream = stream
        self.chunk_size = chunk_size
        self._buffer = bytearray()
        self._eof = False
        self._groups_consumed = False
        self.header = self._read_header()
        logger.info(
            f"Read mzML header ({len(self.header.raw)} bytes, "
            f"{len(self.header.source_files)} source files, "
            f"{len(self.header.samples)} samples)"
        )

    @property
    def source_files(self) -> List[str]:
        return self.header.source_files

    @property
    def samples(self) -> List[ExportedSample]:
        return self.header.samples

    def _fill(self) -> bool:
        """Append the next chunk to the buffer; False once the stream is exhausted."""
        if self._eof:
            return False
        try:
            chunk = self.stream.read(self.chunk_size)
        except OSError as e:
            raise StreamIOError(f"Failed to read mzML input: {e}") from e
        if not chunk:
            self._eof = True
            return False
        self._buffer += chunk
        return True

    def _search(self, pattern: Pattern[bytes], start: int = 0):
        """Search the buffer, reading more input until a match or EOF."""
        search_from = start
        while True:
            match = pattern.search(self._buffer, search_from)
            if match is not None:
                return match
            search_from = max(start, len(self._buffer) - _MARKER_OVERLAP)
            if not self._fill():
                return None

    def _find(self, marker: bytes, start: int = 0) -> int:
        search_from = start
        while True:
            position = self._buffer.find(marker, search_from)
            if position >= 0:
                return position
            search_from = max(start, len(self._buffer) - len(marker))
            if not self._fill():
                return -1

    def _consume(self, end: int) -> bytes:
        data = bytes(self._buffer[:end])
        del self._buffer[:end]
        return data

    def _read_header(self) -> MzMLHeader:
        run_start = self._search(RUN_START)
        if run_start is None:
            raise ContainerMetadataError("No <run> element found in mzML input", key="run")
        return MzMLHeader.parse(self._consume(run_start.start()))

    def iter_spectra(self) -> Iterator[SpectrumRecord]:
        """Yield spectrum records until the spectrum section ends."""
        while True:
            marker = self._search(_BODY_MARKER)
            if marker is None:
                raise StreamIOError("Unexpected end of mzML input inside <run>")
            if marker.group("end") is not None:
                return
            start = marker.start()
            tag_end = self._find(b">", start)
            if tag_end < 0:
                raise StreamIOError("Unexpected end of mzML input inside <spectrum>")
            if self._buffer[tag_end - 1 : tag_end] == b"/":
                # Empty element, no children and no end tag
                end = tag_end + 1
            else:
                end_tag = self._search(SPECTRUM_END, tag_end)
                if end_tag is None:
                    raise StreamIOError("Unexpected end of mzML input inside <spectrum>")
                end = end_tag.end()
            data = self._consume(end)
            yield _parse_spectrum(data, start)

    def iter_groups(self) -> Iterator[SpectrumGroup]:
        """
        Yield spectrum groups in document order.

        A group starts at every MS1 spectrum; MSn spectra join the group
        before them. Spectra without an ms level count as MS1.
        """
        if self._groups_consumed:
            raise RuntimeError("Spectrum groups can only be iterated once")
        self._groups_consumed = True

        group = SpectrumGroup()
        for spectrum in self.iter_spectra():
            if spectrum.ms_level == 1 and group.spectra:
                yield group
                group = SpectrumGroup()
            group.spectra.append(spectrum)
        if group.spectra:
            yield group

    def iter_trailer(self) -> Iterator[bytes]:
        """Yield the remaining input in chunks, starting with anything buffered."""
        if self._buffer:
            yield self._consume(len(self._buffer))
        while self._fill():
            yield self._consume(len(self._buffer))
