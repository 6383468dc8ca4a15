"""
Common test fixtures for mzsdrf tests.
"""

import hashlib
import logging
import re
from pathlib import Path
from typing import Optional, Sequence

import pytest

# Root directory of the tests
TEST_DIR = Path(__file__).parent.resolve()

MZML_NS = "http://psi.hupo.org/ms/mzml"

EXISTING_SAMPLE_LIST = """<sampleList count="1">
    <sample id="old_sample" name="Old Sample">
      <cvParam cvRef="MS" accession="MS:1000004" name="sample mass" value="5" unitCvRef="UO" unitAccession="UO:0000021" unitName="gram"/>
      <userParam name="prepared by" value="someone"/>
    </sample>
  </sampleList>"""

SDRF_HEADER = [
    "source name",
    "characteristics[organism]",
    "characteristics[organism part]",
    "characteristics[disease]",
    "characteristics[biological replicate]",
    "assay name",
    "comment[label]",
    "comment[instrument]",
    "comment[data file]",
    "factor value[disease]",
]


def _spectrum(index: int, ms_level: int) -> str:
    return (
        f'      <spectrum index="{index}" id="scan={index + 1}" defaultArrayLength="0">\n'
        f'        <cvParam cvRef="MS" accession="MS:1000511" name="ms level" value="{ms_level}"/>\n'
        f'        <cvParam cvRef="MS" accession="MS:1000128" name="profile spectrum" value=""/>\n'
        f'        <binaryDataArrayList count="0"/>\n'
        f"      </spectrum>\n"
    )


def build_mzml(
    source_files: Sequence[str] = ("run1.raw",),
    ms_levels: Sequence[int] = (1,) * 10,
    sample_list: Optional[str] = None,
    indexed: bool = False,
    chromatogram: bool = True,
) -> bytes:
    """Build a small but structurally complete mzML document."""
    source_file_xml = "".join(
        f'      <sourceFile id="SF{i}" name="{name}" location="file:///data"/>\n'
        for i, name in enumerate(source_files)
    )
    samples_xml = f"  {sample_list}\n" if sample_list else ""
    spectra_xml = "".join(_spectrum(i, level) for i, level in enumerate(ms_levels))
    chromatogram_xml = (
        '    <chromatogramList count="1" defaultDataProcessingRef="DP1">\n'
        '      <chromatogram index="0" id="TIC" defaultArrayLength="0">\n'
        '        <cvParam cvRef="MS" accession="MS:1000235" name="total ion current chromatogram" value=""/>\n'
        '        <binaryDataArrayList count="0"/>\n'
        "      </chromatogram>\n"
        "    </chromatogramList>\n"
        if chromatogram
        else ""
    )
    mzml = (
        f'<mzML xmlns="{MZML_NS}" id="test" version="1.1.0">\n'
        '  <cvList count="1">\n'
        '    <cv id="MS" fullName="PSI-MS" URI="https://purl.obolibrary.org/obo/ms.obo"/>\n'
        "  </cvList>\n"
        "  <fileDescription>\n"
        "    <fileContent>\n"
        '      <cvParam cvRef="MS" accession="MS:1000580" name="MSn spectrum" value=""/>\n'
        "    </fileContent>\n"
        f'    <sourceFileList count="{len(source_files)}">\n'
        f"{source_file_xml}"
        "    </sourceFileList>\n"
        "  </fileDescription>\n"
        f"{samples_xml}"
        '  <softwareList count="1">\n'
        '    <software id="test" version="1.0"/>\n'
        "  </softwareList>\n"
        '  <run id="run1" defaultInstrumentConfigurationRef="IC1">\n'
        f'    <spectrumList count="{len(ms_levels)}" defaultDataProcessingRef="DP1">\n'
        f"{spectra_xml}"
        "    </spectrumList>\n"
        f"{chromatogram_xml}"
        "  </run>\n"
        "</mzML>"
    )
    if not indexed:
        return ('<?xml version="1.0" encoding="utf-8"?>\n' + mzml + "\n").encode("utf-8")

    body = (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<indexedmzML xmlns="{MZML_NS}">\n' + mzml + "\n"
    ).encode("utf-8")
    offsets = "".join(
        f'      <offset idRef="scan={i + 1}">{offset}</offset>\n'
        for i, offset in enumerate(spectrum_offsets(body))
    )
    index_list_offset = len(body)
    body += (
        '<indexList count="1">\n'
        '    <index name="spectrum">\n'
        f"{offsets}"
        "    </index>\n"
        "  </indexList>\n"
        f"  <indexListOffset>{index_list_offset}</indexListOffset>\n"
        "  <fileChecksum>"
    ).encode("utf-8")
    checksum = hashlib.sha1(body).hexdigest()
    return body + f"{checksum}</fileChecksum>\n</indexedmzML>\n".encode("utf-8")


def spectrum_offsets(document: bytes):
    """Byte offsets of every <spectrum> start tag."""
    return [m.start() for m in re.finditer(rb"<spectrum[\s>]", document)]


def strip_sample_list(document: bytes) -> bytes:
    """Remove the sample list element and the whitespace before it."""
    return re.sub(rb"\s*<sampleList\b.*?</sampleList>", b"", document, flags=re.S)


def write_sdrf(path: Path, rows: Sequence[Sequence[str]], header=SDRF_HEADER) -> Path:
    lines = ["\t".join(header)] + ["\t".join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def sdrf_rows():
    """Two samples in run1.raw and one in run2.raw."""
    return [
        ["Sample 1", "homo sapiens", "liver", "normal", "1", "run 1", "TMT126", "Q Exactive", "run1.raw", "normal"],
        ["Sample 2", "homo sapiens", "liver", "hepatocellular carcinoma", "1", "run 1", "TMT127", "Q Exactive", "run1.raw", "hepatocellular carcinoma"],
        ["Sample 3", "mus musculus", "brain", "normal", "2", "run 2", "label free sample", "Q Exactive", "run2.raw", "normal"],
    ]


@pytest.fixture
def sdrf_file(tmp_path, sdrf_rows):
    """Write the default SDRF table to a temporary file."""
    return write_sdrf(tmp_path / "experiment.sdrf.tsv", sdrf_rows)


@pytest.fixture
def mzml_bytes():
    """A 10 spectrum mzML declaring run1.raw."""
    return build_mzml()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo logging configuration done by the CLI between tests."""
    yield
    logger = logging.getLogger("mzsdrf")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_mzml():
    """Factory building mzML documents, see build_mzml."""
    return build_mzml


@pytest.fixture
def make_sdrf(tmp_path):
    """Factory writing an SDRF table into the temporary directory."""

    def _make(rows, header=SDRF_HEADER, name="table.sdrf.tsv"):
        return write_sdrf(tmp_path / name, rows, header)

    return _make


@pytest.fixture
def existing_sample_list():
    """A sampleList element as found in a converter-written mzML."""
    return EXISTING_SAMPLE_LIST


@pytest.fixture
def strip_samples():
    return strip_sample_list


@pytest.fixture
def offsets_of():
    return spectrum_offsets
