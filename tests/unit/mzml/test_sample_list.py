# tests/unit/mzml/test_sample_list.py
import pytest
from lxml import etree

from mzsdrf.core.exceptions import ContainerMetadataError
from mzsdrf.core.value import Value
from mzsdrf.metadata.mapper import ControlledTerm, ExportedSample, UserParam
from mzsdrf.mzml.sample_list import (
    parse_sample_list,
    parse_source_files,
    render_sample_list,
)


@pytest.fixture
def samples():
    return [
        ExportedSample(
            id="sample_1",
            display_name="Sample 1",
            params=[
                ControlledTerm("OBI", "OBI:0100026", "organism", Value.parse("homo sapiens")),
                ControlledTerm("MS", "MS:1002616", "TMT reagent 126"),
                UserParam("characteristics[sex]", Value.parse("female")),
                UserParam("comment[fraction]", Value.parse("3")),
            ],
        ),
        ExportedSample(id="sample_2", display_name="Sample 2 & <co>"),
    ]


class TestRenderSampleList:
    """Test rendering samples as an mzML sampleList."""

    def test_structure(self, samples):
        root = etree.fromstring(render_sample_list(samples))

        assert root.tag == "sampleList"
        assert root.get("count") == "2"
        first, second = root
        assert (first.get("id"), first.get("name")) == ("sample_1", "Sample 1")
        assert second.get("name") == "Sample 2 & <co>"

    def test_cv_params(self, samples):
        root = etree.fromstring(render_sample_list(samples))
        organism, reagent = root[0].findall("cvParam")

        assert dict(organism.attrib) == {
            "cvRef": "OBI",
            "accession": "OBI:0100026",
            "name": "organism",
            "value": "homo sapiens",
        }
        assert reagent.get("value") == ""

    def test_user_params(self, samples):
        root = etree.fromstring(render_sample_list(samples))
        sex, fraction = root[0].findall("userParam")

        assert sex.get("name") == "characteristics[sex]"
        assert sex.get("value") == "female"
        assert sex.get("type") is None
        assert fraction.get("type") == "xsd:integer"

    def test_indentation(self, samples):
        lines = render_sample_list(samples, indent="    ").decode("utf-8").split("\n")

        assert lines[0].startswith("<sampleList")
        assert lines[1].startswith("      <sample ")
        assert lines[-1] == "    </sampleList>"

    def test_render_then_parse(self, samples):
        assert parse_sample_list(render_sample_list(samples)) == samples


class TestParseFragments:
    """Test parsing header fragments cut from an mzML stream."""

    def test_source_files_in_order(self):
        fragment = (
            b"<fileDescription><sourceFileList count=\"2\">"
            b"<sourceFile id=\"a\" name=\"run1.raw\" location=\"file:///\"/>"
            b"<sourceFile id=\"b\" name=\"run2.raw\" location=\"file:///\"/>"
            b"</sourceFileList></fileDescription>"
        )
        assert parse_source_files(fragment) == ["run1.raw", "run2.raw"]

    def test_source_files_with_namespace(self):
        fragment = (
            b'<fileDescription xmlns="http://psi.hupo.org/ms/mzml"><sourceFileList count="1">'
            b'<sourceFile id="a" name="run1.raw" location="file:///"/>'
            b"</sourceFileList></fileDescription>"
        )
        assert parse_source_files(fragment) == ["run1.raw"]

    def test_no_source_files(self):
        assert parse_source_files(b"<fileDescription><fileContent/></fileDescription>") == []

    def test_existing_sample_list(self, existing_sample_list):
        samples = parse_sample_list(existing_sample_list.encode("utf-8"))

        assert len(samples) == 1
        assert samples[0].id == "old_sample"
        assert samples[0].params == [
            ControlledTerm("MS", "MS:1000004", "sample mass", Value.parse("5")),
            UserParam("prepared by", Value.parse("someone")),
        ]

    def test_malformed_fragment(self):
        with pytest.raises(ContainerMetadataError) as excinfo:
            parse_source_files(b"<fileDescription><sourceFile name='x'></fileDescription>")
        assert excinfo.value.key == "fileDescription"
