# mzsdrf/mzml/sample_list.py
"""
Conversion between mzML ``<sampleList>`` / ``<fileDescription>`` fragments
and the package's sample model.

Header fragments are cut out of the raw byte stream, so they carry no
namespace declaration; the ``{*}`` wildcard matches elements whether or not a
namespace is present.
"""
from typing import Iterable, List

from lxml import etree

from ..core.exceptions import ContainerMetadataError
from ..core.value import Value
from ..metadata.mapper import ControlledTerm, ExportedSample, TermOrParam, UserParam

_PARSER = etree.XMLParser(remove_blank_text=True, resolve_entities=False)


def _parse_fragment(fragment: bytes, element_name: str) -> etree._Element:
    try:
        return etree.fromstring(fragment, _PARSER)
    except etree.XMLSyntaxError as e:
        raise ContainerMetadataError(
            f"Malformed <{element_name}> in mzML header: {e}", key=element_name
        ) from e


def parse_source_files(fragment: bytes) -> List[str]:
    """Return the ``name`` of every ``<sourceFile>`` in a fileDescription fragment."""
    root = _parse_fragment(fragment, "fileDescription")
    return [el.get("name", "") for el in root.iter("{*}sourceFile")]


def _parse_param(element: etree._Element) -> TermOrParam:
    value = Value.parse(element.get("value", ""))
    if etree.QName(element).localname == "cvParam":
        accession = element.get("accession", "")
        vocabulary = element.get("cvRef") or accession.partition(":")[0]
        return ControlledTerm(vocabulary, accession, element.get("name", ""), value)
    return UserParam(element.get("name", ""), value)


def parse_sample_list(fragment: bytes) -> List[ExportedSample]:
    """Parse an existing ``<sampleList>`` fragment."""
    root = _parse_fragment(fragment, "sampleList")
    samples = []
    for sample in root.iter("{*}sample"):
        params = [
            _parse_param(child)
            for child in sample
            if isinstance(child.tag, str)
            and etree.QName(child).localname in ("cvParam", "userParam")
        ]
        samples.append(
            ExportedSample(
                id=sample.get("id", ""),
                display_name=sample.get("name", ""),
                params=params,
            )
        )
    return samples


def _param_element(param: TermOrParam) -> etree._Element:
    if isinstance(param, ControlledTerm):
        element = etree.Element("cvParam")
        element.set("cvRef", param.vocabulary)
        element.set("accession", param.accession)
        element.set("name", param.label)
        element.set("value", param.value.as_str())
        return element

    element = etree.Element("userParam")
    element.set("name", param.key)
    element.set("value", param.value.as_str())
    if param.value.is_numeric:
        element.set("type", param.value.xsd_type())
    return element


def render_sample_list(
    samples: Iterable[ExportedSample], indent: str = "  ", space: str = "  "
) -> bytes:
    """
    Render samples as an indented ``<sampleList>`` element.

    Args:
        samples: Samples to write
        indent: Whitespace placed before every line after the first, so the
            element lines up with its siblings in the surrounding document
        space: Indentation added per nesting level

    Returns:
        UTF-8 encoded XML without a trailing newline
    """
    samples = list(samples)
    sample_list = etree.Element("sampleList")
    sample_list.set("count", str(len(samples)))
    for sample in samples:
        element = etree.SubElement(sample_list, "sample")
        element.set("id", sample.id)
        element.set("name", sample.display_name)
        for param in sample.params:
            element.append(_param_element(param))

    etree.indent(sample_list, space=space)
    text = etree.tostring(sample_list, encoding="unicode")
    return text.replace("\n", "\n" + indent).encode("utf-8")
