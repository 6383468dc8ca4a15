# mzsdrf/metadata/mapper.py
from dataclasses import dataclass, field
from typing import List, Union

from ..core.value import Value
from ..sdrf.model import DATA_FILE, INSTRUMENT, Field, SampleRow
from .ontology import FIELD_TERMS, LABEL_FIELD, LABEL_TERMS

# Columns that drive grouping and are never exported as sample metadata
EXCLUDED_FIELDS = frozenset({DATA_FILE, INSTRUMENT})


@dataclass(frozen=True)
class ControlledTerm:
    """A controlled vocabulary term with an optional value (cvParam)."""

    vocabulary: str
    accession: str
    label: str
    value: Value = field(default_factory=Value.empty)


@dataclass(frozen=True)
class UserParam:
    """A free-form key/value pair (userParam)."""

    key: str
    value: Value = field(default_factory=Value.empty)


TermOrParam = Union[ControlledTerm, UserParam]


@dataclass
class ExportedSample:
    """A sample ready to be written into an mzML sample list."""

    id: str
    display_name: str
    params: List[TermOrParam] = field(default_factory=list)


def map_value(name: str, value: Value, key: str) -> TermOrParam:
    """
    Map a canonical column name and its value onto a controlled term.

    Args:
        name: Canonical column name (e.g. ``organism``)
        value: Cell value
        key: Original header text, used when no term is known

    Returns:
        A ControlledTerm for known properties and isobaric tags, otherwise a
        UserParam keyed by the original header
    """
    if name == LABEL_FIELD:
        term = LABEL_TERMS.get(value.as_str())
        if term is not None:
            # The tag is the term; no value is attached
            return ControlledTerm(term.vocabulary, term.accession, term.label)
        return UserParam(key, value)

    term = FIELD_TERMS.get(name)
    if term is not None:
        return ControlledTerm(term.vocabulary, term.accession, term.label, value)
    return UserParam(key, value)


def map_field(sdrf_field: Field) -> TermOrParam:
    """Map a parsed SDRF field, see map_value."""
    return map_value(sdrf_field.canonical_name, sdrf_field.value, sdrf_field.name)


def sample_id(name: str) -> str:
    return name.replace(" ", "_").lower()


def build_sample(row: SampleRow) -> ExportedSample:
    """
    Convert an SDRF row into an exportable sample.

    Fields are visited innate first, then characteristics, comments and
    factors, each in table order. ``data file`` and ``instrument`` are skipped.
    """
    params = [
        map_field(f) for f in row.iter_fields() if f.canonical_name not in EXCLUDED_FIELDS
    ]
    return ExportedSample(id=sample_id(row.name), display_name=row.name, params=params)
