"""
Ontology mapping for SDRF metadata.

Key components:
- ontology: controlled vocabulary lookup tables
- mapper: column/value to cvParam or userParam mapping, sample building
- aggregator: grouping of rows by data file
"""

from .aggregator import organize_by_data_file
from .mapper import (
    ControlledTerm,
    ExportedSample,
    TermOrParam,
    UserParam,
    build_sample,
    map_field,
    map_value,
)
from .ontology import FIELD_TERMS, LABEL_TERMS, OntologyTerm

__all__ = [
    "ControlledTerm",
    "ExportedSample",
    "FIELD_TERMS",
    "LABEL_TERMS",
    "OntologyTerm",
    "TermOrParam",
    "UserParam",
    "build_sample",
    "map_field",
    "map_value",
    "organize_by_data_file",
]
