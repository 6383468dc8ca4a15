# mzsdrf/metadata/ontology.py
"""
Controlled vocabulary lookup tables for SDRF properties.

FIELD_TERMS maps a canonical SDRF column name to the ontology term describing
it; the row value becomes the term's value. LABEL_TERMS maps isobaric tag
codes found in the ``label`` column to the PSI-MS term for the reagent itself.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class OntologyTerm:
    """A (vocabulary, accession, label) triple."""

    vocabulary: str
    accession: str
    label: str

    @classmethod
    def from_curie(cls, curie: str, label: str) -> "OntologyTerm":
        vocabulary, _, _ = curie.partition(":")
        return cls(vocabulary, curie, label)


LABEL_FIELD = "label"

FIELD_TERMS: Mapping[str, OntologyTerm] = MappingProxyType(
    {
        name: OntologyTerm.from_curie(curie, name)
        for name, curie in (
            ("organism part", "EFO:0000635"),
            ("organism", "OBI:0100026"),
            ("developmental stage", "EFO:0000399"),
            ("ancestry category", "HANCESTRO:0004"),
            ("cell type", "EFO:0000324"),
            ("material type", "BFO:0000040"),
            ("age", "EFO:0000246"),
            ("disease", "EFO:0000408"),
            ("time", "EFO:0000721"),
            ("technology type", "EFO:0005521"),
            ("biological replicate", "EFO:0002091"),
            ("technical replicate", "MS:1001808"),
            ("fraction identifier", "MS:1000858"),
            ("file uri", "PRIDE:0000577"),
        )
    }
)

# PSI-MS has one term per TMT reagent. PRIDE defines its own, sometimes
# duplicated, label terms; PSI-MS is used here.
LABEL_TERMS: Mapping[str, OntologyTerm] = MappingProxyType(
    {
        tag: OntologyTerm.from_curie(curie, f"TMT reagent {tag[3:]}")
        for tag, curie in (
            ("TMT126", "MS:1002616"),
            ("TMT127", "MS:1002617"),
            ("TMT128", "MS:1002618"),
            ("TMT129", "MS:1002619"),
            ("TMT130", "MS:1002620"),
            ("TMT131", "MS:1002621"),
            ("TMT127N", "MS:1002763"),
            ("TMT127C", "MS:1002764"),
            ("TMT128N", "MS:1002765"),
            ("TMT128C", "MS:1002766"),
            ("TMT129N", "MS:1002767"),
            ("TMT129C", "MS:1002768"),
            ("TMT130N", "MS:1002769"),
            ("TMT130C", "MS:1002770"),
        )
    }
)
