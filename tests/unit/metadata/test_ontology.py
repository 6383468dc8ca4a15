# tests/unit/metadata/test_ontology.py
import pytest

from mzsdrf.metadata.ontology import FIELD_TERMS, LABEL_TERMS, OntologyTerm


class TestOntologyTables:
    """Test the controlled vocabulary lookup tables."""

    def test_field_terms_cover_known_properties(self):
        assert set(FIELD_TERMS) == {
            "organism",
            "organism part",
            "developmental stage",
            "ancestry category",
            "cell type",
            "material type",
            "age",
            "disease",
            "time",
            "technology type",
            "biological replicate",
            "technical replicate",
            "fraction identifier",
            "file uri",
        }

    def test_field_term_label_is_property_name(self):
        for name, term in FIELD_TERMS.items():
            assert term.label == name
            assert term.accession.startswith(term.vocabulary + ":")

    def test_label_terms_are_psi_ms(self):
        assert len(LABEL_TERMS) == 14
        for tag, term in LABEL_TERMS.items():
            assert term.vocabulary == "MS"
            assert term.label == f"TMT reagent {tag[3:]}"

    def test_label_accessions_are_unique(self):
        accessions = [term.accession for term in LABEL_TERMS.values()]
        assert len(set(accessions)) == len(accessions)

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            FIELD_TERMS["sex"] = OntologyTerm("PATO", "PATO:0000047", "sex")
        with pytest.raises(TypeError):
            del LABEL_TERMS["TMT126"]

    def test_from_curie(self):
        term = OntologyTerm.from_curie("EFO:0000635", "organism part")
        assert term == OntologyTerm("EFO", "EFO:0000635", "organism part")
