"""Tests for species profile resolution."""

import pytest

from geneloc_pipeline.annotation import (
    SPECIES_PROFILES,
    Species,
    resolve_species,
    supported_species,
)
from geneloc_pipeline.errors import UnsupportedSpeciesError


def test_resolve_human():
    profile = resolve_species("human")

    assert profile.species is Species.HUMAN
    assert profile.dataset_id == "hsapiens_gene_ensembl"
    assert profile.genome_build == "hg38"
    assert profile.symbol_attribute == "hgnc_symbol"
    assert profile.taxid == 9606


def test_resolve_mouse():
    profile = resolve_species("mouse")

    assert profile.species is Species.MOUSE
    assert profile.dataset_id == "mmusculus_gene_ensembl"
    assert profile.genome_build == "mm10"
    assert profile.symbol_attribute == "mgi_symbol"
    assert profile.taxid == 10090


def test_resolve_accepts_enum():
    assert resolve_species(Species.MOUSE) is SPECIES_PROFILES[Species.MOUSE]


@pytest.mark.parametrize("species", ["rat", "Human", "", "hg38"])
def test_unsupported_species_raises(species):
    with pytest.raises(UnsupportedSpeciesError) as exc_info:
        resolve_species(species)

    assert exc_info.value.species == species
    assert exc_info.value.supported == ["human", "mouse"]


def test_unsupported_species_is_value_error():
    """Callers catching ValueError also see unsupported species."""
    with pytest.raises(ValueError):
        resolve_species("zebrafish")


def test_profiles_are_immutable():
    profile = resolve_species("human")

    with pytest.raises(AttributeError):
        profile.genome_build = "hg19"


def test_supported_species():
    assert supported_species() == ["human", "mouse"]
