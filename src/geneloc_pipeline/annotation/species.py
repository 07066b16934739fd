"""Species profiles: annotation dataset, genome build and symbol attribute."""

from dataclasses import dataclass
from enum import Enum

from geneloc_pipeline.errors import UnsupportedSpeciesError


class Species(str, Enum):
    """Species with a known annotation profile."""

    HUMAN = "human"
    MOUSE = "mouse"


@dataclass(frozen=True)
class SpeciesProfile:
    """Lookup settings for one species.

    Attributes:
        species: Species key
        dataset_id: Ensembl BioMart dataset name
        genome_build: UCSC genome build used for ideograms
        symbol_attribute: BioMart attribute holding the official gene symbol
        taxid: NCBI taxonomy id (used by MyGene.info)
    """
    species: Species
    dataset_id: str
    genome_build: str
    symbol_attribute: str
    taxid: int


SPECIES_PROFILES: dict[Species, SpeciesProfile] = {
    Species.HUMAN: SpeciesProfile(
        species=Species.HUMAN,
        dataset_id="hsapiens_gene_ensembl",
        genome_build="hg38",
        symbol_attribute="hgnc_symbol",
        taxid=9606,
    ),
    Species.MOUSE: SpeciesProfile(
        species=Species.MOUSE,
        dataset_id="mmusculus_gene_ensembl",
        genome_build="mm10",
        symbol_attribute="mgi_symbol",
        taxid=10090,
    ),
}


def supported_species() -> list[str]:
    """Species keys accepted by resolve_species()."""
    return [species.value for species in SPECIES_PROFILES]


def resolve_species(species: Species | str) -> SpeciesProfile:
    """Return the profile for a species key.

    Args:
        species: Species enum member or its string value ("human", "mouse")

    Returns:
        Matching SpeciesProfile

    Raises:
        UnsupportedSpeciesError: If the key has no profile
    """
    try:
        key = Species(species)
    except ValueError:
        raise UnsupportedSpeciesError(species, supported_species()) from None

    return SPECIES_PROFILES[key]
