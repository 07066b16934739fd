"""Gene annotation lookup.

Resolves species profiles, queries gene coordinates from BioMart or
MyGene.info, and reshapes the result for plotting.
"""

from geneloc_pipeline.annotation.fetch import (
    AnnotationLookup,
    BiomartLookup,
    MyGeneLookup,
    biomart_response_complete,
    build_biomart_query,
    build_lookup,
    fetch_gene_locations,
    normalize_gene_symbols,
    parse_biomart_tsv,
)
from geneloc_pipeline.annotation.models import (
    CIRCOS_COLUMNS,
    LOCATION_COLUMNS,
    empty_location_table,
    location_schema,
)
from geneloc_pipeline.annotation.species import (
    SPECIES_PROFILES,
    Species,
    SpeciesProfile,
    resolve_species,
    supported_species,
)
from geneloc_pipeline.annotation.transform import add_chr_prefix, to_circos_rows

__all__ = [
    "AnnotationLookup",
    "BiomartLookup",
    "MyGeneLookup",
    "biomart_response_complete",
    "build_biomart_query",
    "build_lookup",
    "fetch_gene_locations",
    "normalize_gene_symbols",
    "parse_biomart_tsv",
    "CIRCOS_COLUMNS",
    "LOCATION_COLUMNS",
    "empty_location_table",
    "location_schema",
    "SPECIES_PROFILES",
    "Species",
    "SpeciesProfile",
    "resolve_species",
    "supported_species",
    "add_chr_prefix",
    "to_circos_rows",
]
