"""Gene coordinate lookup against Ensembl BioMart or MyGene.info."""

import io
from typing import Protocol, runtime_checkable
from xml.etree import ElementTree

import mygene
import polars as pl
import structlog

from geneloc_pipeline.annotation.models import (
    BIOMART_SERVICE_PATH,
    empty_location_table,
    location_attributes,
    location_schema,
)
from geneloc_pipeline.annotation.species import SpeciesProfile
from geneloc_pipeline.api_clients.base import CachedAPIClient
from geneloc_pipeline.config.schema import PipelineConfig
from geneloc_pipeline.errors import (
    AnnotationServiceError,
    EmptyGeneListError,
    NoLocationsFoundError,
)

logger = structlog.get_logger(__name__)

BIOMART_SUCCESS_STAMP = "[success]"


@runtime_checkable
class AnnotationLookup(Protocol):
    """Anything that turns gene symbols into a location table."""

    def lookup(
        self, symbols: list[str], profile: SpeciesProfile
    ) -> pl.DataFrame:  # pragma: no cover - protocol
        ...


def normalize_gene_symbols(genes) -> list[str]:
    """Strip, drop blanks and de-duplicate symbols, keeping first-seen order.

    Raises:
        EmptyGeneListError: If nothing remains
    """
    if isinstance(genes, str):
        genes = [genes]

    symbols = list(dict.fromkeys(g.strip() for g in genes if g and g.strip()))
    if not symbols:
        raise EmptyGeneListError()
    return symbols


def build_biomart_query(symbols: list[str], profile: SpeciesProfile) -> str:
    """Build a BioMart XML query for the location attributes of the symbols.

    The query asks for headerless TSV with unique rows and a completion
    stamp so truncated responses can be detected.
    """
    query = ElementTree.Element(
        "Query",
        {
            "virtualSchemaName": "default",
            "formatter": "TSV",
            "header": "0",
            "uniqueRows": "1",
            "count": "",
            "completionStamp": "1",
            "datasetConfigVersion": "0.6",
        },
    )
    dataset = ElementTree.SubElement(
        query, "Dataset", {"name": profile.dataset_id, "interface": "default"}
    )
    ElementTree.SubElement(
        dataset,
        "Filter",
        {"name": profile.symbol_attribute, "value": ",".join(symbols)},
    )
    for attribute in location_attributes(profile.symbol_attribute):
        ElementTree.SubElement(dataset, "Attribute", {"name": attribute})

    body = ElementTree.tostring(query, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?><!DOCTYPE Query>{body}'


def parse_biomart_tsv(text: str, symbol_attribute: str) -> pl.DataFrame:
    """Parse a headerless BioMart TSV response into a location table.

    Raises:
        AnnotationServiceError: On a BioMart error payload or a response
            missing its completion stamp
    """
    stripped = text.strip()

    if stripped.startswith("Query ERROR") or stripped.startswith("ERROR"):
        raise AnnotationServiceError(stripped.splitlines()[0])

    lines = stripped.splitlines()
    if not lines or lines[-1].strip() != BIOMART_SUCCESS_STAMP:
        raise AnnotationServiceError(
            "BioMart response is incomplete (missing completion stamp)"
        )

    rows = [line for line in lines[:-1] if line.strip()]
    if not rows:
        return empty_location_table(symbol_attribute)

    return pl.read_csv(
        io.BytesIO("\n".join(rows).encode("utf-8")),
        separator="\t",
        has_header=False,
        schema=location_schema(symbol_attribute),
        quote_char=None,
    )


def biomart_response_complete(response) -> bool:
    """True if a martservice body ends with the completion stamp.

    Error payloads ("Query ERROR ...") and truncated bodies arrive with
    HTTP 200 and must not be cached.
    """
    return response.text.rstrip().endswith(BIOMART_SUCCESS_STAMP)


class BiomartLookup:
    """Location lookup via the Ensembl BioMart martservice endpoint.

    The XML query is POSTed as a form field, so gene lists of any length
    fit in one request.
    """

    def __init__(self, client: CachedAPIClient, host: str = "https://www.ensembl.org"):
        self.client = client
        self.url = host.rstrip("/") + BIOMART_SERVICE_PATH

    def lookup(self, symbols: list[str], profile: SpeciesProfile) -> pl.DataFrame:
        query = build_biomart_query(symbols, profile)
        logger.info(
            "biomart_query_start",
            dataset=profile.dataset_id,
            filter=profile.symbol_attribute,
            gene_count=len(symbols),
        )
        response = self.client.post(self.url, data={"query": query})
        df = parse_biomart_tsv(response.text, profile.symbol_attribute)
        logger.info("biomart_query_complete", row_count=df.height)
        return df


class MyGeneLookup:
    """Location lookup via MyGene.info symbol queries.

    Each genomic_pos entry of a hit becomes one row, so genes annotated
    at several loci yield several rows, like BioMart does.
    """

    def __init__(self, mg: mygene.MyGeneInfo | None = None):
        self.mg = mg or mygene.MyGeneInfo()

    def lookup(self, symbols: list[str], profile: SpeciesProfile) -> pl.DataFrame:
        logger.info(
            "mygene_query_start",
            species=profile.species.value,
            taxid=profile.taxid,
            gene_count=len(symbols),
        )
        batch_results = self.mg.querymany(
            symbols,
            scopes="symbol",
            fields="symbol,genomic_pos",
            species=profile.taxid,
            returnall=True,
        )

        records = []
        for hit in batch_results.get("out", []):
            if hit.get("notfound", False):
                continue

            positions = hit.get("genomic_pos")
            if not positions:
                continue
            # genomic_pos can be a single dict or a list of dicts
            if isinstance(positions, dict):
                positions = [positions]

            symbol = hit.get("symbol") or hit.get("query")
            for pos in positions:
                if not isinstance(pos, dict) or "chr" not in pos:
                    continue
                # strand is sometimes null; keep the locus with unknown strand
                strand = pos.get("strand")
                records.append({
                    profile.symbol_attribute: symbol,
                    "chromosome_name": str(pos["chr"]),
                    "start_position": int(pos["start"]),
                    "end_position": int(pos["end"]),
                    "strand": int(strand) if strand is not None else None,
                })

        if not records:
            return empty_location_table(profile.symbol_attribute)

        df = pl.DataFrame(records, schema=location_schema(profile.symbol_attribute))
        logger.info("mygene_query_complete", row_count=df.height)
        return df


def build_lookup(config: PipelineConfig) -> AnnotationLookup:
    """Create the annotation backend named in the configuration."""
    if config.annotation.backend == "mygene":
        return MyGeneLookup()
    return BiomartLookup(
        CachedAPIClient.from_config(config, cache_filter=biomart_response_complete),
        host=config.annotation.biomart_host,
    )


def fetch_gene_locations(
    symbols: list[str],
    profile: SpeciesProfile,
    lookup: AnnotationLookup,
) -> pl.DataFrame:
    """Query gene locations and fail if nothing was found.

    Symbols without any location are dropped silently by the service;
    they are only reported in the log. Duplicate loci pass through.

    Args:
        symbols: Gene symbols (already normalized)
        profile: Species profile selecting dataset and symbol attribute
        lookup: Annotation backend

    Returns:
        LocationTable with the symbol attribute as first column

    Raises:
        NoLocationsFoundError: If the service returned zero rows
    """
    df = lookup.lookup(symbols, profile)

    if df.height == 0:
        raise NoLocationsFoundError(symbols, profile.dataset_id)

    found = set(df.get_column(profile.symbol_attribute).to_list())
    missing = [s for s in symbols if s not in found]
    if missing:
        logger.warning("genes_without_location", missing=missing)

    logger.info(
        "gene_locations_fetched",
        rows=df.height,
        genes_found=len(found),
        genes_requested=len(symbols),
    )
    return df
