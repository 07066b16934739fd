"""Table layouts for gene location data."""

import polars as pl

# Columns after the species-specific symbol column, in output order
LOCATION_COLUMNS = [
    "chromosome_name",
    "start_position",
    "end_position",
    "strand",
]

# Column order expected by the circular plotter; label must stay 4th
CIRCOS_COLUMNS = ["chromosome", "start", "end", "label"]

BIOMART_SERVICE_PATH = "/biomart/martservice"


def location_schema(symbol_attribute: str) -> dict[str, pl.DataType]:
    """Polars schema of a location table keyed by the species symbol attribute.

    Chromosome names stay strings so "17" and "X" share a column type.
    """
    return {
        symbol_attribute: pl.Utf8,
        "chromosome_name": pl.Utf8,
        "start_position": pl.Int64,
        "end_position": pl.Int64,
        "strand": pl.Int8,
    }


def location_attributes(symbol_attribute: str) -> list[str]:
    """Full attribute list requested from the annotation service."""
    return [symbol_attribute, *LOCATION_COLUMNS]


def empty_location_table(symbol_attribute: str) -> pl.DataFrame:
    """Zero-row location table with the correct schema."""
    return pl.DataFrame(schema=location_schema(symbol_attribute))
