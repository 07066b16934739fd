"""CSV writer for raw gene location tables."""

from pathlib import Path

import polars as pl
import structlog

logger = structlog.get_logger(__name__)


def write_location_table(df: pl.DataFrame, output_path: Path) -> Path:
    """
    Write a location table as comma-separated text.

    The table is written as returned by the annotation service: header row
    with the service's column names, no index column, chromosome names
    without a "chr" prefix.

    Args:
        df: LocationTable (symbol attribute, chromosome_name, start_position,
            end_position, strand)
        output_path: Destination CSV path; an existing file is overwritten

    Returns:
        Path to the written CSV file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df.write_csv(output_path, separator=",", include_header=True)

    logger.info("location_table_written", path=str(output_path), rows=df.height)
    return output_path
