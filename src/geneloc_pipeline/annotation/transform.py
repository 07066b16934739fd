"""Reshape location tables for the two genome plots."""

import polars as pl

from geneloc_pipeline.annotation.models import CIRCOS_COLUMNS


def add_chr_prefix(df: pl.DataFrame) -> pl.DataFrame:
    """Prepend "chr" to every chromosome name.

    Ensembl names chromosomes "17", "X"; the ideogram assets use UCSC
    names ("chr17"). Names are not checked for an existing prefix, so
    applying this twice yields "chrchr17".
    """
    return df.with_columns(
        pl.concat_str([pl.lit("chr"), pl.col("chromosome_name")]).alias(
            "chromosome_name"
        )
    )


def to_circos_rows(df: pl.DataFrame, symbol_attribute: str) -> pl.DataFrame:
    """Project an annotated table onto chromosome/start/end/label columns."""
    return df.select(
        pl.col("chromosome_name").alias(CIRCOS_COLUMNS[0]),
        pl.col("start_position").alias(CIRCOS_COLUMNS[1]),
        pl.col("end_position").alias(CIRCOS_COLUMNS[2]),
        pl.col(symbol_attribute).alias(CIRCOS_COLUMNS[3]),
    )
