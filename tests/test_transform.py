"""Tests for chromosome renaming and circos projection."""

import polars as pl

from geneloc_pipeline.annotation import CIRCOS_COLUMNS, add_chr_prefix, to_circos_rows


def test_add_chr_prefix(human_locations):
    annotated = add_chr_prefix(human_locations)

    assert annotated.get_column("chromosome_name").to_list() == ["chr17", "chr17", "chr8"]


def test_add_chr_prefix_leaves_other_columns(human_locations):
    annotated = add_chr_prefix(human_locations)

    assert annotated.columns == human_locations.columns
    assert annotated.drop("chromosome_name").equals(
        human_locations.drop("chromosome_name")
    )


def test_add_chr_prefix_does_not_mutate_input(human_locations):
    add_chr_prefix(human_locations)

    assert human_locations.get_column("chromosome_name").to_list() == ["17", "17", "8"]


def test_add_chr_prefix_twice_double_prefixes(human_locations):
    """Names are not checked for an existing prefix."""
    twice = add_chr_prefix(add_chr_prefix(human_locations))

    assert twice.get_column("chromosome_name")[0] == "chrchr17"


def test_add_chr_prefix_empty_table():
    empty = pl.DataFrame(schema={"hgnc_symbol": pl.Utf8, "chromosome_name": pl.Utf8})

    assert add_chr_prefix(empty).height == 0


def test_to_circos_rows_column_order(human_locations):
    rows = to_circos_rows(add_chr_prefix(human_locations), "hgnc_symbol")

    assert rows.columns == CIRCOS_COLUMNS
    assert rows.columns[3] == "label"
    assert rows.row(2) == ("chr8", 127735434, 127742951, "MYC")
