"""Tests for the location table CSV writer."""

import polars as pl

from geneloc_pipeline.output import write_location_table


def test_write_location_table_content(human_locations, tmp_path):
    output_path = tmp_path / "gene_locations.csv"

    result = write_location_table(human_locations, output_path)

    assert result == output_path
    lines = output_path.read_text().splitlines()
    assert lines == [
        "hgnc_symbol,chromosome_name,start_position,end_position,strand",
        "BRCA1,17,43044295,43125483,-1",
        "TP53,17,7661779,7687550,-1",
        "MYC,8,127735434,127742951,1",
    ]


def test_write_location_table_creates_parent(human_locations, tmp_path):
    output_path = tmp_path / "nested" / "out" / "gene_locations.csv"

    write_location_table(human_locations, output_path)

    assert output_path.exists()


def test_write_location_table_overwrites(human_locations, tmp_path):
    output_path = tmp_path / "gene_locations.csv"
    output_path.write_text("stale\n")

    write_location_table(human_locations.head(1), output_path)

    assert output_path.read_text().splitlines()[1] == "BRCA1,17,43044295,43125483,-1"
    assert pl.read_csv(output_path).height == 1
