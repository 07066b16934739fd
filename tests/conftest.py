"""Shared fixtures: offline genome assets, stub annotation lookups, configs."""

from pathlib import Path

import polars as pl
import pytest

from geneloc_pipeline.annotation import SpeciesProfile, location_schema
from geneloc_pipeline.config.schema import PipelineConfig
from geneloc_pipeline.output.genome import GenomeAssets


# Shortened chromosomes keep rendering fast; gene positions below fit inside
FAKE_CHROMOSOMES = [
    ("chr1", 150_000_000),
    ("chr8", 145_138_636),
    ("chr17", 83_257_441),
]


def _fake_cytobands(name: str, length: int) -> list[tuple]:
    centromere = length // 2
    return [
        (name, 0, centromere - 2_000_000, "p1", "gneg"),
        (name, centromere - 2_000_000, centromere, "p11", "acen"),
        (name, centromere, centromere + 2_000_000, "q11", "acen"),
        (name, centromere + 2_000_000, length - 10_000_000, "q2", "gpos50"),
        (name, length - 10_000_000, length, "q3", "gpos100"),
    ]


@pytest.fixture
def genome_assets(tmp_path) -> GenomeAssets:
    """Write a small chromosome BED and cytoband file."""
    asset_dir = tmp_path / "genome"
    asset_dir.mkdir()

    chr_bed = asset_dir / "chr.bed"
    chr_bed.write_text(
        "".join(f"{name}\t0\t{length}\n" for name, length in FAKE_CHROMOSOMES)
    )

    cytoband = asset_dir / "cytoband.bed"
    cytoband.write_text("".join(
        "\t".join(str(v) for v in band) + "\n"
        for name, length in FAKE_CHROMOSOMES
        for band in _fake_cytobands(name, length)
    ))

    return GenomeAssets(genome_build="hg38", chr_bed_file=chr_bed, cytoband_file=cytoband)


@pytest.fixture
def assets_loader(genome_assets):
    """Assets loader returning the fake assets for any build."""
    calls = []

    def _load(genome_build, cache_dir=None):
        calls.append(genome_build)
        return genome_assets

    _load.calls = calls
    return _load


@pytest.fixture
def human_locations() -> pl.DataFrame:
    """LocationTable for BRCA1, TP53 and MYC as BioMart returns it."""
    return pl.DataFrame(
        {
            "hgnc_symbol": ["BRCA1", "TP53", "MYC"],
            "chromosome_name": ["17", "17", "8"],
            "start_position": [43044295, 7661779, 127735434],
            "end_position": [43125483, 7687550, 127742951],
            "strand": [-1, -1, 1],
        },
        schema=location_schema("hgnc_symbol"),
    )


class StubLookup:
    """AnnotationLookup returning a fixed table and recording calls."""

    def __init__(self, df: pl.DataFrame):
        self.df = df
        self.calls: list[tuple[list[str], SpeciesProfile]] = []

    def lookup(self, symbols, profile):
        self.calls.append((list(symbols), profile))
        return self.df


@pytest.fixture
def stub_lookup(human_locations) -> StubLookup:
    return StubLookup(human_locations)


@pytest.fixture
def empty_lookup() -> StubLookup:
    return StubLookup(pl.DataFrame(schema=location_schema("hgnc_symbol")))


@pytest.fixture
def test_config(tmp_path) -> PipelineConfig:
    """Default config with the cache kept under tmp_path."""
    return PipelineConfig(cache_dir=tmp_path / "cache")


@pytest.fixture
def config_file(tmp_path) -> Path:
    """Minimal config YAML for CLI tests."""
    config_path = tmp_path / "test_config.yaml"
    config_path.write_text(f"""
cache_dir: {tmp_path / "cache"}
annotation:
  backend: biomart
api:
  rate_limit_per_second: 3
  max_retries: 3
  cache_ttl_seconds: 3600
  timeout_seconds: 30
""")
    return config_path
