"""Chromosome and cytoband reference files for ideogram rendering."""

import logging
from dataclasses import dataclass
from pathlib import Path

import polars as pl
from pycirclize.utils import load_eukaryote_example_dataset

logger = logging.getLogger(__name__)

CHROMOSOME_COLUMNS = ["chrom", "start", "end"]
CYTOBAND_COLUMNS = ["chrom", "start", "end", "name", "gie_stain"]

# Standard Giemsa stain colors used for ideogram bands
GIE_STAIN_COLORS = {
    "gneg": "#FFFFFF",
    "gpos25": "#C8C8C8",
    "gpos33": "#D2D2D2",
    "gpos50": "#969696",
    "gpos66": "#A0A0A0",
    "gpos75": "#646464",
    "gpos100": "#000000",
    "gpos": "#000000",
    "acen": "#D92F27",
    "gvar": "#DCDCDC",
    "stalk": "#647FA4",
}


@dataclass(frozen=True)
class GenomeAssets:
    """Reference files describing one genome build.

    Attributes:
        genome_build: UCSC build name (hg38, mm10, ...)
        chr_bed_file: BED file with one line per chromosome (name, 0, length)
        cytoband_file: UCSC cytoband BED (name, start, end, band, gieStain)
    """
    genome_build: str
    chr_bed_file: Path
    cytoband_file: Path


def load_genome_assets(
    genome_build: str, cache_dir: Path | None = None
) -> GenomeAssets:
    """Fetch (or reuse cached) chromosome and cytoband files for a build.

    The cache directory is created if it does not exist yet.
    """
    if cache_dir is not None:
        cache_dir = Path(cache_dir)
        cache_dir.mkdir(parents=True, exist_ok=True)
    chr_bed_file, cytoband_file, _ = load_eukaryote_example_dataset(
        genome_build, cache_dir=cache_dir
    )
    logger.info(f"Loaded genome assets for {genome_build} from {Path(chr_bed_file).parent}")
    return GenomeAssets(
        genome_build=genome_build,
        chr_bed_file=Path(chr_bed_file),
        cytoband_file=Path(cytoband_file),
    )


def _read_bed(path: Path, columns: list[str]) -> pl.DataFrame:
    """Read the leading columns of a headerless BED file."""
    df = pl.read_csv(
        path,
        separator="\t",
        has_header=False,
        comment_prefix="#",
        infer_schema_length=None,
    )
    df = df.select(df.columns[: len(columns)])
    df.columns = columns
    return df


def read_chromosomes(assets: GenomeAssets) -> pl.DataFrame:
    """Chromosome names and lengths in file order."""
    df = _read_bed(assets.chr_bed_file, CHROMOSOME_COLUMNS)
    return df.with_columns(pl.col("chrom").cast(pl.Utf8))


def read_cytobands(assets: GenomeAssets) -> pl.DataFrame:
    """Cytoband intervals with a display color per band."""
    df = _read_bed(assets.cytoband_file, CYTOBAND_COLUMNS)
    return df.with_columns(
        pl.col("chrom").cast(pl.Utf8),
        pl.col("gie_stain")
        .cast(pl.Utf8)
        .replace_strict(GIE_STAIN_COLORS, default="#FFFFFF", return_dtype=pl.Utf8)
        .alias("color"),
    )
