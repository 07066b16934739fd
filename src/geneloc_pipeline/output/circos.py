"""Circular genome plot with gene labels drawn inside the ideogram ring."""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path

import matplotlib
import polars as pl

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from pycirclize import Circos  # noqa: E402

from geneloc_pipeline.annotation.models import CIRCOS_COLUMNS  # noqa: E402
from geneloc_pipeline.config.schema import PlotStyle  # noqa: E402
from geneloc_pipeline.output.genome import (  # noqa: E402
    GenomeAssets,
    load_genome_assets,
)

logger = logging.getLogger(__name__)

# pyplot figure registry and rcParams are process-wide
_CIRCOS_LOCK = threading.Lock()

CYTOBAND_TRACK = (88, 95)
LABEL_TRACK = (86, 87)


@contextmanager
def circular_plot_context(style: PlotStyle):
    """
    Provide a polar figure for one circular plot and release it afterwards.

    Holds a process-wide lock for the duration, applies the style through
    a scoped rc_context, and closes the figure on every exit path, so a
    failed render leaves no open figure and no modified rcParams behind.

    Yields:
        Tuple of (figure, polar axes)
    """
    with _CIRCOS_LOCK:
        with matplotlib.rc_context(style.rc_params()):
            fig = plt.figure(figsize=style.circos_figsize())
            try:
                ax = fig.add_subplot(projection="polar")
                yield fig, ax
            finally:
                plt.close(fig)


def build_circos(rows: pl.DataFrame, assets: GenomeAssets, style: PlotStyle) -> Circos:
    """Lay out the ideogram ring and the inward gene labels."""
    circos = Circos.initialize_from_bed(assets.chr_bed_file, space=2)
    circos.add_cytoband_tracks(CYTOBAND_TRACK, assets.cytoband_file)

    for sector in circos.sectors:
        sector.text(
            sector.name.removeprefix("chr"),
            r=CYTOBAND_TRACK[1] + 6,
            size=style.point_size * 0.8,
        )

    chrom_col, start_col, _, label_col = CIRCOS_COLUMNS
    sectors = {sector.name: sector for sector in circos.sectors}

    skipped = 0
    for (chrom,), group in rows.group_by([chrom_col], maintain_order=True):
        sector = sectors.get(chrom)
        if sector is None:
            skipped += group.height
            continue

        in_range = group.filter(pl.col(start_col) <= sector.end)
        skipped += group.height - in_range.height
        if in_range.height == 0:
            continue

        track = sector.add_track(LABEL_TRACK)
        track.xticks(
            in_range.get_column(start_col).to_list(),
            labels=in_range.get_column(label_col).to_list(),
            outer=False,
            tick_length=3,
            label_size=style.point_size * style.label_scale,
            label_orientation="vertical",
        )

    if skipped:
        logger.warning(f"Skipped {skipped} label(s) outside the {assets.genome_build} ideogram")

    return circos


def plot_circos(
    rows: pl.DataFrame,
    genome_build: str,
    output_path: Path,
    style: PlotStyle | None = None,
    assets: GenomeAssets | None = None,
) -> Path:
    """
    Render the circular genome plot to a PDF.

    Args:
        rows: CircosRow frame (chromosome, start, end, label)
        genome_build: UCSC build name whose ideogram is drawn
        output_path: Path where the PDF will be saved (overwritten)
        style: Canvas and font settings
        assets: Pre-loaded reference files; fetched for genome_build if None

    Returns:
        Path to the saved PDF file
    """
    style = style or PlotStyle()
    assets = assets or load_genome_assets(genome_build, style.genome_cache_dir)
    output_path = Path(output_path)

    with circular_plot_context(style) as (fig, ax):
        circos = build_circos(rows, assets, style)
        circos.plotfig(ax=ax)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(
            output_path,
            dpi=style.fallback_dpi,
            facecolor=style.background,
        )

    logger.info(f"Saved circular genome plot ({rows.height} labels) to {output_path}")
    return output_path
