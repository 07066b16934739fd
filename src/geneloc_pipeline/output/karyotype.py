"""Linear karyotype plot with one labeled marker per gene locus."""

import logging
from pathlib import Path

import matplotlib
import polars as pl

# Use Agg backend (non-interactive, safe for headless/CLI use)
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from geneloc_pipeline.config.schema import PlotStyle  # noqa: E402
from geneloc_pipeline.output.genome import (  # noqa: E402
    GenomeAssets,
    load_genome_assets,
    read_chromosomes,
    read_cytobands,
)

logger = logging.getLogger(__name__)

# Vertical layout of one chromosome row (row height = 1.0)
IDEOGRAM_HEIGHT = 0.22
DATA_PANEL_HEIGHT = 0.7


def draw_karyotype(
    ax,
    df: pl.DataFrame,
    symbol_attribute: str,
    assets: GenomeAssets,
    style: PlotStyle,
) -> pl.DataFrame:
    """
    Draw ideograms and gene markers onto an existing axes.

    Args:
        ax: Target matplotlib axes
        df: AnnotatedTable ("chr"-prefixed chromosome_name, start_position,
            symbol column)
        symbol_attribute: Column holding the marker labels
        assets: Reference files for the genome build
        style: Marker height and font settings

    Returns:
        The rows that were drawn as markers (loci on chromosomes missing
        from the ideogram are dropped)
    """
    chromosomes = read_chromosomes(assets)
    cytobands = read_cytobands(assets)

    names = chromosomes.get_column("chrom").to_list()
    lengths = dict(zip(names, chromosomes.get_column("end").to_list()))
    max_length = max(lengths.values())
    n_rows = len(names)
    row_base = {name: n_rows - 1 - i for i, name in enumerate(names)}

    markers = df.filter(pl.col("chromosome_name").is_in(names))
    skipped = df.height - markers.height
    if skipped:
        logger.warning(
            f"Skipping {skipped} locus/loci on chromosomes not in {assets.genome_build}"
        )

    # Ideograms
    for (chrom,), bands in cytobands.group_by(["chrom"], maintain_order=True):
        if chrom not in row_base:
            continue
        ax.broken_barh(
            [(s, e - s) for s, e in zip(bands["start"], bands["end"])],
            (row_base[chrom], IDEOGRAM_HEIGHT),
            facecolors=bands.get_column("color").to_list(),
            edgecolor="none",
        )

    for name in names:
        y = row_base[name]
        ax.add_patch(plt.Rectangle(
            (0, y), lengths[name], IDEOGRAM_HEIGHT,
            fill=False, edgecolor="black", linewidth=0.3,
        ))
        ax.text(
            -max_length * 0.01, y + IDEOGRAM_HEIGHT / 2, name,
            ha="right", va="center",
        )

    # Markers
    stem = style.marker_r1 * DATA_PANEL_HEIGHT
    for row in markers.iter_rows(named=True):
        x = row["start_position"]
        y0 = row_base[row["chromosome_name"]] + IDEOGRAM_HEIGHT
        ax.plot([x, x], [y0, y0 + stem], color="black", linewidth=0.4)
        ax.text(
            x, y0 + stem, row[symbol_attribute],
            ha="center", va="bottom", rotation=0,
            fontsize=style.point_size * style.label_scale,
        )

    ax.set_xlim(-max_length * 0.08, max_length * 1.02)
    ax.set_ylim(-0.1, n_rows)
    ax.axis("off")

    return markers


def plot_karyotype(
    df: pl.DataFrame,
    genome_build: str,
    symbol_attribute: str,
    output_path: Path,
    style: PlotStyle | None = None,
    assets: GenomeAssets | None = None,
) -> Path:
    """
    Draw every chromosome of a genome build and mark gene start positions.

    Args:
        df: AnnotatedTable ("chr"-prefixed chromosome_name, start_position,
            symbol column)
        genome_build: UCSC build name whose ideogram is drawn
        symbol_attribute: Column holding the marker labels
        output_path: Path where the PDF will be saved (overwritten)
        style: Canvas and font settings
        assets: Pre-loaded reference files; fetched for genome_build if None

    Returns:
        Path to the saved PDF file

    Notes:
        - Chromosomes are stacked top to bottom in reference file order
        - Each marker is a stem rising style.marker_r1 of the data panel,
          labeled horizontally; labels are not repositioned to avoid overlap
    """
    style = style or PlotStyle()
    assets = assets or load_genome_assets(genome_build, style.genome_cache_dir)
    output_path = Path(output_path)

    with matplotlib.rc_context(style.rc_params()):
        fig, ax = plt.subplots(figsize=style.karyoplot_figsize())
        try:
            markers = draw_karyotype(ax, df, symbol_attribute, assets, style)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(
                output_path,
                dpi=style.fallback_dpi,
                facecolor=style.background,
            )
        finally:
            # Close figure to prevent memory leak
            plt.close(fig)

    logger.info(f"Saved karyotype plot ({markers.height} markers) to {output_path}")
    return output_path
