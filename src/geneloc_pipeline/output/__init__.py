"""Output generation: location CSV, karyotype plot and circular genome plot."""

from geneloc_pipeline.output.circos import (
    build_circos,
    circular_plot_context,
    plot_circos,
)
from geneloc_pipeline.output.genome import (
    GenomeAssets,
    load_genome_assets,
    read_chromosomes,
    read_cytobands,
)
from geneloc_pipeline.output.karyotype import draw_karyotype, plot_karyotype
from geneloc_pipeline.output.writers import write_location_table

CSV_FILENAME = "gene_locations.csv"
KARYOPLOT_FILENAME = "karyoplot.pdf"
CIRCOS_FILENAME = "circos_plot.pdf"

__all__ = [
    "CSV_FILENAME",
    "KARYOPLOT_FILENAME",
    "CIRCOS_FILENAME",
    "build_circos",
    "circular_plot_context",
    "plot_circos",
    "GenomeAssets",
    "load_genome_assets",
    "read_chromosomes",
    "read_cytobands",
    "draw_karyotype",
    "plot_karyotype",
    "write_location_table",
]
