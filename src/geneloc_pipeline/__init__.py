"""geneloc-pipeline: gene coordinate lookup with karyotype and circular genome plots."""

__version__ = "0.1.0"

from geneloc_pipeline.pipeline import (  # noqa: E402
    GeneLocationPlotPipeline,
    PipelineOutputs,
    generate_gene_plots,
)

__all__ = [
    "__version__",
    "GeneLocationPlotPipeline",
    "PipelineOutputs",
    "generate_gene_plots",
]
