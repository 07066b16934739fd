"""Gene location plot pipeline.

Runs the four stages in order:
1. Resolve the species profile
2. Query gene coordinates from the annotation service
3. Save the raw location table as CSV
4. Prefix chromosome names and render the karyotype and circular plots

Validation failures (unknown species, empty gene list, no locations found)
abort before anything is written. Later failures propagate unchanged and
leave earlier outputs in place.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional

import structlog

from geneloc_pipeline.annotation import (
    AnnotationLookup,
    Species,
    add_chr_prefix,
    build_lookup,
    fetch_gene_locations,
    normalize_gene_symbols,
    resolve_species,
    to_circos_rows,
)
from geneloc_pipeline.config.schema import PipelineConfig
from geneloc_pipeline.output import (
    CIRCOS_FILENAME,
    CSV_FILENAME,
    KARYOPLOT_FILENAME,
    GenomeAssets,
    load_genome_assets,
    plot_circos,
    plot_karyotype,
    write_location_table,
)
from geneloc_pipeline.persistence import ProvenanceTracker

logger = structlog.get_logger(__name__)


@dataclass
class PipelineOutputs:
    """Files written by one pipeline run."""
    csv: Path
    karyoplot: Path
    circos: Path
    provenance: Path


class GeneLocationPlotPipeline:
    """Fetch gene coordinates and render karyotype and circular genome plots."""

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        lookup: Optional[AnnotationLookup] = None,
        assets_loader: Optional[Callable[[str, Optional[Path]], GenomeAssets]] = None,
    ):
        """
        Args:
            config: Pipeline configuration (defaults if None)
            lookup: Annotation backend; built from config.annotation if None
            assets_loader: Callable returning GenomeAssets for a genome build
        """
        self.config = config or PipelineConfig.default()
        self._lookup = lookup
        self.assets_loader = assets_loader or load_genome_assets

    @property
    def lookup(self) -> AnnotationLookup:
        if self._lookup is None:
            self._lookup = build_lookup(self.config)
        return self._lookup

    def run(
        self,
        genes: Iterable[str],
        species: Species | str = "human",
        output_folder: Path | str = "Localization",
    ) -> PipelineOutputs:
        """
        Run all stages for one gene list.

        Args:
            genes: Gene symbols (official nomenclature for the species)
            species: "human" or "mouse"
            output_folder: Directory receiving the output files (created if missing)

        Returns:
            PipelineOutputs with the paths of every written file

        Raises:
            UnsupportedSpeciesError: Species has no profile
            EmptyGeneListError: No gene symbols were given
            NoLocationsFoundError: None of the genes could be located
        """
        provenance = ProvenanceTracker.from_config(self.config)

        profile = resolve_species(species)
        logger.info(
            "species_resolved",
            species=profile.species.value,
            dataset=profile.dataset_id,
            genome_build=profile.genome_build,
        )
        provenance.record_step("resolve_species", {
            "species": profile.species.value,
            "dataset_id": profile.dataset_id,
            "genome_build": profile.genome_build,
            "symbol_attribute": profile.symbol_attribute,
        })

        symbols = normalize_gene_symbols(genes)

        locations = fetch_gene_locations(symbols, profile, self.lookup)
        provenance.record_step("fetch_locations", {
            "genes_requested": len(symbols),
            "rows": locations.height,
        })

        output_dir = Path(output_folder)
        output_dir.mkdir(parents=True, exist_ok=True)
        logger.info("output_folder_ready", path=str(output_dir))

        csv_path = write_location_table(locations, output_dir / CSV_FILENAME)
        provenance.record_step("write_table", {"path": str(csv_path)})

        annotated = add_chr_prefix(locations)
        style = self.config.plots
        assets = self.assets_loader(profile.genome_build, style.genome_cache_dir)

        logger.info("plot_karyotype_start", genome_build=profile.genome_build)
        karyoplot_path = plot_karyotype(
            annotated,
            profile.genome_build,
            profile.symbol_attribute,
            output_dir / KARYOPLOT_FILENAME,
            style=style,
            assets=assets,
        )
        provenance.record_step("plot_karyotype", {"path": str(karyoplot_path)})

        logger.info("plot_circos_start", genome_build=profile.genome_build)
        circos_rows = to_circos_rows(annotated, profile.symbol_attribute)
        circos_path = plot_circos(
            circos_rows,
            profile.genome_build,
            output_dir / CIRCOS_FILENAME,
            style=style,
            assets=assets,
        )
        provenance.record_step("plot_circos", {"path": str(circos_path)})

        provenance_path = provenance.save_sidecar(csv_path)

        logger.info("gene_plots_complete", output_folder=str(output_dir))
        return PipelineOutputs(
            csv=csv_path,
            karyoplot=karyoplot_path,
            circos=circos_path,
            provenance=provenance_path,
        )


def generate_gene_plots(
    genes: Iterable[str],
    species: Species | str = "human",
    output_folder: Path | str = "Localization",
    *,
    config: Optional[PipelineConfig] = None,
    lookup: Optional[AnnotationLookup] = None,
) -> None:
    """
    Write gene_locations.csv, karyoplot.pdf and circos_plot.pdf for a gene list.

    Example:
        >>> generate_gene_plots(["BRCA1", "TP53", "MYC"], species="human")
    """
    GeneLocationPlotPipeline(config=config, lookup=lookup).run(
        genes, species=species, output_folder=output_folder
    )
