"""Plot command: fetch gene locations and render both genome plots."""

import logging
import sys
from pathlib import Path

import click

from geneloc_pipeline.annotation import supported_species
from geneloc_pipeline.config.loader import load_config_with_overrides
from geneloc_pipeline.errors import GenePlotError
from geneloc_pipeline.pipeline import GeneLocationPlotPipeline

logger = logging.getLogger(__name__)


@click.command('plot')
@click.argument('genes', nargs=-1, required=True)
@click.option(
    '--species',
    type=click.Choice(supported_species()),
    default='human',
    show_default=True,
    help='Species whose annotation dataset and genome build are used'
)
@click.option(
    '--output', '-o',
    'output_folder',
    type=click.Path(file_okay=False, path_type=Path),
    default=Path('Localization'),
    show_default=True,
    help='Output folder for CSV and PDF files'
)
@click.option(
    '--backend',
    type=click.Choice(['biomart', 'mygene']),
    default=None,
    help='Override the annotation backend from config'
)
@click.pass_context
def plot(ctx, genes, species, output_folder, backend):
    """Plot chromosome locations of GENES.

    Writes gene_locations.csv, karyoplot.pdf and circos_plot.pdf into the
    output folder, overwriting existing files.
    """
    config_path = ctx.obj['config_path']
    click.echo(click.style("=== Gene Location Plots ===", bold=True))
    click.echo()

    try:
        config = load_config_with_overrides(
            config_path, {"annotation.backend": backend}
        )
        click.echo(f"Species: {species}")
        click.echo(f"Genes: {', '.join(genes)}")
        click.echo(f"Annotation backend: {config.annotation.backend}")
        click.echo()

        click.echo(click.style("Fetching gene locations and rendering plots...", fg='blue'))
        outputs = GeneLocationPlotPipeline(config=config).run(
            genes, species=species, output_folder=output_folder
        )
    except GenePlotError as e:
        click.echo(click.style(f"Error: {e}", fg='red'), err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(click.style(f"Pipeline failed: {e}", fg='red'), err=True)
        logger.exception("Gene plot pipeline failed")
        sys.exit(1)

    click.echo(click.style(f"  Locations: {outputs.csv}", fg='green'))
    click.echo(click.style(f"  Karyotype: {outputs.karyoplot}", fg='green'))
    click.echo(click.style(f"  Circos:    {outputs.circos}", fg='green'))
    click.echo()
    click.echo(click.style("Gene plots generated successfully.", fg='green'))
