"""Main CLI entry point for geneloc.

Provides command group with global options and subcommands for plotting
gene locations.
"""

import logging
from pathlib import Path

import click

from geneloc_pipeline import __version__
from geneloc_pipeline.annotation import SPECIES_PROFILES
from geneloc_pipeline.api_clients import CachedAPIClient
from geneloc_pipeline.cli.plot_cmd import plot
from geneloc_pipeline.config.loader import load_config_with_overrides


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@click.group()
@click.version_option(__version__, prog_name="geneloc")
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help='Path to pipeline configuration YAML file (defaults if omitted)'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """geneloc: look up gene coordinates and plot them on karyotype and circular genome maps."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
def species():
    """List supported species and their annotation profiles."""
    for profile in SPECIES_PROFILES.values():
        click.echo(click.style(profile.species.value, bold=True))
        click.echo(f"  Dataset:          {profile.dataset_id}")
        click.echo(f"  Genome Build:     {profile.genome_build}")
        click.echo(f"  Symbol Attribute: {profile.symbol_attribute}")


@cli.command()
@click.pass_context
def info(ctx):
    """Display pipeline information and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"geneloc v{__version__}")
    click.echo(f"Config: {config_path or '(defaults)'}")
    click.echo()

    try:
        config = load_config_with_overrides(config_path, {})

        click.echo(f"Config Hash: {config.config_hash()[:16]}...")
        click.echo()

        click.echo(click.style("Annotation:", bold=True))
        click.echo(f"  Backend:      {config.annotation.backend}")
        click.echo(f"  BioMart Host: {config.annotation.biomart_host}")
        click.echo()

        click.echo(click.style("API Configuration:", bold=True))
        click.echo(f"  Rate Limit: {config.api.rate_limit_per_second} req/s")
        click.echo(f"  Max Retries: {config.api.max_retries}")
        click.echo(f"  Cache TTL: {config.api.cache_ttl_seconds}s")
        click.echo(f"  Timeout: {config.api.timeout_seconds}s")
        stats = CachedAPIClient.from_config(config).cache_stats()
        click.echo(f"  Cache: {stats['cache_path']} (exists: {stats['cache_exists']})")
        click.echo()

        click.echo(click.style("Plots:", bold=True))
        plots = config.plots
        click.echo(f"  Karyotype: {plots.karyoplot_width_cm} x {plots.karyoplot_height_cm} cm")
        click.echo(f"  Circos:    {plots.circos_width_cm} x {plots.circos_height_cm} cm")
        click.echo(f"  Font:      {plots.font_family} {plots.point_size}pt")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


# Register commands
cli.add_command(plot)


if __name__ == '__main__':
    cli()
