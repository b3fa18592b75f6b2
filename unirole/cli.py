"""
Command-line interface for unirole - universal role discovery across genomes.
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import yaml
from loguru import logger

from .core.genomes import DEFAULT_GENBANK_SUFFIXES, DEFAULT_GTO_SUFFIXES, GenomeDirectory
from .core.report import build_report, count_failures, write_report
from .core.role_map import RoleMap
from .core.universal import UniversalRoleCounter

DEFAULT_THRESHOLD = 0.90


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', help='Log file path')
def main(verbose: bool, log_file: Optional[str]):
    """unirole - find the roles that occur singly in most genomes. Available commands: count, inspect"""

    # Configure logging
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")

    if log_file:
        logger.add(log_file, level="DEBUG")

    logger.info("unirole started")


def _load_config(config: Optional[str], config_dict: dict) -> dict:
    """Update the config dict from a YAML file, if one was given."""
    if config:
        if not Path(config).exists():
            click.echo(f"Error: Configuration file not found: {config}", err=True)
            sys.exit(1)
        with open(config, 'r') as f:
            file_config = yaml.safe_load(f) or {}
        config_dict.update(file_config)
    return config_dict


def _check_threshold(threshold: float):
    if not 0.0 <= threshold <= 1.0:
        click.echo(f"Error: Threshold must be between 0 and 1, got {threshold}", err=True)
        sys.exit(1)


@main.command()
@click.argument('genome_dirs', nargs=-1)
@click.option('--roles', '-R', 'role_file', required=True, help='Tab-delimited file of useful roles (ID and name)')
@click.option('--threshold', '-t', type=float, default=None,
              help=f'Minimum fraction of genomes in which a universal role must occur singly (default {DEFAULT_THRESHOLD})')
@click.option('--save', '-o', 'save_file', help='File to which the counts should be saved')
@click.option('--compare', 'compare_file', help='Saved count file to compare the results against')
@click.option('--output', help='Report file (default: standard output)')
@click.option('--config', help='Configuration file path')
def count(
    genome_dirs: Tuple[str, ...],
    role_file: str,
    threshold: Optional[float],
    save_file: Optional[str],
    compare_file: Optional[str],
    output: Optional[str],
    config: Optional[str]
):
    """Count role occurrences in genome directories and report the universal roles.

    Each GENOME_DIR holds GTO (.gto) or GenBank (.gb, .gbk, .gbff) files.
    The report lists the universal roles by ID and name, with the number of
    genomes where each occurs singly (good) and multiply (bad). With
    --compare, each universal role is also scored against the saved counts.
    """

    config_dict = {
        "threshold": DEFAULT_THRESHOLD,
        "gto_suffixes": DEFAULT_GTO_SUFFIXES,
        "genbank_suffixes": DEFAULT_GENBANK_SUFFIXES,
    }
    config_dict = _load_config(config, config_dict)
    if threshold is not None:
        config_dict["threshold"] = threshold
    try:
        threshold = float(config_dict["threshold"])
    except (TypeError, ValueError):
        click.echo(f"Error: Threshold must be a number, got {config_dict['threshold']!r}", err=True)
        sys.exit(1)
    _check_threshold(threshold)

    # Validate inputs before doing any work
    if not Path(role_file).exists():
        click.echo(f"Error: Role file not found: {role_file}", err=True)
        sys.exit(1)

    for genome_dir in genome_dirs:
        if not Path(genome_dir).is_dir():
            click.echo(f"Error: {genome_dir} is not a valid directory.", err=True)
            sys.exit(1)

    if compare_file and not Path(compare_file).exists():
        click.echo(f"Error: {compare_file} not found on disk.", err=True)
        sys.exit(1)

    try:
        role_map = RoleMap.load(role_file)
        counter = UniversalRoleCounter(role_map)

        for genome_dir in genome_dirs:
            logger.info(f"Processing {genome_dir}.")
            for genome in GenomeDirectory(genome_dir, config=config_dict):
                logger.debug(f"Parsing {genome}.")
                counter.count(genome)

        if counter.get_counted() == 0:
            logger.warning("No genomes were counted")

        if save_file:
            logger.info(f"Saving results to {save_file}.")
            counter.save(save_file)

        comparator = None
        if compare_file:
            logger.info(f"Loading comparison data from {compare_file}.")
            comparator = UniversalRoleCounter.load(compare_file)

        report = build_report(counter, threshold, comparator)
        write_report(report, output)

        logger.info(f"{len(report)} universal roles found.")
        if comparator is not None:
            logger.info(f"Failure count is {count_failures(report)}.")

    except Exception as e:
        logger.error(f"Universal role count failed: {e}")
        click.echo(f"Error: Universal role count failed - {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument('snapshot_file')
@click.option('--threshold', '-t', default=DEFAULT_THRESHOLD, help='Minimum fraction for a universal role')
def inspect(snapshot_file: str, threshold: float):
    """Summarize a saved count file."""

    _check_threshold(threshold)
    if not Path(snapshot_file).exists():
        click.echo(f"Error: Count file not found: {snapshot_file}", err=True)
        sys.exit(1)

    try:
        counter = UniversalRoleCounter.load(snapshot_file)
    except Exception as e:
        logger.error(f"Failed to load {snapshot_file}: {e}")
        click.echo(f"Error: Failed to load {snapshot_file} - {e}", err=True)
        sys.exit(1)

    universals = counter.universals(threshold) if counter.get_counted() else []
    click.echo(f"Genomes counted: {counter.get_counted()}")
    click.echo(f"Roles registered: {len(counter.role_map)}")
    click.echo(f"Universal roles at {threshold:.2f}: {len(universals)}")
    for role in universals:
        click.echo(f"  {role.id}\t{role.name}\t{counter.score(role):.3f}")


if __name__ == '__main__':
    main()
