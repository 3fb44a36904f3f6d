"""Commands which create or modify a database."""

from typing import Optional
from pathlib import Path

import click

from . import common
from .root import cli
from repgen.db import InvalidIdentifierError, InvalidConfigError, build_database, \
	defer_ambiguous, DEFAULT_THRESHOLD, DEFAULT_LABEL
from repgen.kmers import DEFAULT_K, InvalidInputError


@cli.command(name='create', no_args_is_help=True)
@click.argument('fasta', type=common.filepath(exists=True))
@click.argument('output', type=common.filepath(writable=True))
@click.option(
	'-m', '--threshold',
	type=click.IntRange(min=1),
	default=DEFAULT_THRESHOLD,
	show_default=True,
	help='Minimum number of shared k-mers for a genome to be represented.',
)
@click.option(
	'-K', '--kmer', 'k',
	type=click.IntRange(min=1),
	default=DEFAULT_K,
	show_default=True,
	help='K-mer length.',
)
@click.option(
	'-p', '--label',
	default=DEFAULT_LABEL,
	help='Role of the signature protein (stored in the database).',
)
@common.ambiguity_args
@common.strict_arg()
@common.progress_arg()
def create_cmd(fasta: Path,
               output: Path,
               threshold: int,
               k: int,
               label: str,
               max_ambiguous: int,
               dna: bool,
               strict: bool,
               progress: bool,
               ):
	"""Create a representative database from signature proteins in FASTA.

	Each record ID must be the protein's feature ID, the description is taken as the genome name.
	Genomes are considered in input order. The database is written to OUTPUT.
	"""
	records = common.read_fasta(fasta)

	try:
		db = build_database(
			records,
			threshold=threshold,
			kmerspec=k,
			label=label,
			max_ambiguous=max_ambiguous,
			ambiguity_char=common.ambiguity_char(dna),
			strict=strict,
			progress=common.progress_conf(progress),
		)
	except (InvalidIdentifierError, InvalidInputError, InvalidConfigError) as e:
		raise click.ClickException(str(e)) from e

	db.save(output, compression=common.snapshot_compression(output))
	click.echo(f'Created database with {len(db)} representatives from {len(records)} input genomes.', err=True)


@cli.command(name='update', no_args_is_help=True)
@click.argument('fasta', type=common.filepath(exists=True))
@click.option(
	'-o', '--output',
	type=common.filepath(writable=True),
	help='File to write updated database to. Defaults to overwriting the input database.',
)
@common.ambiguity_args
@common.strict_arg()
@common.progress_arg()
@click.pass_obj
def update_cmd(ctxobj: common.CLIContext,
               fasta: Path,
               output: Optional[Path],
               max_ambiguous: int,
               dna: bool,
               strict: bool,
               progress: bool,
               ):
	"""Add the genomes in FASTA to an existing database.

	This continues construction of the database exactly as if the new records had been part of the
	original input, following all previous ones.
	"""
	db = ctxobj.get_database()
	records = common.read_fasta(fasta)
	ordered = defer_ambiguous(records, max_ambiguous, common.ambiguity_char(dna))
	n_before = len(db)

	try:
		db.add_genomes(ordered, strict=strict, progress=common.progress_conf(progress))
	except (InvalidIdentifierError, InvalidInputError) as e:
		raise click.ClickException(str(e)) from e

	if output is None:
		output = ctxobj.db_path

	db.save(output, compression=common.snapshot_compression(output))
	click.echo(f'Added {len(db) - n_before} new representatives from {len(records)} input genomes.', err=True)
