from typing import TextIO, Optional
from pathlib import Path

import click

from . import common
from .root import cli
from repgen.db import InvalidIdentifierError
from repgen.kmers import InvalidInputError
from repgen.query import query, representation_stats
from repgen.results import TSVResultsExporter, JSONResultsExporter, write_rep_stats


def get_exporter(outfmt: str):
	if outfmt == 'tsv':
		return TSVResultsExporter()

	if outfmt == 'json':
		return JSONResultsExporter()

	assert 0


@cli.command(name='query')
@click.argument('fasta', type=common.filepath(exists=True), required=False)
@click.option(
	'-o', '--output',
	type=click.File(mode='w'),
	default='-',
	help='File path to write to. If omitted will write to stdout.',
)
@click.option(
	'-f', '--outfmt',
	type=click.Choice(['tsv', 'json']),
	default='tsv',
	help='Format to output results in.',
)
@click.option(
	'--stats',
	type=common.filepath(writable=True),
	help='Also write the number of query genomes represented by each representative to this file.',
)
@common.strict_arg()
@common.progress_arg()
@click.pass_obj
def query_cmd(ctxobj: common.CLIContext,
              fasta: Optional[Path],
              output: TextIO,
              outfmt: str,
              stats: Optional[Path],
              strict: bool,
              progress: bool,
              ):
	"""Find the closest representative of each genome in FASTA (or stdin).

	The database is not modified.
	"""
	db = ctxobj.get_database()
	records = common.read_fasta(fasta)

	try:
		results = query(db, records, strict=strict, progress=common.progress_conf(progress))
	except (InvalidIdentifierError, InvalidInputError) as e:
		raise click.ClickException(str(e)) from e

	get_exporter(outfmt).export(output, results)

	if stats is not None:
		write_rep_stats(stats, representation_stats(results, db))
