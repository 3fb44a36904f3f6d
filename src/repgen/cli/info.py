"""Commands which report on the contents of a database."""

from typing import TextIO

import click

from . import common
from .root import cli
from repgen.cluster import write_distance_matrix
from repgen.results import write_rep_list


@cli.command(name='list')
@click.option(
	'-o', '--output',
	type=click.File(mode='w'),
	default='-',
	help='File path to write to. If omitted will write to stdout.',
)
@click.pass_obj
def list_cmd(ctxobj: common.CLIContext, output: TextIO):
	"""List the genome ID and name of all representatives."""
	db = ctxobj.get_database()
	write_rep_list(output, db)


@cli.command(name='dist')
@click.option(
	'-o', '--output',
	type=click.File(mode='w'),
	default='-',
	help='File path to write to. If omitted will write to stdout.',
)
@common.progress_arg()
@click.pass_obj
def dist_cmd(ctxobj: common.CLIContext, output: TextIO, progress: bool):
	"""Calculate distances between all pairs of representatives."""
	db = ctxobj.get_database()
	dmat = db.distance_matrix(progress=common.progress_conf(progress))
	write_distance_matrix(output, dmat, [e.genome_id for e in db])
