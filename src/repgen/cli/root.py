"""Define the root CLI command group."""

import click

from repgen import __version__ as REPGEN_VERSION
from .common import CLIContext, filepath


# Top-level cli group
@click.group()
@click.option(
	'-d', '--db', 'db_path',
	type=filepath(exists=True),
	envvar='REPGEN_DB',
	help='Representative database snapshot file.',
)
@click.version_option(REPGEN_VERSION, prog_name='repgen')
@click.pass_context
def cli(ctx: click.Context, db_path):
	"""Select representative genomes by signature protein k-mers and classify genomes against them."""
	ctx.obj = CLIContext(db_path)
