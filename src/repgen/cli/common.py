from typing import Optional, List
from pathlib import Path

import click

from repgen.db import RepresentativeDatabase, CorruptSnapshotError
from repgen.seq import SequenceRecord, PROTEIN_AMBIGUITY, DNA_AMBIGUITY, parse_seqs, read_records
from repgen.util.io import FilePath
from repgen.util.progress import ProgressConfig, progress_config


class CLIContext:
	"""Click context object for repgen CLI.

	Loads the database lazily the first time it is requested.

	Attributes
	----------
	db_path
		Path to database snapshot file, specified in root command group.
	"""
	db_path: Optional[Path]

	def __init__(self, db_path):
		self.db_path = None if db_path is None else Path(db_path)
		self._db = None

	def require_database(self):
		"""Raise an exception if no database path was given."""
		if self.db_path is None:
			raise click.ClickException('Must supply path to database file (-d option or REPGEN_DB environment variable).')

	def get_database(self) -> RepresentativeDatabase:
		"""Get the database, loading it if needed."""
		self.require_database()

		if self._db is None:
			try:
				self._db = RepresentativeDatabase.load(self.db_path)
			except CorruptSnapshotError as e:
				raise click.ClickException(f'Failed to load database: {e}') from e

		return self._db


################################################################################
# Shared CLI parameters
################################################################################

def filepath(**kw) -> click.Path:
	"""Click Path argument type accepting files only."""
	kw.setdefault('path_type', Path)
	return click.Path(file_okay=True, dir_okay=False, **kw)


def progress_arg():
	"""Click argument to show progress meter."""
	return click.option('--progress/--no-progress', default=True, help="Show/don't show progress meter.")


def strict_arg():
	"""Click argument to fail on invalid feature IDs instead of skipping them."""
	return click.option(
		'--strict/--no-strict',
		default=False,
		help='Fail on records with invalid feature IDs instead of skipping them.',
	)


def ambiguity_args(f):
	"""Decorator adding options controlling deferral of ambiguous sequences."""
	f = click.option(
		'--dna',
		is_flag=True,
		help='Input sequences are DNA, count N instead of X as the ambiguity code.',
	)(f)
	f = click.option(
		'-x', '--max-ambiguous',
		type=click.IntRange(min=1),
		default=20,
		show_default=True,
		help='Sequences with at least this many ambiguity codes are considered last.',
	)(f)
	return f


def ambiguity_char(dna: bool) -> str:
	return DNA_AMBIGUITY if dna else PROTEIN_AMBIGUITY


def progress_conf(progress: bool) -> Optional[ProgressConfig]:
	"""Progress bar configuration for commands, bars are written to stderr to keep stdout clean."""
	if not progress:
		return None
	return progress_config('click', file=click.get_text_stream('stderr'))


################################################################################
# Input and output
################################################################################

def read_fasta(path: Optional[FilePath]) -> List[SequenceRecord]:
	"""Read all records from a (possibly gzipped) FASTA file, or from stdin if ``path`` is None."""
	try:
		if path is None:
			return list(read_records(click.get_text_stream('stdin')))
		with parse_seqs(path) as records:
			return list(records)

	except ValueError as e:
		raise click.ClickException(f'Error parsing sequence file: {e}') from e


def snapshot_compression(path: FilePath) -> str:
	"""Compression to use when writing a snapshot, determined by file extension."""
	return 'gzip' if str(path).endswith('.gz') else 'none'
