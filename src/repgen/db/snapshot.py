"""Save and load representative databases as versioned JSON snapshot files.

A snapshot is a single JSON object with two keys. ``header`` holds the format tag, the layout
version and the database configuration. ``representatives`` is a list of one record per
representative, in genome ID order:

.. code-block:: json

	{
		"header": {
			"format": "repgen-snapshot",
			"version": 1,
			"threshold": 100,
			"kmer_length": 8,
			"label": "Phenylalanyl-tRNA synthetase alpha chain"
		},
		"representatives": [
			{
				"genome_id": "1005530.3",
				"feature_id": "fig|1005530.3.peg.2208",
				"name": "Escherichia coli EC4402",
				"sequence": "MSHLAELVASAKAAISQ..."
			}
		]
	}

Missing or unrecognized keys are an error. Signatures are not stored, they are recalculated on
load.
"""

import json
from pathlib import Path
from typing import List, Optional, Union, IO

from attr import attrs, attrib

from .entry import RepresentativeEntry, genome_of
from .repdb import RepresentativeDatabase
from repgen.util.io import FilePath, maybe_open
from repgen.util.json import to_json, from_json


#: Value of the ``format`` header field
SNAPSHOT_FORMAT = 'repgen-snapshot'

#: Current layout version. Files with this or any earlier version can be read.
SNAPSHOT_VERSION = 1


class CorruptSnapshotError(Exception):
	"""Raised when a snapshot file cannot be loaded.

	Attributes
	----------
	msg
	file
		Path of the file being loaded, if known.
	"""

	msg: str
	file: Optional[Path]

	def __init__(self, msg, file=None):
		super().__init__(msg)
		self.msg = msg
		self.file = file

	def __str__(self):
		if self.file is None:
			return self.msg
		return f'{self.file}: {self.msg}'


@attrs(frozen=True)
class SnapshotHeader:
	"""Header section of a snapshot file."""
	format: str = attrib()
	version: int = attrib()
	threshold: int = attrib()
	kmer_length: int = attrib()
	label: str = attrib()


@attrs(frozen=True)
class SnapshotRecord:
	"""A single representative in a snapshot file."""
	genome_id: str = attrib()
	feature_id: str = attrib()
	name: str = attrib()
	sequence: str = attrib()

	@classmethod
	def from_entry(cls, entry: RepresentativeEntry) -> 'SnapshotRecord':
		return cls(entry.genome_id, entry.fid, entry.name, entry.sequence)


@attrs(frozen=True)
class Snapshot:
	"""Contents of a snapshot file."""
	header: SnapshotHeader = attrib()
	representatives: List[SnapshotRecord] = attrib()

	@classmethod
	def from_db(cls, db: RepresentativeDatabase) -> 'Snapshot':
		header = SnapshotHeader(
			format=SNAPSHOT_FORMAT,
			version=SNAPSHOT_VERSION,
			threshold=db.threshold,
			kmer_length=db.k,
			label=db.label,
		)
		return cls(header, list(map(SnapshotRecord.from_entry, db.sorted())))


def save_snapshot(db: RepresentativeDatabase,
                  file_or_path: Union[FilePath, IO],
                  pretty: bool = False,
                  compression: str = 'none',
                  ):
	"""Write a database to a snapshot file.

	Parameters
	----------
	db
		Database to save.
	file_or_path
		Path to write to or a writable file object in text mode.
	pretty
		Indent the JSON output.
	compression
		Compression to apply when a path is given, ``'none'`` or ``'gzip'``.
	"""
	data = to_json(Snapshot.from_db(db))

	with maybe_open(file_or_path, 'wt', compression=compression) as f:
		json.dump(data, f, indent=4 if pretty else None)


def _file_name(file_or_path) -> Optional[str]:
	if isinstance(file_or_path, (str, Path)):
		return str(file_or_path)
	return getattr(file_or_path, 'name', None)


def _build(snapshot: Snapshot) -> RepresentativeDatabase:
	"""Create a database from parsed snapshot contents, raising ValueError if they are not valid."""
	header = snapshot.header

	if header.format != SNAPSHOT_FORMAT:
		raise ValueError(f'Unrecognized format {header.format!r}')
	if not 1 <= header.version <= SNAPSHOT_VERSION:
		raise ValueError(f'Unsupported snapshot version {header.version}')

	db = RepresentativeDatabase(header.threshold, header.kmer_length, header.label)

	for record in snapshot.representatives:
		if genome_of(record.feature_id) != record.genome_id:
			raise ValueError(f'Genome ID {record.genome_id} does not match feature ID {record.feature_id}')
		if record.genome_id in db:
			raise ValueError(f'Duplicate genome ID {record.genome_id}')

		entry = RepresentativeEntry.parse(record.feature_id, record.name, record.sequence, db.kmerspec)
		db._insert(entry)

	return db


def load_snapshot(file_or_path: Union[FilePath, IO]) -> RepresentativeDatabase:
	"""Load a database from a snapshot file.

	The database's k-mer spec is restored from the file, so signatures of new sequences calculated
	with :meth:`.RepresentativeDatabase.signature` are comparable to the loaded representatives.

	Parameters
	----------
	file_or_path
		Path to snapshot file (may be gzip-compressed) or readable file object in text mode.

	Raises
	------
	CorruptSnapshotError
		If the file is not valid JSON, does not match the expected layout, or describes an invalid
		database. The underlying error is attached as ``__cause__``.
	"""
	file = _file_name(file_or_path)

	with maybe_open(file_or_path, 'rt', compression='auto') as f:
		try:
			data = json.load(f)
		except ValueError as e:
			raise CorruptSnapshotError(f'Invalid JSON: {e}', file) from e

	try:
		snapshot = from_json(data, Snapshot, strict=True)
	except Exception as e:
		raise CorruptSnapshotError(f'Invalid snapshot layout: {e}', file) from e

	try:
		return _build(snapshot)
	except ValueError as e:
		raise CorruptSnapshotError(str(e), file) from e
