"""Representative genome entries and genome ID parsing."""

import re
from functools import total_ordering
from typing import Tuple, Dict, Any

from attr import attrs, attrib

from repgen.kmers import KmerSpec
from repgen.seq import SeqLike, SequenceRecord
from repgen.sigs import KmerSignature, calc_signature


#: Feature ID format, ``<prefix>|<taxon>.<version>.<type>.<number>``
FID_PATTERN = re.compile(r'^[^|]+\|(\d+\.\d+)\.\w+\.\d+$')

#: Genome ID format, ``<taxon>.<version>``
GENOME_ID_PATTERN = re.compile(r'^(\d+)\.(\d+)$')


class InvalidIdentifierError(ValueError):
	"""Raised when a feature ID cannot be parsed into a genome ID."""


def genome_of(fid: str) -> str:
	"""Extract the genome ID from a feature ID.

	>>> genome_of('fig|1005530.3.peg.2208')
	'1005530.3'

	Raises
	------
	InvalidIdentifierError
		If ``fid`` does not have the expected structure.
	"""
	match = FID_PATTERN.match(fid)
	if match is None:
		raise InvalidIdentifierError(f'Invalid feature ID {fid!r}')
	return match.group(1)


def genome_sort_key(genome_id: str) -> Tuple[str, int]:
	"""Get the key genome IDs are sorted by.

	IDs are ordered by the taxon part as text and then by version number, so
	``'1129793.4' < '1129793.30' < '129793.30'``.

	Raises
	------
	InvalidIdentifierError
		If ``genome_id`` is not of the form ``<taxon>.<version>``.
	"""
	match = GENOME_ID_PATTERN.match(genome_id)
	if match is None:
		raise InvalidIdentifierError(f'Invalid genome ID {genome_id!r}')
	return match.group(1), int(match.group(2))


@total_ordering
@attrs(eq=False, repr=False)
class RepresentativeEntry:
	"""A genome identified by the k-mer signature of one protein.

	Identity is determined by genome ID alone: two entries with the same genome ID are equal (and
	hash the same) regardless of their sequences. Entries are ordered by :func:`.genome_sort_key`.

	Attributes
	----------
	genome_id
		ID of the genome, parsed from ``fid``.
	fid
		Feature ID of the signature protein.
	name
		Genome name.
	signature
		K-mer signature of the protein sequence.
	extra
		Additional metadata filled in by client code (e.g. taxonomy). Not persisted.
	"""
	genome_id: str = attrib()
	fid: str = attrib()
	name: str = attrib()
	signature: KmerSignature = attrib()
	extra: Dict[str, Any] = attrib(factory=dict)

	@classmethod
	def parse(cls, fid: str, name: str, sequence: SeqLike, kmerspec: KmerSpec) -> 'RepresentativeEntry':
		"""Create from a feature ID, genome name and protein sequence.

		Raises
		------
		InvalidIdentifierError
			If the genome ID cannot be parsed from ``fid``.
		"""
		genome_id = genome_of(fid)
		return cls(genome_id, fid, name, calc_signature(kmerspec, sequence))

	@classmethod
	def from_record(cls, record: SequenceRecord, kmerspec: KmerSpec) -> 'RepresentativeEntry':
		"""Create from an input record (label is the feature ID, comment is the genome name)."""
		return cls.parse(record.label, record.comment, record.sequence, kmerspec)

	@property
	def sequence(self) -> str:
		return self.signature.sequence

	@property
	def kmerspec(self) -> KmerSpec:
		return self.signature.kmerspec

	@property
	def sort_key(self) -> Tuple[str, int]:
		return genome_sort_key(self.genome_id)

	def similarity(self, other) -> int:
		"""Number of k-mers shared with another entry or signature."""
		return self.signature.similarity(other)

	def distance(self, other) -> float:
		"""Distance to another entry or signature."""
		return self.signature.distance(other)

	def __eq__(self, other):
		if isinstance(other, RepresentativeEntry):
			return self.genome_id == other.genome_id
		return NotImplemented

	def __lt__(self, other):
		if isinstance(other, RepresentativeEntry):
			return self.sort_key < other.sort_key
		return NotImplemented

	def __hash__(self):
		return hash(self.genome_id)

	def __repr__(self):
		return f'<{type(self).__name__} {self.genome_id} {self.name!r}>'

	def __str__(self):
		return f'{self.genome_id} ({self.name})'
