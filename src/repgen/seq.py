"""Generic code for working with sequence data.

Sequences are protein (or, less commonly, DNA) sequences of residue codes. Input arrives as
:class:`SequenceRecord` instances, which are parsed from FASTA files where the record ID is the
feature ID of a genome's signature protein and the description is the genome name.


.. class:: SeqLike

	Type alias for sequence types accepted for signature calculation (``str``, ``bytes``,
	``bytearray``, or :class:`Bio.Seq.Seq`).
"""

from typing import Union, Iterator

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord
from attr import attrs, attrib
from typing_extensions import TypeAlias

from repgen.util.io import FilePath, open_compressed, ClosingIterator


SEQ_TYPES = (str, bytes, bytearray, Seq)

SeqLike: TypeAlias = Union[SEQ_TYPES]

#: Ambiguity code for an unknown amino acid
PROTEIN_AMBIGUITY = 'X'
#: Ambiguity code for an unknown nucleotide
DNA_AMBIGUITY = 'N'


class InvalidInputError(ValueError):
	"""Raised for malformed sequences or k-mer parameters, or when comparing incompatible signatures."""


def seq_to_bytes(seq: SeqLike) -> Union[bytes, bytearray]:
	"""Convert generic sequence to byte string representation.

	Raises
	------
	InvalidInputError
		If a text sequence contains non-ASCII characters.
	"""
	if isinstance(seq, (bytes, bytearray)):
		return seq
	if isinstance(seq, (str, Seq)):
		try:
			return str(seq).encode('ascii')
		except UnicodeEncodeError as e:
			raise InvalidInputError(f'Sequence contains non-ASCII character {e.object[e.start]!r}') from e
	raise TypeError(f'Expected sequence type, got {type(seq)}')


def seq_to_str(seq: SeqLike) -> str:
	"""Convert generic sequence to ``str``."""
	if isinstance(seq, str):
		return seq
	if isinstance(seq, (bytes, bytearray)):
		try:
			return seq.decode('ascii')
		except UnicodeDecodeError as e:
			raise InvalidInputError('Sequence contains non-ASCII bytes') from e
	if isinstance(seq, Seq):
		return str(seq)
	raise TypeError(f'Expected sequence type, got {type(seq)}')


def count_ambiguous(seq: SeqLike, code: str = PROTEIN_AMBIGUITY) -> int:
	"""Count ambiguity characters in a sequence (case-insensitive)."""
	return seq_to_str(seq).upper().count(code.upper())


@attrs(frozen=True)
class SequenceRecord:
	"""A single input record.

	Attributes
	----------
	label
		Feature ID of the genome's signature protein, e.g. ``'fig|1005530.3.peg.2208'``.
	comment
		Free text following the label, the genome name.
	sequence
		Sequence of the signature protein.
	"""
	label: str = attrib()
	comment: str = attrib(default='')
	sequence: str = attrib(default='', converter=seq_to_str)

	@classmethod
	def from_seqrecord(cls, record: SeqRecord) -> 'SequenceRecord':
		"""Convert a Biopython ``SeqRecord`` parsed from FASTA.

		Biopython includes the record ID at the start of the description, this is stripped off.
		"""
		comment = record.description
		if comment == record.id:
			comment = ''
		elif comment.startswith(record.id + ' '):
			comment = comment[len(record.id) + 1:]
		return cls(record.id, comment.strip(), record.seq)


def parse_seqs(path: FilePath, format: str = 'fasta', compression: str = 'auto') -> ClosingIterator[SequenceRecord]:
	"""Open a sequence file and lazily parse its contents into :class:`.SequenceRecord` instances.

	This is a wrapper over :func:`Bio.SeqIO.parse` which transparently handles gzip-compressed
	files. The returned iterator closes the file when exhausted and can also be used as a context
	manager.

	Parameters
	----------
	path
		Path to the file.
	format
		File format as interpreted by :func:`Bio.SeqIO.parse`.
	compression
		See :func:`repgen.util.io.open_compressed`.
	"""
	fobj = open_compressed(path, 'rt', compression)

	try:
		records = map(SequenceRecord.from_seqrecord, SeqIO.parse(fobj, format))
		return ClosingIterator(records, fobj)

	except Exception:
		fobj.close()
		raise


def read_records(file, format: str = 'fasta') -> Iterator[SequenceRecord]:
	"""Parse records from an already open text file object, which is left open."""
	for record in SeqIO.parse(file, format):
		yield SequenceRecord.from_seqrecord(record)

