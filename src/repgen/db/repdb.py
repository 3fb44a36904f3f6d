"""The representative genome database and greedy clustering algorithm."""

import warnings
from bisect import bisect_left
from typing import Optional, Union, List, Iterable, Iterator, Dict, Tuple

import numpy as np
from attr import attrs, attrib

from .entry import RepresentativeEntry, InvalidIdentifierError
from repgen.kmers import KmerSpec, DEFAULT_KMERSPEC, InvalidInputError
from repgen.seq import SeqLike, SEQ_TYPES, SequenceRecord, PROTEIN_AMBIGUITY, count_ambiguous
from repgen.sigs import KmerSignature, calc_signature
from repgen.metric import MAX_SIMILARITY, similarity_distance, distance_pairwise
from repgen.util.io import FilePath
from repgen.util.progress import iter_progress


#: Default minimum number of shared k-mers for a genome to be represented
DEFAULT_THRESHOLD = 100

#: Default role of the protein used to compute genome signatures
DEFAULT_LABEL = 'Phenylalanyl-tRNA synthetase alpha chain'

#: Default number of ambiguity codes which causes a record to be deferred in bulk builds
DEFAULT_MAX_AMBIGUOUS = 20


class InvalidConfigError(ValueError):
	"""Raised when creating a database with an invalid threshold or k-mer length."""


@attrs(frozen=True)
class Representation:
	"""Result of comparing a genome against the representatives in a database.

	For a genome whose ID is already in the database, ``representative`` is the stored entry with
	that ID rather than the closest match, and ``is_represented`` reflects only their similarity. Such
	a genome is covered by its genome ID, not by its sequence.

	Attributes
	----------
	representative
		Closest representative found, or None if the database was empty.
	similarity
		Number of k-mers shared with ``representative``. :data:`repgen.metric.MAX_SIMILARITY` if both
		have identical k-mer sets, which includes a genome just added as a new representative.
	threshold
		Threshold of the database at the time of the comparison.
	distance
		Distance to ``representative`` (1 if there is none).
	"""
	representative: Optional[RepresentativeEntry] = attrib()
	similarity: int = attrib()
	threshold: int = attrib()
	distance: float = attrib()

	@classmethod
	def empty(cls, threshold: int) -> 'Representation':
		"""Result of a query against an empty database."""
		return cls(None, 0, threshold, 1.0)

	@classmethod
	def exact(cls, entry: RepresentativeEntry, threshold: int) -> 'Representation':
		"""Result for a genome with the same k-mer set as a representative (or which was made one)."""
		return cls(entry, MAX_SIMILARITY, threshold, 0.0)

	@property
	def is_represented(self) -> bool:
		return self.representative is not None and self.similarity >= self.threshold

	@property
	def is_exact(self) -> bool:
		"""Whether the genome matched the representative exactly (similarity is the sentinel value)."""
		return self.similarity == MAX_SIMILARITY

	@property
	def genome_id(self) -> Optional[str]:
		"""Genome ID of the representative, if any."""
		return None if self.representative is None else self.representative.genome_id


def _check_threshold(threshold) -> int:
	if isinstance(threshold, bool) or not isinstance(threshold, (int, np.integer)):
		raise InvalidConfigError(f'Threshold must be an integer, got {threshold!r}')
	if threshold < 1:
		raise InvalidConfigError(f'Threshold must be at least 1, got {threshold}')
	return int(threshold)


def _check_kmerspec(kmerspec) -> KmerSpec:
	if isinstance(kmerspec, KmerSpec):
		return kmerspec
	try:
		return KmerSpec(kmerspec)
	except InvalidInputError as e:
		raise InvalidConfigError(str(e)) from e


class RepresentativeDatabase:
	"""A set of representative genomes, no two of which are within the similarity threshold.

	Genomes are added with :meth:`check_genome`, which keeps a genome only if no existing
	representative shares at least :attr:`threshold` k-mers with it. The result depends on the order
	genomes are added in. Representatives are kept sorted by genome ID.

	Parameters
	----------
	threshold
		Minimum number of shared k-mers for a genome to be represented. Must be at least 1.
	kmerspec
		K-mer spec (or just the k-mer length) used for all signatures in the database.
	label
		Role of the protein used to compute genome signatures.

	Raises
	------
	InvalidConfigError
		If ``threshold`` or the k-mer length is less than 1.

	Attributes
	----------
	threshold
	kmerspec
	label
	"""
	threshold: int
	kmerspec: KmerSpec
	label: str

	def __init__(self,
	             threshold: int = DEFAULT_THRESHOLD,
	             kmerspec: Union[KmerSpec, int] = DEFAULT_KMERSPEC,
	             label: str = DEFAULT_LABEL,
	             ):
		self.threshold = _check_threshold(threshold)
		self.kmerspec = _check_kmerspec(kmerspec)
		self.label = label

		# Entries in sorted order, with their sort keys in a parallel list
		self._entries: List[RepresentativeEntry] = []
		self._keys: List[Tuple[str, int]] = []
		self._by_id: Dict[str, RepresentativeEntry] = {}

	@property
	def k(self) -> int:
		return self.kmerspec.k

	def __len__(self):
		return len(self._entries)

	def __iter__(self) -> Iterator[RepresentativeEntry]:
		return iter(self._entries)

	def __contains__(self, item):
		if isinstance(item, RepresentativeEntry):
			item = item.genome_id
		return item in self._by_id

	def __repr__(self):
		return f'<{type(self).__name__} threshold={self.threshold} k={self.k} size={len(self)}>'

	def sorted(self) -> List[RepresentativeEntry]:
		"""Get a list of all representatives ordered by genome ID."""
		return list(self._entries)

	def get(self, genome_id: str, default=None) -> Optional[RepresentativeEntry]:
		"""Get the representative with the given genome ID."""
		return self._by_id.get(genome_id, default)

	def signature(self, seq: SeqLike) -> KmerSignature:
		"""Calculate the signature of a sequence using the database's k-mer spec."""
		return calc_signature(self.kmerspec, seq)

	def make_entry(self, record: SequenceRecord) -> RepresentativeEntry:
		"""Create an entry from an input record using the database's k-mer spec.

		Raises
		------
		repgen.db.entry.InvalidIdentifierError
		repgen.kmers.InvalidInputError
			If the sequence contains non-ASCII characters.
		"""
		return RepresentativeEntry.from_record(record, self.kmerspec)

	def _as_signature(self, query) -> KmerSignature:
		if isinstance(query, SEQ_TYPES):
			return self.signature(query)

		sig = getattr(query, 'signature', query)
		if not isinstance(sig, KmerSignature):
			raise TypeError(f'Expected signature, entry or sequence, got {type(query)}')
		if sig.kmerspec != self.kmerspec:
			raise InvalidInputError(f'Signature k-mer spec {sig.kmerspec} does not match database ({self.kmerspec})')

		return sig

	def _match(self, sig: KmerSignature, entry: RepresentativeEntry, similarity: int) -> Representation:
		"""Representation of a signature by a single entry, given the number of shared k-mers."""
		if similarity == len(sig) == len(entry.signature):
			return Representation.exact(entry, self.threshold)
		return Representation(entry, similarity, self.threshold, similarity_distance(similarity))

	def _scan(self, sig: KmerSignature) -> Representation:
		"""Find the representative sharing the most k-mers with a signature.

		A representative with an identical k-mer set ends the search, otherwise ties go to the first
		representative in genome ID order.
		"""
		best = None
		best_sim = -1

		for entry in self._entries:
			sim = sig.similarity(entry.signature)
			if sim == len(sig) == len(entry.signature):
				return Representation.exact(entry, self.threshold)
			if sim > best_sim:
				best = entry
				best_sim = sim

		if best is None:
			return Representation.empty(self.threshold)
		return self._match(sig, best, best_sim)

	def _insert(self, entry: RepresentativeEntry):
		key = entry.sort_key
		i = bisect_left(self._keys, key)
		self._keys.insert(i, key)
		self._entries.insert(i, entry)
		self._by_id[entry.genome_id] = entry

	def check_genome(self, entry: RepresentativeEntry) -> Representation:
		"""Add a genome to the database if it is not represented by an existing representative.

		The genome is compared against every current representative. If the best match shares at
		least :attr:`threshold` k-mers with it, the database is unchanged and the match is returned.
		Otherwise the genome becomes a new representative and is returned as matching itself, with
		similarity equal to :data:`repgen.metric.MAX_SIMILARITY`. A representative with the same k-mer
		set as the genome always represents it, even if the set is smaller than the threshold.

		A genome whose ID is already present in the database is never added twice. A warning is issued
		and the stored entry with that ID is returned with its actual similarity to the new sequence,
		without scanning other representatives. The genome is covered by its ID in this case: the
		result may have ``is_represented`` False even though the database is left unchanged.

		Parameters
		----------
		entry
			Genome to check, with a signature calculated using the database's k-mer spec.

		Returns
		-------
		Representation

		Raises
		------
		repgen.kmers.InvalidInputError
			If the entry's k-mer spec differs from the database's.
		"""
		sig = self._as_signature(entry)

		existing = self._by_id.get(entry.genome_id)
		if existing is not None:
			warnings.warn(f'Genome {entry.genome_id} ({entry.fid}) is already in the database, not adding.')
			return self._match(sig, existing, sig.similarity(existing.signature))

		rep = self._scan(sig)
		if rep.is_represented:
			return rep

		self._insert(entry)
		return Representation.exact(entry, self.threshold)

	def add_genomes(self,
	                records: Iterable[Union[SequenceRecord, RepresentativeEntry]],
	                strict: bool = True,
	                progress=None,
	                ) -> List[Representation]:
		"""Call :meth:`check_genome` on a sequence of genomes, in order.

		Parameters
		----------
		records
			Input records (or already created entries).
		strict
			If False, records with invalid feature IDs or sequences are skipped with a warning.
			Otherwise the :exc:`repgen.db.entry.InvalidIdentifierError` or
			:exc:`repgen.kmers.InvalidInputError` is propagated (records processed before it remain in
			the database).
		progress
			Display a progress meter. See :func:`repgen.util.progress.get_progress`.

		Returns
		-------
		List[Representation]
			Result for each genome processed, not including skipped records.
		"""
		results = []

		with iter_progress(records, progress, desc='Checking genomes') as itr:
			for record in itr:
				if isinstance(record, RepresentativeEntry):
					entry = record
				else:
					try:
						entry = self.make_entry(record)
					except (InvalidIdentifierError, InvalidInputError) as e:
						if strict:
							raise
						warnings.warn(f'Skipping record {record.label!r}: {e}')
						continue

				results.append(self.check_genome(entry))

		return results

	def find_closest(self, query: Union[KmerSignature, RepresentativeEntry, SeqLike]) -> Representation:
		"""Find the representative closest to a genome, without modifying the database.

		Parameters
		----------
		query
			Signature, entry, or raw sequence (signature calculated with the database's k-mer spec).

		Returns
		-------
		Representation
			The representative sharing the most k-mers with the query (first in genome ID order in
			case of ties). If the database is empty ``representative`` is None. A representative with an
			identical k-mer set is reported with similarity :data:`repgen.metric.MAX_SIMILARITY`.
		"""
		return self._scan(self._as_signature(query))

	def check_similarity(self, query: Union[KmerSignature, RepresentativeEntry, SeqLike], threshold: int) -> bool:
		"""Check if the closest representative to a query shares at least ``threshold`` k-mers with it.

		The database's own threshold plays no part.
		"""
		rep = self.find_closest(query)
		return rep.representative is not None and rep.similarity >= threshold

	def distance_matrix(self, progress=None) -> np.ndarray:
		"""Calculate pairwise distances between all representatives, in genome ID order."""
		return distance_pairwise([e.signature for e in self._entries], progress=progress)

	def save(self, file_or_path, **kw):
		"""Write to a snapshot file, see :func:`repgen.db.snapshot.save_snapshot`."""
		from .snapshot import save_snapshot
		save_snapshot(self, file_or_path, **kw)

	@classmethod
	def load(cls, path: FilePath) -> 'RepresentativeDatabase':
		"""Load from a snapshot file, see :func:`repgen.db.snapshot.load_snapshot`."""
		from .snapshot import load_snapshot
		return load_snapshot(path)


def defer_ambiguous(records: Iterable[SequenceRecord],
                    max_ambiguous: Optional[int] = DEFAULT_MAX_AMBIGUOUS,
                    code: str = PROTEIN_AMBIGUITY,
                    ) -> List[SequenceRecord]:
	"""Reorder records so those with many ambiguity codes come last.

	Poorly sequenced proteins make poor representatives, moving them to the end of the input gives
	every other genome a chance to represent them first. Relative order is otherwise preserved.

	Parameters
	----------
	records
	max_ambiguous
		Records with at least this many ambiguity codes are deferred. None to keep input order.
	code
		Ambiguity character, ``X`` for proteins or ``N`` for DNA.
	"""
	if max_ambiguous is None:
		return list(records)

	good = []
	deferred = []
	for record in records:
		if count_ambiguous(record.sequence, code) >= max_ambiguous:
			deferred.append(record)
		else:
			good.append(record)

	return good + deferred


def build_database(records: Iterable[SequenceRecord],
                   threshold: int = DEFAULT_THRESHOLD,
                   kmerspec: Union[KmerSpec, int] = DEFAULT_KMERSPEC,
                   label: str = DEFAULT_LABEL,
                   max_ambiguous: Optional[int] = DEFAULT_MAX_AMBIGUOUS,
                   ambiguity_char: str = PROTEIN_AMBIGUITY,
                   strict: bool = True,
                   progress=None,
                   ) -> RepresentativeDatabase:
	"""Create a new database from a collection of input records.

	Parameters
	----------
	records
		Input records, in the order they should be considered.
	threshold
	kmerspec
	label
		Passed to :class:`.RepresentativeDatabase`.
	max_ambiguous
	ambiguity_char
		Records with at least ``max_ambiguous`` occurrences of ``ambiguity_char`` in their sequence
		are considered after all others, see :func:`.defer_ambiguous`.
	strict
	progress
		Passed to :meth:`.RepresentativeDatabase.add_genomes`.
	"""
	db = RepresentativeDatabase(threshold, kmerspec, label)
	db.add_genomes(defer_ambiguous(records, max_ambiguous, ambiguity_char), strict=strict, progress=progress)
	return db
