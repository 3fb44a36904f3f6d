import numpy as np
from attr import attrs, attrib

from repgen.kmers import KmerSpec, InvalidInputError
from repgen.metric import shared_kmers, kmer_distance, jaccard


@attrs(frozen=True, eq=False, repr=False)
class KmerSignature:
	"""The set of distinct k-mers found in a single sequence.

	Signatures are compared by counting shared k-mers (:meth:`similarity`), the order of k-mers
	within the sequence plays no part. Comparison requires both signatures to have been calculated
	with the same :class:`repgen.kmers.KmerSpec`.

	Two signatures are equal if they have equal k-mer specs and source sequences.

	Attributes
	----------
	kmerspec
		K-mer spec used to calculate the signature.
	sequence
		Source sequence, as given.
	kmers
		Sorted array of distinct k-mers in the (upper-cased) sequence, dtype ``kmerspec.dtype``.
		Empty if the sequence is shorter than ``k``.
	"""
	kmerspec: KmerSpec = attrib()
	sequence: str = attrib()
	kmers: np.ndarray = attrib()

	@property
	def k(self) -> int:
		return self.kmerspec.k

	def __len__(self):
		return len(self.kmers)

	def __eq__(self, other):
		if isinstance(other, KmerSignature):
			return self.kmerspec == other.kmerspec and self.sequence == other.sequence
		return NotImplemented

	def __hash__(self):
		return hash((self.kmerspec, self.sequence))

	def __repr__(self):
		return f'<{type(self).__name__} k={self.k} len={len(self)}>'

	def _other_kmers(self, other) -> np.ndarray:
		"""Get k-mers of other signature, checking the specs are compatible."""
		sig = getattr(other, 'signature', other)
		if not isinstance(sig, KmerSignature):
			raise TypeError(f'Expected KmerSignature, got {type(other)}')
		if sig.kmerspec != self.kmerspec:
			raise InvalidInputError(f'Cannot compare signatures with different k-mer specs ({self.kmerspec} and {sig.kmerspec})')
		return sig.kmers

	def similarity(self, other) -> int:
		"""Number of distinct k-mers this signature shares with another.

		``other`` may be a ``KmerSignature`` or any object with a ``signature`` attribute holding one
		(e.g. :class:`repgen.db.RepresentativeEntry`).

		Raises
		------
		InvalidInputError
			If the signatures were calculated with different k-mer specs.
		"""
		return shared_kmers(self.kmers, self._other_kmers(other))

	def distance(self, other) -> float:
		"""Distance to another signature, see :mod:`repgen.metric`."""
		return kmer_distance(self.kmers, self._other_kmers(other))

	def jaccard(self, other) -> float:
		"""Jaccard index of this signature's k-mer set and another's."""
		return jaccard(self.kmers, self._other_kmers(other))
