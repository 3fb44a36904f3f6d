"""K-mer length configuration and basic k-mer functions."""

from typing import Dict, Any, Iterator

import numpy as np
from attr import attrs, attrib

from repgen.seq import SeqLike, seq_to_bytes, InvalidInputError
from repgen.util.json import Jsonable


#: Default protein k-mer length
DEFAULT_K = 8


@attrs(frozen=True, repr=False, init=False)
class KmerSpec(Jsonable):
	"""Specifications for k-mer signatures.

	Signatures are only comparable if they were calculated with equal specs. Instances are passed
	explicitly to everything that builds signatures, there is no process-wide k-mer length setting.

	Attributes
	----------
	k
		Length of k-mers.
	dtype
		Numpy dtype used to store k-mers in signature arrays (fixed-length ``bytes``).
	"""
	k: int = attrib()
	dtype: np.dtype = attrib(eq=False)

	def __init__(self, k: int):
		"""
		Parameters
		----------
		k
			Value of :attr:`k` attribute.

		Raises
		------
		InvalidInputError
			If ``k`` is not a positive integer.
		"""
		if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
			raise InvalidInputError(f'k must be an integer, got {k!r}')
		if k < 1:
			raise InvalidInputError('k must be positive')

		self.__attrs_init__(k=int(k), dtype=np.dtype(f'S{k}'))

	def __repr__(self):
		return f'{type(self).__name__}({self.k})'

	def __to_json__(self):
		return dict(k=self.k)

	@classmethod
	def __from_json__(cls, data: Dict[str, Any]) -> 'KmerSpec':
		return cls(data['k'])


DEFAULT_KMERSPEC = KmerSpec(DEFAULT_K)


def nwindows(length: int, k: int) -> int:
	"""Number of overlapping length-``k`` windows in a sequence of the given length."""
	return max(length - k + 1, 0)


def iter_kmers(seq: SeqLike, k: int) -> Iterator[bytes]:
	"""Iterate over all overlapping k-mers of a sequence, in order and including repeats.

	K-mers are upper-cased ``bytes``. Yields nothing if the sequence is shorter than ``k``.
	"""
	data = seq_to_bytes(seq).upper()
	for i in range(nwindows(len(data), k)):
		yield data[i:i + k]
