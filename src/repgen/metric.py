"""Similarity and distance between k-mer sets.

K-mer sets are passed around as sorted Numpy arrays of distinct k-mers (see
:class:`repgen.sigs.KmerSignature`). The primary score is the *similarity*, the number of distinct
k-mers two sets have in common. The distance is derived from it:

* 0 if both sets are identical (this includes two empty sets),
* ``1 - s / (2 * (s + 1))`` otherwise, where ``s`` is the similarity.

Distances between non-identical sets are confined to ``[0.5, 1]``. This makes the distance a true
metric (the triangle inequality holds trivially for three distinct sets) which can never rank one
pair as closer than another with more k-mers in common.
"""

from typing import Sequence, Optional, TYPE_CHECKING

import numpy as np

from repgen.util.progress import get_progress

if TYPE_CHECKING:
	from repgen.sigs import KmerSignature


#: Reserved similarity value denoting a sequence matched to itself, larger than any real count.
MAX_SIMILARITY = 2 ** 31 - 1

#: Numpy dtype for distance matrices
SCORE_DTYPE = np.dtype(np.float32)


def shared_kmers(kmers1: np.ndarray, kmers2: np.ndarray) -> int:
	"""Count the k-mers two k-mer sets have in common.

	Parameters
	----------
	kmers1
		Sorted array of distinct k-mers.
	kmers2
		Sorted array of distinct k-mers, same dtype as ``kmers1``.
	"""
	if len(kmers1) == 0 or len(kmers2) == 0:
		return 0
	return int(np.intersect1d(kmers1, kmers2, assume_unique=True).size)


def similarity_distance(similarity: int, identical: bool = False) -> float:
	"""Convert a similarity score to a distance.

	Parameters
	----------
	similarity
		Number of shared k-mers.
	identical
		Whether the two k-mer sets are identical, in which case the distance is zero regardless of
		``similarity``.
	"""
	if identical or similarity == MAX_SIMILARITY:
		return 0.0
	if similarity < 0:
		raise ValueError(f'Similarity must be non-negative, got {similarity}')
	return 1.0 - similarity / (2.0 * (similarity + 1))


def kmer_distance(kmers1: np.ndarray, kmers2: np.ndarray) -> float:
	"""Distance between two k-mer sets in sorted array format."""
	s = shared_kmers(kmers1, kmers2)
	return similarity_distance(s, identical=(s == len(kmers1) == len(kmers2)))


def jaccard(kmers1: np.ndarray, kmers2: np.ndarray) -> float:
	"""Jaccard index of two k-mer sets in sorted array format.

	One if both sets are empty.
	"""
	s = shared_kmers(kmers1, kmers2)
	union = len(kmers1) + len(kmers2) - s
	return 1. if union == 0 else s / union


def num_pairs(n: int) -> int:
	"""Get the number of distinct (unordered) pairs of ``n`` objects."""
	return n * (n - 1) // 2


def distance_pairwise(sigs: Sequence['KmerSignature'],
                      out: Optional[np.ndarray] = None,
                      progress=None,
                      ) -> np.ndarray:
	"""Calculate the full symmetric distance matrix for a list of signatures.

	Parameters
	----------
	sigs
		Signatures, all calculated with the same :class:`repgen.kmers.KmerSpec`.
	out
		Optional pre-allocated ``(n, n)`` array of dtype :data:`.SCORE_DTYPE`.
	progress
		Display a progress meter of the number of pairs calculated so far. See
		:func:`repgen.util.progress.get_progress`.
	"""
	n = len(sigs)

	if out is None:
		out = np.empty((n, n), SCORE_DTYPE)
	elif out.shape != (n, n):
		raise ValueError(f'Expected output array of shape {(n, n)}')
	elif out.dtype != SCORE_DTYPE:
		raise ValueError(f'Output array dtype must be {SCORE_DTYPE}, got {out.dtype}')

	np.fill_diagonal(out, 0)

	with get_progress(progress, num_pairs(n)) as meter:
		for i in range(n - 1):
			for j in range(i + 1, n):
				out[i, j] = out[j, i] = sigs[i].distance(sigs[j])
			meter.increment(n - i - 1)

	return out
