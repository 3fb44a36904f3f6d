"""Calculate k-mer signatures from sequence data."""

from typing import Iterable, List

import numpy as np

from .base import KmerSignature
from repgen.kmers import KmerSpec
from repgen.seq import SeqLike, seq_to_bytes, seq_to_str
from repgen.util.progress import iter_progress


def kmer_array(kmerspec: KmerSpec, seq: SeqLike) -> np.ndarray:
	"""Get the sorted array of distinct k-mers in a sequence.

	The sequence is upper-cased first. Every window of length ``k`` is a k-mer, including those
	containing ambiguity codes.

	Parameters
	----------
	kmerspec
		K-mer spec, determines ``k`` and the output dtype.
	seq
		Sequence to calculate k-mers for.

	Returns
	-------
	numpy.ndarray
		Array of dtype ``kmerspec.dtype``, empty if the sequence is shorter than ``k``.
	"""
	data = bytes(seq_to_bytes(seq).upper())
	k = kmerspec.k

	if len(data) < k:
		return np.empty(0, dtype=kmerspec.dtype)

	codes = np.frombuffer(data, dtype=np.uint8)
	windows = np.lib.stride_tricks.sliding_window_view(codes, k)

	# Each row of k bytes reinterpreted as a single fixed-length bytes value
	kmers = np.ascontiguousarray(windows).view(kmerspec.dtype).ravel()
	return np.unique(kmers)


def calc_signature(kmerspec: KmerSpec, seq: SeqLike) -> KmerSignature:
	"""Calculate the k-mer signature of a sequence.

	Parameters
	----------
	kmerspec
		K-mer spec to use.
	seq
		Sequence to calculate signature of. Sequences shorter than ``k`` give an empty signature.
	"""
	return KmerSignature(kmerspec, seq_to_str(seq), kmer_array(kmerspec, seq))


def calc_signatures(kmerspec: KmerSpec, seqs: Iterable[SeqLike], progress=None) -> List[KmerSignature]:
	"""Calculate signatures for a collection of sequences.

	Parameters
	----------
	kmerspec
		K-mer spec to use.
	seqs
		Sequences to calculate signatures of.
	progress
		Display a progress meter. See :func:`repgen.util.progress.get_progress`.
	"""
	with iter_progress(seqs, progress, desc='Calculating signatures') as itr:
		return [calc_signature(kmerspec, seq) for seq in itr]
