"""Test repgen.sigs."""

import numpy as np
import pytest

from repgen.kmers import KmerSpec, InvalidInputError
from repgen.sigs import KmerSignature, calc_signature, calc_signatures, kmer_array
from repgen.util.progress import TestProgressMeter
from .common import ECOLI_PROT, GLACIECOLA_PROT, PROT1, PROT2, PROT3


K10 = KmerSpec(10)


class TestKmerArray:

	def test_basic(self):
		arr = kmer_array(KmerSpec(3), 'BCABCA')
		assert arr.dtype == np.dtype('S3')
		assert list(arr) == [b'ABC', b'BCA', b'CAB']

	def test_sorted_unique(self):
		arr = kmer_array(K10, ECOLI_PROT)
		assert np.all(arr[:-1] < arr[1:])

	def test_upper(self):
		assert np.array_equal(kmer_array(KmerSpec(4), 'mshla'), kmer_array(KmerSpec(4), 'MSHLA'))

	def test_short(self):
		arr = kmer_array(K10, 'MSHLA')
		assert arr.dtype == K10.dtype
		assert len(arr) == 0

	def test_exact_length(self):
		assert list(kmer_array(KmerSpec(5), 'MSHLA')) == [b'MSHLA']


class TestKmerSignature:

	def test_attrs(self):
		sig = calc_signature(K10, PROT1)
		assert sig.sequence == PROT1
		assert sig.kmerspec == K10
		assert sig.k == 10
		assert len(sig) == 41

	def test_sequence_kept_as_given(self):
		sig = calc_signature(KmerSpec(3), b'mshla')
		assert sig.sequence == 'mshla'
		assert len(sig) == 3

	def test_eq(self):
		assert calc_signature(K10, PROT1) == calc_signature(K10, PROT1)
		assert calc_signature(K10, PROT1) != calc_signature(K10, PROT2)
		assert calc_signature(K10, PROT1) != calc_signature(KmerSpec(9), PROT1)
		assert hash(calc_signature(K10, PROT1)) == hash(calc_signature(K10, PROT1))

	def test_similarity(self):
		sig1 = calc_signature(K10, PROT1)
		sig2 = calc_signature(K10, PROT2)
		sig3 = calc_signature(K10, PROT3)

		assert sig2.similarity(sig3) == 3
		assert sig3.similarity(sig2) == 3
		assert sig1.similarity(sig2) == 0
		assert sig1.similarity(sig1) == len(sig1)

	def test_similarity_truncated(self):
		full = calc_signature(K10, ECOLI_PROT)
		part = calc_signature(K10, GLACIECOLA_PROT)
		assert len(full) == 318
		assert len(part) == 51
		assert part.similarity(full) == 51

	def test_distance(self):
		sig1 = calc_signature(K10, PROT1)
		sig2 = calc_signature(K10, PROT2)
		sig3 = calc_signature(K10, PROT3)

		assert sig1.distance(sig1) == 0
		assert sig1.distance(sig2) == 1
		assert sig2.distance(sig3) == pytest.approx(1 - 3 / 8)
		assert sig2.distance(sig3) == sig3.distance(sig2)

	def test_jaccard(self):
		sig2 = calc_signature(K10, PROT2)
		sig3 = calc_signature(K10, PROT3)
		assert sig2.jaccard(sig3) == pytest.approx(3 / (41 + 20 - 3))
		assert sig2.jaccard(sig2) == 1

	def test_empty(self):
		empty1 = calc_signature(K10, 'MSH')
		empty2 = calc_signature(K10, '')
		assert empty1.similarity(empty2) == 0
		assert empty1.distance(empty2) == 0
		assert empty1.distance(calc_signature(K10, PROT1)) == 1

	def test_different_k(self):
		sig1 = calc_signature(K10, PROT1)
		sig2 = calc_signature(KmerSpec(9), PROT1)
		with pytest.raises(InvalidInputError):
			sig1.similarity(sig2)
		with pytest.raises(InvalidInputError):
			sig1.distance(sig2)

	def test_wrong_type(self):
		with pytest.raises(TypeError):
			calc_signature(K10, PROT1).similarity(PROT1)


def test_calc_signatures():
	seqs = [PROT1, PROT2, PROT3]
	sigs = calc_signatures(K10, seqs, progress=TestProgressMeter)
	assert sigs == [calc_signature(K10, seq) for seq in seqs]
