"""Test repgen.kmers."""

import numpy as np
import pytest

from repgen.kmers import KmerSpec, DEFAULT_KMERSPEC, DEFAULT_K, InvalidInputError, nwindows, iter_kmers
from repgen.util.json import to_json, from_json


class TestKmerSpec:

	def test_attrs(self):
		spec = KmerSpec(10)
		assert spec.k == 10
		assert spec.dtype == np.dtype('S10')
		assert repr(spec) == 'KmerSpec(10)'

	def test_default(self):
		assert DEFAULT_KMERSPEC.k == DEFAULT_K == 8

	def test_eq(self):
		assert KmerSpec(9) == KmerSpec(9)
		assert KmerSpec(9) != KmerSpec(10)
		assert hash(KmerSpec(9)) == hash(KmerSpec(9))

	def test_numpy_int(self):
		assert KmerSpec(np.int64(6)).k == 6

	@pytest.mark.parametrize('k', [0, -1])
	def test_nonpositive(self, k):
		with pytest.raises(InvalidInputError):
			KmerSpec(k)

	@pytest.mark.parametrize('k', [1.5, '8', None, True])
	def test_non_int(self, k):
		with pytest.raises(InvalidInputError):
			KmerSpec(k)

	def test_invalid_input_is_value_error(self):
		with pytest.raises(ValueError):
			KmerSpec(0)

	def test_json(self):
		spec = KmerSpec(7)
		data = to_json(spec)
		assert data == dict(k=7)
		assert from_json(data, KmerSpec) == spec


def test_nwindows():
	assert nwindows(50, 10) == 41
	assert nwindows(10, 10) == 1
	assert nwindows(9, 10) == 0
	assert nwindows(0, 3) == 0


class TestIterKmers:

	def test_basic(self):
		assert list(iter_kmers('ABCDE', 3)) == [b'ABC', b'BCD', b'CDE']

	def test_repeats(self):
		assert list(iter_kmers('AAAA', 2)) == [b'AA', b'AA', b'AA']

	def test_lower(self):
		assert list(iter_kmers(b'abcd', 4)) == [b'ABCD']

	def test_short(self):
		assert list(iter_kmers('ABC', 4)) == []
