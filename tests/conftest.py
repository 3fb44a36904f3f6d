from pathlib import Path

import numpy as np
import pytest

from repgen.db import RepresentativeDatabase
from repgen.seq import parse_seqs


@pytest.fixture(scope='session')
def test_data():
	"""The directory containing test data."""
	return Path(__file__).parent / 'data'


@pytest.fixture(autouse=True)
def raise_numpy_errors():
	"""Raise exceptions for all Numpy errors in all tests."""

	old_settings = np.seterr(all='raise')

	yield

	np.seterr(**old_settings)


@pytest.fixture(scope='session')
def small_fasta(test_data):
	"""Six signature proteins, E. coli first."""
	return test_data / 'small.fa'


@pytest.fixture(scope='session')
def small_records(small_fasta):
	with parse_seqs(small_fasta) as records:
		return list(records)


@pytest.fixture()
def small_db(small_records):
	"""Database built from small.fa with threshold 50 and k=10."""
	db = RepresentativeDatabase(50, 10)
	db.add_genomes(small_records)
	return db
