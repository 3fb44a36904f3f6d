import pytest


@pytest.fixture()
def small_db_file(small_db, tmp_path):
	"""Snapshot file of the small database."""
	file = tmp_path / 'small.json'
	small_db.save(file)
	return file


@pytest.fixture(scope='session')
def small_fasta_entries(small_fasta):
	"""Text of each record in small.fa."""
	text = small_fasta.read_text()
	return ['>' + s for s in text.split('>')[1:]]
