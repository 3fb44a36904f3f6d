"""Helper code for tests of exported query results and database tables."""

import csv
import json
from typing import TextIO, List, Dict

from repgen.db import RepresentativeDatabase
from repgen.metric import MAX_SIMILARITY
from repgen.query import QueryResults, RepStats
from repgen.util.json import to_json


def read_tsv(file: TextIO) -> List[Dict[str, str]]:
	return list(csv.DictReader(file, delimiter='\t'))


def expected_score(item) -> str:
	"""String value of the score column for a result item."""
	if item.representative is None:
		return ''
	sim = item.representation.similarity
	return 'MAX' if sim == MAX_SIMILARITY else str(sim)


def check_tsv_results(file: TextIO, results: QueryResults):
	"""Assert exported TSV data matches the given results object."""
	file.seek(0)
	header = file.readline().rstrip('\n').split('\t')
	assert header == ['genome_id', 'name', 'rep_id', 'score']

	file.seek(0)
	rows = read_tsv(file)
	assert len(rows) == len(results.items)

	for item, row in zip(results.items, rows):
		assert row['genome_id'] == item.genome_id
		assert row['name'] == item.name
		assert row['rep_id'] == (item.representation.genome_id or '')
		assert row['score'] == expected_score(item)


def check_json_results(file: TextIO, results: QueryResults, strict: bool = False):
	"""Assert exported JSON data matches the given results object.

	Parameters
	----------
	file
		Opened results file.
	results
		Query results to check against.
	strict
		If True, expect that ``data`` was exported from the exact same ``results`` object. Otherwise
		expect results from a separate query run with the same inputs.
	"""
	file.seek(0)
	data = json.load(file)

	assert data['threshold'] == results.threshold
	assert data['kmerspec'] == dict(k=results.kmerspec.k)
	assert data['label'] == results.label
	assert data['repgen_version'] == results.repgen_version

	if strict:
		assert data['timestamp'] == to_json(results.timestamp)
		assert data['extra'] == results.extra

	assert len(data['items']) == len(results.items)

	for item, item_data in zip(results.items, data['items']):
		assert item_data['genome_id'] == item.genome_id
		assert item_data['name'] == item.name
		assert item_data['feature_id'] == item.feature_id

		rep = item.representation
		rep_data = item_data['representation']
		assert rep_data['is_represented'] == rep.is_represented
		assert rep_data['distance'] == rep.distance

		if rep.representative is None:
			assert rep_data['representative'] is None
			assert rep_data['similarity'] is None
			assert item_data['jaccard'] is None

		else:
			assert rep_data['representative'] == dict(
				genome_id=rep.representative.genome_id,
				feature_id=rep.representative.fid,
				name=rep.representative.name,
			)
			assert str(rep_data['similarity']) == expected_score(item)
			assert item_data['jaccard'] == item.jaccard


def check_rep_list(file: TextIO, db: RepresentativeDatabase):
	"""Assert exported representative list matches a database."""
	file.seek(0)
	rows = read_tsv(file)
	assert [(r['genome_id'], r['name']) for r in rows] == [(e.genome_id, e.name) for e in db.sorted()]


def check_rep_stats(file: TextIO, stats: List[RepStats]):
	"""Assert exported representative statistics table matches a list of stats."""
	file.seek(0)
	rows = read_tsv(file)
	assert len(rows) == len(stats)

	for s, row in zip(stats, rows):
		assert row == dict(
			rep_id=s.representative.genome_id,
			rep_name=s.representative.name,
			represented=str(s.represented),
			outliers=str(s.outliers),
		)
