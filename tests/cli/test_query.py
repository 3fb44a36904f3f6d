"""Test the 'query' command."""

from io import StringIO

import pytest

from repgen.query import query, representation_stats
from repgen.cli.test import invoke_cli
from ..results import check_tsv_results, check_json_results, check_rep_stats


@pytest.fixture()
def ref_results(small_db, small_records):
	return query(small_db, small_records)


@pytest.mark.parametrize('progress', [False, True])
def test_tsv_stdout(small_db_file, small_fasta, ref_results, progress):
	args = ['-d', small_db_file, 'query', small_fasta]
	args.append('--progress' if progress else '--no-progress')
	result = invoke_cli(args)

	assert result.exit_code == 0
	check_tsv_results(StringIO(result.stdout), ref_results)


def test_json_file(small_db_file, small_fasta, ref_results, tmp_path):
	out = tmp_path / 'results.json'
	result = invoke_cli(['-d', small_db_file, 'query', small_fasta, '-f', 'json', '-o', out, '--no-progress'])
	assert result.exit_code == 0
	assert result.stdout == ''

	with open(out) as f:
		check_json_results(f, ref_results, strict=False)


def test_stdin(small_db_file, small_fasta, ref_results):
	result = invoke_cli(
		['-d', small_db_file, 'query', '--no-progress'],
		input=small_fasta.read_text(),
	)
	assert result.exit_code == 0
	check_tsv_results(StringIO(result.stdout), ref_results)


def test_stats(small_db_file, small_fasta, small_db, ref_results, tmp_path):
	stats_file = tmp_path / 'stats.tsv'
	result = invoke_cli(['-d', small_db_file, 'query', small_fasta, '--stats', stats_file, '--no-progress'])
	assert result.exit_code == 0

	with open(stats_file) as f:
		check_rep_stats(f, representation_stats(ref_results, small_db))


def test_db_unchanged(small_db_file, small_fasta):
	before = small_db_file.read_text()
	result = invoke_cli(['-d', small_db_file, 'query', small_fasta, '--no-progress'])
	assert result.exit_code == 0
	assert small_db_file.read_text() == before


def test_invalid_ids(small_db_file, test_data):
	with pytest.warns(UserWarning, match='Skipping query record'):
		result = invoke_cli(['-d', small_db_file, 'query', test_data / 'badids.fa', '--no-progress'])

	assert result.exit_code == 0
	lines = result.stdout.splitlines()
	assert [line.split('\t')[0] for line in lines[1:]] == ['1005530.3', '224308.1']


def test_invalid_ids_strict(small_db_file, test_data):
	result = invoke_cli(['-d', small_db_file, 'query', test_data / 'badids.fa', '--strict', '--no-progress'])
	assert result.exit_code == 1
	assert 'fig|12345.peg.4' in result.stderr
