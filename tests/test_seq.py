"""Test repgen.seq."""

import gzip
from io import StringIO

import pytest
from Bio.Seq import Seq

from repgen.seq import SequenceRecord, InvalidInputError, seq_to_bytes, seq_to_str, count_ambiguous, parse_seqs, read_records


@pytest.mark.parametrize('seq', ['MSHLAX', b'MSHLAX', bytearray(b'MSHLAX'), Seq('MSHLAX')])
def test_convert(seq):
	assert seq_to_str(seq) == 'MSHLAX'
	assert seq_to_bytes(seq) == b'MSHLAX'


def test_convert_invalid():
	with pytest.raises(TypeError):
		seq_to_str(123)
	with pytest.raises(TypeError):
		seq_to_bytes(None)


def test_convert_non_ascii():
	with pytest.raises(InvalidInputError, match='non-ASCII'):
		seq_to_bytes('MKL\u00c9VV')
	with pytest.raises(InvalidInputError):
		seq_to_str('MKL\u00c9VV'.encode('latin-1'))


def test_count_ambiguous():
	assert count_ambiguous('MXXSxH') == 3
	assert count_ambiguous('ACGTNNn', 'N') == 3
	assert count_ambiguous('ACGT', 'N') == 0


class TestSequenceRecord:

	def test_converter(self):
		record = SequenceRecord('fig|1.1.peg.1', 'name', b'MSH')
		assert record.sequence == 'MSH'

	def test_defaults(self):
		record = SequenceRecord('label')
		assert record.comment == ''
		assert record.sequence == ''


FASTA = '''\
>label1
ACDEF
GHIK
>label2 comment2 with spaces
LMNP
>label3
'''


class TestParse:

	def test_read_records(self):
		records = list(read_records(StringIO(FASTA)))
		assert records == [
			SequenceRecord('label1', '', 'ACDEFGHIK'),
			SequenceRecord('label2', 'comment2 with spaces', 'LMNP'),
			SequenceRecord('label3', '', ''),
		]

	@pytest.mark.parametrize('compressed', [False, True])
	def test_parse_seqs(self, tmp_path, compressed):
		file = tmp_path / 'test.fa'
		if compressed:
			with gzip.open(file, 'wt') as f:
				f.write(FASTA)
		else:
			file.write_text(FASTA)

		itr = parse_seqs(file)
		records = list(itr)
		assert itr.closed
		assert [r.label for r in records] == ['label1', 'label2', 'label3']
		assert records[1].comment == 'comment2 with spaces'

	def test_small(self, small_records):
		assert len(small_records) == 6
		first = small_records[0]
		assert first.label == 'fig|1005530.3.peg.2208'
		assert first.comment == 'Escherichia coli EC4402'
		assert len(first.sequence) == 327
