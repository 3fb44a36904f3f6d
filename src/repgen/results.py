"""Export query results and database summaries in various formats."""

import csv
import json
from abc import ABC, abstractmethod
from typing import IO, Union, TextIO, Any, Iterable, List, Dict
from functools import singledispatchmethod

from attr import attrs, attrib, asdict

from repgen.db import RepresentativeDatabase, RepresentativeEntry, Representation
from repgen.metric import MAX_SIMILARITY
from repgen.query import QueryResults, QueryResultItem, RepStats
from repgen.util.io import FilePath, maybe_open
import repgen.util.json as rjson


#: How the "matched itself" similarity value is written in reports
MAX_SIMILARITY_STR = 'MAX'


def format_similarity(similarity: int) -> Union[int, str]:
	"""Get the value reported for a similarity score, replacing the sentinel value with ``'MAX'``."""
	return MAX_SIMILARITY_STR if similarity == MAX_SIMILARITY else similarity


def _tsv_opts(format_opts: Dict[str, Any]) -> Dict[str, Any]:
	if 'dialect' not in format_opts:
		format_opts.setdefault('delimiter', '\t')
		format_opts.setdefault('lineterminator', '\n')
		format_opts.setdefault('quoting', csv.QUOTE_MINIMAL)
	return format_opts


class AbstractResultsExporter(ABC):
	"""Base for classes that export formatted query results.

	Subclasses must implement :meth:`export`.
	"""

	@abstractmethod
	def export(self, file_or_path: Union[FilePath, IO], results: QueryResults):
		"""Write query results to file.

		Parameters
		----------
		file_or_path
			Open file-like object or file path to write to.
		results
			Results to export.
		"""


def getattr_nested(obj, attrs: Union[str, Iterable[str]], pass_none=False):
	if isinstance(attrs, str):
		attrs = attrs.split('.')

	for attr in attrs:
		if pass_none and obj is None:
			return None

		obj = getattr(obj, attr)

	return obj


class TSVResultsExporter(AbstractResultsExporter):
	"""Exports query results as a tab-separated table with one row per query genome.

	The ``score`` column holds the number of k-mers shared with the closest representative, or
	``MAX`` for the sentinel value. ``rep_id`` and ``score`` are empty if the database was empty.

	Attributes
	----------
	format_opts
		Dialect and other formatting arguments passed to :func:`csv.writer`.
	"""
	format_opts: Dict[str, Any]

	COLUMNS = [
		('genome_id', 'genome_id'),
		('name', 'name'),
		('rep_id', 'representation.genome_id'),
		('score', 'representation.similarity'),
	]

	def __init__(self, **format_opts):
		self.format_opts = _tsv_opts(format_opts)

	def get_header(self) -> List[str]:
		"""Get values for header row."""
		return [name for name, _ in self.COLUMNS]

	def get_row(self, item: QueryResultItem) -> list:
		"""Get row values for single result item."""
		row = [getattr_nested(item, attrs, pass_none=True) for _, attrs in self.COLUMNS]
		if item.representative is None:
			row[-1] = None
		else:
			row[-1] = format_similarity(row[-1])
		return row

	def export(self, file_or_path: Union[FilePath, TextIO], results: QueryResults):
		with maybe_open(file_or_path, 'w') as f:
			writer = csv.writer(f, **self.format_opts)

			writer.writerow(self.get_header())
			for item in results.items:
				writer.writerow(self.get_row(item))


@attrs()
class JSONResultsExporter(AbstractResultsExporter):
	"""Exports query results in JSON format.

	Attributes
	----------
	pretty
		Write in more human-readable but less compact format. Defaults to False.
	"""
	pretty: bool = attrib(default=False)

	@singledispatchmethod
	def to_json(self, obj):
		"""Convert object to JSON-compatible format (need not work recursively)."""
		return rjson.to_json(obj)

	@to_json.register(QueryResults)
	def _results_to_json(self, results: QueryResults):
		return asdict(results, recurse=False)

	@to_json.register(QueryResultItem)
	def _item_to_json(self, item: QueryResultItem):
		return asdict(item, recurse=False)

	@to_json.register(Representation)
	def _representation_to_json(self, rep: Representation):
		return dict(
			representative=rep.representative,
			similarity=None if rep.representative is None else format_similarity(rep.similarity),
			distance=rep.distance,
			is_represented=rep.is_represented,
		)

	@to_json.register(RepresentativeEntry)
	def _entry_to_json(self, entry: RepresentativeEntry):
		return dict(genome_id=entry.genome_id, feature_id=entry.fid, name=entry.name)

	def export(self, file_or_path: Union[FilePath, TextIO], results: QueryResults):
		opts = dict(indent=4, sort_keys=True) if self.pretty else dict()
		with maybe_open(file_or_path, 'w') as f:
			json.dump(results, f, default=self.to_json, **opts)


def write_rep_list(file_or_path: Union[FilePath, TextIO], db: RepresentativeDatabase, **format_opts):
	"""Write a table of the genome ID and name of each representative in a database, in ID order."""
	with maybe_open(file_or_path, 'w') as f:
		writer = csv.writer(f, **_tsv_opts(format_opts))
		writer.writerow(['genome_id', 'name'])
		for entry in db:
			writer.writerow([entry.genome_id, entry.name])


def write_rep_stats(file_or_path: Union[FilePath, TextIO], stats: Iterable[RepStats], **format_opts):
	"""Write a table of query counts per representative.

	Parameters
	----------
	file_or_path
	stats
		Output of :func:`repgen.query.representation_stats`, written in the given order.
	\\**format_opts
		Formatting arguments passed to :func:`csv.writer`.
	"""
	with maybe_open(file_or_path, 'w') as f:
		writer = csv.writer(f, **_tsv_opts(format_opts))
		writer.writerow(['rep_id', 'rep_name', 'represented', 'outliers'])
		for s in stats:
			writer.writerow([s.representative.genome_id, s.representative.name, s.represented, s.outliers])
