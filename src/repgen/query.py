"""Classify genomes against a representative database."""

import warnings
from datetime import datetime
from typing import Iterable, Optional, Any, List, Dict

from attr import attrs, attrib

from repgen import __version__ as REPGEN_VERSION
from repgen.db import RepresentativeDatabase, RepresentativeEntry, Representation, genome_of, \
	InvalidIdentifierError
from repgen.kmers import KmerSpec, InvalidInputError
from repgen.seq import SequenceRecord
from repgen.util.progress import iter_progress


@attrs()
class QueryResultItem:
	"""Result for a single query genome.

	Attributes
	----------
	genome_id
		ID of the query genome, parsed from ``feature_id``.
	name
		Name of the query genome.
	feature_id
		Feature ID of the query protein.
	representation
		Closest representative in the database and its similarity to the query.
	jaccard
		Jaccard index of the query's k-mer set and the representative's (None if the database was
		empty). Informational only.
	"""
	genome_id: str = attrib()
	name: str = attrib()
	feature_id: str = attrib()
	representation: Representation = attrib()
	jaccard: Optional[float] = attrib(default=None)

	@property
	def representative(self) -> Optional[RepresentativeEntry]:
		return self.representation.representative

	@property
	def is_represented(self) -> bool:
		return self.representation.is_represented


@attrs(repr=False)
class QueryResults:
	"""Results for a set of queries, as well as information on the database used.

	Attributes
	----------
	items
		Results for each query genome, in input order.
	threshold
		Threshold of database used.
	kmerspec
		K-mer spec of database used.
	label
		Label of database used.
	repgen_version
		Version of the library used to generate the results.
	timestamp
		Time query was completed.
	extra
		JSON-able dict containing additional arbitrary metadata.
	"""
	items: List[QueryResultItem] = attrib()
	threshold: int = attrib()
	kmerspec: KmerSpec = attrib()
	label: str = attrib()
	repgen_version: str = attrib(default=REPGEN_VERSION)
	timestamp: datetime = attrib(factory=datetime.now)
	extra: Dict[str, Any] = attrib(factory=dict)


def query_item(db: RepresentativeDatabase, record: SequenceRecord) -> QueryResultItem:
	"""Classify a single input record.

	Raises
	------
	repgen.db.InvalidIdentifierError
		If the record's label is not a valid feature ID.
	repgen.kmers.InvalidInputError
		If the sequence contains non-ASCII characters.
	"""
	genome_id = genome_of(record.label)
	sig = db.signature(record.sequence)
	rep = db.find_closest(sig)
	jaccard = None if rep.representative is None else sig.jaccard(rep.representative)
	return QueryResultItem(genome_id, record.comment, record.label, rep, jaccard)


def query(db: RepresentativeDatabase,
          records: Iterable[SequenceRecord],
          strict: bool = False,
          progress=None,
          ) -> QueryResults:
	"""Find the closest representative for each of a set of genomes.

	The database is not modified.

	Parameters
	----------
	db
		Database to query.
	records
		Input records, one per query genome.
	strict
		Raise :exc:`repgen.db.InvalidIdentifierError` on records with invalid feature IDs (or
		:exc:`repgen.kmers.InvalidInputError` on invalid sequences) instead of skipping them with a
		warning.
	progress
		Display a progress meter. See :func:`repgen.util.progress.get_progress`.
	"""
	items = []

	with iter_progress(records, progress, desc='Querying') as itr:
		for record in itr:
			try:
				items.append(query_item(db, record))
			except (InvalidIdentifierError, InvalidInputError) as e:
				if strict:
					raise
				warnings.warn(f'Skipping query record {record.label!r}: {e}')

	return QueryResults(items, db.threshold, db.kmerspec, db.label)


@attrs()
class RepStats:
	"""Number of query genomes assigned to a single representative.

	Attributes
	----------
	representative
	represented
		Number of queries closest to the representative and within the threshold.
	outliers
		Number of queries closest to the representative but below the threshold.
	"""
	representative: RepresentativeEntry = attrib()
	represented: int = attrib(default=0)
	outliers: int = attrib(default=0)


def representation_stats(results: QueryResults, db: Optional[RepresentativeDatabase] = None) -> List[RepStats]:
	"""Count the query genomes assigned to each representative.

	Parameters
	----------
	results
	db
		If given, also include representatives with no queries assigned to them.

	Returns
	-------
	List[RepStats]
		Sorted by number of represented queries (largest first) and then by genome ID.
	"""
	stats = dict()

	if db is not None:
		for entry in db:
			stats[entry.genome_id] = RepStats(entry)

	for item in results.items:
		rep = item.representative
		if rep is None:
			continue

		s = stats.get(rep.genome_id)
		if s is None:
			s = stats[rep.genome_id] = RepStats(rep)

		if item.is_represented:
			s.represented += 1
		else:
			s.outliers += 1

	return sorted(stats.values(), key=lambda s: (-s.represented, s.representative.sort_key))
