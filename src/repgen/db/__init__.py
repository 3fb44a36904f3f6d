"""Representative genome database: entries, greedy clustering and persistence."""

from .entry import RepresentativeEntry, InvalidIdentifierError, genome_of, genome_sort_key
from .repdb import RepresentativeDatabase, Representation, InvalidConfigError, build_database, \
	defer_ambiguous, DEFAULT_THRESHOLD, DEFAULT_LABEL, DEFAULT_MAX_AMBIGUOUS
from .snapshot import save_snapshot, load_snapshot, CorruptSnapshotError
