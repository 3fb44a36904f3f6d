"""Helper functions and shared data for tests."""

from typing import Iterable

from repgen.db import RepresentativeDatabase


#: Phenylalanyl-tRNA synthetase alpha chain of Escherichia coli EC4402 (fig|1005530.3.peg.2208)
ECOLI_FID = 'fig|1005530.3.peg.2208'
ECOLI_NAME = 'Escherichia coli EC4402'
ECOLI_PROT = (
	'MSHLAELVASAKAAISQASDVAALDNVRVEYLGKKGHLTLQMTTLRELPPEERPAAGAVI'
	'NEAKEQVQQALNARKAELESAALNARLAAETIDVSLPGRRIENGGLHPVTRTIDRIESFF'
	'GELGFTVATGPEIEDDYHNFDALNIPGHHPARADHDTFWFDATRLLRTQTSGVQIRTMKA'
	'QQPPIRIIAPGRVYRNDYDQTHTPMFHQMEGLIVDTNISFTNLKGTLHDFLRNFFEEDLQ'
	'IRFRPSYFPFTEPSAEVDVMGKNGKWLEVLGCGMVHPNVLRNVGIDPEVYSGFAFGMGME'
	'RLTMLRYGVTDLRSFFENDLRFLKQFK'
)

#: Truncated version of ECOLI_PROT
GLACIECOLA_FID = 'fig|1129793.4.peg.2957'
GLACIECOLA_PROT = ECOLI_PROT[:60]

# Short unrelated proteins. PROT2 and PROT3 share exactly 3 10-mers.
PROT1 = 'MGMLVPLISKISDLSEEAKACVAACSSVEELDEVRGRYIGRAGALTALLA'
PROT2 = 'MDINLFKEELEELAKKAKHMLNETASKNDLEQVKVSLLGKKGLLTLQSAA'
PROT3 = 'MDINLFKEELKHMLNETASKKGLLTLQSA'

#: Genome IDs of representatives built from small.fa with threshold 50 and k=10, in sorted order.
SMALL_REP_IDS = ['1005530.3', '224308.1', '224308.2', '83333.1']


def check_separation(db: RepresentativeDatabase):
	"""Check no two representatives in a database are within its threshold of each other."""
	reps = db.sorted()
	for i, x in enumerate(reps):
		for y in reps[i + 1:]:
			assert x.similarity(y) < db.threshold, (x, y)


def check_coverage(db: RepresentativeDatabase, seqs: Iterable):
	"""Check each sequence is represented by some representative in the database."""
	for seq in seqs:
		rep = db.find_closest(seq)
		assert rep.is_represented
		assert rep.similarity >= db.threshold


def check_same_db(db1: RepresentativeDatabase, db2: RepresentativeDatabase):
	"""Check two databases have the same configuration and entries in the same order."""
	assert db1.threshold == db2.threshold
	assert db1.kmerspec == db2.kmerspec
	assert db1.label == db2.label
	assert len(db1) == len(db2)

	for e1, e2 in zip(db1, db2):
		assert e1 == e2
		assert e1.fid == e2.fid
		assert e1.name == e2.name
		assert e1.sequence == e2.sequence
		assert e1.signature == e2.signature
