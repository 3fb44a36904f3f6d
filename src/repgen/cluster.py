"""Read and write distance matrices between representatives."""

from typing import Union, Sequence, TextIO, Tuple, List
import csv

import numpy as np

from repgen.metric import SCORE_DTYPE
from repgen.util.io import FilePath, maybe_open


def write_distance_matrix(file: Union[FilePath, TextIO],
                          dmat: np.ndarray,
                          ids: Sequence[str],
                          fmt: str = '0.4f',
                          delimiter: str = '\t',
                          ):
	"""Write a square distance matrix as a delimited table.

	The first row and first column hold the genome IDs, the top left cell is ``genome_id``.

	Parameters
	----------
	file
		File path or writable text file object.
	dmat
		Square array of distances.
	ids
		Genome IDs corresponding to the matrix rows/columns.
	fmt
		Format spec for distance values.
	delimiter
		Field delimiter.
	"""
	if dmat.shape != (len(ids), len(ids)):
		raise ValueError(f'Matrix shape {dmat.shape} does not match number of IDs ({len(ids)})')

	with maybe_open(file, 'w', newline='') as fobj:
		writer = csv.writer(fobj, delimiter=delimiter, lineterminator='\n')
		writer.writerow(['genome_id', *ids])
		for id_, values in zip(ids, dmat):
			writer.writerow([id_, *(format(d, fmt) for d in values)])


def read_distance_matrix(file: Union[FilePath, TextIO], delimiter: str = '\t') -> Tuple[np.ndarray, List[str]]:
	"""Read a distance matrix written by :func:`.write_distance_matrix`.

	Returns
	-------
	Tuple
		``(matrix, ids)`` tuple.
	"""
	with maybe_open(file, newline='') as fobj:
		reader = csv.reader(fobj, delimiter=delimiter)
		ids = next(reader)[1:]
		n = len(ids)

		rows = []
		for i, (rid, *values) in enumerate(reader):
			if i >= n or rid != ids[i]:
				raise ValueError(f'Row {i + 1} ID {rid!r} does not match column IDs')
			rows.append(np.fromiter(map(float, values), SCORE_DTYPE, count=n))

		if len(rows) != n:
			raise ValueError(f'Expected {n} rows, got {len(rows)}')

		return np.stack(rows) if rows else np.empty((0, 0), SCORE_DTYPE), ids
