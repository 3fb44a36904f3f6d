"""Utility code for reading/writing data files.


.. class:: FilePath

	Alias for types which can represent a file system path (``str`` or :class:`os.PathLike`).
"""

import os
from io import TextIOWrapper
from typing import Union, IO, BinaryIO, ContextManager, Iterable, TypeVar, Optional
from contextlib import nullcontext

from typing_extensions import TypeAlias


FilePath: TypeAlias = Union[str, os.PathLike]

T = TypeVar('T')


def guess_compression(fobj: BinaryIO) -> str:
	"""Guess the compression mode of a readable file-like object in binary mode.

	Assumes the current position is at the beginning of the file.
	"""
	magic = fobj.read(2)
	return 'gzip' if magic == b'\x1f\x8b' else 'none'


def _open_auto(path: str, mode: str, **kwargs) -> IO:
	"""Open file for reading with compression determined automatically."""

	if mode[0] != 'r':
		raise ValueError('Automatic compression detection only supported for reading.')

	file = open(path, 'rb')

	try:
		compression = guess_compression(file)
		file.seek(0)

		if compression == 'gzip':
			import gzip
			binary = gzip.GzipFile(fileobj=file, mode='rb')
		else:
			binary = file

		return TextIOWrapper(binary, **kwargs) if mode[1] == 't' else binary

	except Exception:
		file.close()
		raise


def open_compressed(path: FilePath,
                    mode: str = 'rt',
                    compression: str = 'auto',
                    **kwargs,
                    ) -> IO:
	"""Open a file with compression method specified by a string.

	Parameters
	----------
	path
		Path of file to open. May be string or path-like object.
	mode : str
		Mode to open file in - similar to :func:`open`. Must be exactly two characters, the first
		in ``rwax`` and the second in``tb``.
	compression : str
		Compression method. Allowed values are ``'none'``, ``'gzip'``, or ``'auto'``. ``'auto'``
		is only valid when reading.
	\\**kwargs
		Additional text-specific keyword arguments identical to the following :func:`open`
		arguments: ``encoding``, ``errors``, and ``newlines``.

	Returns
	-------
	IO
		Open file object.
	"""
	if not(len(mode) == 2 and mode[0] in 'rwax' and mode[1] in 'tb'):
		msg = f'Invalid mode {mode!r}'
		if mode in 'rwax':
			msg += ' (must specify either binary or text mode)'
		raise ValueError(msg)

	path = os.fsdecode(path)

	if compression == 'none':
		return open(path, mode, **kwargs)

	elif compression == 'gzip':
		import gzip
		return gzip.open(path, mode, **kwargs)

	elif compression == 'auto':
		return _open_auto(path, mode, **kwargs)

	else:
		raise ValueError(f'Unknown compression type {compression!r}')


class ClosingIterator(Iterable[T]):
	"""Wraps an iterator which reads from a stream, closes the stream when finished.

	Used to wrap the lazy iterator returned by :func:`Bio.SeqIO.parse`. The object is an iterator
	itself, but will close the stream automatically when it finishes. May also be used as a context
	manager which closes the stream on exit.

	Attributes
	----------
	fobj
		The underlying file-like object the instance is responsible for closing.
	iterator
		The iterator which the instance wraps.
	"""

	def __init__(self, iterable: Iterable[T], fobj):
		self.iterator = iter(iterable)
		self.fobj = fobj

	def __iter__(self):
		return self

	def __next__(self) -> T:
		try:
			return next(self.iterator)

		except StopIteration:
			self.close()
			raise

	def close(self):
		"""Close the stream."""
		self.fobj.close()

	@property
	def closed(self) -> bool:
		return self.fobj.closed

	def __enter__(self):
		return self

	def __exit__(self, *args):
		self.close()


def maybe_open(file_or_path: Union[FilePath, IO],
               mode: str = 'r',
               compression: Optional[str] = None,
               **open_kw,
               ) -> ContextManager[IO]:
	"""Open a file given a file path as an argument, but pass existing file objects though.

	If a path is given the returned context manager opens it and closes it on exit. An existing file
	object is passed through untouched and left for the caller to close.

	Parameters
	----------
	file_or_path
		A path-like object or open file object.
	mode
		Mode to open file in.
	compression
		If not None, open paths with :func:`.open_compressed` using this compression method (``mode``
		must then be one of the two-character modes it accepts).
	\\**open_kw
		Keyword arguments to :func:`open`.
	"""
	try:
		path = os.fspath(file_or_path)
	except TypeError:
		return nullcontext(file_or_path)

	if compression is not None:
		return open_compressed(path, mode, compression, **open_kw)
	return open(path, mode, **open_kw)
