"""Abstract interface for progress meters.

API functions which run long loops (building a database, classifying many sequences) take a
``progress`` argument instead of a meter instance, because the total length is only known inside
the function. See :func:`.get_progress` for the accepted values.
"""

import sys
from abc import ABC, abstractmethod
from typing import Optional, Union, Callable, Iterable, Iterator, TextIO, Dict, Any, Mapping, cast


#: Callable which takes ``total`` and keyword arguments and returns an AbstractProgressMeter
ProgressFactoryFunc = Callable[..., 'AbstractProgressMeter']

#: Progress meter factories by string key
REGISTRY: Dict[str, ProgressFactoryFunc] = dict()


def register(key: str):
	"""Decorator to register progress meter class under the given key."""
	def decorator(cls):
		REGISTRY[key] = cls.create
		return cls
	return decorator


class AbstractProgressMeter(ABC):
	"""Abstract base class for an object which displays progress to the user.

	Instances can be used as context managers, on exit the :meth:`close` method is called.

	Attributes
	----------
	n
		Number of completed iterations.
	total
		Expected total number of iterations, or None if not known in advance.
	"""
	n: int
	total: Optional[int]

	@abstractmethod
	def increment(self, delta: int = 1):
		"""Increment the position of the meter by the given value."""

	def close(self):
		"""Stop displaying progress and perform whatever cleanup is necessary."""

	def __enter__(self):
		return self

	def __exit__(self, *args):
		self.close()

	@classmethod
	@abstractmethod
	def create(cls,
	           total: Optional[int],
	           *,
	           desc: Optional[str] = None,
	           file: Optional[TextIO] = None,
	           **kw,
	           ) -> 'AbstractProgressMeter':
		"""Factory function with standardized signature to create instances.

		Parameters
		----------
		total
			Total number of iterations to completion.
		desc
			Description to display to the user.
		file
			File-like object to write to. Defaults to ``sys.stderr``.
		\\**kw
			Additional options depending on the subclass.
		"""


class ProgressConfig:
	"""Factory for progress meters with stored default settings.

	Attributes
	----------
	callable
		The :meth:`.AbstractProgressMeter.create` method of a concrete progress meter type.
	kw
		Keyword arguments to pass to callable.
	"""

	def __init__(self, callable: ProgressFactoryFunc, kw: Dict[str, Any]):
		self.callable = callable
		self.kw = kw

	def create(self, total: Optional[int], **kw) -> AbstractProgressMeter:
		"""Create a progress meter instance, overriding stored settings with ``kw``."""
		final_kw = dict(self.kw)
		final_kw.update(kw)
		return self.callable(total, **final_kw)

	def update(self, *args: Mapping[str, Any], **kw) -> 'ProgressConfig':
		"""Get a copy with updated keyword arguments."""
		new_kw = dict(self.kw)
		new_kw.update(*args, **kw)
		return ProgressConfig(self.callable, new_kw)


ProgressArg = Union[ProgressConfig, str, bool, type, ProgressFactoryFunc, None]


def progress_config(arg: ProgressArg, **kw) -> ProgressConfig:
	"""Get a ``ProgressConfig`` instance from flexible argument types.

	Accepts the following types/values:

	- :class:`.ProgressConfig` - returned as-is (updated with ``kw``).
	- ``None`` or ``False`` - no progress display.
	- ``True`` - display with ``tqdm``.
	- ``str`` key - looked up in :data:`.REGISTRY` (``'tqdm'`` or ``'click'``).
	- :class:`.AbstractProgressMeter` subclass.
	- ``callable`` - factory function with the same signature as :meth:`.AbstractProgressMeter.create`.
	"""
	if isinstance(arg, ProgressConfig):
		return arg.update(kw) if kw else arg

	if arg is None or arg is False:
		arg = NullProgressMeter
	if arg is True:
		arg = TqdmProgressMeter

	if isinstance(arg, type) and issubclass(arg, AbstractProgressMeter):
		return ProgressConfig(arg.create, kw)
	if isinstance(arg, str):
		return ProgressConfig(REGISTRY[arg], kw)
	if callable(arg):
		return ProgressConfig(cast(ProgressFactoryFunc, arg), kw)

	raise TypeError(arg)


def get_progress(arg: ProgressArg, total: Optional[int], **kw) -> AbstractProgressMeter:
	"""Get a progress meter instance.

	Parameters
	----------
	arg
		See :func:`.progress_config`.
	total
		Length of progress meter to create.
	\\**kw
		Additional keyword arguments to pass to progress meter factory.
	"""
	return progress_config(arg).create(total, **kw)


class ProgressIterator(Iterator):
	"""Iterator which advances a progress meter as it is consumed, closing it at the end."""

	def __init__(self, iterable: Iterable, meter: AbstractProgressMeter):
		self.itr = iter(iterable)
		self.meter = meter
		self._first = True

	def __next__(self):
		if not self._first:
			self.meter.increment()
		self._first = False

		try:
			return next(self.itr)
		except StopIteration:
			self.meter.close()
			raise

	def __enter__(self):
		return self

	def __exit__(self, *args):
		self.meter.close()


def iter_progress(iterable: Iterable, progress: ProgressArg = True, total: Optional[int] = None, **kw) -> ProgressIterator:
	"""Display a progress meter while iterating over an object.

	Parameters
	----------
	iterable
		Iterable object.
	progress
		Passed to :func:`get_progress`.
	total
		Total number of expected iterations. Defaults to ``len(iterable)`` if the object has a length,
		otherwise the total is unknown.
	\\**kw
		Additional keyword arguments to pass to progress meter factory.
	"""
	if total is None and hasattr(iterable, '__len__'):
		total = len(iterable)

	return ProgressIterator(iterable, get_progress(progress, total, **kw))


class NullProgressMeter(AbstractProgressMeter):
	"""Progress meter which does nothing."""

	def __init__(self, total=None):
		self.n = 0
		self.total = total

	def increment(self, delta: int = 1):
		pass

	@classmethod
	def create(cls, total, **kw):
		return cls(total)


class TestProgressMeter(AbstractProgressMeter):
	"""Progress meter which displays nothing but tracks its position, for use in tests."""

	__test__ = False

	def __init__(self, total, **kw):
		self.n = 0
		self.total = total
		self.kw = kw
		self.closed = False

	def increment(self, delta: int = 1):
		if self.closed:
			raise RuntimeError('Attempted to increment closed progress meter.')
		if self.total is not None and self.n + delta > self.total:
			raise ValueError(f'Attempted to advance past total of {self.total}')
		self.n += delta

	def close(self):
		self.closed = True

	@classmethod
	def create(cls, total, **kw):
		return cls(total, **kw)


@register('tqdm')
class TqdmProgressMeter(AbstractProgressMeter):
	"""Wrapper around a progress meter from the ``tqdm`` library."""

	def __init__(self, pbar):
		self.pbar = pbar

	@property
	def n(self):
		return self.pbar.n

	@property
	def total(self):
		return self.pbar.total

	def increment(self, delta: int = 1):
		self.pbar.update(delta)

	def close(self):
		self.pbar.close()

	@classmethod
	def create(cls, total, *, desc=None, file=None, **kw):
		from tqdm import tqdm
		return cls(tqdm(total=total, desc=desc, file=file, **kw))


@register('click')
class ClickProgressMeter(AbstractProgressMeter):
	"""Wrapper around a progress bar from the ``click`` library.

	Click progress bars need a known length, ``total`` may not be None.
	"""

	def __init__(self, pbar):
		self.pbar = pbar

	@property
	def n(self):
		return self.pbar.pos

	@property
	def total(self):
		return self.pbar.length

	def increment(self, delta: int = 1):
		self.pbar.update(delta)

	def close(self):
		self.pbar.finish()
		self.pbar.render_finish()

	@classmethod
	def create(cls, total, *, desc=None, file=None, **kw):
		import click
		if total is None:
			raise ValueError('Click progress bar requires a known total.')
		if file is None:
			file = sys.stderr
		return cls(click.progressbar(length=total, label=desc, file=file, **kw))
