"""Convert data to/from JSON-compatible form using ``cattrs``.

Two converters are kept: :data:`converter` is lenient and used for writing reports, while
:data:`strict_converter` rejects unknown keys and does not coerce ``str`` or
``int`` fields from other JSON types. It is used where input must match a schema exactly (snapshot
files).
"""

from typing import Any
from datetime import datetime

import cattr
import numpy as np


converter = cattr.Converter()
strict_converter = cattr.Converter(forbid_extra_keys=True)


def to_json(obj):
	"""Convert object to JSON-writable data (anything that can be passed to :func:`json.dump`)."""
	return converter.unstructure(obj)


def from_json(data, cls=Any, strict: bool = False):
	"""Load object of type ``cls`` from parsed JSON data.

	Parameters
	----------
	data
		Data parsed from JSON format.
	cls
		Type to load.
	strict
		Use :data:`strict_converter`, which raises an error on keys not matching any attribute of
		an ``attrs`` class, or on ``str`` and ``int`` values of the wrong JSON type.
	"""
	conv = strict_converter if strict else converter
	return conv.structure(data, cls)


class Jsonable:
	"""Mixin class that provides custom JSON conversion methods.

	Either of the special methods ``__to_json__`` and ``__from_json__`` may be set to ``None`` to
	indicate that the default conversion process should be used.
	"""
	__to_json__ = None
	__from_json__ = None


def _is_jsonable(cls, method: str) -> bool:
	return isinstance(cls, type) and issubclass(cls, Jsonable) and getattr(cls, method) is not None


for _conv in (converter, strict_converter):
	_conv.register_unstructure_hook(datetime, datetime.isoformat)
	_conv.register_structure_hook(datetime, lambda value, type_: datetime.fromisoformat(value))
	_conv.register_unstructure_hook(np.integer, int)
	_conv.register_unstructure_hook(np.floating, float)
	_conv.register_structure_hook_func(
		lambda cls: _is_jsonable(cls, '__from_json__'),
		lambda data, cls: cls.__from_json__(data),
	)
	_conv.register_unstructure_hook_func(
		lambda cls: _is_jsonable(cls, '__to_json__'),
		lambda obj: obj.__to_json__(),
	)


def _structure_str_strict(value, type_):
	if not isinstance(value, str):
		raise TypeError(f'Expected string, got {value!r}')
	return value


def _structure_int_strict(value, type_):
	if isinstance(value, bool) or not isinstance(value, int):
		raise TypeError(f'Expected integer, got {value!r}')
	return value


strict_converter.register_structure_hook(str, _structure_str_strict)
strict_converter.register_structure_hook(int, _structure_int_strict)
