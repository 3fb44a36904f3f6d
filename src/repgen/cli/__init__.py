"""repgen command line interface."""

from .root import cli
from . import build
from . import query
from . import info
