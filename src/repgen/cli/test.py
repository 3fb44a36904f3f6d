"""Tools for testing CLI."""

from typing import Optional, Sequence

from click.testing import CliRunner, Result

from .root import cli


DEFAULT_ENV = dict(
	REPGEN_DB=None,  # Ensure this is unset by default in tests.
)


def default_runner(**kw) -> CliRunner:
	"""Get a CliRunner instance with altered default settings."""
	kw.setdefault('env', DEFAULT_ENV)
	return CliRunner(**kw)


def invoke_cli(args: Sequence, runner: Optional[CliRunner] = None, **kw) -> Result:
	"""Invoke CLI in test context, using different defaults than base Click method.

	Exceptions are not caught by default, and all arguments are converted to strings.
	"""
	if runner is None:
		runner = default_runner(env=kw.pop('env', DEFAULT_ENV))

	kw.setdefault('catch_exceptions', False)
	args = list(map(str, args))
	return runner.invoke(cli, args, **kw)
