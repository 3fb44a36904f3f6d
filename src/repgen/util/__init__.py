"""Miscellaneous utility code."""
