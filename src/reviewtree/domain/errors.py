from __future__ import annotations

"""
Domain Exception Hierarchy.

Errors raised past the normalizer boundary are programming or
infrastructure faults, never malformed input.
"""


class ReviewTreeError(Exception):
    """Base class for all reviewtree failures."""


class TreeInvariantError(ReviewTreeError):
    """
    A structural invariant of the tree was violated.

    Indicates a bug in an earlier stage (e.g. an empty directory node
    reaching the compressor). Must not be recovered from.
    """


class RecordSourceError(ReviewTreeError):
    """The record source could not deliver a batch."""
