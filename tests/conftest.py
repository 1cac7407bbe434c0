"""Shared fixtures for the Inkwise test suite."""

import itertools

import pytest

from inkwise.state.sanitizer import reconcile


class CountingIds:
    """Deterministic id factory: id-1, id-2, ..."""

    def __init__(self, prefix: str = "id-"):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


@pytest.fixture
def ids():
    return CountingIds()


@pytest.fixture
def make_state(ids):
    """Build a canonical state from wire-format data."""

    def _make(data=None, **fields):
        payload = dict(data or {})
        payload.update(fields)
        return reconcile(payload, ids)

    return _make
