"""Shared fixtures: a scripted stand-in for the subprocess runner."""

import threading

import pytest

from common.shell import CommandResult


class FakeRunner:
    """Returns canned results keyed by argv tuple and records every call."""

    def __init__(self, responses=None, default=None):
        self.responses = dict(responses or {})
        self.default = default
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, argv, timeout=None):
        key = tuple(argv)
        with self._lock:
            self.calls.append(key)
        return self.responses.get(key, self.default)


@pytest.fixture
def make_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def ok():
    """Build a successful CommandResult from stdout text."""
    return lambda stdout: CommandResult(stdout=stdout, returncode=0)
