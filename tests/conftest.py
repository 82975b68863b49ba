"""Shared fixtures: a scripted stand-in for GitRunner."""

import pytest

from gitglimpse.errors import GitCommandFailed


class FakeGit:
    """Answers git queries from a table instead of running git.

    Responses are keyed by the argument tuple. A list value means success
    with those stdout lines; a ``(status, lines)`` tuple sets the status.
    """

    def __init__(self, responses=None, spawn_status=0):
        self.responses = dict(responses or {})
        self.spawn_status = spawn_status
        self.calls = []
        self.spawned = []

    def query(self, *args):
        self.calls.append(args)
        if args not in self.responses:
            raise AssertionError(f"unexpected git call: {args}")
        result = self.responses[args]
        if isinstance(result, list):
            return 0, result, ''
        status, lines = result
        return status, lines, f"fatal: {args[0]} failed\n"

    def lines(self, *args):
        status, lines, stderr = self.query(*args)
        if status != 0:
            raise GitCommandFailed(['git', *args], status, stderr)
        return lines

    def spawn(self, *args):
        self.spawned.append(list(args))
        return self.spawn_status


UNSET = (1, [])


@pytest.fixture
def fake_git():
    return FakeGit()
