"""Exceptions and exit codes shared by the git-glimpse tools."""

from typing import List, Optional

# Exit code used when git gave us no status (killed by a signal, not found).
MISSING_STATUS_EXIT = 255

# Exit code for failures of git-glimpse itself.
INTERNAL_ERROR_EXIT = 254


class GlimpseError(Exception):
    """An internal or logic failure, reported by git-glimpse itself."""


class AmbiguousMergeBase(GlimpseError):
    """The references do not share exactly one octopus merge-base."""


class GitCommandFailed(Exception):
    """A git query exited non-zero.

    Git is expected to have explained the failure on stderr already, so
    the only thing left to do is to propagate its status.
    """

    def __init__(self, command: List[str], status: Optional[int], stderr: str = ""):
        self.command = command
        self.status = status
        self.stderr = stderr
        super().__init__(
            f"`{' '.join(command)}` failed with status {status}"
        )

    @property
    def exit_code(self) -> int:
        """Status to exit with, falling back to MISSING_STATUS_EXIT."""
        if isinstance(self.status, int) and 0 < self.status < 256:
            return self.status
        return MISSING_STATUS_EXIT
