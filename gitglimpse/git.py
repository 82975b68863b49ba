"""Running git: captured queries and terminal-attached display commands."""

import logging
import subprocess
from typing import List, Optional, Sequence, Tuple

from git import Git
from git.exc import GitCommandNotFound

from .errors import GitCommandFailed, GlimpseError, MISSING_STATUS_EXIT

logger = logging.getLogger(__name__)


class GitRunner:
    """Runs git commands inside a repository directory.

    Queries go through GitPython's command object so their output can be
    captured and parsed. The final display command is spawned directly so
    that git keeps the terminal, and with it the pager and colors.
    """

    def __init__(self, repo_path: Optional[str] = None):
        """Initialize the runner.

        Args:
            repo_path: Directory to run git in (default: current directory)
        """
        self.repo_path = repo_path
        self._git = Git(repo_path)

    def _command(self, args: Sequence[str]) -> List[str]:
        return ['git', *args]

    def _run(self, args: Sequence[str]) -> Tuple[int, List[str], str]:
        command = self._command(args)
        logger.debug("running %s", command)
        try:
            status, stdout, stderr = self._git.execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                stdout_as_string=False,
            )
        except GitCommandNotFound as e:
            raise GitCommandFailed(command, None, str(e)) from e

        try:
            text = stdout.decode('utf-8')
        except UnicodeDecodeError as e:
            raise GlimpseError(f"output of `{' '.join(command)}` was not UTF-8") from e

        lines = [line.strip() for line in text.splitlines()]
        logger.debug("`%s` exited with %s: %r", ' '.join(command), status, lines)
        return status, lines, _decode_stderr(stderr)

    def query(self, *args: str) -> Tuple[int, List[str], str]:
        """Run a git query and capture its output.

        Args:
            *args: Arguments following ``git``

        Returns:
            Tuple of (exit status, trimmed stdout lines, stderr)

        Raises:
            GlimpseError: If stdout is not valid UTF-8
            GitCommandFailed: If git could not be started at all
        """
        return self._run(args)

    def lines(self, *args: str) -> List[str]:
        """Run a git query that must succeed and return its stdout lines.

        Raises:
            GitCommandFailed: If git exits non-zero
        """
        status, lines, stderr = self._run(args)
        if status != 0:
            raise GitCommandFailed(self._command(args), status, stderr)
        return lines

    def spawn(self, *args: str) -> int:
        """Run git attached to the terminal and wait for it.

        Returns:
            Git's exit code, or MISSING_STATUS_EXIT if it was killed by a signal
        """
        command = self._command(args)
        logger.debug("spawning %s", command)
        try:
            completed = subprocess.run(command, cwd=self.repo_path)
        except FileNotFoundError as e:
            raise GitCommandFailed(command, None, str(e)) from e

        if completed.returncode is None or completed.returncode < 0:
            return MISSING_STATUS_EXIT
        return completed.returncode


def _decode_stderr(stderr) -> str:
    if isinstance(stderr, bytes):
        return stderr.decode('utf-8', errors='replace')
    return stderr or ""
