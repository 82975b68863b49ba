"""Defaults read from git's own configuration store."""

import logging
from typing import Optional

from .errors import GitCommandFailed, GlimpseError
from .git import GitRunner

logger = logging.getLogger(__name__)

BASE_KEY = 'glimpse.base'
PRETTY_KEY = 'glimpse.pretty'

DEFAULT_BASE = 'main'

# `git config --get` exits with 1 when the key is not set.
_UNSET_STATUS = 1


def resolve_base(flag: Optional[str], configured: Optional[str],
                 default: str = DEFAULT_BASE) -> str:
    """Pick the base branch: command-line flag, then configuration, then default.

    Empty strings count as unset.
    """
    for candidate in (flag, configured):
        if candidate:
            return candidate
    return default


class GitConfig:
    """Reads single values from ``git config``."""

    def __init__(self, git: GitRunner):
        self.git = git

    def get(self, key: str) -> Optional[str]:
        """Read one configuration value.

        Args:
            key: Dotted configuration key, e.g. ``glimpse.base``

        Returns:
            The value, or None if the key is not set

        Raises:
            GitCommandFailed: If git fails for any other reason
            GlimpseError: If git reports more than one line for the key
        """
        args = ('config', '--get', key)
        status, lines, stderr = self.git.query(*args)
        if status == _UNSET_STATUS and not lines:
            logger.debug("%s is not set", key)
            return None
        if status != 0:
            raise GitCommandFailed(['git', *args], status, stderr)
        if len(lines) > 1:
            raise GlimpseError(f"expected at most one line for `{key}`, got {len(lines)}")
        value = lines[0] if lines else ''
        logger.debug("%s = %r", key, value)
        return value

    def base(self, flag: Optional[str] = None) -> str:
        """Resolve the base branch, reading ``glimpse.base`` only if needed."""
        if flag:
            return flag
        return resolve_base(None, self.get(BASE_KEY))

    def pretty(self) -> Optional[str]:
        """Return the configured default log format, if any."""
        return self.get(PRETTY_KEY) or None
