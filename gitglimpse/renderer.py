"""Drawing the commit graph with ``git log --graph``."""

import logging
from typing import List, Optional, Sequence

from .config import GitConfig
from .errors import AmbiguousMergeBase, GitCommandFailed, GlimpseError
from .git import GitRunner

logger = logging.getLogger(__name__)

# Curated format for git-prettylog: hash and decorations on the first line,
# subject, author and relative date on the second.
PRETTY_FORMAT = (
    'format:'
    '%C(dim white) ---%C(reset) %C(bold blue)%h%C(reset) %C(dim white)-'
    '%C(reset)%C(auto)%d%C(reset)\n'
    '%C(white)%s%C(reset) %C(dim white)%an%C(reset) %C(dim green)(%ar)%C(reset)'
)

LOG_ARGS = ['log', '--graph', '--decorate']

# `git merge-base` exits with 1 when the commits share no ancestor.
_NO_MERGE_BASE_STATUS = 1


class GraphRenderer:
    """Shows the history between the common ancestor of some refs and their tips."""

    def __init__(self, git: GitRunner, config: Optional[GitConfig] = None):
        self.git = git
        self.config = config or GitConfig(git)

    def merge_base(self, refs: Sequence[str]) -> str:
        """Find the single octopus merge-base of *refs*.

        Raises:
            GlimpseError: If *refs* is empty
            AmbiguousMergeBase: If git does not report exactly one commit
            GitCommandFailed: If git fails for another reason
        """
        if not refs:
            raise GlimpseError("no references to show")

        args = ('merge-base', '--octopus', *refs)
        status, lines, stderr = self.git.query(*args)
        if status == _NO_MERGE_BASE_STATUS and not lines:
            raise AmbiguousMergeBase(
                f"{', '.join(refs)} have no common ancestor (disconnected histories?)"
            )
        if status != 0:
            raise GitCommandFailed(['git', *args], status, stderr)

        lines = [line for line in lines if line]
        if len(lines) != 1:
            raise AmbiguousMergeBase(
                f"expected exactly one merge-base for {', '.join(refs)}, got {len(lines)}"
            )
        return lines[0]

    def resolve_format(self, explicit: Optional[str] = None) -> Optional[str]:
        """Pick the log format: explicit, then ``glimpse.pretty``, else git's default."""
        if explicit:
            return explicit
        return self.config.pretty()

    @staticmethod
    def build_command(refs: Sequence[str], merge_base: str, fmt: Optional[str] = None,
                      paths: Sequence[str] = ()) -> List[str]:
        """Build the ``git log`` arguments for a bounded graph.

        Excluding the merge-base's parents (``^<merge-base>^@``) keeps the
        merge-base itself as the root of the graph while hiding its history.
        """
        args = list(LOG_ARGS)
        if fmt:
            args.append(f'--format={fmt}')
        args.append('--ancestry-path')
        args.append(f'^{merge_base}^@')
        args.extend(refs)
        args.append('--')
        args.extend(paths)
        return args

    def show(self, refs: Sequence[str], paths: Sequence[str] = (),
             fmt: Optional[str] = None) -> int:
        """Draw the graph for *refs* and return git's exit code."""
        logger.debug("showing graph for refs %s", list(refs))
        merge_base = self.merge_base(refs)
        logger.debug("merge-base is %s", merge_base)
        args = self.build_command(refs, merge_base, self.resolve_format(fmt), paths)
        return self.git.spawn(*args)


def prettylog(git: GitRunner, args: Sequence[str] = (),
              config: Optional[GitConfig] = None) -> int:
    """Run ``git log --graph --decorate`` with the curated (or configured) format.

    Positional *args* are revisions: a trailing ``--`` is added unless the
    caller already separated paths with one.
    """
    config = config or GitConfig(git)
    fmt = config.pretty() or PRETTY_FORMAT
    args = list(args)
    if '--' not in args:
        args.append('--')
    return git.spawn(*LOG_ARGS, f'--format={fmt}', *args)


def list_branches(git: GitRunner, args: Sequence[str] = ()) -> int:
    """Print local branch names, one per line."""
    return git.spawn('branch', '--list', '--format=%(refname:short)', *args)
