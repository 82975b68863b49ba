"""Choosing which references to draw.

Three modes are supported:
  - explicit: the caller's references, used verbatim
  - locals: every local branch, optionally with upstream/push counterparts
  - stack: a base branch plus whatever is checked out right now

All repository state is read through ``git branch --list``,
``git branch --show-current`` and ``git rev-list --tags``.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .git import GitRunner

logger = logging.getLogger(__name__)

HEAD = 'HEAD'

# Ref names cannot contain control characters, so a tab is a safe separator.
FIELD_SEPARATOR = '\t'


@dataclass(frozen=True)
class PresetConfig:
    """Which counterparts to add next to each selected branch."""
    select_upstreams: bool = False
    select_pushes: bool = False
    select_last_tag: bool = False

    def with_upstreams(self) -> 'PresetConfig':
        """Return a copy with upstream inclusion forced on."""
        return replace(self, select_upstreams=True)


@dataclass
class BranchEntry:
    """One line of the branch listing."""
    name: str
    upstream: Optional[str] = None
    push: Optional[str] = None
    detached_head: bool = False

    @classmethod
    def parse(cls, line: str, preset: PresetConfig) -> 'BranchEntry':
        """Parse a line produced by ``RefSelector.branch_format``."""
        fields = line.split(FIELD_SEPARATOR)
        name = fields.pop(0).strip()
        upstream = fields.pop(0).strip() if preset.select_upstreams and fields else ''
        push = fields.pop(0).strip() if preset.select_pushes and fields else ''
        return cls(
            name=name,
            upstream=upstream or None,
            push=push or None,
            detached_head=name == HEAD,
        )


class RefSelector:
    """Builds reference lists by querying git."""

    def __init__(self, git: GitRunner):
        self.git = git

    def current_branch(self) -> Optional[str]:
        """Return the checked-out branch, or None when HEAD is detached."""
        lines = self.git.lines('branch', '--show-current')
        current = lines[0] if lines else ''
        logger.debug("HEAD is detached: %s", not current)
        return current or None

    @staticmethod
    def branch_format(preset: PresetConfig, detached: bool) -> str:
        """Build the ``--format`` argument for the branch listing.

        When HEAD is detached, git lists it as a pseudo-branch whose short
        name is a description like ``(HEAD detached at 1a2b3c)``. It is
        reported as the literal ``HEAD`` instead.
        """
        name = '%(refname:short)'
        if detached:
            name = f'%(if)%(HEAD)%(then){HEAD}%(else){name}%(end)'
        fields = [name]
        if preset.select_upstreams:
            fields.append('%(upstream:short)')
        if preset.select_pushes:
            fields.append('%(push:short)')
        return '--format=' + FIELD_SEPARATOR.join(fields)

    def list_branches(self, preset: PresetConfig, patterns: Sequence[str] = (),
                      detached: bool = False) -> List[str]:
        """List local branches matching *patterns* with their counterparts.

        Args:
            preset: Which counterparts to include
            patterns: Branch name patterns (all local branches if empty)
            detached: Whether HEAD is detached

        Returns:
            Branch names, each followed by its selected counterparts
        """
        lines = self.git.lines(
            'branch', '--list', self.branch_format(preset, detached), *patterns
        )
        refs = []
        for line in lines:
            if not line:
                continue
            entry = BranchEntry.parse(line, preset)
            refs.append(entry.name)
            if entry.detached_head:
                continue
            if preset.select_upstreams:
                if entry.upstream:
                    refs.append(entry.upstream)
                else:
                    logger.warning("branch %s has no upstream, skipping it", entry.name)
            if preset.select_pushes:
                if entry.push:
                    refs.append(entry.push)
                else:
                    logger.warning("branch %s has no push target, skipping it", entry.name)
        return refs

    def last_tag(self) -> Optional[str]:
        """Return the most recently tagged commit, if the repository has tags."""
        lines = self.git.lines('rev-list', '--tags', '--max-count=1')
        return lines[-1] if lines else None

    def _add_last_tag(self, refs: List[str], preset: PresetConfig) -> List[str]:
        if preset.select_last_tag:
            tag = self.last_tag()
            if tag:
                refs.append(tag)
            else:
                logger.warning("last tag requested, but no last tag was found")
        return refs

    def explicit(self, refs: Sequence[str]) -> List[str]:
        """Use the given references verbatim."""
        return list(refs)

    def locals(self, preset: PresetConfig) -> List[str]:
        """Select every local branch (and a detached HEAD, if any)."""
        detached = self.current_branch() is None
        refs = self.list_branches(preset, detached=detached)
        return self._add_last_tag(refs, preset)

    def stack(self, preset: PresetConfig, base: str) -> List[str]:
        """Select *base* and the current branch (or HEAD, when detached).

        When the current branch is the base itself, it is listed once and
        its upstream is always included, so the graph shows how far the
        local base has drifted from its remote.
        """
        current = self.current_branch()
        patterns = [base]
        if current == base:
            preset = preset.with_upstreams()
        elif current is not None:
            patterns.append(current)

        refs = self.list_branches(preset, patterns, detached=current is None)
        if base not in refs:
            # Not a local branch: a remote-tracking branch, tag or commit.
            logger.debug("base %s is not a local branch, using it verbatim", base)
            refs.insert(0, base)
        if current is None and HEAD not in refs:
            refs.append(HEAD)
        return self._add_last_tag(refs, preset)
