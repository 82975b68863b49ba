"""Stack command implementation."""

from typing import List

from .base import GraphCommand
from ..selector import RefSelector


class StackCommand(GraphCommand):
    """Show the current branch (or detached HEAD) on top of a base branch.

    The base comes from ``--base``, else the ``glimpse.base`` configuration
    key, else ``main``.
    """

    def select(self, selector: RefSelector) -> List[str]:
        base = self.config.base(self.get_option('base'))
        return selector.stack(self.preset, base)
