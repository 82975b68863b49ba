"""Locals command implementation."""

from typing import List

from .base import GraphCommand
from ..selector import RefSelector


class LocalsCommand(GraphCommand):
    """Show all local branches and, optionally, their upstreams and push targets."""

    def select(self, selector: RefSelector) -> List[str]:
        return selector.locals(self.preset)
