"""Select command implementation."""

from typing import List

import click

from .base import GraphCommand
from ..selector import RefSelector


class SelectCommand(GraphCommand):
    """Show exactly the references given on the command line."""

    def validate(self) -> None:
        """Validate command options."""
        if not self.get_option('branches'):
            raise click.UsageError("at least one reference is required")

    def select(self, selector: RefSelector) -> List[str]:
        return selector.explicit(self.get_option('branches', ()))
