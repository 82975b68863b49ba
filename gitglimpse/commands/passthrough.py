"""Commands that hand their arguments straight to git."""

from .base import BaseCommand
from ..renderer import list_branches, prettylog


class PrettyLogCommand(BaseCommand):
    """``git log --graph --decorate`` with a readable two-line format."""

    def validate(self) -> None:
        pass

    def execute(self) -> int:
        return prettylog(self.git, list(self.get_option('args', ())), config=self.config)


class ListBranchesCommand(BaseCommand):
    """List local branch names, one per line."""

    def validate(self) -> None:
        pass

    def execute(self) -> int:
        return list_branches(self.git, list(self.get_option('args', ())))
