"""git-glimpse CLI commands module.

Each command validates its options, asks git what it needs to know and
returns the exit code of the git process that drew the output.
"""

from .base import BaseCommand, GraphCommand
from .stack import StackCommand
from .locals import LocalsCommand
from .select import SelectCommand
from .passthrough import PrettyLogCommand, ListBranchesCommand

__all__ = [
    'BaseCommand',
    'GraphCommand',
    'StackCommand',
    'LocalsCommand',
    'SelectCommand',
    'PrettyLogCommand',
    'ListBranchesCommand',
]
