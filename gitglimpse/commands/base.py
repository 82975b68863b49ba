"""Base command classes for the git-glimpse tools."""

import logging
from abc import ABC, abstractmethod
from typing import Any, List

from ..config import GitConfig
from ..errors import GitCommandFailed, GlimpseError, INTERNAL_ERROR_EXIT
from ..git import GitRunner
from ..logs import err_console
from ..renderer import GraphRenderer
from ..selector import PresetConfig, RefSelector

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """Base class for all CLI commands.

    Provides access to git and the command execution lifecycle, and turns
    failures into process exit codes.
    """

    def __init__(self, **kwargs):
        """Initialize command with options.

        Args:
            **kwargs: Command options passed from CLI
        """
        self.options = kwargs
        self.console = err_console
        self.git = kwargs.get('git') or GitRunner(kwargs.get('repo'))
        self.config = GitConfig(self.git)

    @abstractmethod
    def validate(self) -> None:
        """Validate command options.

        Raises:
            click.UsageError: If validation fails
        """
        pass

    @abstractmethod
    def execute(self) -> int:
        """Execute the command logic.

        Returns:
            Exit code of the git process that produced the output
        """
        pass

    def run(self) -> int:
        """Template method: validate then execute, mapping failures to exit codes.

        Returns:
            Exit code for the process
        """
        self.validate()
        try:
            return self.execute()
        except GitCommandFailed as e:
            # git has already said what went wrong; pass its words along.
            if e.stderr:
                self.console.print(e.stderr.rstrip('\n'), markup=False, highlight=False)
            logger.debug("%s", e)
            return e.exit_code
        except GlimpseError as e:
            logger.error("%s", e)
            return INTERNAL_ERROR_EXIT

    def get_option(self, key: str, default: Any = None) -> Any:
        """Get a command option value."""
        value = self.options.get(key)
        return default if value is None else value


class GraphCommand(BaseCommand):
    """A command that selects references and draws their graph."""

    def validate(self) -> None:
        """Validate command options."""
        pass  # No required validation

    @property
    def preset(self) -> PresetConfig:
        return PresetConfig(
            select_upstreams=bool(self.get_option('upstreams', False)),
            select_pushes=bool(self.get_option('pushes', False)),
            select_last_tag=bool(self.get_option('last_tag', False)),
        )

    @abstractmethod
    def select(self, selector: RefSelector) -> List[str]:
        """Return the references to draw."""
        pass

    def execute(self) -> int:
        """Select references and show their graph."""
        refs = self.select(RefSelector(self.git))
        refs.extend(self.get_option('refs', ()))
        renderer = GraphRenderer(self.git, self.config)
        return renderer.show(
            refs,
            paths=list(self.get_option('paths', ())),
            fmt=self.get_option('format'),
        )
