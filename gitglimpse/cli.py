"""Command-line interface for git-glimpse."""

import sys

import click

from . import __version__
from .commands import (
    BaseCommand,
    ListBranchesCommand,
    LocalsCommand,
    PrettyLogCommand,
    SelectCommand,
    StackCommand,
)
from .logs import setup_logging

PASSTHROUGH_SETTINGS = dict(
    ignore_unknown_options=True,
    allow_interspersed_args=False,
)


def _exit_with(command: BaseCommand):
    """Run a command and exit with its status."""
    sys.exit(command.run())


def repo_option(f):
    return click.option('--repo', '-C', default=None, metavar='PATH',
                        help="Run as if git was started in PATH (default: current directory)")(f)


def display_options(f):
    f = click.option('--verbose', '-v', count=True,
                     help="Log git invocations and the selected references")(f)
    f = click.option('--format', '-f', 'log_format', default=None,
                     help="Log format, as for `git log --format` (default: glimpse.pretty)")(f)
    return repo_option(f)


def preset_options(f):
    """Options shared by the stack and locals selections."""
    f = click.argument('refs', nargs=-1)(f)
    f = click.option('--path', '-P', 'paths', multiple=True,
                     help="Only show commits touching PATH (repeatable)")(f)
    f = click.option('--last-tag', is_flag=True,
                     help="Include the most recently tagged commit")(f)
    f = click.option('--pushes', '-p', is_flag=True,
                     help="Include all `@{push}` counterparts")(f)
    f = click.option('--upstreams', '-u', is_flag=True,
                     help="Include all `@{upstream}` counterparts")(f)
    return f


def base_option(f):
    return click.option('--base', '-b', default=None,
                        help="Base branch (default: glimpse.base, else `main`)")(f)


class StackDefaultGroup(click.Group):
    """A group that reads an unknown first argument as a reference for ``stack``.

    ``git graph feature`` then shows the base, the current branch and
    ``feature``, as ``git glimpse stack feature`` would.
    """

    default_command = 'stack'

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith('-') and self.get_command(ctx, args[0]) is None:
            return self.default_command, self.get_command(ctx, self.default_command), args
        return super().resolve_command(ctx, args)


GLIMPSE_HELP = """Show a minimal graph of Git commits.

\b
The graph starts at the common ancestor of the selected references and
stops at their tips. When no subcommand is given, this runs as if `stack`
was invoked with no arguments. Arguments that are not subcommands are
extra references for `stack`.

\b
CONFIGURATION:
  glimpse.base    Base branch for `stack` (default: main)
  glimpse.pretty  Default log format
  GLIMPSE_LOG     Log level (debug, info, warning, error)

\b
EXAMPLES:

  # Current branch on top of main
  git glimpse

  # Every local branch with its upstream
  git glimpse locals --upstreams

  # Two explicit branches, only history under src/
  git glimpse select release main -P src/

  # Current branch, main and release
  git glimpse release
"""


@click.group(cls=StackDefaultGroup, invoke_without_command=True, help=GLIMPSE_HELP)
@click.version_option(version=__version__)
@display_options
@click.pass_context
def glimpse(ctx, repo, log_format, verbose):
    setup_logging(verbose)
    ctx.obj = {'repo': repo, 'format': log_format}
    if ctx.invoked_subcommand is None:
        _exit_with(StackCommand(repo=repo, format=log_format))


@glimpse.command()
@base_option
@preset_options
@click.pass_obj
def stack(obj, base, upstreams, pushes, last_tag, paths, refs):
    """Display the current branch (or detached HEAD) and its base branch."""
    _exit_with(StackCommand(
        base=base, upstreams=upstreams, pushes=pushes, last_tag=last_tag,
        paths=paths, refs=refs, **obj,
    ))


@glimpse.command('locals')
@preset_options
@click.pass_obj
def local_branches(obj, upstreams, pushes, last_tag, paths, refs):
    """Display local branches and, optionally, their upstreams."""
    _exit_with(LocalsCommand(
        upstreams=upstreams, pushes=pushes, last_tag=last_tag,
        paths=paths, refs=refs, **obj,
    ))


@glimpse.command()
@click.option('--path', '-P', 'paths', multiple=True,
              help="Only show commits touching PATH (repeatable)")
@click.argument('branches', nargs=-1)
@click.pass_obj
def select(obj, paths, branches):
    """Display exactly the given references."""
    _exit_with(SelectCommand(branches=branches, paths=paths, **obj))


GIT_STACK_HELP = """Show a minimal graph of Git commits.

\b
Takes the same subcommands as `git glimpse`. When no subcommand is given,
this runs as if `locals --upstreams --pushes` was invoked.
"""


@click.group(invoke_without_command=True, help=GIT_STACK_HELP)
@click.version_option(version=__version__)
@display_options
@click.pass_context
def git_stack(ctx, repo, log_format, verbose):
    setup_logging(verbose)
    ctx.obj = {'repo': repo, 'format': log_format}
    if ctx.invoked_subcommand is None:
        _exit_with(LocalsCommand(repo=repo, format=log_format, upstreams=True, pushes=True))


git_stack.add_command(stack)
git_stack.add_command(local_branches, 'locals')
git_stack.add_command(local_branches, 'local')
git_stack.add_command(select)


@click.command(context_settings=PASSTHROUGH_SETTINGS)
@repo_option
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
def prettylog(repo, args):
    """A wrapper around `git log --graph --decorate --format=...`.

    All ARGS are passed on to `git log`.
    """
    setup_logging()
    _exit_with(PrettyLogCommand(repo=repo, args=args))


@click.command(context_settings=PASSTHROUGH_SETTINGS)
@repo_option
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
def ls_branches(repo, args):
    """List local branch names, one per line.

    All ARGS are passed on to `git branch --list`.
    """
    setup_logging()
    _exit_with(ListBranchesCommand(repo=repo, args=args))


def main():
    """Main entry point."""
    glimpse()


if __name__ == '__main__':
    main()
