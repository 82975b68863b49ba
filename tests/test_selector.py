"""Tests for reference selection."""

import logging

import pytest

from conftest import FakeGit
from gitglimpse.errors import GitCommandFailed
from gitglimpse.selector import BranchEntry, PresetConfig, RefSelector

SHOW_CURRENT = ('branch', '--show-current')
LAST_TAG = ('rev-list', '--tags', '--max-count=1')


def listing(preset, *patterns, detached=False):
    """Argument tuple of the branch listing query."""
    return ('branch', '--list', RefSelector.branch_format(preset, detached), *patterns)


# =============================================================================
# Model Tests
# =============================================================================

class TestPresetConfig:
    """Test PresetConfig defaults and helpers."""

    def test_defaults_select_nothing(self):
        preset = PresetConfig()
        assert not preset.select_upstreams
        assert not preset.select_pushes
        assert not preset.select_last_tag

    def test_with_upstreams_returns_copy(self):
        preset = PresetConfig(select_pushes=True)
        forced = preset.with_upstreams()
        assert forced.select_upstreams
        assert forced.select_pushes
        assert not preset.select_upstreams


class TestBranchEntry:
    """Test parsing of branch listing lines."""

    def test_name_only(self):
        entry = BranchEntry.parse('feature', PresetConfig())
        assert entry.name == 'feature'
        assert entry.upstream is None
        assert not entry.detached_head

    def test_upstream_and_push(self):
        preset = PresetConfig(select_upstreams=True, select_pushes=True)
        entry = BranchEntry.parse('feature\torigin/feature\tfork/feature', preset)
        assert entry.upstream == 'origin/feature'
        assert entry.push == 'fork/feature'

    def test_missing_upstream_with_push(self):
        preset = PresetConfig(select_upstreams=True, select_pushes=True)
        entry = BranchEntry.parse('feature\t\tfork/feature', preset)
        assert entry.upstream is None
        assert entry.push == 'fork/feature'

    def test_detached_head(self):
        entry = BranchEntry.parse('HEAD', PresetConfig(select_upstreams=True))
        assert entry.detached_head


# =============================================================================
# Query Tests
# =============================================================================

class TestBranchFormat:
    """Test the --format argument of the branch listing."""

    def test_plain(self):
        assert RefSelector.branch_format(PresetConfig(), False) == '--format=%(refname:short)'

    def test_counterparts_are_tab_separated(self):
        preset = PresetConfig(select_upstreams=True, select_pushes=True)
        assert RefSelector.branch_format(preset, False) == (
            '--format=%(refname:short)\t%(upstream:short)\t%(push:short)'
        )

    def test_detached_reports_head(self):
        fmt = RefSelector.branch_format(PresetConfig(), True)
        assert fmt == '--format=%(if)%(HEAD)%(then)HEAD%(else)%(refname:short)%(end)'


class TestCurrentBranch:
    """Test detection of the checked-out branch."""

    def test_on_branch(self):
        git = FakeGit({SHOW_CURRENT: ['feature']})
        assert RefSelector(git).current_branch() == 'feature'

    def test_detached(self):
        git = FakeGit({SHOW_CURRENT: []})
        assert RefSelector(git).current_branch() is None

    def test_failure_propagates(self):
        git = FakeGit({SHOW_CURRENT: (128, [])})
        with pytest.raises(GitCommandFailed) as exc_info:
            RefSelector(git).current_branch()
        assert exc_info.value.exit_code == 128


class TestLastTag:
    """Test lookup of the most recently tagged commit."""

    def test_found(self):
        git = FakeGit({LAST_TAG: ['1a2b3c']})
        assert RefSelector(git).last_tag() == '1a2b3c'

    def test_no_tags(self):
        git = FakeGit({LAST_TAG: []})
        assert RefSelector(git).last_tag() is None


# =============================================================================
# Mode Tests
# =============================================================================

class TestExplicit:
    """Test the explicit selection."""

    def test_verbatim(self, fake_git):
        refs = RefSelector(fake_git).explicit(('release', 'main', 'release'))
        assert refs == ['release', 'main', 'release']
        assert fake_git.calls == []


class TestLocals:
    """Test the locals selection."""

    def test_all_branches(self):
        preset = PresetConfig()
        git = FakeGit({
            SHOW_CURRENT: ['main'],
            listing(preset): ['feature', 'main'],
        })
        assert RefSelector(git).locals(preset) == ['feature', 'main']

    def test_upstreams_only_where_present(self, caplog):
        preset = PresetConfig(select_upstreams=True)
        git = FakeGit({
            SHOW_CURRENT: ['main'],
            listing(preset): ['feature', 'main\torigin/main', 'topic\torigin/topic'],
        })
        with caplog.at_level(logging.WARNING):
            refs = RefSelector(git).locals(preset)

        assert refs == ['feature', 'main', 'origin/main', 'topic', 'origin/topic']
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == ['branch feature has no upstream, skipping it']

    def test_pushes(self):
        preset = PresetConfig(select_pushes=True)
        git = FakeGit({
            SHOW_CURRENT: ['main'],
            listing(preset): ['main\tfork/main'],
        })
        assert RefSelector(git).locals(preset) == ['main', 'fork/main']

    def test_detached_head_injected_once(self, caplog):
        preset = PresetConfig(select_upstreams=True)
        git = FakeGit({
            SHOW_CURRENT: [],
            listing(preset, detached=True): ['HEAD', 'main\torigin/main'],
        })
        with caplog.at_level(logging.WARNING):
            refs = RefSelector(git).locals(preset)

        assert refs == ['HEAD', 'main', 'origin/main']
        assert refs.count('HEAD') == 1
        assert not caplog.records

    def test_last_tag(self):
        preset = PresetConfig(select_last_tag=True)
        git = FakeGit({
            SHOW_CURRENT: ['main'],
            listing(preset): ['main'],
            LAST_TAG: ['1a2b3c'],
        })
        assert RefSelector(git).locals(preset) == ['main', '1a2b3c']

    def test_missing_last_tag_is_a_warning(self, caplog):
        preset = PresetConfig(select_last_tag=True)
        git = FakeGit({
            SHOW_CURRENT: ['main'],
            listing(preset): ['main'],
            LAST_TAG: [],
        })
        with caplog.at_level(logging.WARNING):
            refs = RefSelector(git).locals(preset)

        assert refs == ['main']
        assert "no last tag was found" in caplog.text

    def test_listing_failure_propagates(self):
        preset = PresetConfig()
        git = FakeGit({
            SHOW_CURRENT: ['main'],
            listing(preset): (129, []),
        })
        with pytest.raises(GitCommandFailed):
            RefSelector(git).locals(preset)


class TestStack:
    """Test the stack selection."""

    def test_current_branch_and_base(self):
        preset = PresetConfig()
        git = FakeGit({
            SHOW_CURRENT: ['feature'],
            listing(preset, 'main', 'feature'): ['feature', 'main'],
        })
        assert RefSelector(git).stack(preset, 'main') == ['feature', 'main']

    def test_current_is_base_forces_upstream(self):
        preset = PresetConfig()
        forced = preset.with_upstreams()
        git = FakeGit({
            SHOW_CURRENT: ['main'],
            listing(forced, 'main'): ['main\torigin/main'],
        })
        refs = RefSelector(git).stack(preset, 'main')

        assert refs == ['main', 'origin/main']
        assert refs.count('main') == 1
        assert listing(forced, 'main') in git.calls

    def test_upstreams_for_both(self):
        preset = PresetConfig(select_upstreams=True)
        git = FakeGit({
            SHOW_CURRENT: ['feature'],
            listing(preset, 'main', 'feature'): ['feature', 'main\torigin/main'],
        })
        assert RefSelector(git).stack(preset, 'main') == ['feature', 'main', 'origin/main']

    def test_detached_head_appended_once(self):
        preset = PresetConfig()
        git = FakeGit({
            SHOW_CURRENT: [],
            listing(preset, 'main', detached=True): ['main'],
        })
        assert RefSelector(git).stack(preset, 'main') == ['main', 'HEAD']

    def test_detached_head_listed_by_git_is_not_duplicated(self):
        preset = PresetConfig()
        git = FakeGit({
            SHOW_CURRENT: [],
            listing(preset, 'main', detached=True): ['HEAD', 'main'],
        })
        refs = RefSelector(git).stack(preset, 'main')
        assert refs.count('HEAD') == 1

    def test_base_that_is_not_a_local_branch(self):
        preset = PresetConfig()
        git = FakeGit({
            SHOW_CURRENT: ['feature'],
            listing(preset, 'origin/main', 'feature'): ['feature'],
        })
        assert RefSelector(git).stack(preset, 'origin/main') == ['origin/main', 'feature']

    def test_last_tag(self):
        preset = PresetConfig(select_last_tag=True)
        git = FakeGit({
            SHOW_CURRENT: ['feature'],
            listing(preset, 'main', 'feature'): ['feature', 'main'],
            LAST_TAG: ['1a2b3c'],
        })
        assert RefSelector(git).stack(preset, 'main') == ['feature', 'main', '1a2b3c']
