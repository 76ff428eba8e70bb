"""
Tests for commit reference resolution.
"""

from unittest.mock import MagicMock

import pytest

from vertag.exit_codes import COMMIT_NOT_FOUND, CommitNotFound, RepositoryAccessError
from vertag.infra.git_client import GitClient
from vertag.services.commit_resolver import is_head_reference, resolve_commit

from conftest import FakeGateway, fake_hash


@pytest.fixture
def gateway():
    commits = [
        "abc1230000000000000000000000000000000003",
        "abc1110000000000000000000000000000000002",
        "def4560000000000000000000000000000000001",
    ]
    return FakeGateway(commits=commits)


class TestHeadReferences:
    """"", "current" and "HEAD" resolve to HEAD."""

    @pytest.mark.parametrize("ref", ["", "current", "CURRENT", "HEAD", "head", "  current  "])
    def test_aliases(self, gateway, ref):
        assert resolve_commit(ref, gateway) == gateway.commits[0]
        assert is_head_reference(ref)

    def test_none_is_head(self, gateway):
        assert resolve_commit(None, gateway) == gateway.commits[0]

    def test_head_does_not_scan_history(self, gateway):
        resolve_commit("current", gateway)
        assert gateway.history_reads == 0

    def test_unreadable_head(self):
        mock_gateway = MagicMock(spec=GitClient)
        mock_gateway.head.side_effect = OSError("broken")

        with pytest.raises(RepositoryAccessError, match="Cannot read HEAD"):
            resolve_commit("current", mock_gateway)

    def test_empty_repository(self):
        with pytest.raises(RepositoryAccessError):
            resolve_commit("HEAD", FakeGateway())


class TestFullIds:
    """A 40-character hex id is returned unchanged."""

    def test_full_id_returned_as_is(self, gateway):
        full = gateway.commits[2]

        assert resolve_commit(full, gateway) == full
        assert gateway.history_reads == 0

    def test_full_id_lowercased(self, gateway):
        full = gateway.commits[2]
        assert resolve_commit(full.upper(), gateway) == full

    def test_unknown_full_id_not_checked_here(self, gateway):
        """Existence is verified when the tag is written."""
        missing = "0" * 40
        assert resolve_commit(missing, gateway) == missing


class TestPrefixes:
    """Shorter hex strings are matched against history, newest first."""

    def test_unique_prefix(self, gateway):
        assert resolve_commit("def4", gateway) == gateway.commits[2]

    def test_first_match_wins(self, gateway):
        assert resolve_commit("abc", gateway) == gateway.commits[0]
        assert resolve_commit("abc111", gateway) == gateway.commits[1]

    def test_scan_stops_at_first_match(self, gateway):
        resolve_commit("abc", gateway)
        assert gateway.history_reads == 1

    def test_no_match(self, gateway):
        with pytest.raises(CommitNotFound) as exc_info:
            resolve_commit("fff", gateway)

        assert exc_info.value.ref == "fff"
        assert exc_info.value.exit_code == COMMIT_NOT_FOUND

    def test_long_history(self):
        commits = [fake_hash(f"c{i}") for i in range(500)]
        gateway = FakeGateway(commits=commits)

        assert resolve_commit(commits[-1][:12], gateway) == commits[-1]

    def test_history_failure(self):
        mock_gateway = MagicMock(spec=GitClient)
        mock_gateway.commit_history.side_effect = OSError("broken pipe")

        with pytest.raises(RepositoryAccessError, match="commit history"):
            resolve_commit("abc", mock_gateway)


class TestInvalidReferences:
    """Non-hex references never match."""

    @pytest.mark.parametrize("ref", ["main", "v1.0.0", "xyz", "abc-123", "a" * 41, "HEAD~1"])
    def test_rejected(self, gateway, ref):
        with pytest.raises(CommitNotFound):
            resolve_commit(ref, gateway)

        assert gateway.history_reads == 0
