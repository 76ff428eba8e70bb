"""
Shared fixtures for vertag tests.
"""

import hashlib
import os
import shutil
import subprocess
from typing import Dict, Iterable, Iterator, List, Optional

import pytest

from vertag.exit_codes import DuplicateTagError, RepositoryAccessError
from vertag.infra.gateway import GitCommit, RepositoryGateway


def fake_hash(seed: str) -> str:
    """Deterministic 40-character commit id."""
    return hashlib.sha1(seed.encode()).hexdigest()


class FakeGateway(RepositoryGateway):
    """In-memory repository: a linear history and a tag table."""

    def __init__(self, commits: Optional[List[str]] = None, tags: Optional[Dict[str, str]] = None):
        # newest first, like git rev-list
        self.commits = list(commits or [])
        self.tags = dict(tags or {})
        self.history_reads = 0
        self.created: List[str] = []

    def list_tags(self) -> List[str]:
        return list(self.tags)

    def head(self) -> str:
        if not self.commits:
            raise RepositoryAccessError("HEAD does not point to a commit")
        return self.commits[0]

    def commit_history(self) -> Iterator[str]:
        for commit_id in self.commits:
            self.history_reads += 1
            yield commit_id

    def recent_commits(self, limit: int) -> List[GitCommit]:
        return [
            GitCommit(hash=commit_id, message=f"commit {i}")
            for i, commit_id in enumerate(self.commits[:limit])
        ]

    def commit_exists(self, commit_id: str) -> bool:
        return commit_id in self.commits

    def tag_exists(self, tag_name: str) -> bool:
        return tag_name in self.tags

    def create_tag(self, tag_name: str, commit_id: str) -> None:
        if tag_name in self.tags:
            raise DuplicateTagError(tag_name)
        self.tags[tag_name] = commit_id
        self.created.append(tag_name)


def make_gateway(tag_names: Iterable[str] = (), commit_count: int = 3) -> FakeGateway:
    """FakeGateway with ``commit_count`` commits and the given tags on the oldest one."""
    commits = [fake_hash(f"commit-{i}") for i in range(commit_count)]
    return FakeGateway(commits=commits, tags={name: commits[-1] for name in tag_names})


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's ~/.vertag and VERTAG_* variables."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("VERTAG_"):
            monkeypatch.delenv(key)
    return home


# ============================================================================
# Real git repositories
# ============================================================================

def git(repo, *args: str) -> str:
    """Run git in ``repo`` and return stripped stdout."""
    result = subprocess.run(
        ["git", "-c", "user.name=Test User", "-c", "user.email=test@example.com",
         "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path):
    """A git repository with three commits; returns (path, [hash newest first])."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")

    for i, message in enumerate(["First commit", "Second commit", "Third commit"]):
        (repo / f"test{i}.txt").write_text(f"test content {i}")
        git(repo, "add", f"test{i}.txt")
        git(repo, "commit", "-q", "-m", message)

    hashes = git(repo, "rev-list", "HEAD").split("\n")
    return repo, hashes
