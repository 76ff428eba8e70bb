"""
Git client infrastructure for vertag.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from datetime import datetime
from typing import Iterator, List, Optional, Tuple
import logging

from .gateway import GitCommit, RepositoryGateway
from ..exit_codes import DuplicateTagError, RepositoryAccessError

logger = logging.getLogger(__name__)


class GitClient(RepositoryGateway):
    """
    RepositoryGateway backed by the git binary.

    Example:
        client = GitClient("/path/to/repo")
        for name in client.list_tags():
            print(name)
    """

    def __init__(self, path: str = ".", git: str = "git"):
        """
        Initialize GitClient.

        Args:
            path: Working directory of the repository (default: ".")
            git: git executable to invoke (default: "git")
        """
        self.path = path
        self.git = git

    def _run(self, *args: str) -> Tuple[str, str, int]:
        """
        Run a git command in the repository.

        Args:
            args: Arguments passed after the git executable

        Returns:
            Tuple of (stdout, stderr, returncode), output stripped

        Raises:
            RepositoryAccessError: If git cannot be executed at all
        """
        cmd = [self.git, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise RepositoryAccessError(f"Cannot run {self.git}: {e}") from e

        return result.stdout.strip(), result.stderr.strip(), result.returncode

    def _check(self, *args: str) -> str:
        """Run a git command and raise RepositoryAccessError on failure."""
        output, error, code = self._run(*args)
        if code != 0:
            command = ' '.join([self.git, *args])
            logger.error(f"Git command failed: {command} - {error}")
            raise RepositoryAccessError(f"{command} failed: {error or f'exit code {code}'}")
        return output

    def is_git_repo(self) -> bool:
        """Check if the working directory is inside a git repository."""
        output, _, code = self._run("rev-parse", "--is-inside-work-tree")
        return code == 0 and output == "true"

    def list_tags(self) -> List[str]:
        """List all tag names, newest version first."""
        output = self._check("tag", "--list", "--sort=-v:refname")
        return [line.strip() for line in output.split('\n') if line.strip()]

    def head(self) -> str:
        """Full commit id of HEAD."""
        return self._check("rev-parse", "--verify", "HEAD^{commit}")

    def commit_history(self) -> Iterator[str]:
        """
        Stream commit ids reachable from HEAD, newest first.

        The git process is killed if the consumer stops iterating early.
        """
        cmd = [self.git, "rev-list", "HEAD"]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            proc = subprocess.Popen(
                cmd,
                cwd=self.path,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise RepositoryAccessError(f"Cannot run {self.git}: {e}") from e

        try:
            for line in proc.stdout:
                commit_id = line.strip()
                if commit_id:
                    yield commit_id
            error = proc.stderr.read().strip()
            if proc.wait() != 0:
                raise RepositoryAccessError(f"git rev-list HEAD failed: {error}")
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            proc.stdout.close()
            proc.stderr.close()

    def recent_commits(self, limit: int = 10) -> List[GitCommit]:
        """
        Get the latest commits from HEAD.

        Args:
            limit: Maximum commits to return

        Returns:
            List of GitCommit objects, newest first. Empty for a repository
            without commits.
        """
        output, _, code = self._run("log", "--format=%H|%aI|%an|%ae|%s", "-n", str(limit))
        if code != 0 or not output:
            return []

        commits = []
        for line in output.split('\n'):
            if not line or '|' not in line:
                continue

            parts = line.split('|', 4)
            if len(parts) < 5:
                continue

            commit_hash, date_str, author, email, message = (p.strip() for p in parts)

            date: Optional[datetime]
            try:
                date = datetime.fromisoformat(date_str.replace('Z', '+00:00'))
            except ValueError:
                date = None

            commits.append(GitCommit(
                hash=commit_hash,
                date=date,
                author=author,
                email=email,
                message=message
            ))

        return commits

    def commit_exists(self, commit_id: str) -> bool:
        """Check that ``commit_id`` names a commit object."""
        _, _, code = self._run("cat-file", "-e", f"{commit_id}^{{commit}}")
        return code == 0

    def tag_exists(self, tag_name: str) -> bool:
        """Check whether refs/tags/<tag_name> exists."""
        _, _, code = self._run("rev-parse", "--verify", "--quiet", f"refs/tags/{tag_name}")
        return code == 0

    def create_tag(self, tag_name: str, commit_id: str) -> None:
        """
        Create a lightweight tag.

        git refuses to overwrite an existing tag without --force, which is
        never passed here.
        """
        _, error, code = self._run("tag", tag_name, commit_id)
        if code == 0:
            logger.debug(f"Git tag created: {tag_name} -> {commit_id[:7]}")
            return
        if "already exists" in error:
            raise DuplicateTagError(tag_name)
        logger.error(f"Git tag create error: {tag_name} - {error}")
        raise RepositoryAccessError(f"git tag {tag_name} {commit_id} failed: {error}")
