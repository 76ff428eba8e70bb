"""
Infrastructure layer for vertag.

Contains abstractions for external systems:
- RepositoryGateway: What the tagging pipeline needs from a repository
- GitClient: Gateway implementation that runs the git binary

These provide clean interfaces that can be mocked for testing.
"""

from .gateway import RepositoryGateway, GitCommit
from .git_client import GitClient

__all__ = [
    'RepositoryGateway',
    'GitCommit',
    'GitClient',
]
