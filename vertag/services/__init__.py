"""
Service layer for vertag.

Services hold the logic that needs a repository:
- resolve_commit: Turn a user-supplied reference into a commit id
- create_tag: Write one release tag without overwriting
- TagService: Run the whole plan-resolve-write pipeline
"""

from .commit_resolver import resolve_commit, is_head_reference
from .tag_writer import create_tag
from .tag_service import TagService, TaggingOptions, policy_from_config

__all__ = [
    'resolve_commit',
    'is_head_reference',
    'create_tag',
    'TagService',
    'TaggingOptions',
    'policy_from_config',
]
