"""
Tag creation with overwrite protection.

A tag is only written when its commit exists and its name is free. An
existing tag is never moved or replaced.
"""

import logging

from ..exit_codes import CommitNotFound, DuplicateTagError, ValidationError
from ..domain.tag import parse_tag
from ..infra.gateway import RepositoryGateway

logger = logging.getLogger(__name__)


def create_tag(tag_name: str, commit_id: str, gateway: RepositoryGateway) -> None:
    """
    Create release tag ``tag_name`` on ``commit_id``.

    Args:
        tag_name: Release tag (module/channel/vX.Y.Z)
        commit_id: Resolved commit id
        gateway: Repository to write to

    Raises:
        ValidationError: ``tag_name`` is not a release tag
        CommitNotFound: ``commit_id`` does not exist
        DuplicateTagError: ``tag_name`` already exists
        RepositoryAccessError: The tag could not be written
    """
    if parse_tag(tag_name) is None:
        raise ValidationError(f"Not a release tag name: {tag_name!r}")

    if not gateway.commit_exists(commit_id):
        raise CommitNotFound(commit_id)

    if gateway.tag_exists(tag_name):
        raise DuplicateTagError(tag_name)

    gateway.create_tag(tag_name, commit_id)
    logger.info(f"Created tag {tag_name} at {commit_id[:7]}")
