"""
Commit reference resolution.

A reference is one of:
- "" / "current" / "HEAD": the commit HEAD points to
- a full 40-character hex id: used as-is, existence is checked at write time
- a shorter hex prefix: the first commit in history (newest first) whose id
  starts with the prefix

Prefix collisions are not reported; the newest matching commit wins.
"""

import logging
import re

from ..exit_codes import CommitNotFound, CommandError, RepositoryAccessError
from ..infra.gateway import RepositoryGateway

logger = logging.getLogger(__name__)

FULL_ID_LENGTH = 40
HEAD_ALIASES = ("", "current", "head")
HEX_PATTERN = re.compile(r'[0-9a-f]+', re.ASCII)


def is_head_reference(ref: str) -> bool:
    return ref.strip().lower() in HEAD_ALIASES


def resolve_commit(ref: str, gateway: RepositoryGateway) -> str:
    """
    Resolve ``ref`` to a full commit id.

    Args:
        ref: Commit reference as typed by the user
        gateway: Repository to resolve against

    Returns:
        Full commit id

    Raises:
        CommitNotFound: No commit matches the reference
        RepositoryAccessError: HEAD or the history could not be read
    """
    ref = (ref or "").strip().lower()

    if is_head_reference(ref):
        try:
            commit_id = gateway.head()
        except CommandError:
            raise
        except Exception as e:
            raise RepositoryAccessError(f"Cannot read HEAD: {e}") from e
        logger.debug(f"Resolved HEAD to {commit_id}")
        return commit_id

    if not HEX_PATTERN.fullmatch(ref) or len(ref) > FULL_ID_LENGTH:
        raise CommitNotFound(ref, f"Not a commit id or prefix: {ref}")

    if len(ref) == FULL_ID_LENGTH:
        return ref

    try:
        for commit_id in gateway.commit_history():
            if commit_id.startswith(ref):
                logger.debug(f"Resolved prefix {ref} to {commit_id}")
                return commit_id
    except CommandError:
        raise
    except Exception as e:
        raise RepositoryAccessError(f"Cannot read commit history: {e}") from e

    raise CommitNotFound(ref)
