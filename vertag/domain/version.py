"""
Version domain object for vertag.

A Version is the (major, minor, patch) triple carried by every release tag.
Versions are immutable and totally ordered by major, then minor, then patch.

Two bump policies exist:
- CAPPED: each component is a single decimal digit, carry propagates upward
  (1.5.9 -> 1.6.0, 2.9.9 -> 3.0.0). This is the default.
- UNBOUNDED: patch is incremented without any carry (1.5.9 -> 1.5.10).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .tag import ParsedTag

RADIX = 10


class VersionPolicy(Enum):
    """How the next version is derived from the current one."""
    CAPPED = "capped"
    UNBOUNDED = "unbounded"


@dataclass(frozen=True, order=True)
class Version:
    """
    Semantic version triple.

    Field order matters: dataclass ordering compares (major, minor, patch)
    lexicographically, which is the total order used for max-selection.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0

    @classmethod
    def zero(cls) -> 'Version':
        """The version of a module/channel pair that has never been tagged."""
        return cls(0, 0, 0)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {'major': self.major, 'minor': self.minor, 'patch': self.patch}

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def next_version(current: Version, policy: VersionPolicy = VersionPolicy.CAPPED) -> Version:
    """
    Compute the version that follows ``current``.

    Args:
        current: Highest existing version (Version.zero() when untagged)
        policy: CAPPED (base-10 carry) or UNBOUNDED (plain patch increment)

    Returns:
        The next Version

    Raises:
        ValueError: If any component of ``current`` is negative
    """
    if min(current.major, current.minor, current.patch) < 0:
        raise ValueError(f"Version components must be non-negative: {current!r}")

    if policy == VersionPolicy.UNBOUNDED:
        return Version(current.major, current.minor, current.patch + 1)

    major, minor, patch = current.major, current.minor, current.patch + 1
    if patch > RADIX - 1:
        patch = 0
        minor += 1
    if minor > RADIX - 1:
        minor = 0
        major += 1
    return Version(major, minor, patch)


def generate_next_tag(
    module: str,
    channel: str,
    current: Version,
    policy: VersionPolicy = VersionPolicy.CAPPED
) -> str:
    """
    Build the tag name for the release after ``current``.

    Examples:
        generate_next_tag("m", "c", Version(1, 2, 3))  -> "m/c/v1.2.4"
        generate_next_tag("m", "c", Version(2, 9, 9))  -> "m/c/v3.0.0"
    """
    from .tag import format_tag_name
    return format_tag_name(module, channel, next_version(current, policy))


def current_version(
    parsed_tags: Iterable['ParsedTag'],
    module: str,
    channels: Sequence[str]
) -> Version:
    """
    Highest version of ``module`` across the union of ``channels``.

    Returns Version.zero() when the module or the channel combination has
    no tags yet. Channel order does not matter.
    """
    wanted = set(channels)
    versions = [
        tag.version for tag in parsed_tags
        if tag.module == module and tag.channel in wanted
    ]
    if not versions:
        return Version.zero()
    return max(versions)
