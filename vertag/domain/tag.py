"""
Release tag domain objects for vertag.

Release tags have the form ``<module>/<channel>/v<major>.<minor>.<patch>``,
for example ``app/production/v0.1.1``. Module and channel are lowercase
ASCII words; anything else in the repository's tag list is ignored.

Parsing a tag list yields a Catalog (the distinct modules and channels seen)
and the ParsedTag records used for version resolution.
"""

import logging
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .version import Version
from ..exit_codes import ValidationError

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r'([a-z]+)/([a-z]+)/v(\d+)\.(\d+)\.(\d+)', re.ASCII)
NAME_PATTERN = re.compile(r'[a-z]+', re.ASCII)


@dataclass(frozen=True)
class ParsedTag:
    """
    A release tag split into its fields.

    Attributes:
        name: Original tag string (e.g., "api/dev/v1.0.0")
        module: Deployable unit (e.g., "api")
        channel: Deployment track (e.g., "dev")
        version: Parsed Version
    """

    name: str
    module: str
    channel: str
    version: Version

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'tag': self.name,
            'module': self.module,
            'channel': self.channel,
            'version': str(self.version),
        }

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Catalog:
    """Distinct module and channel names observed across all release tags."""

    modules: FrozenSet[str] = frozenset()
    channels: FrozenSet[str] = frozenset()

    def sorted_modules(self) -> List[str]:
        return sorted(self.modules)

    def sorted_channels(self) -> List[str]:
        return sorted(self.channels)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'modules': self.sorted_modules(),
            'channels': self.sorted_channels(),
        }


def parse_tag(raw: str) -> Optional[ParsedTag]:
    """
    Parse a single tag name.

    The name is matched as given; surrounding whitespace makes it a
    non-release tag.

    Returns:
        ParsedTag, or None if the tag is not a release tag
    """
    match = TAG_PATTERN.fullmatch(raw)
    if not match:
        return None

    module, channel, major, minor, patch = match.groups()
    return ParsedTag(
        name=raw,
        module=module,
        channel=channel,
        version=Version(int(major), int(minor), int(patch))
    )


def parse_tags(raw_tags: Iterable[str]) -> Tuple[Catalog, List[ParsedTag]]:
    """
    Build the catalog and parsed tag list from raw tag names.

    Malformed tags are skipped; they never fail the batch.
    The returned list keeps input order.
    """
    modules = set()
    channels = set()
    parsed = []

    for raw in raw_tags:
        tag = parse_tag(raw)
        if tag is None:
            if raw:
                logger.debug(f"Skipping non-release tag: {raw!r}")
            continue
        modules.add(tag.module)
        channels.add(tag.channel)
        parsed.append(tag)

    return Catalog(modules=frozenset(modules), channels=frozenset(channels)), parsed


def format_tag_name(module: str, channel: str, version: Version) -> str:
    """Format the wire name of a release tag."""
    return f"{module}/{channel}/v{version.major}.{version.minor}.{version.patch}"


def validate_name(kind: str, value: str) -> str:
    """
    Check that a module or channel name is usable in a tag.

    Args:
        kind: "module" or "channel", used in the error message
        value: Name to check

    Returns:
        The value unchanged

    Raises:
        ValidationError: If the value is empty or not lowercase ASCII letters
    """
    if not value:
        raise ValidationError(f"Empty {kind} name")
    if ' ' in value:
        raise ValidationError(f"Invalid characters (space) in {kind}: {value!r}")
    if not NAME_PATTERN.fullmatch(value):
        raise ValidationError(
            f"Invalid {kind} {value!r}: only lowercase letters a-z are allowed"
        )
    return value


def split_multi_value(values: Iterable[str]) -> Tuple[str, ...]:
    """
    Flatten comma-separated option values into a de-duplicated tuple.

    Examples:
        split_multi_value(["dev,prod"])          -> ("dev", "prod")
        split_multi_value(["dev", "prod,dev"])   -> ("dev", "prod")
    """
    seen = []
    for value in values:
        for part in value.split(','):
            if part and part not in seen:
                seen.append(part)
    return tuple(seen)
