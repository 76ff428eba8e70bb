"""
Tagging service for vertag.

Orchestrates one tagging run: read the release tags, work out the current
version, generate the next tag per channel, resolve the target commit and
write the tags one after another.

Used by the `vertag create` command.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generator, List, Optional, Tuple

from ..config import load_config
from ..domain.operation import OperationStatus, OperationSummary, TagPlan, TagResult
from ..domain.tag import Catalog, ParsedTag, parse_tags, validate_name
from ..domain.version import VersionPolicy, current_version, generate_next_tag
from ..exit_codes import (
    CommandError,
    CommitNotFound,
    ConfigError,
    DuplicateTagError,
    RepositoryAccessError,
    ValidationError,
)
from ..infra.gateway import RepositoryGateway
from .commit_resolver import resolve_commit
from .tag_writer import create_tag

logger = logging.getLogger(__name__)


def policy_from_config(config: Dict[str, Any]) -> VersionPolicy:
    """Read versioning.policy from the configuration."""
    value = str(config.get("versioning", {}).get("policy", "capped")).lower()
    try:
        return VersionPolicy(value)
    except ValueError:
        raise ConfigError(
            f"Unknown versioning policy {value!r} (expected 'capped' or 'unbounded')"
        ) from None


@dataclass(frozen=True)
class TaggingOptions:
    """Everything one tagging run needs to know, fixed before it starts."""
    module: str
    channels: Tuple[str, ...]
    commit: str = "current"
    dry_run: bool = False
    policy: VersionPolicy = VersionPolicy.CAPPED


class TagService:
    """
    Service for creating release tags.

    The catalog is read fresh from the repository on every call; nothing
    is cached between runs.

    Example:
        service = TagService(gateway=GitClient("."))
        options = TaggingOptions(module="api", channels=("dev", "prod"))

        for progress in service.apply(options):
            print(progress)

        print(service.last_result.created_tags)
    """

    def __init__(
        self,
        gateway: RepositoryGateway,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize TagService.

        Args:
            gateway: Repository to read tags from and write tags to
            config: Configuration dict (loads default if None)
        """
        self.gateway = gateway
        self.config = config if config is not None else load_config()
        self.last_result: Optional[OperationSummary] = None

    def load_tags(self) -> Tuple[Catalog, List[ParsedTag]]:
        """Read and parse every release tag in the repository."""
        try:
            raw_tags = self.gateway.list_tags()
        except CommandError:
            raise
        except Exception as e:
            raise RepositoryAccessError(f"Cannot list tags: {e}") from e
        return parse_tags(raw_tags)

    def load_catalog(self) -> Catalog:
        """Known modules and channels."""
        catalog, _ = self.load_tags()
        return catalog

    def validate(self, options: TaggingOptions) -> None:
        """
        Check module and channel names before anything is read or written.

        Raises:
            ValidationError: On an invalid name or an empty channel list
        """
        validate_name("module", options.module)
        if not options.channels:
            raise ValidationError("At least one channel is required")
        for channel in options.channels:
            validate_name("channel", channel)

    def plan(self, options: TaggingOptions) -> List[TagPlan]:
        """
        Work out the tag to create for every requested channel.

        All channels share one baseline: the highest version of the module
        across the whole channel set.
        """
        self.validate(options)
        _, parsed = self.load_tags()
        channels = list(dict.fromkeys(options.channels))
        baseline = current_version(parsed, options.module, channels)
        logger.debug(f"Current version of {options.module} on {','.join(channels)}: {baseline}")

        return [
            TagPlan(
                module=options.module,
                channel=channel,
                current=baseline,
                tag_name=generate_next_tag(options.module, channel, baseline, options.policy),
            )
            for channel in channels
        ]

    def apply(self, options: TaggingOptions) -> Generator[str, None, OperationSummary]:
        """
        Create the planned tags.

        Tags are written sequentially. The first failure is recorded in
        ``last_result`` and re-raised; tags written before it are kept.
        A dry run makes the same commit and duplicate checks without writing.

        Args:
            options: Tagging options

        Yields:
            Progress messages

        Returns:
            OperationSummary with results
        """
        result = OperationSummary(dry_run=options.dry_run)
        self.last_result = result

        plans = self.plan(options)
        yield f"Current version: {plans[0].current}"

        commit_id = resolve_commit(options.commit, self.gateway)
        if not self.gateway.commit_exists(commit_id):
            raise CommitNotFound(commit_id)
        result.commit = commit_id
        yield f"Target commit: {commit_id}"

        for plan in plans:
            if not options.dry_run:
                yield f"Creating {plan.tag_name}..."
            try:
                self._write(plan, commit_id, options.dry_run)
            except CommandError as e:
                result.add_detail(TagResult(
                    plan=plan,
                    commit=commit_id,
                    status=OperationStatus.FAILED,
                    error=str(e),
                ))
                yield f"  ✗ {plan.tag_name}: {e}"
                raise

            if options.dry_run:
                result.add_detail(TagResult(plan=plan, commit=commit_id, status=OperationStatus.DRY_RUN))
                yield f"Would create {plan.tag_name}"
            else:
                result.add_detail(TagResult(plan=plan, commit=commit_id, status=OperationStatus.SUCCESS))
                yield f"  ✓ {plan.tag_name}"

        return result

    def _write(self, plan: TagPlan, commit_id: str, dry_run: bool) -> None:
        """Write one planned tag, or only check that it could be written."""
        if dry_run:
            if self.gateway.tag_exists(plan.tag_name):
                raise DuplicateTagError(plan.tag_name)
            return
        create_tag(plan.tag_name, commit_id, self.gateway)
