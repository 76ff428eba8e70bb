"""
Operation result domain objects for vertag.

Provides the planned and completed records for a tagging run, one entry
per requested channel.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional

from .version import Version


class OperationStatus(Enum):
    """Status of an individual tag write."""
    SUCCESS = "success"
    FAILED = "failed"
    DRY_RUN = "dry_run"


@dataclass(frozen=True)
class TagPlan:
    """The tag that would be written for one channel."""
    module: str
    channel: str
    current: Version
    tag_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'module': self.module,
            'channel': self.channel,
            'current': str(self.current),
            'tag': self.tag_name,
        }


@dataclass
class TagResult:
    """
    Outcome of writing one planned tag.

    Used to track what happened to each channel during a run.
    """
    plan: TagPlan
    commit: str
    status: OperationStatus
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = self.plan.to_dict()
        result['commit'] = self.commit
        result['status'] = self.status.value
        if self.error:
            result['error'] = self.error
        return result


@dataclass
class OperationSummary:
    """
    Summary of a tagging run across its channels.

    Tags are written sequentially and the first failure stops the run,
    so ``failed`` is at most 1 and earlier successes stay in place.
    """
    operation: str = "create_tags"
    commit: Optional[str] = None
    total: int = 0
    successful: int = 0
    failed: int = 0
    dry_run: bool = False
    details: List[TagResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no failures occurred."""
        return self.failed == 0

    @property
    def created_tags(self) -> List[str]:
        return [
            d.plan.tag_name for d in self.details
            if d.status == OperationStatus.SUCCESS
        ]

    def add_detail(self, detail: TagResult) -> None:
        """Add a tag result and update counts."""
        self.details.append(detail)
        self.total += 1

        if detail.status == OperationStatus.SUCCESS:
            self.successful += 1
        elif detail.status == OperationStatus.FAILED:
            self.failed += 1
            if detail.error:
                self.errors.append(f"{detail.plan.tag_name}: {detail.error}")
        elif detail.status == OperationStatus.DRY_RUN:
            self.successful += 1  # Count dry-run as successful

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'type': 'summary',
            'operation': self.operation,
            'commit': self.commit,
            'total': self.total,
            'successful': self.successful,
            'failed': self.failed,
            'dry_run': self.dry_run,
            'errors': self.errors,
        }
