"""
Domain layer for vertag.

Contains pure domain objects with no I/O or side effects:
- Version: Semantic version triple and the next-version policies
- ParsedTag, Catalog: Release tags and the modules/channels they name
- SelectionState: Reducer behind the interactive pickers
- TagPlan, TagResult, OperationSummary: Planned and completed tag writes

These objects are immutable where possible and provide
serialization methods for JSONL output.
"""

from .version import (
    Version,
    VersionPolicy,
    next_version,
    generate_next_tag,
    current_version,
)
from .tag import (
    ParsedTag,
    Catalog,
    parse_tag,
    parse_tags,
    format_tag_name,
    validate_name,
    split_multi_value,
)
from .selection import (
    SelectionMode,
    SelectionStatus,
    SelectionState,
    KeyEvent,
    new_selection,
    reduce,
    selected_values,
)
from .operation import OperationStatus, TagPlan, TagResult, OperationSummary

__all__ = [
    'Version',
    'VersionPolicy',
    'next_version',
    'generate_next_tag',
    'current_version',
    'ParsedTag',
    'Catalog',
    'parse_tag',
    'parse_tags',
    'format_tag_name',
    'validate_name',
    'split_multi_value',
    'SelectionMode',
    'SelectionStatus',
    'SelectionState',
    'KeyEvent',
    'new_selection',
    'reduce',
    'selected_values',
    'OperationStatus',
    'TagPlan',
    'TagResult',
    'OperationSummary',
]
