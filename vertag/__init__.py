"""
vertag - Release tags per module and channel for git repositories.

A release tag names a module (deployable unit), a channel (deployment
track) and a version: ``api/production/v1.4.2``. vertag reads the existing
tags, finds the highest version of a module across the requested channels
and writes the next one to a commit.

Quick Start:
    from vertag import GitClient, TagService, TaggingOptions

    service = TagService(GitClient("."))
    options = TaggingOptions(module="api", channels=("dev", "prod"))

    for message in service.apply(options):
        print(message)

    print(service.last_result.created_tags)

Pure helpers:
    parse_tags(["api/dev/v1.0.0"])          -> (Catalog, [ParsedTag])
    current_version(parsed, "api", ["dev"]) -> Version(1, 0, 0)
    generate_next_tag("api", "dev", Version(1, 0, 9)) -> "api/dev/v1.1.0"
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    Version,
    VersionPolicy,
    ParsedTag,
    Catalog,
    parse_tags,
    current_version,
    next_version,
    generate_next_tag,
    SelectionMode,
    SelectionState,
    KeyEvent,
)

# Infrastructure
from .infra import RepositoryGateway, GitClient

# Services
from .services import TagService, TaggingOptions, resolve_commit, create_tag

# Errors
from .exit_codes import (
    CommandError,
    ValidationError,
    RepositoryAccessError,
    CommitNotFound,
    DuplicateTagError,
    EmptySelectionError,
)

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Version",
    "VersionPolicy",
    "ParsedTag",
    "Catalog",
    "parse_tags",
    "current_version",
    "next_version",
    "generate_next_tag",
    "SelectionMode",
    "SelectionState",
    "KeyEvent",
    # Infrastructure
    "RepositoryGateway",
    "GitClient",
    # Services
    "TagService",
    "TaggingOptions",
    "resolve_commit",
    "create_tag",
    # Errors
    "CommandError",
    "ValidationError",
    "RepositoryAccessError",
    "CommitNotFound",
    "DuplicateTagError",
    "EmptySelectionError",
    # Configuration
    "load_config",
    "save_config",
]
