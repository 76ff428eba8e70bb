"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
from functools import wraps
from typing import Any, Dict, Optional

import click

from .config import configure_logging, load_config
from .domain.operation import OperationSummary
from .exit_codes import INTERRUPTED, CommandError, RepositoryAccessError, get_exit_code_for_exception
from .infra.git_client import GitClient


def open_repository(config: Dict[str, Any], repo_path: Optional[str] = None) -> GitClient:
    """
    Create the git gateway for the configured repository.

    Raises:
        RepositoryAccessError: If the path is not inside a git repository
    """
    path = repo_path or config.get("general", {}).get("repository", ".")
    client = GitClient(path)
    if not client.is_git_repo():
        raise RepositoryAccessError(f"Not a git repository: {path}")
    return client


def report_error(
    error: Exception,
    output_json: bool = False,
    summary: Optional[OperationSummary] = None
) -> None:
    """
    Report a failed command.

    With --json the error is printed as a JSON object on stdout, otherwise
    as a message on stderr. Tags already written before the failure are
    listed because they are not rolled back.
    """
    created = summary.created_tags if summary else []

    if output_json:
        error_obj = {
            "error": str(error),
            "type": type(error).__name__,
            "exit_code": get_exit_code_for_exception(error),
        }
        if created:
            error_obj["created"] = created
        print(json.dumps(error_obj, ensure_ascii=False), flush=True)
        return

    click.echo(f"Error: {error}", err=True)
    if created:
        click.echo(f"Tags created before the failure: {', '.join(created)}", err=True)


def handle_errors(func):
    """
    Decorator that turns CommandError and Ctrl+C into exit codes.

    The wrapped command receives ``output_json`` as a keyword argument.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        output_json = kwargs.get('output_json', False)
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo("Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            report_error(e, output_json)
            sys.exit(e.exit_code)
    return wrapper


def setup_command(debug: bool = False) -> Dict[str, Any]:
    """Load the configuration and apply its logging settings."""
    config = load_config()
    configure_logging(config, debug=debug)
    return config


# Standard options that many commands share
common_options = {
    'repo': click.option('--repo', 'repo_path', type=click.Path(file_okay=False),
                         help='Repository to work on (default: general.repository, ".")'),
    'json': click.option('--json', 'output_json', is_flag=True,
                         help='Output as JSONL'),
    'pretty': click.option('--pretty', is_flag=True,
                           help='Display with rich formatting'),
    'debug': click.option('--debug', is_flag=True,
                          help='Enable debug logging'),
    'dry_run': click.option('--dry-run', is_flag=True,
                            help='Preview tags without creating them'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('repo', 'json', 'debug')
        def my_command(repo_path, output_json, debug):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
