"""
Current command for vertag.

Shows the current version of a module and the tags the next release
would get, without writing anything.
"""

import json
from typing import Optional, Tuple

import click

from ..cli_utils import add_common_options, handle_errors, open_repository, setup_command
from ..domain.tag import split_multi_value
from ..domain.version import VersionPolicy
from ..services.tag_service import TagService, TaggingOptions, policy_from_config


@click.command('current')
@click.option('-m', '--module', required=True, help='Module name')
@click.option('-c', '--channel', 'channels', multiple=True, required=True,
              help='Channel; comma-separated or repeated for several')
@click.option('--policy', type=click.Choice(['capped', 'unbounded']),
              help='Version bump policy (default: versioning.policy)')
@add_common_options('repo', 'json', 'debug')
@handle_errors
def current_handler(
    module: str,
    channels: Tuple[str, ...],
    policy: Optional[str],
    repo_path: Optional[str],
    output_json: bool,
    debug: bool,
):
    """
    Show the current version and the next tag(s).

    With several channels the current version is the highest across all
    of them.

    \b
    Examples:
        vertag current -m api -c dev
        vertag current -m api -c dev,staging,prod --json
    """
    config = setup_command(debug)
    service = TagService(open_repository(config, repo_path), config)

    options = TaggingOptions(
        module=module,
        channels=split_multi_value(channels),
        policy=VersionPolicy(policy) if policy else policy_from_config(config),
    )
    plans = service.plan(options)
    current = plans[0].current

    if output_json:
        print(json.dumps({
            'module': module,
            'channels': list(options.channels),
            'current': str(current),
            'next': [plan.tag_name for plan in plans],
        }), flush=True)
        return

    click.echo(f"Current version: {current}", err=True)
    for plan in plans:
        click.echo(plan.tag_name)
