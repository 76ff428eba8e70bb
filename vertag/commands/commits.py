"""
Commits command for vertag.

Lists the latest commits so a hash or prefix can be passed to
`vertag create --commit`.
"""

import json
from typing import Optional

import click

from ..cli_utils import add_common_options, handle_errors, open_repository, setup_command


@click.command('commits')
@click.option('-n', '--limit', type=click.IntRange(min=1),
              help='Number of commits to show (default: general.history_limit)')
@add_common_options('repo', 'json', 'debug')
@handle_errors
def commits_handler(
    limit: Optional[int],
    repo_path: Optional[str],
    output_json: bool,
    debug: bool,
):
    """
    Show the latest commits on HEAD.

    \b
    Examples:
        vertag commits
        vertag commits -n 5 --json
    """
    config = setup_command(debug)
    gateway = open_repository(config, repo_path)
    if limit is None:
        limit = int(config.get("general", {}).get("history_limit", 10))

    for commit in gateway.recent_commits(limit):
        if output_json:
            print(json.dumps(commit.to_dict()), flush=True)
        else:
            click.echo(commit.display())
