"""
List command for vertag.

Shows the modules and channels found in the repository's release tags,
with the latest version on each module/channel pair.
"""

import json
from typing import Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from ..cli_utils import add_common_options, handle_errors, open_repository, setup_command
from ..domain.tag import ParsedTag
from ..services.tag_service import TagService


def latest_by_pair(parsed: List[ParsedTag]) -> Dict[Tuple[str, str], ParsedTag]:
    """Newest tag for every (module, channel) pair."""
    latest: Dict[Tuple[str, str], ParsedTag] = {}
    for tag in parsed:
        key = (tag.module, tag.channel)
        if key not in latest or tag.version > latest[key].version:
            latest[key] = tag
    return latest


@click.command('list')
@click.option('-m', '--module', help='Only show this module')
@add_common_options('repo', 'json', 'pretty', 'debug')
@handle_errors
def list_handler(
    module: Optional[str],
    repo_path: Optional[str],
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    List modules, channels and their latest versions.

    Tags that do not follow module/channel/vX.Y.Z are ignored.

    \b
    Examples:
        vertag list
        vertag list -m api --pretty
        vertag list --json
    """
    config = setup_command(debug)
    service = TagService(open_repository(config, repo_path), config)
    catalog, parsed = service.load_tags()

    latest = latest_by_pair(parsed)
    rows = sorted(
        (tag for key, tag in latest.items() if module is None or key[0] == module),
        key=lambda t: (t.module, t.channel)
    )

    if output_json:
        print(json.dumps({'type': 'catalog', **catalog.to_dict()}), flush=True)
        for tag in rows:
            print(json.dumps(tag.to_dict()), flush=True)
        return

    if pretty:
        console = Console()
        table = Table(title="Release tags", show_header=True)
        table.add_column("Module", style="cyan")
        table.add_column("Channel")
        table.add_column("Version", justify="right", style="green")
        table.add_column("Tag")
        for tag in rows:
            table.add_row(tag.module, tag.channel, str(tag.version), tag.name)
        console.print(table)
        if not rows:
            console.print("[yellow]No release tags found.[/yellow]")
        return

    if not rows:
        click.echo("No release tags found.", err=True)
        return

    for tag in rows:
        click.echo(f"{tag.module}\t{tag.channel}\t{tag.version}")
