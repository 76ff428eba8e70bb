"""
Create command for vertag.

Generates the next release tag for a module on one or more channels and
writes it to the target commit. Values that are not passed as options are
asked for interactively.
"""

import json
import sys
from typing import Optional, Sequence, Tuple

import click

from ..cli_utils import add_common_options, open_repository, report_error, setup_command
from ..domain.tag import Catalog, split_multi_value
from ..domain.version import VersionPolicy
from ..exit_codes import INTERRUPTED, AbortedError, CommandError
from ..infra.gateway import RepositoryGateway
from ..services.tag_service import TagService, TaggingOptions, policy_from_config
from ..tui.selector import select_many, select_one

NEW_ITEM = "+ new..."
CURRENT_COMMIT = "current (HEAD)"


# ============================================================================
# Interactive prompts
# ============================================================================

def _confirm_new(kind: str, values: Sequence[str], known: Sequence[str], yes: bool) -> None:
    """Ask before introducing module/channel names that have never been tagged."""
    for value in values:
        if value in known or yes:
            continue
        if not click.confirm(f"Are you sure you want to create new {kind} '{value}'?", err=True):
            raise AbortedError(f"invalid {kind} selected")


def _prompt_text(kind: str, known: Sequence[str], yes: bool, multi: bool) -> Tuple[str, ...]:
    """Free-text fallback when there is nothing to pick from."""
    hint = " (comma-separated)" if multi else ""
    if known:
        click.echo(f"Known {kind}s: {', '.join(known)}", err=True)
    raw = click.prompt(f"Enter {kind} name{hint}", err=True)
    values = split_multi_value([raw]) if multi else (raw,)
    _confirm_new(kind, values, known, yes)
    return values


def prompt_module(catalog: Catalog, yes: bool = False) -> str:
    """Pick the module, offering every module seen in the tags."""
    known = catalog.sorted_modules()
    if not known:
        return _prompt_text("module", known, yes, multi=False)[0]

    choice = select_one("Select module", known + [NEW_ITEM])
    if choice is None:
        raise AbortedError()
    if choice == NEW_ITEM:
        return _prompt_text("module", known, yes, multi=False)[0]
    return choice


def prompt_channels(catalog: Catalog, yes: bool = False) -> Tuple[str, ...]:
    """Pick one or more channels, offering every channel seen in the tags."""
    known = catalog.sorted_channels()
    if not known:
        return _prompt_text("channel", known, yes, multi=True)

    choices = select_many("Select channel(s)", known + [NEW_ITEM])
    if choices is None:
        raise AbortedError()

    channels = [c for c in choices if c != NEW_ITEM]
    if NEW_ITEM in choices:
        channels.extend(_prompt_text("channel", known, yes, multi=True))
    return split_multi_value(channels)


def prompt_commit(gateway: RepositoryGateway, limit: int = 10) -> str:
    """Pick the commit to tag from the latest ``limit`` commits."""
    commits = gateway.recent_commits(limit)
    if not commits:
        return "current"

    by_label = {commit.display(): commit.hash for commit in commits}
    choice = select_one("Select commit", [CURRENT_COMMIT] + list(by_label))
    if choice is None:
        raise AbortedError()
    if choice == CURRENT_COMMIT:
        return "current"
    return by_label[choice]


# ============================================================================
# Output
# ============================================================================

def _output_simple(service, progress_iter, options):
    """Progress on stderr, created tag names on stdout."""
    mode = "[dry run] " if options.dry_run else ""

    for progress in progress_iter:
        click.echo(f"{mode}{progress}", err=True)

    result = service.last_result
    if result:
        for detail in result.details:
            click.echo(detail.plan.tag_name)


def _output_json(service, progress_iter, options):
    """JSONL output: progress lines, one line per tag, then the summary."""
    for progress in progress_iter:
        print(json.dumps({'progress': progress}), flush=True)

    result = service.last_result
    if result:
        for detail in result.details:
            print(json.dumps(detail.to_dict()), flush=True)
        print(json.dumps(result.to_dict()), flush=True)


def _output_pretty(service, progress_iter, options):
    """Rich formatted output with a summary table."""
    from rich.console import Console
    from rich.progress import Progress, SpinnerColumn, TextColumn
    from rich.table import Table

    console = Console()
    mode = "[bold yellow]DRY RUN[/bold yellow] " if options.dry_run else ""

    console.print(f"\n{mode}[bold]Create tags[/bold]")
    console.print(f"[bold]Module:[/bold] {options.module}")
    console.print(f"[bold]Channels:[/bold] {', '.join(options.channels)}")
    console.print()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Processing...", total=None)

        for message in progress_iter:
            progress.update(task, description=message)

    result = service.last_result
    table = Table(title=f"{mode}Tags", show_header=True)
    table.add_column("Channel", style="cyan")
    table.add_column("Current")
    table.add_column("Tag", style="green")
    table.add_column("Commit")

    for detail in result.details:
        table.add_row(
            detail.plan.channel,
            str(detail.plan.current),
            detail.plan.tag_name,
            detail.commit[:7],
        )

    console.print(table)
    if not options.dry_run:
        console.print(f"\n[bold green]✓[/bold green] Created {result.successful} tag(s)")


# ============================================================================
# Create command
# ============================================================================

@click.command('create')
@click.option('-m', '--module', help='Module to tag (prompted for if omitted)')
@click.option('-c', '--channel', 'channels', multiple=True,
              help='Channel to tag; comma-separated or repeated for several')
@click.option('--commit', 'commit_ref',
              help='Commit to tag: full hash, short prefix or "current" (default)')
@click.option('--policy', type=click.Choice(['capped', 'unbounded']),
              help='Version bump policy (default: versioning.policy)')
@click.option('--interactive/--no-interactive', default=None,
              help='Prompt for missing values (default: general.interactive)')
@click.option('--yes', '-y', is_flag=True, help='Accept new module/channel names without asking')
@add_common_options('repo', 'dry_run', 'json', 'pretty', 'debug')
def create_handler(
    module: Optional[str],
    channels: Tuple[str, ...],
    commit_ref: Optional[str],
    policy: Optional[str],
    interactive: Optional[bool],
    yes: bool,
    repo_path: Optional[str],
    dry_run: bool,
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    Create the next release tag for a module.

    The new version is one step past the highest existing version of the
    module across all given channels, and the same tag version is written
    to every channel. Existing tags are never moved.

    \b
    Examples:
        # Tag HEAD as the next api release on dev
        vertag create -m api -c dev
        # Same version on two channels, on a specific commit
        vertag create -m api -c dev,prod --commit 1a2b3c4
        # Preview without writing
        vertag create -m api -c dev --dry-run
        # Pick everything interactively
        vertag create
    """
    config = setup_command(debug)
    general = config.get("general", {})
    if interactive is None:
        interactive = bool(general.get("interactive", True))
    interactive = interactive and sys.stdin.isatty()

    service = None
    try:
        gateway = open_repository(config, repo_path)
        service = TagService(gateway, config)
        version_policy = VersionPolicy(policy) if policy else policy_from_config(config)

        channel_list = split_multi_value(channels)
        catalog = Catalog()
        if interactive and (not module or not channel_list):
            catalog = service.load_catalog()

        if not module:
            if not interactive:
                raise click.UsageError("Missing option '-m' / '--module'")
            module = prompt_module(catalog, yes)

        if not channel_list:
            if not interactive:
                raise click.UsageError("Missing option '-c' / '--channel'")
            channel_list = prompt_channels(catalog, yes)

        if commit_ref is None:
            if interactive:
                commit_ref = prompt_commit(gateway, int(general.get("history_limit", 10)))
            else:
                commit_ref = "current"

        options = TaggingOptions(
            module=module,
            channels=channel_list,
            commit=commit_ref,
            dry_run=dry_run,
            policy=version_policy,
        )

        progress_iter = service.apply(options)
        if pretty:
            _output_pretty(service, progress_iter, options)
        elif output_json:
            _output_json(service, progress_iter, options)
        else:
            _output_simple(service, progress_iter, options)

    except KeyboardInterrupt:
        click.echo("Interrupted by user", err=True)
        sys.exit(INTERRUPTED)
    except CommandError as e:
        report_error(e, output_json, service.last_result if service else None)
        sys.exit(e.exit_code)
