#!/usr/bin/env python3

import click

from vertag import __version__
from vertag.commands.create import create_handler
from vertag.commands.current import current_handler
from vertag.commands.list import list_handler
from vertag.commands.commits import commits_handler
from vertag.commands.config import config_cmd


@click.group()
@click.version_option(__version__, prog_name="vertag")
def cli():
    """vertag - Release tags per module and channel for git repositories.

    Tags look like <module>/<channel>/v<major>.<minor>.<patch>, for example
    api/production/v1.4.2. vertag finds the highest existing version and
    tags the next one; it never moves or deletes a tag.
    """
    pass


# Core commands
cli.add_command(create_handler, name='create')
cli.add_command(current_handler, name='current')
cli.add_command(list_handler, name='list')
cli.add_command(commits_handler, name='commits')

# Command groups
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
