import click
from vertag.cli_utils import handle_errors
from vertag.config import get_config_path, get_default_config, load_config, save_config
import json
import os


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("init")
@click.option("--format", "fmt", type=click.Choice(["json", "toml", "yaml"]), default="json",
              help="File format to write (default: json)")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@handle_errors
def init_config(fmt, force):
    """Write the default configuration to ~/.vertag/."""
    config_path = os.path.expanduser(f"~/.vertag/config.{fmt}")
    if os.path.exists(config_path) and not force:
        click.echo(f"Configuration already exists at {config_path} (use --force to overwrite)", err=True)
        return
    written = save_config(get_default_config(), config_path)
    click.echo(str(written))


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
def show_config(pretty):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON (JSONL format).
    Use --pretty for human-readable formatted output.
    """
    config = load_config()

    if pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config, ensure_ascii=False))


@config_cmd.command("path")
def show_path():
    """Show the config file path being used."""
    print(json.dumps({"config_path": str(get_config_path())}))
