"""Config CLI commands for Option Calc.

- settings.json: machine-specific settings (grant path, HTTP timeout)
- grant.yaml: the option grant being tracked
"""

import json
import os
from pathlib import Path

import click
import yaml

from optcalc.sdk import (
    # Settings (machine-specific)
    get_config_dir,
    get_settings_path,
    load_settings,
    set_setting,
    get_http_timeout,
    # Grant file
    get_grant_path,
    load_grant_file,
    save_grant_file,
    load_grant_config,
    DEFAULT_GRANT,
)

from .errors import user_errors


@click.group()
def config():
    """Manage settings (settings.json) and the grant file (grant.yaml).

    Settings include:
    - grant: path to your grant.yaml (set with 'config set-grant')
    - http_timeout_sec: per-request timeout for quote lookups
    """
    pass


@config.command("path")
def config_path():
    """Show configuration paths and active grant file location."""
    with user_errors("config path"):
        config_dir = get_config_dir()
        settings_path = get_settings_path()
        grant_path = get_grant_path()

    click.echo("Configuration paths:")
    click.echo()

    click.echo(f"  Config directory: {config_dir}")
    if os.environ.get("OPTION_CALC_CONFIG_PATH"):
        click.echo(f"    (from OPTION_CALC_CONFIG_PATH)")
    else:
        click.echo(f"    (XDG default)")

    if settings_path.exists():
        click.echo(f"  Settings file:    {settings_path} [exists]")
    else:
        click.echo(f"  Settings file:    {settings_path} [not found]")

    if grant_path.exists():
        click.echo(f"  Grant file:       {grant_path} [exists]")
    else:
        click.echo(f"  Grant file:       {grant_path} [not found]")


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing grant file.")
def config_init(force):
    """Create a starter grant.yaml in the config directory."""
    with user_errors("config init"):
        path = get_grant_path()

        if path.exists() and not force:
            raise click.ClickException(f"Grant file already exists: {path}\nUse --force to overwrite.")

        save_grant_file(DEFAULT_GRANT, path)

    click.echo(f"Created grant file: {path}")
    click.echo("Edit it with your grant terms, then run: option-calc show")


@config.command("show")
def config_show():
    """Show current settings and the validated grant."""
    with user_errors("config show"):
        settings_path = get_settings_path()
        settings = load_settings()
        data = load_grant_file()
        load_grant_config()
        grant_path = get_grant_path()

    if settings:
        click.echo(f"# Settings: {settings_path}")
        click.echo(json.dumps(settings, indent=2))
    else:
        click.echo(f"# No settings configured yet")
        click.echo(f"# Settings file: {settings_path}")
    click.echo()

    click.echo(f"# Grant: {grant_path}")
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip())


@config.command("set-grant")
@click.argument("grant_path", type=click.Path())
def config_set_grant(grant_path):
    """Set the path to your grant.yaml.

    Example:
        option-calc config set-grant ~/repos/my-config/grant.yaml
    """
    path = Path(grant_path).expanduser().resolve()

    if not path.exists():
        click.echo(f"Warning: Grant file does not exist yet: {path}", err=True)
        click.echo("The path will be saved, but you'll need to create the file.", err=True)
        click.echo()

    with user_errors("config set-grant"):
        settings_file = set_setting("grant", str(path))

    click.echo(f"Grant path set to: {path}")
    click.echo(f"Saved to: {settings_file}")


@config.command("timeout")
@click.argument("seconds", required=False, type=click.FloatRange(min=0, min_open=True))
def config_timeout(seconds):
    """Show or set the quote request timeout (http_timeout_sec).

    \b
    Examples:
      option-calc config timeout        # Show current value
      option-calc config timeout 3.5    # Set to 3.5 seconds
    """
    with user_errors("config timeout"):
        if seconds is None:
            click.echo(get_http_timeout())
            return

        settings_file = set_setting("http_timeout_sec", seconds)

    click.echo(f"Set http_timeout_sec = {seconds}")
    click.echo(f"Saved to: {settings_file}")
