"""Config commands."""

import json

import rich_click as click
from pydantic import ValidationError
from rich.syntax import Syntax

from ..config import get_config_path, load_config, save_config
from ..models.config import TweetsumConfig
from ._console import console, status_icon


@click.group()
def config():
    """Manage configuration."""
    pass


@config.command("show")
def config_show():
    """Show the merged configuration."""
    syntax = Syntax(json.dumps(load_config(), indent=2), "json", theme="monokai")
    console.print(syntax)


@config.command("path")
def config_path():
    """Show configuration file path."""
    console.print(str(get_config_path()))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set a configuration value (e.g., reveal.interval_seconds 0.02).

    The result is validated before it is written; unknown sections and
    values of the wrong type are rejected.
    """
    cfg = load_config()

    section, _, field = key.partition(".")
    if not field or "." in field or not isinstance(cfg.get(section), dict):
        raise click.BadParameter(f"expected <section>.<field>, one of: {', '.join(cfg)}", param_hint="KEY")

    # JSON literals (numbers, booleans, null) first, plain string otherwise
    try:
        parsed_value = json.loads(value)
    except json.JSONDecodeError:
        parsed_value = value
    cfg[section][field] = parsed_value

    try:
        settings = TweetsumConfig.model_validate(cfg)
    except ValidationError as exc:
        raise click.BadParameter(exc.errors()[0]["msg"], param_hint="VALUE") from exc

    save_config(cfg)
    console.print(f"{status_icon(True)} Set {key} = {getattr(getattr(settings, section), field, parsed_value)}")
