"""API key commands."""

import rich_click as click

from ..auth import SOURCE_ENV, CredentialState
from ..config import get_key_store_path, load_settings
from ._console import console, status_icon
from ._helpers import mask_key


def _credentials() -> CredentialState:
    return CredentialState.from_environment(key_name=load_settings().llm.api_key_env)


@click.group()
def key():
    """Manage the Fireworks API key."""
    pass


@key.command("set")
@click.argument("value", required=False)
def key_set(value: str | None):
    """Store a user API key (prompted for when omitted)."""
    if value is None:
        value = click.prompt("Fireworks API key", hide_input=True, default="", show_default=False)
    credentials = _credentials()
    if not credentials.save_user_key(value):
        raise click.UsageError("API key must not be empty")
    console.print(f"{status_icon(True)} Saved API key to {get_key_store_path()}")
    if credentials.env_key:
        console.print("[yellow]Note: the environment key still takes precedence at startup.[/yellow]")


@key.command("clear")
def key_clear():
    """Remove the stored user API key."""
    _credentials().clear_user_key()
    console.print(f"{status_icon(True)} Removed stored API key")


@key.command("status")
def key_status():
    """Show which API key would be used."""
    credentials = _credentials()
    if not credentials.active_key:
        console.print(f"{status_icon(False)} No API key configured")
        return
    source = "environment" if credentials.source == SOURCE_ENV else "stored user key"
    console.print(f"{status_icon(True)} Using {source} ({mask_key(credentials.active_key)})")
