"""CLI entry point for tweetsum."""

import rich_click as click

from .. import __version__

# Import command modules; avoid shadowing module names with command objects
# so that `import tweetsum.cli.<module>` still resolves to the module.
from . import config_cmd as _config_mod
from . import key as _key_mod
from . import parse as _parse_mod
from . import summarize as _summarize_mod
from . import web as _web_mod
from ._helpers import configure_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool):
    """Summarize X/Twitter posts with Sentient Dobby."""
    configure_logging(verbose)


# Register commands
cli.add_command(_summarize_mod.summarize)
cli.add_command(_parse_mod.parse)
cli.add_command(_key_mod.key)
cli.add_command(_config_mod.config)
cli.add_command(_web_mod.web)


if __name__ == "__main__":
    cli()
