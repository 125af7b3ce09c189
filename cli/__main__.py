"""Allow ``python -m cli``."""

from cli.commands.main import cli

cli()
