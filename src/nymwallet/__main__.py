"""Allow ``python -m nymwallet``."""

from nymwallet.cli import cli

cli()
