"""Allow ``python -m vendorsync``."""

from .main import cli

cli()
