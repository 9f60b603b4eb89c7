"""dwnotes — daily and weekly note generator for Markdown vaults."""

__version__ = "0.1.0"
