"""Bank statement transaction parsing toolkit."""

__version__ = "0.1.0"
