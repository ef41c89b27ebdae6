"""Client de bureau NewsDesk."""

__version__ = "0.1.0"
