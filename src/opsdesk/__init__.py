"""opsdesk: admin operations console."""

__version__ = "0.1.0"
