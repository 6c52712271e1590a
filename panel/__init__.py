"""Control panel for a GitHub Codespace and the application it hosts."""

__version__ = "0.1.0"
