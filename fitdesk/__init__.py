"""fitdesk: desk exercise breaks from the terminal."""

__version__ = "0.1.0"
