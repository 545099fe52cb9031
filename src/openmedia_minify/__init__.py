"""OpenMedia as-run log minifier."""

__version__ = "0.1.0"
