"""Run external shell scripts as editor text and file actions."""

__version__ = "0.1.0"
