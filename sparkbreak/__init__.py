"""Spark Break: a ball-launching block breaker."""

__version__ = "0.1.0"
