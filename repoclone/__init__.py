"""Cached, strategy-driven acquisition of git repositories."""

__version__ = "0.1.0"
