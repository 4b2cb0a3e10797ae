"""Shared utilities."""

from .env_file import LayeredEnv

__all__ = ["LayeredEnv"]
