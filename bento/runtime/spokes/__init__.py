"""Spokes -- pluggable command tables and raw event handlers."""

from .base import (
    CommandContext,
    CommandHandler,
    CommandTable,
    HandlesMessageCreate,
    HandlesMessageReaction,
    Spoke,
)
from .builtin import BrickSpoke, CoreSpoke, default_spokes
from .registry import RegistryError, SpokeRegistry

__all__ = [
    "BrickSpoke",
    "CommandContext",
    "CommandHandler",
    "CommandTable",
    "CoreSpoke",
    "HandlesMessageCreate",
    "HandlesMessageReaction",
    "RegistryError",
    "Spoke",
    "SpokeRegistry",
    "default_spokes",
]
