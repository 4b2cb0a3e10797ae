"""Spoke registry -- merges command tables and wires raw event handlers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..config.settings import Settings
from ..messaging.types import GatewaySession
from .base import (
    CommandContext,
    CommandHandler,
    CommandTable,
    HandlesMessageCreate,
    HandlesMessageReaction,
    Spoke,
)

logger = logging.getLogger(__name__)

HELP_COMMAND = "help"


class RegistryError(RuntimeError):
    """Raised when the registry is used outside its build-once lifecycle."""


class SpokeRegistry:
    """Collects spokes during startup and freezes them into one table."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._spokes: list[Spoke] = []
        self._table: Mapping[str, CommandHandler] | None = None

    @property
    def spokes(self) -> tuple[Spoke, ...]:
        return tuple(self._spokes)

    @property
    def built(self) -> bool:
        return self._table is not None

    @property
    def table(self) -> Mapping[str, CommandHandler]:
        if self._table is None:
            raise RegistryError("registry has not been built")
        return self._table

    def register(self, spoke: Spoke) -> None:
        if self._table is not None:
            raise RegistryError("cannot register spokes after build()")
        self._spokes.append(spoke)

    def merge_commands(self) -> CommandTable:
        """Merge every spoke's table; later registrations win on collision."""
        merged: CommandTable = {}
        for spoke in self._spokes:
            for name, handler in spoke.commands().items():
                if name in merged:
                    logger.info(
                        "[registry] %s overrides command %r",
                        type(spoke).__name__, name,
                    )
                merged[name] = handler
        return merged

    def build(self, session: GatewaySession) -> Mapping[str, CommandHandler]:
        """Wire raw-event spokes into *session* and freeze the command table.

        Must run exactly once, after every :meth:`register` call and before
        the gateway connects.
        """
        if self._table is not None:
            raise RegistryError("build() may only be called once")

        for spoke in self._spokes:
            if isinstance(spoke, HandlesMessageCreate):
                session.add_message_handler(spoke.on_message_create)
            if isinstance(spoke, HandlesMessageReaction):
                session.add_reaction_handler(spoke.on_message_reaction)

        merged = self.merge_commands()
        merged.pop(HELP_COMMAND, None)
        merged[HELP_COMMAND] = help_response(merged, self._settings)

        self._table = MappingProxyType(merged)
        logger.info(
            "[registry] built %d commands from %d spokes",
            len(self._table), len(self._spokes),
        )
        return self._table


def help_text(command_names: Iterable[str], settings: Settings) -> str:
    lines = [f"- {settings.prefix}{name}" for name in command_names]
    return f":grimacepeeking: {settings.bot_name} commands:\n" + "\n".join(lines)


def help_response(commands: Mapping[str, CommandHandler], settings: Settings) -> CommandHandler:
    text = help_text(list(commands), settings)

    async def _help(ctx: CommandContext) -> None:
        await ctx.reply(text)

    return _help
