"""Spoke contracts -- command tables and optional raw-event capabilities.

Every spoke provides a command table. Raw gateway events are opt-in: a
spoke that also subclasses :class:`HandlesMessageCreate` or
:class:`HandlesMessageReaction` is subscribed to that event stream when the
registry is built.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..config.settings import Settings
from ..messaging.types import GatewaySession, IncomingMessage, IncomingReaction


@dataclass
class CommandContext:
    message: IncomingMessage
    session: GatewaySession
    settings: Settings

    async def reply(self, text: str) -> None:
        await self.session.send_reply(self.message.channel_id, text, self.message.message_id)


CommandHandler = Callable[[CommandContext], Awaitable[None]]
CommandTable = dict[str, CommandHandler]


class Spoke(ABC):
    @abstractmethod
    def commands(self) -> CommandTable: ...


class HandlesMessageCreate(ABC):
    @abstractmethod
    async def on_message_create(self, session: GatewaySession, message: IncomingMessage) -> None: ...


class HandlesMessageReaction(ABC):
    @abstractmethod
    async def on_message_reaction(self, session: GatewaySession, reaction: IncomingReaction) -> None: ...
