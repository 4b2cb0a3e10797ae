"""Platform-neutral event records and the gateway session contract."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class IncomingMessage:
    message_id: str
    channel_id: str
    content: str
    author_id: str
    author_name: str = ""
    author_is_bot: bool = False
    mention_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class IncomingReaction:
    message_id: str
    channel_id: str
    user_id: str
    emoji: str


class GatewaySession(Protocol):
    """What the router needs from a live chat connection."""

    @property
    def bot_user_id(self) -> str: ...

    def add_message_handler(self, handler: MessageHandler) -> None: ...

    def add_reaction_handler(self, handler: ReactionHandler) -> None: ...

    async def send_reply(self, channel_id: str, text: str, reference_id: str) -> None: ...


MessageHandler = Callable[[GatewaySession, IncomingMessage], Awaitable[None]]
ReactionHandler = Callable[[GatewaySession, IncomingReaction], Awaitable[None]]
