"""Discord gateway session -- adapts ``discord.Client`` events for the router."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

import discord

from ..config.settings import Settings
from .types import IncomingMessage, IncomingReaction, MessageHandler, ReactionHandler

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 2000


class GatewayError(RuntimeError):
    """Raised when the gateway session cannot be constructed."""


def default_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.message_content = True
    intents.reactions = True
    return intents


class DiscordGateway(discord.Client):
    """A ``discord.Client`` that fans events out to registered handlers."""

    def __init__(self, token: str, *, intents: discord.Intents | None = None, **options: Any) -> None:
        super().__init__(intents=intents or default_intents(), **options)
        self._token = token
        self._message_handlers: list[MessageHandler] = []
        self._reaction_handlers: list[ReactionHandler] = []

    @property
    def bot_user_id(self) -> str:
        return str(self.user.id) if self.user else ""

    def add_message_handler(self, handler: MessageHandler) -> None:
        self._message_handlers.append(handler)

    def add_reaction_handler(self, handler: ReactionHandler) -> None:
        self._reaction_handlers.append(handler)

    async def on_ready(self) -> None:
        logger.info("[gateway] connected as %s (id=%s)", self.user, self.bot_user_id)

    async def on_message(self, message: discord.Message) -> None:
        event = to_incoming_message(message)
        await self._fan_out("message", [h(self, event) for h in self._message_handlers])

    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        event = to_incoming_reaction(payload)
        await self._fan_out("reaction", [h(self, event) for h in self._reaction_handlers])

    async def _fan_out(self, kind: str, calls: list[Awaitable[None]]) -> None:
        results = await asyncio.gather(*calls, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                logger.error("[gateway] %s handler failed: %s", kind, result, exc_info=result)

    async def send_reply(self, channel_id: str, text: str, reference_id: str) -> None:
        channel = self.get_channel(int(channel_id))
        if channel is None:
            channel = await self.fetch_channel(int(channel_id))
        reference = discord.MessageReference(
            message_id=int(reference_id),
            channel_id=int(channel_id),
            fail_if_not_exists=False,
        )
        for i, chunk in enumerate(split_message(text)):
            await channel.send(chunk, reference=reference if i == 0 else None)

    def run_forever(self) -> None:
        # log_handler=None keeps discord.py from replacing our logging setup.
        self.run(self._token, log_handler=None)


def create_gateway(settings: Settings) -> DiscordGateway:
    if not settings.discord_token:
        raise GatewayError("API_TOKEN is not set; cannot create Discord session")
    return DiscordGateway(settings.discord_token)


def to_incoming_message(message: discord.Message) -> IncomingMessage:
    return IncomingMessage(
        message_id=str(message.id),
        channel_id=str(message.channel.id),
        content=message.content or "",
        author_id=str(message.author.id),
        author_name=message.author.name,
        author_is_bot=message.author.bot,
        mention_ids=tuple(str(u.id) for u in message.mentions),
    )


def to_incoming_reaction(payload: discord.RawReactionActionEvent) -> IncomingReaction:
    return IncomingReaction(
        message_id=str(payload.message_id),
        channel_id=str(payload.channel_id),
        user_id=str(payload.user_id),
        emoji=str(payload.emoji),
    )


def split_message(text: str, max_len: int = MAX_MESSAGE_LENGTH) -> list[str]:
    if len(text) <= max_len:
        return [text]
    chunks: list[str] = []
    while text:
        if len(text) <= max_len:
            chunks.append(text)
            break
        split_at = text.rfind("\n", 0, max_len)
        if split_at < max_len // 2:
            split_at = text.rfind(" ", 0, max_len)
        if split_at < max_len // 2:
            split_at = max_len
        chunks.append(text[:split_at])
        text = text[split_at:].lstrip()
    return chunks
