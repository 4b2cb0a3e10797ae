"""Built-in spokes shipped with the bot."""

from __future__ import annotations

import random

from ..messaging import canned
from ..messaging.types import GatewaySession, IncomingMessage, IncomingReaction
from .base import (
    CommandContext,
    CommandTable,
    HandlesMessageCreate,
    HandlesMessageReaction,
    Spoke,
)

BRICK = "🧱"

BRICK_QUIPS: tuple[str, ...] = (
    f"{BRICK} bricked up and ready.",
    f"One {BRICK} at a time.",
    f"{BRICK}{BRICK}{BRICK} the wall grows.",
    f"You called? {BRICK}",
)


class CoreSpoke(Spoke):
    def commands(self) -> CommandTable:
        return {
            "ping": self._ping,
            "about": self._about,
        }

    async def _ping(self, ctx: CommandContext) -> None:
        await ctx.reply("pong")

    async def _about(self, ctx: CommandContext) -> None:
        s = ctx.settings
        mode = "evil" if s.evil else "friendly"
        llm = s.model if s.fallback_enabled else "off"
        await ctx.reply(
            f"{s.bot_name} ({mode} mode). Prefix: `{s.prefix}`. "
            f"Tag me to chat (LLM: {llm})."
        )


class BrickSpoke(Spoke, HandlesMessageCreate, HandlesMessageReaction):
    """Answers brick talk and brick reactions with more bricks."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def commands(self) -> CommandTable:
        return {"brick": self._brick}

    async def _brick(self, ctx: CommandContext) -> None:
        await ctx.reply(canned.pick(BRICK_QUIPS, self._rng))

    async def on_message_create(self, session: GatewaySession, message: IncomingMessage) -> None:
        if message.author_is_bot or message.author_id == session.bot_user_id:
            return
        if "bricked up" in message.content.lower():
            await session.send_reply(message.channel_id, BRICK, message.message_id)

    async def on_message_reaction(self, session: GatewaySession, reaction: IncomingReaction) -> None:
        if reaction.user_id == session.bot_user_id or reaction.emoji != BRICK:
            return
        await session.send_reply(reaction.channel_id, canned.pick(BRICK_QUIPS, self._rng), reaction.message_id)


def default_spokes() -> list[Spoke]:
    return [CoreSpoke(), BrickSpoke()]
