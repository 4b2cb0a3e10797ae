"""Command dispatcher -- routes each inbound message to a handler or fallback.

Per message, exactly one terminal outcome is reached:

    received -> ignored
             -> protest_short_circuit   (tagged + protest mode)
             -> command_handled         (token found in the command table)
             -> fallback_canned         (tagged by another bot)
             -> fallback_generated      (tagged, provider replied)
             -> fallback_suppressed     (tagged, provider or send failed)
"""

from __future__ import annotations

import enum
import logging
import random
from collections.abc import Mapping, Sequence

from ..agent.fallback import FallbackInvoker
from ..agent.persona import PersonaPromptSpec, compose_persona_prompt, persona_for
from ..config.settings import Settings
from ..spokes.base import CommandContext, CommandHandler
from . import canned
from .trigger import humanize_bot_mentions, resolve_trigger
from .types import GatewaySession, IncomingMessage

logger = logging.getLogger(__name__)


class DispatchOutcome(enum.Enum):
    ignored = "ignored"
    command_handled = "command_handled"
    protest_short_circuit = "protest_short_circuit"
    fallback_canned = "fallback_canned"
    fallback_generated = "fallback_generated"
    fallback_suppressed = "fallback_suppressed"


class CommandDispatcher:
    def __init__(
        self,
        settings: Settings,
        table: Mapping[str, CommandHandler],
        *,
        fallback: FallbackInvoker | None = None,
        persona: PersonaPromptSpec | None = None,
        canned_replies: Sequence[str] = canned.FREELOADING,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._table = table
        self._fallback = fallback
        self._persona = persona or persona_for(settings)
        self._canned_replies = canned_replies
        self._rng = rng or random.Random()

    async def on_message(self, session: GatewaySession, message: IncomingMessage) -> None:
        await self.handle(session, message)

    async def handle(self, session: GatewaySession, message: IncomingMessage) -> DispatchOutcome:
        bot_id = session.bot_user_id
        if message.author_id == bot_id:
            return DispatchOutcome.ignored

        trigger = resolve_trigger(
            message.content, message.mention_ids, bot_id, self._settings.prefix,
        )
        ctx = CommandContext(message=message, session=session, settings=self._settings)

        if trigger.tagged and self._settings.protesting:
            await _safe_reply(ctx, canned.PROTEST_MESSAGE)
            return DispatchOutcome.protest_short_circuit

        handler = self._table.get(trigger.token) if trigger.token else None
        if handler is not None:
            logger.info(
                "[dispatch] command=%r user=%s channel=%s",
                trigger.token, message.author_name or message.author_id, message.channel_id,
            )
            try:
                await handler(ctx)
            except Exception:
                logger.exception("[dispatch] command %r failed", trigger.token)
            return DispatchOutcome.command_handled

        if not trigger.tagged or self._fallback is None:
            return DispatchOutcome.ignored

        if message.author_is_bot:
            await _safe_reply(ctx, canned.pick(self._canned_replies, self._rng))
            return DispatchOutcome.fallback_canned

        return await self._generate(ctx, bot_id)

    async def _generate(self, ctx: CommandContext, bot_id: str) -> DispatchOutcome:
        assert self._fallback is not None
        message = ctx.message
        text = humanize_bot_mentions(message.content, bot_id, self._settings.bot_name)
        system = compose_persona_prompt(self._persona, message.author_id, self._rng.random)

        logger.info(
            "[dispatch] sending to LLM user=%s system=%r msg=%r",
            message.author_name or message.author_id, system, text,
        )
        if await self._fallback.invoke(system, text, ctx.reply):
            return DispatchOutcome.fallback_generated
        return DispatchOutcome.fallback_suppressed


async def _safe_reply(ctx: CommandContext, text: str) -> None:
    try:
        await ctx.reply(text)
    except Exception as exc:
        logger.error("[dispatch] failed to send reply: %s", exc)
