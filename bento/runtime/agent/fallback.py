"""Generative fallback -- one Anthropic Messages call per tagged query."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import anthropic

logger = logging.getLogger(__name__)

ReplyFn = Callable[[str], Awaitable[None]]


class FallbackInvoker:
    """Sends the composed persona prompt plus the user's text to the provider.

    Failures never reach the chat: provider and send errors are logged and
    :meth:`invoke` returns ``False``.
    """

    def __init__(self, client: anthropic.AsyncAnthropic, model: str, max_tokens: int) -> None:
        self._client = client
        self.model = model
        self.max_tokens = max_tokens

    @classmethod
    def from_key(cls, api_key: str, model: str, max_tokens: int) -> FallbackInvoker:
        # One request per query: the SDK would otherwise retry 5xx and overloads.
        return cls(anthropic.AsyncAnthropic(api_key=api_key, max_retries=0), model, max_tokens)

    async def invoke(self, system_prompt: str, text: str, reply: ReplyFn) -> bool:
        try:
            resp = await self._client.messages.create(
                model=self.model,
                system=system_prompt,
                messages=[{"role": "user", "content": text}],
                max_tokens=self.max_tokens,
            )
        except anthropic.APIError as exc:
            logger.error("[fallback] error calling LLM: %s", exc)
            return False

        answer = first_text(resp)
        if not answer:
            logger.warning("[fallback] LLM returned no text (model=%s)", self.model)
            return False

        try:
            await reply(answer)
        except Exception as exc:
            logger.error("[fallback] sending llm reply failed: %s", exc)
            return False
        return True


def first_text(resp: Any) -> str | None:
    for block in getattr(resp, "content", None) or []:
        if getattr(block, "type", None) == "text":
            return block.text
    return None
