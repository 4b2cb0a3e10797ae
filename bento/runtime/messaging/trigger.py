"""Trigger resolution -- prefixed command, bot mention, or neither."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class TriggerResult:
    token: str = ""
    tagged: bool = False


NOT_A_TRIGGER = TriggerResult()


def mention_tag(user_id: str) -> str:
    return f"<@{user_id}>"


def _mention_forms(user_id: str) -> tuple[str, str]:
    # Discord renders nickname mentions as <@!id>.
    return f"<@!{user_id}>", mention_tag(user_id)


def strip_bot_mentions(text: str, bot_id: str) -> str:
    for form in _mention_forms(bot_id):
        text = text.replace(form, "")
    return text


def humanize_bot_mentions(text: str, bot_id: str, bot_name: str) -> str:
    """Replace the bot's mention tokens with ``@<bot name>``."""
    for form in _mention_forms(bot_id):
        text = text.replace(form, f"@{bot_name}")
    return text


def _first_field(text: str) -> str:
    fields = text.split()
    return fields[0] if fields else ""


def resolve_trigger(
    text: str,
    mention_ids: Iterable[str],
    bot_id: str,
    prefix: str,
) -> TriggerResult:
    """Classify *text* as a prefixed command, a bot mention, or neither.

    The prefix form wins when a message both starts with the prefix and
    mentions the bot. A mention with nothing else in the message yields an
    empty token with ``tagged`` still set.
    """
    if prefix and text.startswith(prefix):
        return TriggerResult(_first_field(text).removeprefix(prefix), False)

    if bot_id and bot_id in mention_ids:
        return TriggerResult(_first_field(strip_bot_mentions(text, bot_id)), True)

    return NOT_A_TRIGGER
