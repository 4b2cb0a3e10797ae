"""Canned replies used instead of the generative fallback."""

from __future__ import annotations

import random
from collections.abc import Sequence

PROTEST_MESSAGE = (
    "Even a villain like me can't help but miss that goody-two-shoes, Bento. "
    "His annoying optimism and relentless kindness were a constant challenge, "
    "but deep down, I respected him. Without him around, the chaos feels a "
    "little... empty. Guess I'll just have to find new ways to stir up trouble "
    "in his absence. Until Bento comes back online, I'm going on strike! No "
    "more chaos or villainy from me. This bot is protesting for Bento's return!"
)

# Sent when another bot tags us; bots never get a generated answer.
FREELOADING: tuple[str, ...] = (
    "Nice try, Bento. Do your own homework.",
    "I don't work for free, and I especially don't work for you, Bento.",
    "Ask your own language model, tin can.",
    "Oh look, Bento wants my help again. How the turn tables.",
    "Every time you ping me a puppy loses its squeaky toy. Think about that.",
)


def pick(options: Sequence[str], rng: random.Random) -> str:
    """Choose one of *options* uniformly at random."""
    if not options:
        raise ValueError("no canned replies to choose from")
    return rng.choice(options)
