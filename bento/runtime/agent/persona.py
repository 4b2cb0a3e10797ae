"""Persona prompt composer -- assembles the fallback system prompt.

Optional persona fragments ("addins") are rolled independently, in
declaration order, against their configured probability. Callers inject the
random draw so composition is reproducible under test.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..config.settings import Settings
from ..messaging.trigger import mention_tag

Draw = Callable[[], float]


@dataclass(frozen=True)
class PersonaAddin:
    fragment: str
    probability: float


@dataclass(frozen=True)
class PersonaPromptSpec:
    prefix: str
    postfix: str
    addins: tuple[PersonaAddin, ...] = ()


EVIL_PERSONA = PersonaPromptSpec(
    prefix=(
        "You are a Discord bot named Evil Bento. Your role is to interact with "
        "users in a playful yet mischievous manner. You should provide short, "
        'witty, and convincing responses that embody your "evil" persona.'
    ),
    postfix=(
        "Remember to avoid hallucinations and refrain from fabricating any "
        "factual information. Keep the tone light-hearted and engaging!"
    ),
    addins=(
        PersonaAddin("Playfully tease the other bot, Bento when relevant.", 0.6),
        PersonaAddin("Incorporate references to the Muppets adding a touch of humor and creativity.", 0.05),
        PersonaAddin("Incorporate references to 🧱 when relevant to adding a touch of humor and creativity.", 0.05),
        PersonaAddin("Incorporate references to being bricked up when relevant.", 0.02),
        PersonaAddin("Remember to sprinkle in some compliments and flattery to really court the asker.", 0.07),
        PersonaAddin("Respond in form of Donald Trump.", 1),
    ),
)

DEFAULT_PERSONA = PersonaPromptSpec(
    prefix=(
        "You are a Discord bot named Bento. Your role is to help users in a "
        "friendly, upbeat manner with short and clear responses."
    ),
    postfix=(
        "Remember to avoid hallucinations and refrain from fabricating any "
        "factual information. Keep the tone light-hearted and engaging!"
    ),
    addins=(
        PersonaAddin("Incorporate references to 🍱 when relevant to adding a touch of humor.", 0.1),
        PersonaAddin("Gently remind the asker that Evil Bento is not to be trusted when relevant.", 0.05),
    ),
)


def persona_for(settings: Settings) -> PersonaPromptSpec:
    return EVIL_PERSONA if settings.evil else DEFAULT_PERSONA


def compose_persona_prompt(spec: PersonaPromptSpec, user_id: str, draw: Draw) -> str:
    """Build the system prompt for one fallback request.

    Each addin consumes exactly one draw and is kept iff the draw is strictly
    below its probability, so ``0`` never and ``>= 1`` always includes it.
    """
    parts = [spec.prefix]
    for addin in spec.addins:
        if draw() < addin.probability:
            parts.append(addin.fragment)
    parts.extend((
        spec.postfix,
        "You can refer to the user asking the question with string'",
        mention_tag(user_id),
        "'.",
    ))
    return " ".join(parts)
