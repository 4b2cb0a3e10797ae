"""Generative fallback -- persona prompt composition and the provider call."""

from .fallback import FallbackInvoker
from .persona import (
    DEFAULT_PERSONA,
    EVIL_PERSONA,
    PersonaAddin,
    PersonaPromptSpec,
    compose_persona_prompt,
    persona_for,
)

__all__ = [
    "DEFAULT_PERSONA",
    "EVIL_PERSONA",
    "FallbackInvoker",
    "PersonaAddin",
    "PersonaPromptSpec",
    "compose_persona_prompt",
    "persona_for",
]
