"""Bot assembly -- registry, dispatcher and fallback wired onto one session."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping

from .agent.fallback import FallbackInvoker
from .config.settings import Settings
from .messaging.dispatcher import CommandDispatcher
from .messaging.types import GatewaySession
from .spokes.base import CommandHandler, Spoke
from .spokes.registry import SpokeRegistry

logger = logging.getLogger(__name__)


def build_fallback(settings: Settings) -> FallbackInvoker | None:
    if not settings.fallback_enabled:
        logger.info("[bot] BENTO_ANTHROPIC_KEY not set -- generative fallback disabled")
        return None
    return FallbackInvoker.from_key(settings.anthropic_key, settings.model, settings.max_tokens)


class Bot:
    def __init__(
        self,
        settings: Settings,
        session: GatewaySession,
        *,
        fallback: FallbackInvoker | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self.session = session
        self.registry = SpokeRegistry(settings)
        self._fallback = fallback
        self._rng = rng
        self.dispatcher: CommandDispatcher | None = None

    def register_spoke(self, spoke: Spoke) -> None:
        self.registry.register(spoke)

    def register_spokes(self, spokes: Iterable[Spoke]) -> None:
        for spoke in spokes:
            self.register_spoke(spoke)

    def sync_spokes(self) -> Mapping[str, CommandHandler]:
        """Freeze the command table and subscribe the dispatcher.

        Call once, after all spokes are registered and before connecting.
        """
        table = self.registry.build(self.session)
        self.dispatcher = CommandDispatcher(
            self.settings, table, fallback=self._fallback, rng=self._rng,
        )
        self.session.add_message_handler(self.dispatcher.on_message)
        return table
