"""Shared pytest fixtures for bento.runtime tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bento.runtime.config.settings import Settings
from bento.runtime.messaging.types import IncomingMessage

BOT_ID = "999"

_BENTO_ENV_KEYS = (
    "BENTO_NAME",
    "BENTO_PREFIX",
    "BENTO_EVIL",
    "BENTO_PROTESTING",
    "BENTO_ANTHROPIC_KEY",
    "BENTO_MODEL",
    "BENTO_MAX_TOKENS",
    "API_TOKEN",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in _BENTO_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    dotenv = tmp_path / ".env"
    monkeypatch.setenv("DOTENV_PATH", str(dotenv))
    return dotenv


@pytest.fixture()
def dotenv_path(_isolate_env: Path) -> Path:
    return _isolate_env


class FakeSession:
    def __init__(self, bot_user_id: str = BOT_ID) -> None:
        self._bot_user_id = bot_user_id
        self.message_handlers: list = []
        self.reaction_handlers: list = []
        self.replies: list[tuple[str, str, str]] = []

    @property
    def bot_user_id(self) -> str:
        return self._bot_user_id

    def add_message_handler(self, handler) -> None:
        self.message_handlers.append(handler)

    def add_reaction_handler(self, handler) -> None:
        self.reaction_handlers.append(handler)

    async def send_reply(self, channel_id: str, text: str, reference_id: str) -> None:
        self.replies.append((channel_id, text, reference_id))

    @property
    def reply_texts(self) -> list[str]:
        return [text for _, text, _ in self.replies]


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def settings() -> Settings:
    return Settings(anthropic_key="sk-test", discord_token="token")


@pytest.fixture()
def make_message():
    def _make(
        content: str,
        *,
        author_id: str = "42",
        author_is_bot: bool = False,
        mentions: tuple[str, ...] = (),
    ) -> IncomingMessage:
        return IncomingMessage(
            message_id="m1",
            channel_id="c1",
            content=content,
            author_id=author_id,
            author_name="alice",
            author_is_bot=author_is_bot,
            mention_ids=mentions,
        )

    return _make
