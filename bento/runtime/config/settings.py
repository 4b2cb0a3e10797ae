"""Bot settings -- reads from ``.env`` file and environment, once, at startup."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ..util.env_file import LayeredEnv

DEFAULT_BOT_NAME = "Bento"
DEFAULT_PREFIX = "."
DEFAULT_MODEL = "claude-3-haiku-20240307"
DEFAULT_MAX_TOKENS = 300

_TRUE_VALUES = frozenset({"1", "t", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "f", "false", "no", "off"})


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    bot_name: str = DEFAULT_BOT_NAME
    prefix: str = DEFAULT_PREFIX
    evil: bool = False
    protesting: bool = False
    anthropic_key: str = ""
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    discord_token: str = ""

    @property
    def fallback_enabled(self) -> bool:
        return bool(self.anthropic_key)

    def redacted(self) -> dict[str, str]:
        """Return a display-safe view of the settings for startup logs."""
        return {
            "bot_name": self.bot_name,
            "prefix": self.prefix,
            "evil": str(self.evil).lower(),
            "protesting": str(self.protesting).lower(),
            "model": self.model,
            "max_tokens": str(self.max_tokens),
            "anthropic_key": _mask(self.anthropic_key),
            "discord_token": _mask(self.discord_token),
        }


def parse_bool(key: str, raw: str, default: bool) -> bool:
    if not raw:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"failed to parse bool from {raw!r} for {key}")


def parse_positive_int(key: str, raw: str, default: int) -> int:
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"failed to parse int from {raw!r} for {key}") from exc
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def load_settings(
    environ: Mapping[str, str] | None = None,
    dotenv: str | Path | None = None,
) -> Settings:
    """Resolve :class:`Settings` from a ``.env`` file and the environment.

    Values in the ``.env`` file take precedence; keys it does not set fall
    back to *environ* (``os.environ`` by default). Malformed booleans or
    integers raise :class:`ConfigError`.
    """
    e = LayeredEnv(environ, dotenv).get

    return Settings(
        bot_name=e("BENTO_NAME") or DEFAULT_BOT_NAME,
        prefix=e("BENTO_PREFIX") or DEFAULT_PREFIX,
        evil=parse_bool("BENTO_EVIL", e("BENTO_EVIL"), False),
        protesting=parse_bool("BENTO_PROTESTING", e("BENTO_PROTESTING"), False),
        anthropic_key=e("BENTO_ANTHROPIC_KEY"),
        model=e("BENTO_MODEL") or DEFAULT_MODEL,
        max_tokens=parse_positive_int("BENTO_MAX_TOKENS", e("BENTO_MAX_TOKENS"), DEFAULT_MAX_TOKENS),
        discord_token=e("API_TOKEN"),
    )


def _mask(secret: str) -> str:
    if not secret:
        return "not set"
    if len(secret) <= 12:
        return "***"
    return secret[:4] + "..." + secret[-4:]
