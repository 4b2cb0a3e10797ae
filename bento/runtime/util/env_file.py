"""Layered key lookup: a ``.env`` file over the process environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

DEFAULT_DOTENV = ".env"


class LayeredEnv:
    """Resolves configuration keys from a ``.env`` file, then *environ*.

    The file is parsed once with python-dotenv. Keys it sets (non-empty)
    shadow the environment. When *dotenv* is not given, the path comes
    from ``DOTENV_PATH`` in *environ*, else ``./.env``. A missing file is
    not an error.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        dotenv: str | Path | None = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        if dotenv is None:
            dotenv = self._environ.get("DOTENV_PATH") or DEFAULT_DOTENV
        self.path = Path(dotenv)
        self._file = _read_dotenv(self.path)

    @property
    def file_values(self) -> dict[str, str]:
        return dict(self._file)

    def get(self, key: str) -> str:
        """Return the value for *key*, or ``""`` if neither layer sets it."""
        return self._file.get(key) or self._environ.get(key, "")


def _read_dotenv(path: Path) -> dict[str, str]:
    if not path.is_file():
        logger.debug("[config] no env file at %s", path)
        return {}
    # Bare keys without "=" parse to None.
    values = dotenv_values(path, interpolate=False)
    return {k: v for k, v in values.items() if v is not None}
