"""Console entry point for ``bento``.

Loads settings, registers the built-in spokes, builds the command table and
runs the Discord gateway until interrupted.

Usage::

    bento
    bento --env-file /etc/bento/.env
    bento --list-commands
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.table import Table

from bento.runtime.bot import Bot, build_fallback
from bento.runtime.config.settings import ConfigError, Settings, load_settings
from bento.runtime.messaging.gateway import GatewayError, create_gateway
from bento.runtime.spokes.builtin import default_spokes
from bento.runtime.spokes.registry import HELP_COMMAND, SpokeRegistry, help_text

logger = logging.getLogger(__name__)
console = Console()

_NOISY_LOGGERS = ("discord", "anthropic", "httpx")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bento",
        description="Run the Bento Discord bot.",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Path to a .env file (default: DOTENV_PATH or ./.env).",
    )
    parser.add_argument(
        "--list-commands",
        action="store_true",
        default=False,
        help="Print the merged command list and exit without connecting.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log discord.py and HTTP client internals at INFO.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )
    if not verbose:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _print_settings(settings: Settings) -> None:
    table = Table(title="bento settings", show_header=False)
    for key, value in settings.redacted().items():
        table.add_row(key, value)
    console.print(table)


def _list_commands(settings: Settings) -> int:
    registry = SpokeRegistry(settings)
    for spoke in default_spokes():
        registry.register(spoke)
    merged = registry.merge_commands()
    merged.pop(HELP_COMMAND, None)
    # Same text the help command replies with.
    console.print(help_text(list(merged), settings), markup=False)
    return 0


def _run(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(dotenv=args.env_file)
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        return 2

    if args.list_commands:
        return _list_commands(settings)

    _print_settings(settings)

    try:
        gateway = create_gateway(settings)
    except GatewayError as exc:
        logger.error("[cli] error creating Discord session: %s", exc)
        console.print(f"[red]Error:[/red] {exc}")
        return 1

    bot = Bot(settings, gateway, fallback=build_fallback(settings))
    bot.register_spokes(default_spokes())
    table = bot.sync_spokes()
    logger.info("[cli] commands: %s", ", ".join(table))

    gateway.run_forever()
    return 0


def main() -> None:
    """CLI entry point for ``bento``."""
    args = _build_parser().parse_args()
    _configure_logging(args.verbose)

    try:
        code = _run(args)
    except KeyboardInterrupt:
        code = 130

    sys.exit(code)


if __name__ == "__main__":
    main()
