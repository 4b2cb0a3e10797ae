"""Tests for SpokeRegistry -- merge order, capability wiring, help."""

from __future__ import annotations

import pytest

from bento.runtime.config.settings import Settings
from bento.runtime.spokes.base import (
    CommandContext,
    CommandTable,
    HandlesMessageCreate,
    HandlesMessageReaction,
    Spoke,
)
from bento.runtime.spokes.registry import RegistryError, SpokeRegistry, help_text


async def _noop(ctx: CommandContext) -> None:
    return None


class TableSpoke(Spoke):
    def __init__(self, table: CommandTable) -> None:
        self._table = table

    def commands(self) -> CommandTable:
        return self._table


class ListeningSpoke(Spoke, HandlesMessageCreate):
    def commands(self) -> CommandTable:
        return {}

    async def on_message_create(self, session, message) -> None:
        return None


class ReactingSpoke(Spoke, HandlesMessageReaction):
    def commands(self) -> CommandTable:
        return {}

    async def on_message_reaction(self, session, reaction) -> None:
        return None


class DuckSpoke(Spoke):
    """Has handler-shaped methods but does not declare the capabilities."""

    def commands(self) -> CommandTable:
        return {}

    async def on_message_create(self, session, message) -> None:
        return None

    async def on_message_reaction(self, session, reaction) -> None:
        return None


class TestMerge:
    def test_later_spoke_wins_on_collision(self, settings: Settings, session) -> None:
        async def first(ctx: CommandContext) -> None: ...

        async def second(ctx: CommandContext) -> None: ...

        registry = SpokeRegistry(settings)
        registry.register(TableSpoke({"x": first}))
        registry.register(TableSpoke({"x": second}))
        table = registry.build(session)
        assert table["x"] is second

    def test_declaration_order_is_kept(self, settings: Settings) -> None:
        registry = SpokeRegistry(settings)
        registry.register(TableSpoke({"b": _noop, "a": _noop}))
        registry.register(TableSpoke({"c": _noop, "b": _noop}))
        assert list(registry.merge_commands()) == ["b", "a", "c"]

    def test_register_does_not_deduplicate(self, settings: Settings) -> None:
        registry = SpokeRegistry(settings)
        spoke = TableSpoke({"x": _noop})
        registry.register(spoke)
        registry.register(spoke)
        assert registry.spokes == (spoke, spoke)


class TestBuild:
    def test_table_is_frozen(self, settings: Settings, session) -> None:
        registry = SpokeRegistry(settings)
        registry.register(TableSpoke({"x": _noop}))
        table = registry.build(session)
        with pytest.raises(TypeError):
            table["y"] = _noop  # type: ignore[index]

    def test_build_twice_raises(self, settings: Settings, session) -> None:
        registry = SpokeRegistry(settings)
        registry.build(session)
        with pytest.raises(RegistryError):
            registry.build(session)

    def test_register_after_build_raises(self, settings: Settings, session) -> None:
        registry = SpokeRegistry(settings)
        registry.build(session)
        with pytest.raises(RegistryError):
            registry.register(TableSpoke({}))

    def test_table_before_build_raises(self, settings: Settings) -> None:
        registry = SpokeRegistry(settings)
        assert registry.built is False
        with pytest.raises(RegistryError):
            _ = registry.table

    def test_capabilities_are_wired(self, settings: Settings, session) -> None:
        listening = ListeningSpoke()
        reacting = ReactingSpoke()
        registry = SpokeRegistry(settings)
        registry.register(listening)
        registry.register(reacting)
        registry.register(TableSpoke({"x": _noop}))
        registry.build(session)
        assert session.message_handlers == [listening.on_message_create]
        assert session.reaction_handlers == [reacting.on_message_reaction]

    def test_undeclared_capabilities_are_not_wired(self, settings: Settings, session) -> None:
        registry = SpokeRegistry(settings)
        registry.register(DuckSpoke())
        registry.build(session)
        assert session.message_handlers == []
        assert session.reaction_handlers == []


class TestHelp:
    def test_help_text_format(self, settings: Settings) -> None:
        assert help_text(["ping", "about"], settings) == (
            ":grimacepeeking: Bento commands:\n- .ping\n- .about"
        )

    async def test_help_lists_commands_in_order(self, settings: Settings, session, make_message) -> None:
        registry = SpokeRegistry(settings)
        registry.register(TableSpoke({"ping": _noop, "about": _noop}))
        registry.register(TableSpoke({"brick": _noop}))
        table = registry.build(session)
        assert list(table) == ["ping", "about", "brick", "help"]

        ctx = CommandContext(message=make_message(".help"), session=session, settings=settings)
        await table["help"](ctx)
        assert session.replies == [
            ("c1", ":grimacepeeking: Bento commands:\n- .ping\n- .about\n- .brick", "m1"),
        ]

    async def test_help_uses_configured_prefix(self, session, make_message) -> None:
        settings = Settings(bot_name="Evil Bento", prefix="!")
        registry = SpokeRegistry(settings)
        registry.register(TableSpoke({"ping": _noop}))
        table = registry.build(session)
        ctx = CommandContext(message=make_message("!help"), session=session, settings=settings)
        await table["help"](ctx)
        assert session.reply_texts == [":grimacepeeking: Evil Bento commands:\n- !ping"]

    def test_spoke_help_is_replaced(self, settings: Settings, session) -> None:
        registry = SpokeRegistry(settings)
        registry.register(TableSpoke({"help": _noop, "ping": _noop}))
        table = registry.build(session)
        assert table["help"] is not _noop
        assert list(table) == ["ping", "help"]
