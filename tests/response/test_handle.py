from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from chatterbox import response
from chatterbox.config import core, local_llm
from chatterbox.directives import Directives
from chatterbox.response import history as history_mod

BOT_ID = 999


class FakeChannel:
    def __init__(self, messages):
        # newest first, like Discord
        self._messages = messages
        self.calls = []
        self.id = 55

    def history(self, *, limit, before):
        self.calls.append((limit, before))

        async def _gen():
            for msg in self._messages[:limit]:
                yield msg

        return _gen()


def _msg(mid, name, uid, bot=False, content="", channel=None, guild_id=1):
    return SimpleNamespace(
        id=mid,
        content=content or f"message {mid}",
        author=SimpleNamespace(id=uid, name=name, bot=bot),
        guild=SimpleNamespace(id=guild_id) if guild_id is not None else None,
        channel=channel,
        mentions=[],
        role_mentions=[],
        channel_mentions=[],
    )


def test_context_limit_defaults_to_directive(store):
    assert response.resolve_context_limit("1", Directives()) == 20
    assert response.resolve_context_limit("1", Directives(context_size=7)) == 7


def test_server_context_wins_over_directive(store):
    store.set("1", "context", 42)
    assert response.resolve_context_limit("1", Directives(context_size=7)) == 42


def test_context_limit_is_clamped(store):
    assert response.resolve_context_limit(None, Directives(context_size=500)) == 100

    store.set("1", "context", 1000)
    assert response.resolve_context_limit("1", Directives()) == 100

    store.set("1", "context", -4)
    assert response.resolve_context_limit("1", Directives()) == 1


def test_non_numeric_server_context_is_ignored(store):
    store.set("1", "context", "lots")
    assert response.resolve_context_limit("1", Directives(context_size=9)) == 9


def test_context_limit_falls_back_to_configured_default(store, monkeypatch):
    monkeypatch.setattr(core, "CONTEXT_LENGTH", 7)
    assert response.resolve_context_limit("1", Directives()) == 7
    assert response.resolve_context_limit(None, Directives(context_size=3)) == 3


def test_non_finite_server_context_is_ignored(store):
    store.path.write_text('{"servers": {"1": {"context": Infinity}}}', encoding="utf-8")
    assert response.resolve_context_limit("1", Directives(context_size=9)) == 9


def test_select_model(monkeypatch):
    monkeypatch.setattr(local_llm, "USE_LOCAL", False)
    assert response.select_model(Directives()) == core.MSG_MODEL_ID
    assert response.select_model(Directives(use_advanced_model=True)) == core.ADVANCED_MODEL_ID


@pytest.mark.asyncio
async def test_fetch_history_orders_and_filters():
    newest_first = [
        _msg(4, "bob", 3),
        _msg(3, "helper", 7, bot=True),
        _msg(2, "chatterbox", BOT_ID, bot=True),
        _msg(1, "alice", 2),
    ]
    channel = FakeChannel(newest_first)
    current = _msg(5, "bob", 3, channel=channel)

    kept = await history_mod.fetch_history(current, 10, BOT_ID)

    assert [m.id for m in kept] == [1, 2, 4]
    assert channel.calls == [(10, current)]


@pytest.mark.asyncio
async def test_fetch_history_rejects_zero_limit():
    with pytest.raises(ValueError):
        await history_mod.fetch_history(_msg(1, "bob", 3, channel=FakeChannel([])), 0, BOT_ID)


@pytest.mark.asyncio
async def test_handle_builds_prompt_and_calls_model(store, monkeypatch):
    store.set("1", "runescape", True)
    store.set("1", "context", 2)

    channel = FakeChannel([_msg(2, "alice", 2, content="older"), _msg(1, "carol", 4)])
    current = _msg(3, "bob", 3, content="<@999> -a hi there", channel=channel)

    fake_chat = AsyncMock(return_value="Hello bob")
    monkeypatch.setattr(local_llm, "USE_LOCAL", False)
    monkeypatch.setattr(response.oai, "chat", fake_chat)

    reply = await response.handle(
        current, BOT_ID, "hi there", Directives(use_advanced_model=True, context_size=50)
    )

    assert reply == "Hello bob"
    assert channel.calls[0][0] == 2

    prompt = fake_chat.await_args.args[0]
    assert fake_chat.await_args.kwargs["model"] == core.ADVANCED_MODEL_ID
    assert "carol: message 1\nalice: older" in prompt
    assert 'Their message is: "hi there"' in prompt
    assert "Runescape Mode" in prompt


@pytest.mark.asyncio
async def test_handle_uses_local_model_when_configured(store, monkeypatch):
    current = _msg(3, "bob", 3, content="hi", channel=FakeChannel([]))

    fake_local = AsyncMock(return_value="local reply")
    fake_remote = AsyncMock()
    monkeypatch.setattr(local_llm, "USE_LOCAL", True)
    monkeypatch.setattr(response.ollama, "chat", fake_local)
    monkeypatch.setattr(response.oai, "chat", fake_remote)

    reply = await response.handle(current, BOT_ID, "hi", Directives())

    assert reply == "local reply"
    assert fake_local.await_args.kwargs["model"] == local_llm.LOCAL_MODEL_ID
    fake_remote.assert_not_awaited()
