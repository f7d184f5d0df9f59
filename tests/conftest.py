"""Shared test fixtures and dummy classes."""

from __future__ import annotations

import asyncio
from typing import Any

from tele_fun_facts.fetcher import NetworkError


class DummyChat:
    """Dummy Telegram chat for testing."""

    def __init__(self, chat_id: int) -> None:
        self.id = chat_id
        self.type = "private"
        self.sent: list[str] = []

    async def send_message(self, text: str) -> None:
        self.sent.append(text)


class DummyUser:
    """Dummy Telegram user for testing."""

    def __init__(self, user_id: int, username: str | None = None) -> None:
        self.id = user_id
        self.username = username


class DummySentMessage:
    def __init__(self, message_id: int) -> None:
        self.message_id = message_id


class DummyMessage:
    """Dummy Telegram message for testing."""

    def __init__(self, message_id: int = 100) -> None:
        self.message_id = message_id
        self.replies: list[str] = []
        self._next_id = message_id + 1

    async def reply_text(self, text: str, **_: Any) -> DummySentMessage:
        self.replies.append(text)
        sent = DummySentMessage(self._next_id)
        self._next_id += 1
        return sent


class DummyQuery:
    """Dummy callback query for inline button presses."""

    def __init__(self, data: str, message: DummyMessage) -> None:
        self.data = data
        self.message = message
        self.answered = 0
        self.edits: list[str] = []

    async def answer(self, *_: Any, **__: Any) -> None:
        self.answered += 1

    async def edit_message_text(self, text: str, **_: Any) -> None:
        self.edits.append(text)


class DummyUpdate:
    """Dummy Telegram update for testing."""

    def __init__(self, chat_id: int, user_id: int, data: str | None = None) -> None:
        self.effective_chat = DummyChat(chat_id)
        self.effective_user = DummyUser(user_id)
        self.message = DummyMessage()
        self.effective_message = self.message
        self.callback_query = DummyQuery(data, self.message) if data else None


class DummyBot:
    """Records message edits made by the Telegram presenter."""

    def __init__(self) -> None:
        self.edits: list[dict[str, Any]] = []

    async def edit_message_text(self, text: str, **kwargs: Any) -> None:
        self.edits.append({"text": text, **kwargs})


class DummyApplication:
    """Dummy Telegram application for testing."""

    def __init__(self) -> None:
        self.bot_data: dict[str, object] = {}


class DummyContext:
    """Dummy Telegram context for testing."""

    def __init__(self, args: list[str] | None = None) -> None:
        self.args = args or []
        self.application = DummyApplication()
        self.bot = DummyBot()


class DummyPresenter:
    """Records every display() call made by a session."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, bool, Any]] = []

    async def display(self, fact: str, busy: bool, rate_limit: Any = None) -> None:
        self.calls.append((fact, busy, rate_limit))

    @property
    def busy_states(self) -> list[bool]:
        return [busy for _, busy, _ in self.calls]

    @property
    def last(self) -> tuple[str, bool, Any]:
        return self.calls[-1]


class FakeClock:
    """Epoch-millisecond clock advanced by hand (or by FakeSleep)."""

    def __init__(self, now_ms: float = 0.0) -> None:
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


class FakeSleep:
    """Records requested delays; optionally moves a FakeClock forward."""

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.delays: list[float] = []
        self.clock = clock

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self.clock is not None:
            self.clock.advance(delay * 1000)
        await asyncio.sleep(0)


class CountingFetch:
    """Fact fetch that returns ``net-1``, ``net-2``... and counts calls."""

    def __init__(self, prefix: str = "net") -> None:
        self.prefix = prefix
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        return f"{self.prefix}-{self.calls}"


class FailingFetch:
    """Single-attempt fetch that always fails like a dead API."""

    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        raise NetworkError("fact API HTTP 503: unavailable")


def sequence_source(items: list[str | None]):
    """Async source yielding ``items`` in order, then None forever."""
    remaining = list(items)
    calls = {"count": 0}

    async def source() -> str | None:
        calls["count"] += 1
        if not remaining:
            return None
        return remaining.pop(0)

    source.calls = calls
    return source
