"""Bot runtime state (fact sessions per chat)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..session import FactSession

logger = logging.getLogger(__name__)


@dataclass
class BotState:
    """Runtime state for the bot: one in-memory fact session per chat."""

    sessions: dict[int, FactSession] = field(default_factory=dict)

    def get_session(self, chat_id: int) -> FactSession | None:
        return self.sessions.get(chat_id)

    def set_session(self, chat_id: int, session: FactSession) -> None:
        self.sessions[chat_id] = session

    async def close(self) -> None:
        for chat_id, session in list(self.sessions.items()):
            try:
                await session.close()
            except Exception:
                logger.exception("Failed to close fact session for chat_id=%s", chat_id)
        self.sessions.clear()


BOT_STATE_KEY = "state"
