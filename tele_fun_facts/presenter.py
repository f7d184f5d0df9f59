"""Telegram-backed presenter: one message edited in place per chat."""

from __future__ import annotations

from telegram.constants import ParseMode
from telegram.error import BadRequest

from . import view
from .models.rate_window import RateLimitInfo


class TelegramPresenter:
    def __init__(self, bot, chat_id: int, message_id: int) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self.message_id = message_id

    async def display(
        self, fact: str, busy: bool, rate_limit: RateLimitInfo | None = None
    ) -> None:
        text = view.render_screen(fact, busy, rate_limit)
        try:
            await self.bot.edit_message_text(
                text,
                chat_id=self.chat_id,
                message_id=self.message_id,
                parse_mode=ParseMode.HTML,
                reply_markup=view.fact_keyboard(notice=rate_limit is not None),
            )
        except BadRequest as exc:
            if "Message is not modified" in str(exc):
                return
            raise
