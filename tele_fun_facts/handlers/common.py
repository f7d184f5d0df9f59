"""Shared handler helpers: auth guard, state and session lookup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .. import config
from ..presenter import TelegramPresenter
from ..session import FactSession, build_session
from ..state import BOT_STATE_KEY, BotState

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from telegram import Update
    from telegram.ext import ContextTypes


def get_state(app) -> BotState:
    """Retrieve or initialize the bot state from application data.

    Args:
        app: The Telegram Application instance

    Returns:
        BotState object holding the per-chat fact sessions.
    """
    return app.bot_data.setdefault(BOT_STATE_KEY, BotState())


def allowed(update: "Update") -> bool:
    """Check if the update sender is authorized to use the bot.

    Args:
        update: Telegram Update object containing chat information

    Returns:
        True if the chat ID is in the ALLOWED list, False otherwise.

    Note:
        Returns False if ALLOWED_CHAT_IDS is empty or update has no chat.
    """
    if not config.ALLOWED:
        return False
    if not update.effective_chat:
        return False
    return update.effective_chat.id in config.ALLOWED


async def guard(update: "Update", context: "ContextTypes.DEFAULT_TYPE") -> bool:
    """Check authorization before executing commands.

    Sends an unauthorized message on failure.
    """
    if allowed(update):
        return True
    if update and update.effective_chat:
        await update.effective_chat.send_message("⛔ Not authorized")
    return False


def bind_session(context, chat_id: int, message_id: int) -> tuple[FactSession, bool]:
    """Point the chat's session at a screen message, creating it if needed.

    Returns:
        (session, created)
    """
    state = get_state(context.application)
    presenter = TelegramPresenter(context.bot, chat_id, message_id)
    session = state.get_session(chat_id)
    if session is None:
        session = build_session(presenter)
        state.set_session(chat_id, session)
        logger.info("Created fact session for chat_id=%s", chat_id)
        return session, True
    session.presenter = presenter
    return session, False
