"""Callback query handlers for the fact screen buttons."""

from __future__ import annotations

import html
import logging

from telegram.error import BadRequest

from .. import view
from .common import allowed, bind_session

logger = logging.getLogger(__name__)


async def _safe_edit_message_text(query, text: str, **kwargs) -> None:
    try:
        await query.edit_message_text(text, **kwargs)
    except BadRequest as exc:
        if "Message is not modified" in str(exc):
            return
        raise


async def handle_callback_query(update, context) -> None:
    query = update.callback_query
    await query.answer()

    data = query.data

    if not allowed(update):
        await _safe_edit_message_text(query, "⛔ Not authorized")
        return

    try:
        if data in (view.CB_NEXT, view.CB_DISMISS):
            chat_id = update.effective_chat.id
            session, created = bind_session(context, chat_id, query.message.message_id)
            if created:
                # Screen outlived its session (bot restart): start over on it.
                await session.load_initial()
            elif data == view.CB_NEXT:
                await session.on_tap()
            else:
                await session.dismiss_notice()
        else:
            await _safe_edit_message_text(query, "❓ Unknown action")
    except Exception as e:
        logger.exception("Callback query error")
        try:
            await query.message.reply_text(f"❌ Error: {html.escape(str(e))}")
        except Exception as notify_error:
            logger.error(f"Failed to send error notification: {notify_error}")
