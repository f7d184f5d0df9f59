"""Fact screen commands."""

from __future__ import annotations

import html
import logging

from telegram.constants import ParseMode

from .. import view
from ..session import LOADING_TEXT
from .common import bind_session, get_state, guard

logger = logging.getLogger(__name__)


async def cmd_fact(update, context) -> None:
    if not await guard(update, context):
        return
    chat_id = update.effective_chat.id
    existing = get_state(context.application).get_session(chat_id)
    placeholder = existing.current_fact if existing else LOADING_TEXT
    try:
        msg = await update.message.reply_text(
            view.render_screen(placeholder, busy=existing is None),
            parse_mode=ParseMode.HTML,
            reply_markup=view.fact_keyboard(),
        )
        session, _ = bind_session(context, chat_id, msg.message_id)
        await session.load_initial()
    except Exception as e:
        logger.exception("Fact screen failed for chat_id=%s", chat_id)
        await update.message.reply_text(f"❌ Error: {html.escape(str(e))}")


async def cmd_start(update, context) -> None:
    if not await guard(update, context):
        return
    await update.message.reply_text(
        "Hi! Here's a random fun fact. Tap the button under it for another one."
    )
    await cmd_fact(update, context)


async def cmd_stats(update, context) -> None:
    if not await guard(update, context):
        return
    session = get_state(context.application).get_session(update.effective_chat.id)
    if session is None:
        await update.message.reply_text("No facts yet. Send /fact to start.")
        return
    msg = view.render_session_stats(
        session.metrics,
        len(session.cache),
        len(session.cache.seen),
        session.taps_left(),
    )
    await update.message.reply_text(msg, parse_mode=ParseMode.HTML)
