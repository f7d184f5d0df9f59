from __future__ import annotations

from .. import view
from .common import guard


async def cmd_help(update, context) -> None:
    if not await guard(update, context):
        return
    await update.message.reply_text(view.render_help())


async def cmd_whoami(update, context) -> None:
    """Reply with the ids needed to fill ALLOWED_CHAT_IDS."""
    chat = update.effective_chat
    user = update.effective_user
    lines = [f"chat_id: {chat.id}", f"chat_type: {chat.type}"]
    if user is not None:
        lines.append(f"user_id: {user.id}")
        lines.append(f"user: @{user.username}" if user.username else "user: (no username)")
    await update.message.reply_text("\n".join(lines))
