"""Entrypoint for running the Telegram bot from the package.

This module wires up the Application, registers handlers and runs polling.
"""

from __future__ import annotations

import logging

from telegram import BotCommand
from telegram.ext import Application, CallbackQueryHandler, CommandHandler

from . import config
from .commands import COMMANDS
from .handlers import dispatch
from .handlers.callbacks import handle_callback_query
from .logger import setup_logging
from .runtime import STARTUP_TIME
from .state import BOT_STATE_KEY, BotState

logger = logging.getLogger(__name__)


def build_application() -> Application:
    if config.TOKEN is None:
        raise RuntimeError("BOT_TOKEN environment variable is not set")

    # Concurrent updates let a tap reach a session that is mid-fetch, where it
    # is dropped rather than queued behind the fetch.
    app = (
        Application.builder()
        .token(config.TOKEN)
        .concurrent_updates(True)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    app.bot_data.setdefault(BOT_STATE_KEY, BotState())

    for spec in COMMANDS:
        fn = getattr(dispatch, spec.handler)
        triggers = [spec.name, *spec.aliases]
        app.add_handler(CommandHandler(triggers, fn))

    app.add_handler(CallbackQueryHandler(handle_callback_query))

    return app


async def register_bot_commands(app: Application) -> None:
    """Register bot commands for Telegram autocomplete."""
    try:
        bot_commands = [BotCommand(spec.name, spec.description) for spec in COMMANDS]
        await app.bot.set_my_commands(bot_commands)
        logger.info("Registered %d commands for autocomplete", len(bot_commands))
    except Exception as e:
        logger.warning("Failed to register bot commands: %s", e)


async def post_init(app: Application) -> None:
    await register_bot_commands(app)
    logger.info(
        "Bot started at %s (fact API: %s, tap limit %s)",
        STARTUP_TIME.strftime("%Y-%m-%d %H:%M:%S"),
        config.FACT_API_URL,
        "on" if config.RATE_LIMIT_ENABLED else "off",
    )


async def post_shutdown(app: Application) -> None:
    state = app.bot_data.get(BOT_STATE_KEY)
    if isinstance(state, BotState):
        await state.close()


def run() -> None:
    setup_logging()
    logger.info("Starting tele_fun_facts")
    app = build_application()

    # run polling; keep the stop_signals None so container shutdown behaves normally
    app.run_polling(stop_signals=None)


if __name__ == "__main__":
    run()
