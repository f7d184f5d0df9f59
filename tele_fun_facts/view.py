"""View layer for formatting Telegram messages (HTML)."""

from __future__ import annotations

import html
import time
from typing import Iterable

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from .commands import COMMANDS, GROUP_ORDER
from .models.command_spec import CommandSpec
from .models.metrics import SessionMetrics
from .models.rate_window import RateLimitInfo

CB_NEXT = "fact:next"
CB_DISMISS = "fact:dismiss"

_HINT_IDLE = "tap the button for another fact"
_HINT_BUSY = "fetching…"


def bold(text: str) -> str:
    return f"<b>{html.escape(str(text))}</b>"


def code(text: str) -> str:
    return f"<code>{html.escape(str(text))}</code>"


def render_rate_limit_notice(info: RateLimitInfo) -> str:
    lines = [
        bold("oops 😢"),
        "<i>this is here so nobody spams the fact api. please take a break and slow down.</i>",
        f"try again in {max(0, info.seconds_remaining)}s",
    ]
    return "\n".join(lines)


def render_screen(fact: str, busy: bool, rate_limit: RateLimitInfo | None = None) -> str:
    lines = [html.escape(fact.lower()), "", f"<i>{_HINT_BUSY if busy else _HINT_IDLE}</i>"]
    if rate_limit is not None:
        lines.extend(["", render_rate_limit_notice(rate_limit)])
    return "\n".join(lines)


def fact_keyboard(notice: bool = False) -> InlineKeyboardMarkup:
    rows = [[InlineKeyboardButton("🎲 another fact", callback_data=CB_NEXT)]]
    if notice:
        rows.append([InlineKeyboardButton("ok", callback_data=CB_DISMISS)])
    return InlineKeyboardMarkup(rows)


def _format_timestamp(ts: float | None) -> str:
    if not ts:
        return "never"
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(ts))


def render_session_stats(
    metrics: SessionMetrics, cache_size: int, seen: int, taps_left: int | None = None
) -> str:
    lines = [bold("Fact stats:")]
    lines.append(f"shown: {metrics.shown} (last: {_format_timestamp(metrics.last_shown_ts)})")
    for source in ("cache", "network", "fallback"):
        lines.append(f"• from {source}: {metrics.by_source.get(source, 0)}")
    lines.append(
        f"taps: {metrics.taps} | ignored: {metrics.ignored_taps} | rate limited: {metrics.rate_limited}"
    )
    if taps_left is not None:
        lines.append(f"taps left this window: {taps_left}")
    lines.append(
        f"refills: {metrics.refills} | prefetched: {metrics.prefetched} | errors: {metrics.refill_errors}"
    )
    if metrics.render_errors:
        lines.append(f"render errors: {metrics.render_errors}")
    lines.append(f"cache: {cache_size} queued, {seen} seen")
    return "\n".join(lines)


def render_help(
    commands: Iterable[CommandSpec] = COMMANDS, group_order: Iterable[str] = GROUP_ORDER
) -> str:
    """Plain-text command list, grouped in ``group_order``."""
    grouped: dict[str, list[CommandSpec]] = {}
    for command in commands:
        grouped.setdefault(command.group, []).append(command)

    sections = ["🎲 Fun facts bot. Commands:"]
    for group in group_order:
        if group not in grouped:
            continue
        entries = "\n".join(f"{c.usage} – {c.description}" for c in grouped[group])
        sections.append(f"{group}\n{entries}")
    return "\n\n".join(sections)
