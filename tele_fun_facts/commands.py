"""Command registry (single source of truth for help + wiring)."""

from __future__ import annotations

from .models.command_spec import CommandSpec, Group


_FACT_COMMANDS = (
    CommandSpec("start", "Facts", "/start", "open the fact screen", "cmd_start"),
    CommandSpec(
        "fact",
        "Facts",
        "/fact",
        "open the fact screen (or show it again)",
        "cmd_fact",
    ),
    CommandSpec("stats", "Facts", "/stats", "fact source and cache stats", "cmd_stats"),
)

_INFO_COMMANDS = (
    CommandSpec("help", "Info", "/help", "this menu", "cmd_help"),
    CommandSpec("whoami", "Info", "/whoami", "show chat and user info", "cmd_whoami"),
)


COMMANDS: tuple[CommandSpec, ...] = (
    *_FACT_COMMANDS,
    *_INFO_COMMANDS,
)


GROUP_ORDER: tuple[Group, ...] = (
    "Facts",
    "Info",
)
