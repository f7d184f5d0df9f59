"""Dispatch layer: command name -> handler, as referenced by the registry."""

from __future__ import annotations

from . import facts, meta

# Facts
cmd_start = facts.cmd_start
cmd_fact = facts.cmd_fact
cmd_stats = facts.cmd_stats

# Meta
cmd_help = meta.cmd_help
cmd_whoami = meta.cmd_whoami
