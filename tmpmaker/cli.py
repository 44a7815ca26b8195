#!/usr/bin/env python3
"""Command line front end for TmpMaker.

Usage:
  tmpmaker create                       # create or open today's temp note
  tmpmaker cleanup                      # delete temp notes past retention
  tmpmaker startup                      # load plugin, run startup cleanup if enabled
  tmpmaker commands                     # list palette commands
  tmpmaker settings                     # show settings
  tmpmaker settings set retentionDays 7
  tmpmaker watch                        # startup, then follow settings changes
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .constants import EDITOR_ENV, VAULT_ENV
from .host import LocalHost
from .notes import FAILED
from .plugin import TmpMakerPlugin
from .settings_form import FIELDS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tmpmaker", description="Dated scratch notes with retention cleanup")
    parser.add_argument("--vault", "-v", default=os.environ.get(VAULT_ENV, "."),
                        help=f"Vault directory (default: ${VAULT_ENV} or current directory)")
    parser.add_argument("--editor", "-e", default=os.environ.get(EDITOR_ENV),
                        help=f"Command used to open notes (default: ${EDITOR_ENV})")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("create", help="Create or open today's temp note")
    sub.add_parser("cleanup", help="Delete temp notes older than the retention window")
    sub.add_parser("startup", help="Load the plugin and run the startup hook")
    sub.add_parser("commands", help="List palette commands")

    settings = sub.add_parser("settings", help="Show or change settings")
    settings_sub = settings.add_subparsers(dest="settings_command")
    setter = settings_sub.add_parser("set", help="Change one setting")
    setter.add_argument("field", choices=[f.key for f in FIELDS])
    setter.add_argument("value")

    watch = sub.add_parser("watch", help="Run the startup hook, then reload settings on external change")
    watch.add_argument("--interval", type=float, default=1.0, help="Polling interval in seconds")
    return parser


def _show_settings(plugin: TmpMakerPlugin):
    for field, value in plugin.setting_tab.display():
        if isinstance(value, bool):
            value = "on" if value else "off"
        print(f"{field.name} ({field.key}): {value}")
        print(f"    {field.desc}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    vault = Path(args.vault).expanduser()
    if not vault.is_dir():
        print(f"Error: Vault not found: {vault}", file=sys.stderr)
        return 1

    host = LocalHost(vault, editor=args.editor)
    plugin = TmpMakerPlugin(host)
    plugin.onload()

    if args.command == "create":
        return 1 if plugin.execute_command("create-temp-note") == FAILED else 0

    if args.command == "cleanup":
        deleted = plugin.execute_command("cleanup-old-temp-notes")
        if not deleted:
            print("No temp notes to clean up.")
        return 0

    if args.command == "startup":
        host.layout_ready()
        return 0

    if args.command == "commands":
        for command in plugin.commands.values():
            print(f"{command.id}: {command.name}")
        return 0

    if args.command == "settings":
        if args.settings_command == "set":
            try:
                plugin.setting_tab.on_change(args.field, args.value)
            except ValueError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
        _show_settings(plugin)
        return 0

    if args.command == "watch":
        from .watcher import watch_settings

        host.layout_ready()
        watch_settings(plugin, host.settings_path, interval=args.interval)
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
