"""Orchestrator CLI, dispatches to sub-CLIs.

Sub-commands:
  switchctrl  Q-BRIDGE switch control (show, VLAN, port membership, neighbors)
  switchmac   LLDP neighbor MAC export for the testbed web interface

Examples:
  qbridgectl switchctrl 10.47.1.5 show

  qbridgectl switchctrl 10.47.1.5 --community private port access 47 2 4 6 8

  qbridgectl switchmac 10.47.1.5 experimental
"""

from __future__ import annotations

import os
import sys

from tabulate import tabulate

from qbridgectl import __version__, configure_logging
from qbridgectl import glogger

COMMANDS = {
    "switchctrl": ("qbridgectl.switchctrl.cli", "Q-BRIDGE switch control"),
    "switchmac": ("qbridgectl.discovery.cli", "LLDP neighbor MAC export"),
}


def _print_usage() -> None:
    print("usage: qbridgectl <command> [options]\n")
    print("Available commands:")
    for cmd, (_, desc) in COMMANDS.items():
        print(f"  {cmd:14s}  {desc}")
    print("\nRun 'qbridgectl <command> --help' for command-specific options.")


def _print_startup_banner() -> None:
    startup_rows = [
        ["version", __version__],
        ["LOGURU_LEVEL", os.getenv("LOGURU_LEVEL", "DEBUG")],
    ]

    for var in ("QBRIDGECTL_COMMUNITY", "QBRIDGECTL_PORT", "QBRIDGECTL_TIMEOUT", "QBRIDGECTL_RETRIES"):
        val = os.environ.get(var)
        if val is not None:
            startup_rows.append([var, "***" if var == "QBRIDGECTL_COMMUNITY" else val])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "qbridgectl starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    glogger.opt(raw=True).info(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def main() -> None:
    """Main entry point, dispatch to sub-CLI."""
    configure_logging()
    _print_startup_banner()

    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        _print_usage()
        sys.exit(0 if len(sys.argv) >= 2 else 1)

    command = sys.argv[1]
    if command not in COMMANDS:
        print(f"qbridgectl: unknown command '{command}'\n", file=sys.stderr)
        _print_usage()
        sys.exit(1)

    module_path, _ = COMMANDS[command]

    # Import and call the sub-CLI's main(), passing remaining args
    from importlib import import_module

    module = import_module(module_path)
    module.main(sys.argv[2:])


if __name__ == "__main__":
    main()
