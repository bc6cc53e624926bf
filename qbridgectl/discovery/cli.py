"""CLI entry point for the switchmac neighbor export, standalone-capable.

Prints one line per LLDP neighbor in the format the testbed web interface
expects:

  <mac>,<switch>/<module>.<port>,<vlan>,<interface>,<class>

Example:
  qbridgectl switchmac 10.47.1.5 experimental
"""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

from qbridgectl.exceptions import SwitchError
from qbridgectl.switchctrl.cli import add_connection_args, build_config, setup_logging, vlan_id_arg
from qbridgectl.switchctrl.client import SnmpSwitch
from qbridgectl.switchctrl.formatters import CONTROL_VLAN, SwitchMacFormatter


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for switchmac and parse ``args``."""
    parser = argparse.ArgumentParser(
        prog="qbridgectl switchmac",
        description="List MAC addresses of LLDP neighbors connected to a switch.",
    )
    add_connection_args(parser)
    parser.add_argument("node_class", choices=["experimental", "control"], help="Node class to report")
    parser.add_argument(
        "--control-vlan",
        type=vlan_id_arg,
        default=CONTROL_VLAN,
        help=f"VLAN reported for every neighbor (default: {CONTROL_VLAN})",
    )
    return parser.parse_args(args)


def main(args: list[str] | None = None) -> None:
    """Main entry point for switchmac CLI."""
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    try:
        config = build_config(parsed)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        with SnmpSwitch(config=config) as switch:
            neighbors = switch.get_neighbors()
    except SwitchError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)

    output = SwitchMacFormatter(parsed.host, parsed.node_class, parsed.control_vlan).format(neighbors)
    if output:
        print(output)
