"""CLI entry point for Q-BRIDGE switch control, standalone-capable.

Examples:
  qbridgectl-switchctrl 10.47.1.5 show
  qbridgectl-switchctrl 10.47.1.5 vlan list
  qbridgectl-switchctrl 10.47.1.5 --community private vlan create 101
  qbridgectl-switchctrl 10.47.1.5 --community private vlan delete 101
  qbridgectl-switchctrl 10.47.1.5 --community private port access 47 2 4 6 8
  qbridgectl-switchctrl 10.47.1.5 --community private port trunk 1 3 5 7 --vlans 101 201 303
  qbridgectl-switchctrl 10.47.1.5 --community private port clear 1 3
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from loguru import logger
from pydantic import ValidationError

from qbridgectl import configure_logging
from qbridgectl.config import SnmpConfig
from qbridgectl.exceptions import SwitchError
from qbridgectl.switchctrl.client import SnmpSwitch
from qbridgectl.switchctrl.formatters import TerminalFormatter
from qbridgectl.switchctrl.vlans import VLAN_ID_MAX, VLAN_ID_MIN


def vlan_id_arg(value: str) -> int:
    """argparse type for a VLAN ID."""
    try:
        vlan_id = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid vlan number: {value!r}")
    if not VLAN_ID_MIN <= vlan_id <= VLAN_ID_MAX:
        raise argparse.ArgumentTypeError(f"vlan number {vlan_id} out of range {VLAN_ID_MIN}-{VLAN_ID_MAX}")
    return vlan_id


def port_arg(value: str) -> int:
    """argparse type for a 1-based bridge port number."""
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port number: {value!r}")
    if port < 1:
        raise argparse.ArgumentTypeError(f"port number {port} must be 1 or greater")
    return port


def cmd_show(switch: SnmpSwitch, args: argparse.Namespace) -> None:
    """Print interfaces, VLANs and LLDP neighbors."""
    formatter = TerminalFormatter(
        interfaces=switch.get_interfaces(),
        vlans=switch.get_vlans(),
        neighbors=switch.get_neighbors(),
    )
    print(formatter.format())


def cmd_vlan_list(switch: SnmpSwitch, args: argparse.Namespace) -> None:
    """List VLANs."""
    vlans = switch.get_vlans()
    if not vlans:
        print("No VLANs found")
        return
    print(TerminalFormatter(vlans=vlans).format_vlans())


def cmd_vlan_create(switch: SnmpSwitch, args: argparse.Namespace) -> None:
    """Create a VLAN."""
    switch.create_vlan(args.vlan_id)
    print(f"VLAN {args.vlan_id} created successfully")


def cmd_vlan_delete(switch: SnmpSwitch, args: argparse.Namespace) -> None:
    """Delete a VLAN."""
    switch.delete_vlan(args.vlan_id)
    print(f"VLAN {args.vlan_id} deleted successfully")


def cmd_port_access(switch: SnmpSwitch, args: argparse.Namespace) -> None:
    """Set access VLAN on ports."""
    switch.set_port_access(args.ports, args.vlan_id)
    print(f"Ports {' '.join(map(str, args.ports))} set to access VLAN {args.vlan_id}")


def cmd_port_trunk(switch: SnmpSwitch, args: argparse.Namespace) -> None:
    """Add trunk VLANs on ports."""
    switch.set_port_trunk(args.ports, args.vlans)
    print(f"Ports {' '.join(map(str, args.ports))} set to trunk VLANs {' '.join(map(str, args.vlans))}")


def cmd_port_clear(switch: SnmpSwitch, args: argparse.Namespace) -> None:
    """Remove ports from all VLANs."""
    switch.clear_port(args.ports)
    print(f"Ports {' '.join(map(str, args.ports))} cleared")


def cmd_neighbors(switch: SnmpSwitch, args: argparse.Namespace) -> None:
    """List LLDP neighbors."""
    print(TerminalFormatter(neighbors=switch.get_neighbors()).format_neighbors())


def add_connection_args(parser: argparse.ArgumentParser) -> None:
    """Add the SNMP connection options shared by all switch CLIs."""
    parser.add_argument("host", help="Switch IP address or hostname")
    parser.add_argument(
        "--community",
        help="SNMP community string (default: $QBRIDGECTL_COMMUNITY or public)",
    )
    parser.add_argument("--port", type=int, help="SNMP UDP port (default: $QBRIDGECTL_PORT or 161)")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-request timeout in seconds (default: $QBRIDGECTL_TIMEOUT or 5)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        help="Wire-level retries per request (default: $QBRIDGECTL_RETRIES or 0)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def build_config(parsed: argparse.Namespace, **extra: Any) -> SnmpConfig:
    """Build the session config; options left unset fall back to ``QBRIDGECTL_*`` variables."""
    return SnmpConfig.from_env(
        parsed.host,
        community=parsed.community,
        port=parsed.port,
        timeout=parsed.timeout,
        retries=parsed.retries,
        **extra,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for switch control."""
    parser = argparse.ArgumentParser(
        prog="qbridgectl-switchctrl",
        description="Q-BRIDGE switch control: interfaces, VLANs, port membership and LLDP neighbors",
    )
    add_connection_args(parser)
    parser.add_argument(
        "--auto-create",
        action="store_true",
        help="Agent creates VLAN rows on first PortList write; skip the explicit createAndGo",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show
    subparsers.add_parser("show", help="Show interfaces, VLANs and neighbors")

    # vlan
    vlan_parser = subparsers.add_parser("vlan", help="VLAN management")
    vlan_sub = vlan_parser.add_subparsers(dest="vlan_command", help="VLAN commands")

    vlan_sub.add_parser("list", help="List all VLANs")

    vlan_create = vlan_sub.add_parser("create", help="Create a VLAN")
    vlan_create.add_argument("vlan_id", type=vlan_id_arg, help="VLAN ID (1-4094)")

    vlan_delete = vlan_sub.add_parser("delete", help="Delete a VLAN")
    vlan_delete.add_argument("vlan_id", type=vlan_id_arg, help="VLAN ID to delete")

    # port
    port_parser = subparsers.add_parser("port", help="Port VLAN membership")
    port_sub = port_parser.add_subparsers(dest="port_command", help="Port commands")

    port_access = port_sub.add_parser("access", help="Set access VLAN on ports")
    port_access.add_argument("vlan_id", type=vlan_id_arg, help="Access VLAN ID")
    port_access.add_argument("ports", type=port_arg, nargs="+", help="Bridge port numbers")

    port_trunk = port_sub.add_parser("trunk", help="Add trunk VLANs on ports")
    port_trunk.add_argument("ports", type=port_arg, nargs="+", help="Bridge port numbers")
    port_trunk.add_argument("--vlans", type=vlan_id_arg, nargs="+", required=True, help="Trunk VLAN IDs")

    port_clear = port_sub.add_parser("clear", help="Remove ports from all VLANs")
    port_clear.add_argument("ports", type=port_arg, nargs="+", help="Bridge port numbers")

    # neighbors
    subparsers.add_parser("neighbors", help="List LLDP neighbors")

    return parser


def setup_logging(verbose: bool) -> None:
    """DEBUG with the full format when verbose, plain INFO otherwise."""
    if verbose:
        configure_logging()
    else:
        logger.remove()
        logger.add(sys.stderr, level="INFO")
        logger.enable("qbridgectl")


def main(args: list[str] | None = None) -> None:
    """Main entry point for switch control CLI."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(parsed.verbose)

    try:
        config = build_config(parsed, auto_create_on_write=parsed.auto_create)
    except ValidationError as e:
        parser.error(str(e))

    try:
        with SnmpSwitch(config=config) as switch:
            if parsed.command == "show":
                cmd_show(switch, parsed)
            elif parsed.command == "vlan":
                if parsed.vlan_command == "list":
                    cmd_vlan_list(switch, parsed)
                elif parsed.vlan_command == "create":
                    cmd_vlan_create(switch, parsed)
                elif parsed.vlan_command == "delete":
                    cmd_vlan_delete(switch, parsed)
                else:
                    print("Usage: qbridgectl-switchctrl HOST vlan {list|create|delete}")
            elif parsed.command == "port":
                if parsed.port_command == "access":
                    cmd_port_access(switch, parsed)
                elif parsed.port_command == "trunk":
                    cmd_port_trunk(switch, parsed)
                elif parsed.port_command == "clear":
                    cmd_port_clear(switch, parsed)
                else:
                    print("Usage: qbridgectl-switchctrl HOST port {access|trunk|clear}")
            elif parsed.command == "neighbors":
                cmd_neighbors(switch, parsed)
    except SwitchError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
