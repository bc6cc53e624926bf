"""Q-BRIDGE Switch Control Library.

Manages VLAN/port membership and discovers LLDP neighbors on SNMPv2c managed
switches through the standard Q-BRIDGE (RFC 2674), BRIDGE, IF and LLDP MIBs.
"""

__version__ = "0.0.1"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from qbridgectl.config import SnmpConfig  # noqa: E402
from qbridgectl.exceptions import (  # noqa: E402
    CorrelationError,
    OidParseError,
    PortError,
    SnmpDeviceError,
    SnmpTransportError,
    SwitchError,
    VLANError,
)
from qbridgectl.switchctrl.client import SnmpSwitch  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "SnmpConfig",
    "SnmpSwitch",
    "SwitchError",
    "SnmpTransportError",
    "SnmpDeviceError",
    "CorrelationError",
    "OidParseError",
    "VLANError",
    "PortError",
]
