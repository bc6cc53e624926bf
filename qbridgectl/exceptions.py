"""Exception hierarchy for switch management."""


class SwitchError(Exception):
    """Base exception for all switch management errors."""


class SnmpTransportError(SwitchError):
    """SNMP request failed on the wire (timeout, unreachable agent, bad response)."""


class SnmpDeviceError(SwitchError):
    """The agent answered a request with a non-zero error status."""

    def __init__(self, message: str, error_status: int, error_name: str = "", error_index: int = 0):
        self.error_status = error_status
        self.error_name = error_name
        self.error_index = error_index
        super().__init__(message)


class CorrelationError(SwitchError):
    """Rows from separate table walks could not be joined."""


class OidParseError(CorrelationError):
    """An OID did not carry the numeric row key it was expected to carry."""


class VLANError(SwitchError):
    """VLAN operation failed."""


class PortError(SwitchError):
    """Port configuration failed."""
