"""Connection settings for one managed switch."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field

_ENV_PREFIX = "QBRIDGECTL_"


class SnmpConfig(BaseModel):
    """SNMPv2c settings for a single switch session.

    ``auto_create_on_write`` declares that the agent creates a static VLAN row
    on the first write to one of its PortList columns. Leave it off unless the
    target device is known to behave that way.
    """

    host: str
    community: str = "public"
    port: int = Field(default=161, ge=1, le=65535)
    timeout: float = Field(default=5.0, gt=0)
    retries: int = Field(default=0, ge=0)
    max_repetitions: int = Field(default=25, ge=1)
    auto_create_on_write: bool = False

    @classmethod
    def from_env(cls, host: str, **overrides: Any) -> SnmpConfig:
        """Build a config, taking unset values from ``QBRIDGECTL_*`` variables."""
        values: dict[str, Any] = {"host": host}
        for field_name in ("community", "port", "timeout", "retries"):
            env_val = os.getenv(f"{_ENV_PREFIX}{field_name.upper()}")
            if env_val is not None:
                values[field_name] = env_val
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
