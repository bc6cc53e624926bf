"""Neighbor discovery subpackage.

Reads directly attached neighbors from a switch's LLDP-MIB remote table.
"""

from qbridgectl.discovery.lldp import LldpNeighborManager
from qbridgectl.discovery.models import Neighbor

__all__ = [
    "LldpNeighborManager",
    "Neighbor",
]
