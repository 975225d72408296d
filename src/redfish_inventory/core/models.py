"""
Normalized inventory data model for the Redfish inventory collector.

Every entity discovered on a management controller is reduced to a
DiscoveredDevice before it is handed to the registration layer. Records are
immutable once the schema mapper has produced them and live only for the
duration of one collection run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class DeviceType(str, Enum):
    """Hardware classes modeled by the collector."""

    NODE = "Node"
    CPU = "CPU"
    DIMM = "DIMM"


@dataclass(frozen=True)
class DiscoveredDevice:
    """
    A single piece of hardware as read from the Redfish resource graph.

    parent_reference is the Redfish path of the owning system. It is never
    resolved to an inventory identifier; nodes carry an empty string.
    source_uri is the Redfish path this record was decoded from.
    """

    device_type: DeviceType
    manufacturer: str
    part_number: str
    serial_number: str
    parent_reference: str
    source_uri: str

    def temporary_name(self, ordinal: int) -> str:
        """Build the run-scoped name used to create the inventory envelope."""
        return f"{self.device_type.value}-{ordinal}-{self.serial_number}"


@dataclass
class SystemInventory:
    """Devices discovered beneath one Redfish system resource."""

    node: DiscoveredDevice
    processors: List[DiscoveredDevice] = field(default_factory=list)
    memory_modules: List[DiscoveredDevice] = field(default_factory=list)

    def devices(self) -> List[DiscoveredDevice]:
        """Flatten to node first, then processors, then memory modules."""
        return [self.node, *self.processors, *self.memory_modules]


@dataclass(frozen=True)
class DiscoveryWarning:
    """A discovery branch that was skipped, and why."""

    path: str
    reason: str
