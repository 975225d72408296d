"""
Redfish discovery traversal.

Walks Systems -> each system -> its Processors and Memory collections and
produces the flat, ordered device list handed to registration. Failures below
the systems collection are logged and the branch is skipped; a failure on the
systems collection itself propagates to the caller.
"""

import logging
from typing import List, Optional

from src.i18n import _
from src.redfish_inventory.core.errors import (
    DecodeError,
    TransportError,
    UnexpectedStatusError,
)
from src.redfish_inventory.core.models import (
    DeviceType,
    DiscoveredDevice,
    DiscoveryWarning,
    SystemInventory,
)
from src.redfish_inventory.redfish.mapper import decode_device, map_device
from src.redfish_inventory.redfish.schemas import (
    RedfishSystem,
    ResourceCollection,
    decode_resource,
)

logger = logging.getLogger(__name__)

RECOVERABLE_ERRORS = (TransportError, UnexpectedStatusError, DecodeError)


class DiscoveryTraverser:
    """Sequential walk of one controller's resource graph."""

    def __init__(self, client, systems_path: str = "Systems"):
        """
        Args:
            client: object with an async get(path) -> bytes, normally a ResourceClient
            systems_path: reference of the systems collection
        """
        self.client = client
        self.systems_path = systems_path
        self.warnings: List[DiscoveryWarning] = []

    async def discover(self) -> List[DiscoveredDevice]:
        """Discover every system and return all devices in traversal order."""
        devices: List[DiscoveredDevice] = []
        for inventory in await self.discover_systems():
            devices.extend(inventory.devices())
        logger.info(_("Redfish discovery found %d device(s)"), len(devices))
        return devices

    async def discover_systems(self) -> List[SystemInventory]:
        """Discover each member of the systems collection."""
        self.warnings = []

        raw = await self.client.get(self.systems_path)
        collection = ResourceCollection.from_payload(raw, self.systems_path)
        logger.debug(
            "Systems collection %s lists %d member(s)",
            self.systems_path,
            len(collection.members),
        )

        inventories = []
        for system_path in collection.members:
            inventory = await self._discover_system(system_path)
            if inventory is not None:
                inventories.append(inventory)
        return inventories

    async def _discover_system(self, system_path: str) -> Optional[SystemInventory]:
        try:
            raw = await self.client.get(system_path)
            system = decode_resource(raw, RedfishSystem, system_path)
        except RECOVERABLE_ERRORS as error:
            self._skip(system_path, error, _("Skipping system %s: %s"))
            return None

        # Nodes have no parent; resolution of parent references is not done here.
        inventory = SystemInventory(node=map_device(system, DeviceType.NODE, system_path))
        inventory.processors = await self._discover_members(
            system.processors, DeviceType.CPU, system_path
        )
        inventory.memory_modules = await self._discover_members(
            system.memory, DeviceType.DIMM, system_path
        )
        return inventory

    async def _discover_members(
        self,
        collection_path: Optional[str],
        device_type: DeviceType,
        parent_path: str,
    ) -> List[DiscoveredDevice]:
        if not collection_path:
            logger.debug("%s has no %s collection", parent_path, device_type.value)
            return []

        try:
            raw = await self.client.get(collection_path)
            collection = ResourceCollection.from_payload(raw, collection_path)
        except RECOVERABLE_ERRORS as error:
            self._skip(collection_path, error, _("Skipping collection %s: %s"))
            return []

        devices = []
        for member_path in collection.members:
            try:
                raw = await self.client.get(member_path)
                devices.append(
                    decode_device(raw, device_type, member_path, parent_path)
                )
            except RECOVERABLE_ERRORS as error:
                self._skip(member_path, error, _("Skipping resource %s: %s"))
        return devices

    def _skip(self, path: str, error: Exception, message: str) -> None:
        logger.warning(message, path, error)
        self.warnings.append(DiscoveryWarning(path=path, reason=str(error)))
