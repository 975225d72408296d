"""
Collection run orchestration.

Sequences discovery and registration for one management controller:

    START -> DISCOVER -> NO_DEVICES_FOUND
                      -> DEVICES_FOUND -> REGISTER_NEXT ... -> DONE

Any unhandled error ends the run in FAILED. Discovery below the systems
collection never fails the run; registration failures always do, because a
partially registered controller leaves the inventory silently incomplete.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from src.i18n import _
from src.redfish_inventory.core.config import InventorySettings
from src.redfish_inventory.core.errors import (
    DeviceRegistrationError,
    DiscoveryError,
    InventoryError,
    NoDevicesFoundError,
)
from src.redfish_inventory.core.models import DiscoveredDevice, DiscoveryWarning
from src.redfish_inventory.discovery.traverser import DiscoveryTraverser
from src.redfish_inventory.redfish.resource_client import ResourceClient
from src.redfish_inventory.registration.payloads import DeviceStatus
from src.redfish_inventory.registration.registration_client import RegistrationClient
from src.redfish_inventory.utils.verbosity_logger import get_logger


class RunState(str, Enum):
    """States of a collection run."""

    START = "start"
    DISCOVER = "discover"
    NO_DEVICES_FOUND = "no_devices_found"
    DEVICES_FOUND = "devices_found"
    REGISTER_NEXT = "register_next"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunResult:
    """Outcome of one collection run."""

    address: str
    state: RunState = RunState.START
    devices: List[DiscoveredDevice] = field(default_factory=list)
    correlation: Dict[str, str] = field(default_factory=dict)
    warnings: List[DiscoveryWarning] = field(default_factory=list)
    error: Optional[InventoryError] = None

    @property
    def success(self) -> bool:
        return self.state == RunState.DONE


def default_resource_client_factory(
    address: str, settings: InventorySettings
) -> ResourceClient:
    return ResourceClient(
        address,
        settings.redfish_username,
        settings.redfish_password,
        api_root=settings.redfish_api_root,
        verify_ssl=settings.redfish_verify_ssl,
    )


def default_registration_client_factory(
    settings: InventorySettings,
) -> RegistrationClient:
    return RegistrationClient(
        settings.inventory_host,
        labels=settings.inventory_labels,
        verify_ssl=settings.inventory_verify_ssl,
    )


class InventoryOrchestrator:
    """Runs discovery against one controller and registers what it finds."""

    def __init__(
        self,
        settings: Optional[InventorySettings] = None,
        resource_client_factory: Optional[Callable] = None,
        registration_client_factory: Optional[Callable] = None,
    ):
        self.settings = settings or InventorySettings()
        self.resource_client_factory = (
            resource_client_factory or default_resource_client_factory
        )
        self.registration_client_factory = (
            registration_client_factory or default_registration_client_factory
        )
        self.logger = get_logger(__name__, self.settings.log_levels)

    def _transition(self, result: RunResult, state: RunState) -> None:
        self.logger.debug(
            "Run for %s: %s -> %s", result.address, result.state.value, state.value
        )
        result.state = state

    async def discover_only(self, address: str) -> List[DiscoveredDevice]:
        """Run discovery and return the devices without registering anything."""
        devices, _warnings = await self._discover(address)
        return devices

    async def _discover(self, address: str):
        async with self.resource_client_factory(address, self.settings) as client:
            traverser = DiscoveryTraverser(client, self.settings.systems_path)
            try:
                devices = await traverser.discover()
            except InventoryError as error:
                raise DiscoveryError(address, error) from error
        return devices, list(traverser.warnings)

    async def run(self, address: str) -> RunResult:
        """
        Discover and register every device on a controller.

        Never raises InventoryError; the terminal error is stored on the result.
        """
        result = RunResult(address=address)
        try:
            self._transition(result, RunState.DISCOVER)
            result.devices, result.warnings = await self._discover(address)

            if not result.devices:
                self._transition(result, RunState.NO_DEVICES_FOUND)
                raise NoDevicesFoundError(address)

            self._transition(result, RunState.DEVICES_FOUND)
            async with self.registration_client_factory(self.settings) as registration:
                await self.register_devices(result, registration)
        except InventoryError as error:
            result.error = error
            if result.state != RunState.NO_DEVICES_FOUND:
                self._transition(result, RunState.FAILED)
            self.logger.error(_("Collection for %s failed: %s"), address, error)
            return result

        self._transition(result, RunState.DONE)
        self.logger.info(
            _("Registered %d device(s) from %s"), len(result.correlation), address
        )
        return result

    async def register_devices(self, result: RunResult, registration) -> None:
        """Register result.devices in order, recording name -> uid."""
        for ordinal, device in enumerate(result.devices):
            self._transition(result, RunState.REGISTER_NEXT)
            name = device.temporary_name(ordinal)
            uid: Optional[str] = None
            try:
                self.logger.info(
                    _("Creating resource envelope for %s (%s)"),
                    name,
                    device.device_type.value,
                )
                uid = await registration.create_envelope(name)
                result.correlation[name] = uid

                self.logger.info(_("Updating status for %s (UID: %s)"), name, uid)
                await registration.attach_status(uid, DeviceStatus.from_device(device))
            except InventoryError as error:
                raise DeviceRegistrationError(name, error, uid=uid) from error
            self.logger.info(_("Successfully posted device %s"), uid)


async def collect_and_register(
    address: str, settings: Optional[InventorySettings] = None
) -> RunResult:
    """
    Collect inventory from the controller at address and register it.

    Returns the successful RunResult, or raises the run's terminal error.
    """
    result = await InventoryOrchestrator(settings).run(address)
    if result.error is not None:
        raise result.error
    return result
