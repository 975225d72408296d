"""
Tests for the normalized inventory data model.
"""

import dataclasses

import pytest

from src.redfish_inventory.core.models import (
    DeviceType,
    DiscoveredDevice,
    SystemInventory,
)


def _device(device_type, serial):
    return DiscoveredDevice(device_type, "Vendor", "PN", serial, "", f"/{serial}")


class TestDiscoveredDevice:
    """Tests for DiscoveredDevice."""

    def test_temporary_name(self):
        device = _device(DeviceType.CPU, "CPU0002")
        assert device.temporary_name(1) == "CPU-1-CPU0002"

    def test_temporary_name_with_empty_serial(self):
        assert _device(DeviceType.DIMM, "").temporary_name(0) == "DIMM-0-"

    def test_is_immutable(self):
        device = _device(DeviceType.NODE, "N1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            device.serial_number = "other"  # type: ignore[misc]


class TestSystemInventory:
    """Tests for SystemInventory flattening."""

    def test_devices_order_is_node_cpus_dimms(self):
        node = _device(DeviceType.NODE, "N")
        cpus = [_device(DeviceType.CPU, "C1"), _device(DeviceType.CPU, "C2")]
        dimms = [_device(DeviceType.DIMM, "D1")]
        inventory = SystemInventory(node=node, processors=cpus, memory_modules=dimms)

        assert inventory.devices() == [node, *cpus, *dimms]

    def test_node_only(self):
        node = _device(DeviceType.NODE, "N")
        assert SystemInventory(node=node).devices() == [node]
