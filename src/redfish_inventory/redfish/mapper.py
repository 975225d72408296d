"""
Projection of decoded Redfish resources onto DiscoveredDevice records.
"""

from typing import Dict, Type

from src.redfish_inventory.core.models import DeviceType, DiscoveredDevice
from src.redfish_inventory.redfish.schemas import (
    HasCommonProperties,
    RedfishMemory,
    RedfishProcessor,
    RedfishSystem,
    decode_resource,
)

SCHEMA_FOR_DEVICE_TYPE: Dict[DeviceType, Type] = {
    DeviceType.NODE: RedfishSystem,
    DeviceType.CPU: RedfishProcessor,
    DeviceType.DIMM: RedfishMemory,
}


def map_device(
    resource: HasCommonProperties,
    device_type: DeviceType,
    source_uri: str,
    parent_reference: str = "",
) -> DiscoveredDevice:
    """
    Build a DiscoveredDevice from any resource exposing common properties.

    PartNumber wins when present; otherwise Model stands in for it. Model is
    never replaced by PartNumber.
    """
    common = resource.common_properties()
    return DiscoveredDevice(
        device_type=device_type,
        manufacturer=common.manufacturer,
        part_number=common.part_number or common.model,
        serial_number=common.serial_number,
        parent_reference=parent_reference,
        source_uri=source_uri,
    )


def decode_device(
    raw: bytes,
    device_type: DeviceType,
    source_uri: str,
    parent_reference: str = "",
) -> DiscoveredDevice:
    """Decode a raw payload with the schema for device_type and map it."""
    resource = decode_resource(raw, SCHEMA_FOR_DEVICE_TYPE[device_type], source_uri)
    return map_device(resource, device_type, source_uri, parent_reference)
