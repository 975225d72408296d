"""
Request and response bodies of the inventory API.

Requests are validated when serialized so a malformed body never reaches the
network.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from src.redfish_inventory.core.errors import PayloadValidationError
from src.redfish_inventory.core.models import DeviceType, DiscoveredDevice


def _require_string(value: Any, name: str, allow_empty: bool = True) -> None:
    if not isinstance(value, str):
        raise PayloadValidationError(f"{name} must be a string")
    if not allow_empty and not value:
        raise PayloadValidationError(f"{name} must not be empty")


@dataclass(frozen=True)
class EnvelopeRequest:
    """Body of POST /devices."""

    name: str
    labels: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        _require_string(self.name, "name", allow_empty=False)
        body: Dict[str, Any] = {"name": self.name}
        if self.labels:
            for key, value in self.labels.items():
                _require_string(key, "label key", allow_empty=False)
                _require_string(value, f"label {key}")
            body["labels"] = dict(self.labels)
        return body


@dataclass(frozen=True)
class DeviceStatus:
    """Observed state attached to an envelope."""

    device_type: DeviceType
    manufacturer: str
    part_number: str
    serial_number: str
    redfish_uri: str

    @classmethod
    def from_device(cls, device: DiscoveredDevice) -> "DeviceStatus":
        return cls(
            device_type=device.device_type,
            manufacturer=device.manufacturer,
            part_number=device.part_number,
            serial_number=device.serial_number,
            redfish_uri=device.source_uri,
        )

    def to_dict(self) -> Dict[str, Any]:
        if not isinstance(self.device_type, DeviceType):
            raise PayloadValidationError(f"unknown device type {self.device_type!r}")
        _require_string(self.manufacturer, "manufacturer")
        _require_string(self.part_number, "partNumber")
        _require_string(self.serial_number, "serialNumber")
        _require_string(self.redfish_uri, "redfish_uri", allow_empty=False)
        return {
            "deviceType": self.device_type.value,
            "manufacturer": self.manufacturer,
            "partNumber": self.part_number,
            "serialNumber": self.serial_number,
            "properties": {"redfish_uri": self.redfish_uri},
        }


@dataclass(frozen=True)
class StatusUpdateRequest:
    """Body of PUT /devices/<uid>/status."""

    status: DeviceStatus

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.to_dict()}


@dataclass(frozen=True)
class EnvelopeResponse:
    """The part of the create response the collector relies on."""

    uid: Optional[str]

    @classmethod
    def from_payload(cls, data: Any) -> "EnvelopeResponse":
        """Extract metadata.uid; anything missing or non-string gives uid None."""
        metadata = data.get("metadata") if isinstance(data, dict) else None
        uid = metadata.get("uid") if isinstance(metadata, dict) else None
        if not isinstance(uid, str) or not uid:
            return cls(uid=None)
        return cls(uid=uid)
