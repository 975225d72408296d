"""
Typed views of the Redfish payloads the collector reads.

Only the fields the collector needs are decoded. Everything else a controller
returns is ignored, but the fields that are decoded are type-checked and a
mismatch raises DecodeError instead of being defaulted.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Tuple, Type, TypeVar

from src.redfish_inventory.core.errors import DecodeError

ODATA_ID = "@odata.id"


def load_json_object(raw: bytes, source: str) -> Dict[str, Any]:
    """Parse a response body that must be a JSON object."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as error:
        raise DecodeError(source, f"invalid JSON: {error}") from error
    if not isinstance(data, dict):
        raise DecodeError(source, f"expected a JSON object, got {type(data).__name__}")
    return data


def _optional_string(data: Dict[str, Any], key: str, source: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(source, f"{key} must be a string, got {type(value).__name__}")
    return value


def _optional_link(data: Dict[str, Any], key: str, source: str) -> Optional[str]:
    """Read a {"@odata.id": ...} link; a missing or empty link is None."""
    link = data.get(key)
    if link is None:
        return None
    if not isinstance(link, dict):
        raise DecodeError(source, f"{key} must be an object")
    target = link.get(ODATA_ID)
    if target is None or target == "":
        return None
    if not isinstance(target, str):
        raise DecodeError(source, f"{key}.{ODATA_ID} must be a string")
    return target


@dataclass(frozen=True)
class ResourceCollection:
    """A Redfish collection reduced to its ordered member references."""

    members: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, raw: bytes, source: str) -> "ResourceCollection":
        data = load_json_object(raw, source)
        members = data.get("Members")
        if members is None:
            return cls()
        if not isinstance(members, list):
            raise DecodeError(source, "Members must be an array")

        references = []
        for index, member in enumerate(members):
            target = member.get(ODATA_ID) if isinstance(member, dict) else None
            if not isinstance(target, str) or not target:
                raise DecodeError(source, f"Members[{index}] has no {ODATA_ID}")
            references.append(target)
        return cls(tuple(references))


@dataclass(frozen=True)
class CommonProperties:
    """Identity fields shared by systems, processors and memory modules."""

    manufacturer: str = ""
    model: str = ""
    part_number: str = ""
    serial_number: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str) -> "CommonProperties":
        return cls(
            manufacturer=_optional_string(data, "Manufacturer", source),
            model=_optional_string(data, "Model", source),
            part_number=_optional_string(data, "PartNumber", source),
            serial_number=_optional_string(data, "SerialNumber", source),
        )


class HasCommonProperties(Protocol):
    """Any decoded resource that exposes the shared identity fields."""

    def common_properties(self) -> CommonProperties:
        """Return the identity fields of this resource."""


@dataclass(frozen=True)
class RedfishSystem:
    """ComputerSystem resource, the node."""

    common: CommonProperties
    processors: Optional[str] = None
    memory: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str) -> "RedfishSystem":
        return cls(
            common=CommonProperties.from_dict(data, source),
            processors=_optional_link(data, "Processors", source),
            memory=_optional_link(data, "Memory", source),
        )

    def common_properties(self) -> CommonProperties:
        return self.common


@dataclass(frozen=True)
class RedfishProcessor:
    """Processor resource."""

    common: CommonProperties

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str) -> "RedfishProcessor":
        return cls(common=CommonProperties.from_dict(data, source))

    def common_properties(self) -> CommonProperties:
        return self.common


@dataclass(frozen=True)
class RedfishMemory:
    """Memory (DIMM) resource."""

    common: CommonProperties

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str) -> "RedfishMemory":
        return cls(common=CommonProperties.from_dict(data, source))

    def common_properties(self) -> CommonProperties:
        return self.common


ResourceT = TypeVar("ResourceT", RedfishSystem, RedfishProcessor, RedfishMemory)


def decode_resource(raw: bytes, schema: Type[ResourceT], source: str) -> ResourceT:
    """Decode a raw body into the given resource schema."""
    return schema.from_dict(load_json_object(raw, source), source)
