"""
Tests for inventory API request and response bodies.
"""

import pytest

from src.redfish_inventory.core.errors import PayloadValidationError
from src.redfish_inventory.core.models import DeviceType, DiscoveredDevice
from src.redfish_inventory.registration.payloads import (
    DeviceStatus,
    EnvelopeRequest,
    EnvelopeResponse,
    StatusUpdateRequest,
)

DIMM = DiscoveredDevice(
    device_type=DeviceType.DIMM,
    manufacturer="Micron",
    part_number="32GB-DDR4-2666",
    serial_number="DIMM0003",
    parent_reference="/redfish/v1/Systems/1",
    source_uri="/redfish/v1/Systems/1/Memory/1",
)


class TestEnvelopeRequest:
    """Tests for the create body."""

    def test_name_only_by_default(self):
        assert EnvelopeRequest("Node-0-ABC").to_dict() == {"name": "Node-0-ABC"}

    def test_labels_included(self):
        body = EnvelopeRequest("n", labels={"site": "lab"}).to_dict()
        assert body["labels"] == {"site": "lab"}

    def test_empty_name_rejected(self):
        with pytest.raises(PayloadValidationError, match="name"):
            EnvelopeRequest("").to_dict()

    def test_non_string_label_rejected(self):
        with pytest.raises(PayloadValidationError):
            EnvelopeRequest("n", labels={"rack": 12}).to_dict()  # type: ignore[dict-item]


class TestDeviceStatus:
    """Tests for the status body."""

    def test_from_device_drops_parent_reference(self):
        body = StatusUpdateRequest(DeviceStatus.from_device(DIMM)).to_dict()

        assert body == {
            "status": {
                "deviceType": "DIMM",
                "manufacturer": "Micron",
                "partNumber": "32GB-DDR4-2666",
                "serialNumber": "DIMM0003",
                "properties": {"redfish_uri": "/redfish/v1/Systems/1/Memory/1"},
            }
        }
        assert "parentID" not in body["status"]

    def test_empty_identity_fields_allowed(self):
        status = DeviceStatus(DeviceType.NODE, "", "", "", "/S/1")
        assert status.to_dict()["manufacturer"] == ""

    def test_unknown_device_type_rejected(self):
        status = DeviceStatus("GPU", "", "", "", "/S/1")  # type: ignore[arg-type]
        with pytest.raises(PayloadValidationError, match="device type"):
            status.to_dict()

    def test_missing_source_uri_rejected(self):
        with pytest.raises(PayloadValidationError, match="redfish_uri"):
            DeviceStatus(DeviceType.CPU, "", "", "", "").to_dict()

    def test_non_string_field_rejected(self):
        status = DeviceStatus(DeviceType.CPU, None, "", "", "/x")  # type: ignore[arg-type]
        with pytest.raises(PayloadValidationError, match="manufacturer"):
            status.to_dict()


class TestEnvelopeResponse:
    """Tests for uid extraction."""

    def test_uid_present(self):
        assert EnvelopeResponse.from_payload({"metadata": {"uid": "dev-1"}}).uid == "dev-1"

    @pytest.mark.parametrize(
        "payload",
        [None, [], {}, {"metadata": None}, {"metadata": {"uid": ""}}, {"metadata": "x"}],
    )
    def test_uid_absent(self, payload):
        assert EnvelopeResponse.from_payload(payload).uid is None
