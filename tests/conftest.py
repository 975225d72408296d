"""
Pytest configuration and shared fixtures for Redfish inventory collector tests.
"""

import json
from typing import Dict, List, Optional, Union
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.redfish_inventory.core.config import InventorySettings
from src.redfish_inventory.core.errors import UnexpectedStatusError


def to_body(payload) -> bytes:
    """Serialize a payload the way a controller would send it."""
    if isinstance(payload, bytes):
        return payload
    return json.dumps(payload).encode("utf-8")


def collection(*members: str) -> Dict:
    """Build a Redfish collection payload."""
    return {"Members": [{"@odata.id": member} for member in members]}


class FakeResourceClient:
    """In-memory Redfish graph keyed by resource path."""

    def __init__(self, resources: Dict[str, Union[Dict, bytes, Exception]]):
        self.resources = resources
        self.requested: List[str] = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, traceback):
        self.closed = True

    async def get(self, path: str = "") -> bytes:
        self.requested.append(path)
        if path not in self.resources:
            raise UnexpectedStatusError(path, 404, "Not Found")
        resource = self.resources[path]
        if isinstance(resource, Exception):
            raise resource
        return to_body(resource)


class FakeRegistrationClient:
    """Records create/attach calls and hands out sequential uids."""

    def __init__(
        self,
        create_errors: Optional[Dict[str, Exception]] = None,
        attach_errors: Optional[Dict[str, Exception]] = None,
    ):
        self.create_errors = create_errors or {}
        self.attach_errors = attach_errors or {}
        self.calls: List[tuple] = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, traceback):
        self.closed = True

    async def create_envelope(self, name: str) -> str:
        self.calls.append(("create", name))
        if name in self.create_errors:
            raise self.create_errors[name]
        return f"dev-{len([c for c in self.calls if c[0] == 'create'])}"

    async def attach_status(self, uid: str, status) -> None:
        self.calls.append(("attach", uid, status))
        if uid in self.attach_errors:
            raise self.attach_errors[uid]


def make_response(status: int = 200, body: Union[str, bytes] = b"") -> AsyncMock:
    """Create an aiohttp-style response usable with 'async with'."""
    raw = body.encode("utf-8") if isinstance(body, str) else body
    response = AsyncMock()
    response.status = status
    response.read = AsyncMock(return_value=raw)
    response.text = AsyncMock(side_effect=lambda *args, **kwargs: raw.decode("utf-8"))
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def make_session(**methods) -> MagicMock:
    """Create a ClientSession mock whose get/post/put return the given responses."""
    session = MagicMock()
    for name, response in methods.items():
        if isinstance(response, Exception):
            setattr(session, name, MagicMock(side_effect=response))
        else:
            setattr(session, name, MagicMock(return_value=response))
    session.close = AsyncMock()
    return session


@pytest.fixture
def settings():
    """Settings pointing at a local inventory API."""
    return InventorySettings(
        redfish_username="admin",
        redfish_password="secret",
        inventory_host="http://inventory.test:8080",
    )


@pytest.fixture
def single_system_graph():
    """One HPE system with one processor and one memory module."""
    return {
        "Systems": collection("/redfish/v1/Systems/1"),
        "/redfish/v1/Systems/1": {
            "Manufacturer": "HPE",
            "Model": "ProLiant BL460c Gen10",
            "SerialNumber": "ABC0001",
            "Processors": {"@odata.id": "/redfish/v1/Systems/1/Processors"},
            "Memory": {"@odata.id": "/redfish/v1/Systems/1/Memory"},
        },
        "/redfish/v1/Systems/1/Processors": collection(
            "/redfish/v1/Systems/1/Processors/1"
        ),
        "/redfish/v1/Systems/1/Processors/1": {
            "Manufacturer": "Intel",
            "Model": "Xeon-Gold-6240",
            "SerialNumber": "CPU0002",
        },
        "/redfish/v1/Systems/1/Memory": collection("/redfish/v1/Systems/1/Memory/1"),
        "/redfish/v1/Systems/1/Memory/1": {
            "Manufacturer": "Micron",
            "PartNumber": "32GB-DDR4-2666",
            "SerialNumber": "DIMM0003",
        },
    }


@pytest.fixture
def two_system_graph():
    """S1 with CPUs [C1, C2] and DIMM [D1]; S2 with one CPU and no memory link."""
    return {
        "Systems": collection("/redfish/v1/Systems/S1", "/redfish/v1/Systems/S2"),
        "/redfish/v1/Systems/S1": {
            "Manufacturer": "Dell",
            "PartNumber": "R750",
            "SerialNumber": "S1SN",
            "Processors": {"@odata.id": "/redfish/v1/Systems/S1/Processors"},
            "Memory": {"@odata.id": "/redfish/v1/Systems/S1/Memory"},
        },
        "/redfish/v1/Systems/S1/Processors": collection(
            "/redfish/v1/Systems/S1/Processors/C1",
            "/redfish/v1/Systems/S1/Processors/C2",
        ),
        "/redfish/v1/Systems/S1/Processors/C1": {"SerialNumber": "C1SN"},
        "/redfish/v1/Systems/S1/Processors/C2": {"SerialNumber": "C2SN"},
        "/redfish/v1/Systems/S1/Memory": collection("/redfish/v1/Systems/S1/Memory/D1"),
        "/redfish/v1/Systems/S1/Memory/D1": {"SerialNumber": "D1SN"},
        "/redfish/v1/Systems/S2": {
            "Manufacturer": "Dell",
            "SerialNumber": "S2SN",
            "Processors": {"@odata.id": "/redfish/v1/Systems/S2/Processors"},
        },
        "/redfish/v1/Systems/S2/Processors": collection(
            "/redfish/v1/Systems/S2/Processors/C1"
        ),
        "/redfish/v1/Systems/S2/Processors/C1": {"SerialNumber": "S2C1SN"},
    }
