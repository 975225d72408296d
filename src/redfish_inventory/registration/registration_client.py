"""
Inventory API client.

Each device is registered in two calls: POST /devices creates an empty
envelope and returns its uid, then PUT /devices/<uid>/status attaches the
observed state. The uid only ever comes from the API.
"""

import asyncio
import json
import logging
from typing import Dict, Optional
from urllib.parse import quote

import aiohttp

from src.redfish_inventory.core.errors import (
    EnvelopeCreationError,
    StatusUpdateError,
    TransportError,
    UnexpectedStatusError,
)
from src.redfish_inventory.core.version import get_user_agent
from src.redfish_inventory.registration.payloads import (
    DeviceStatus,
    EnvelopeRequest,
    EnvelopeResponse,
    StatusUpdateRequest,
)
from src.redfish_inventory.utils.ssl_context import create_ssl_context

logger = logging.getLogger(__name__)

CREATE_SUCCESS_STATUSES = (200, 201)
UPDATE_SUCCESS_STATUS = 200


class RegistrationClient:
    """Client for the inventory API's device endpoints."""

    def __init__(
        self,
        inventory_host: str,
        labels: Optional[Dict[str, str]] = None,
        verify_ssl: bool = True,
    ):
        self.inventory_host = inventory_host.rstrip("/")
        self.labels = dict(labels or {})
        self.verify_ssl = verify_ssl
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "RegistrationClient":
        return self

    async def __aexit__(self, exc_type, exc, traceback) -> None:
        await self.close()

    def devices_url(self) -> str:
        return f"{self.inventory_host}/devices"

    def status_url(self, uid: str) -> str:
        return f"{self.devices_url()}/{quote(uid, safe='')}/status"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            ssl_context = None
            if self.inventory_host.startswith("https://"):
                ssl_context = create_ssl_context(self.verify_ssl)
            connector = aiohttp.TCPConnector(ssl=ssl_context)
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={
                    "Accept": "application/json",
                    "User-Agent": get_user_agent(),
                },
            )
        return self._session

    async def create_envelope(self, name: str) -> str:
        """
        Create a device envelope and return the uid assigned by the API.

        Raises:
            PayloadValidationError: name is empty
            TransportError: the request could not be completed
            EnvelopeCreationError: status other than 200/201, or no metadata.uid
        """
        url = self.devices_url()
        body = EnvelopeRequest(name=name, labels=self.labels).to_dict()
        session = self._get_session()
        logger.debug("POST %s %s", url, body)

        try:
            async with session.post(url, json=body) as response:
                text = (await response.read()).decode("utf-8", errors="replace")
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as error:
            raise TransportError(url, error) from error

        if status not in CREATE_SUCCESS_STATUSES:
            raise EnvelopeCreationError(
                name, f"unexpected status {status}", status
            ) from UnexpectedStatusError(url, status, text)

        try:
            data = json.loads(text) if text else None
        except ValueError:
            data = None
        uid = EnvelopeResponse.from_payload(data).uid
        if uid is None:
            raise EnvelopeCreationError(name, "response has no metadata.uid", status)
        return uid

    async def attach_status(self, uid: str, status: DeviceStatus) -> None:
        """
        Attach observed state to an existing envelope.

        Raises:
            PayloadValidationError: the status body is malformed
            TransportError: the request could not be completed
            StatusUpdateError: status other than 200
        """
        url = self.status_url(uid)
        body = StatusUpdateRequest(status=status).to_dict()
        session = self._get_session()
        logger.debug("PUT %s %s", url, body)

        try:
            async with session.put(url, json=body) as response:
                text = (await response.read()).decode("utf-8", errors="replace")
                response_status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as error:
            raise TransportError(url, error) from error

        if response_status != UPDATE_SUCCESS_STATUS:
            raise StatusUpdateError(uid, response_status, text) from UnexpectedStatusError(
                url, response_status, text
            )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None
