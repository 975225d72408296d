"""
Redfish resource client.
Issues authenticated GET requests against a management controller and returns
the raw response bodies for the schema mapper to decode.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from src.redfish_inventory.core.errors import TransportError, UnexpectedStatusError
from src.redfish_inventory.core.version import get_user_agent
from src.redfish_inventory.utils.ssl_context import create_ssl_context

logger = logging.getLogger(__name__)


class ResourceClient:
    """
    Read-only client for one management controller.

    Paths are resolved against https://<address>/<api_root>. An empty path is
    the API root itself, a path starting with "/" is taken relative to the
    controller host (the form @odata.id references use), anything else is
    relative to the API root.

    Use as an async context manager so the underlying session is closed.
    """

    def __init__(
        self,
        address: str,
        username: str,
        password: str,
        api_root: str = "redfish/v1",
        verify_ssl: bool = False,
    ):
        self.address = address.strip().rstrip("/")
        self.host_url = f"https://{self.address}"
        self.base_url = f"{self.host_url}/{api_root.strip('/')}"
        self.auth = aiohttp.BasicAuth(username, password)
        self.verify_ssl = verify_ssl
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "ResourceClient":
        return self

    async def __aexit__(self, exc_type, exc, traceback) -> None:
        await self.close()

    def resolve(self, path: str = "") -> str:
        """Turn a resource reference into an absolute URL."""
        if not path:
            return self.base_url
        if path.startswith(("https://", "http://")):
            return path
        if path.startswith("/"):
            return f"{self.host_url}{path}"
        return f"{self.base_url}/{path}"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            connector = aiohttp.TCPConnector(ssl=create_ssl_context(self.verify_ssl))
            self._session = aiohttp.ClientSession(
                connector=connector,
                auth=self.auth,
                headers={
                    "Accept": "application/json",
                    "User-Agent": get_user_agent(),
                },
            )
        return self._session

    async def get(self, path: str = "") -> bytes:
        """
        Fetch a resource and return its raw body.

        Raises:
            TransportError: the request could not be completed
            UnexpectedStatusError: the controller answered with a status other than 200
        """
        url = self.resolve(path)
        session = self._get_session()
        logger.debug("GET %s", url)

        try:
            async with session.get(url) as response:
                body = await response.read()
                if response.status != 200:
                    raise UnexpectedStatusError(
                        url, response.status, body.decode("utf-8", errors="replace")
                    )
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as error:
            raise TransportError(url, error) from error

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None
