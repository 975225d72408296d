"""
Exception taxonomy for the Redfish inventory collector.

Discovery treats TransportError, UnexpectedStatusError and DecodeError as
recoverable below the root collection; a root failure surfaces as
DiscoveryError. Registration treats every failure as fatal for the run.
"""

from typing import Optional


class InventoryError(Exception):
    """Base class for all collector exceptions."""


class TransportError(InventoryError):
    """Raised when a request could not be sent or no response was received."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class UnexpectedStatusError(InventoryError):
    """Raised when a response carries a status outside the accepted set."""

    def __init__(self, url: str, status: int, body: str = ""):
        message = f"unexpected status {status} from {url}"
        if body:
            message = f"{message}: {body[:200]}"
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


class DecodeError(InventoryError):
    """Raised when a Redfish payload does not match the expected schema."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"cannot decode {source}: {reason}")
        self.source = source
        self.reason = reason


class DiscoveryError(InventoryError):
    """Raised when the root Systems collection cannot be read or decoded."""

    def __init__(self, address: str, cause: Exception):
        super().__init__(f"redfish discovery on {address} failed: {cause}")
        self.address = address
        self.cause = cause


class NoDevicesFoundError(InventoryError):
    """Raised when discovery completes without yielding a single device."""

    def __init__(self, address: str):
        super().__init__(f"no devices discovered on {address}")
        self.address = address


class PayloadValidationError(InventoryError):
    """Raised when a registration request body fails validation before sending."""


class RegistrationError(InventoryError):
    """Base class for inventory API failures."""


class EnvelopeCreationError(RegistrationError):
    """Raised when the create call is rejected or returns no identifier."""

    def __init__(self, name: str, reason: str, status: Optional[int] = None):
        super().__init__(f"cannot create envelope {name}: {reason}")
        self.name = name
        self.reason = reason
        self.status = status


class StatusUpdateError(RegistrationError):
    """Raised when the status update for an envelope is rejected."""

    def __init__(self, uid: str, status: int, body: str = ""):
        message = f"status update for {uid} returned {status}"
        if body:
            message = f"{message}: {body[:200]}"
        super().__init__(message)
        self.uid = uid
        self.status = status
        self.body = body


class DeviceRegistrationError(InventoryError):
    """
    Raised by the orchestrator when one device cannot be registered.

    uid is set when the envelope was created before the failure, so the
    caller can reconcile the dangling record by hand.
    """

    def __init__(self, device_name: str, cause: Exception, uid: Optional[str] = None):
        if uid:
            message = f"failed to register {device_name} (envelope {uid}): {cause}"
        else:
            message = f"failed to register {device_name}: {cause}"
        super().__init__(message)
        self.device_name = device_name
        self.uid = uid
        self.cause = cause


def format_error_chain(error: BaseException) -> str:
    """Render an exception and its causes as a single line."""
    parts = []
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        if not parts or text not in parts[-1]:
            parts.append(text)
        current = current.__cause__
    return " <- ".join(parts)
