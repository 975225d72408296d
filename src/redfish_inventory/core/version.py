"""
Collector version detection.
Provides the running version for the User-Agent header of outgoing requests.
"""

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "redfish-inventory"

_CACHED_VERSION: dict[str, str] = {}


def get_version() -> str:
    """
    Get the redfish-inventory version string.

    Resolution order:
    1. importlib.metadata (installed package)
    2. "unknown" fallback

    The result is cached after the first call.
    """
    if "value" in _CACHED_VERSION:
        return _CACHED_VERSION["value"]

    try:
        _CACHED_VERSION["value"] = pkg_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        _CACHED_VERSION["value"] = "unknown"
        logger.debug("Package metadata not found, version is 'unknown'")
    return _CACHED_VERSION["value"]


def get_user_agent() -> str:
    """Build the User-Agent header value."""
    return f"{DISTRIBUTION_NAME}/{get_version()}"
