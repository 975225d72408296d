"""
TLS context construction shared by the Redfish and inventory clients.
"""

import ssl


def create_ssl_context(verify: bool) -> ssl.SSLContext:
    """
    Create a client SSL context.

    Management controllers ship self-signed certificates, so callers may turn
    verification off for them.
    """
    ssl_context = ssl.create_default_context()
    if not verify:
        ssl_context.check_hostname = False  # NOSONAR - verification is configurable
        ssl_context.verify_mode = ssl.CERT_NONE  # NOSONAR - verification is configurable
    return ssl_context
