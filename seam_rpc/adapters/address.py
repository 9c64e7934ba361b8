"""
Target address parsing

Splits a client address URI into the parts the adapters need.
"""

from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

from seam_rpc.errors import UnsupportedAddressError

DEFAULT_PORT = 80

# Schemes whose formatted form always carries a path
SLASHED_SCHEMES = ("http", "https", "ftp", "gopher", "file")


@dataclass(frozen=True)
class Address:
    """Parsed target address

    Attributes:
        scheme: Lower-case URI scheme ("tcp", "http", ...)
        host: Host name or IP address
        port: Port, 80 when the URI does not specify one
        uri: Formatted address, used for HTTP requests and log records
    """
    scheme: str
    host: str
    port: int
    uri: str

    def __str__(self) -> str:
        return self.uri


def format_address(parts) -> str:
    """Format split URI parts; web schemes get "/" when the path is empty"""
    path = parts.path
    if not path and parts.scheme in SLASHED_SCHEMES:
        path = "/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def parse_address(address: str) -> Address:
    """Parse a client address

    Args:
        address: Target URI, e.g. "tcp://127.0.0.1:7000" or "http://host/rpc"

    Returns:
        Address: Parsed address

    Raises:
        UnsupportedAddressError: The address has no host or an invalid port
    """
    parts = urlsplit(address)
    if not parts.hostname:
        raise UnsupportedAddressError(f"Address has no host: {address!r}")

    try:
        port = parts.port
    except ValueError as e:
        raise UnsupportedAddressError(f"Invalid port in address {address!r}: {e}") from e

    return Address(
        scheme=parts.scheme,
        host=parts.hostname,
        port=port or DEFAULT_PORT,
        uri=format_address(parts),
    )
