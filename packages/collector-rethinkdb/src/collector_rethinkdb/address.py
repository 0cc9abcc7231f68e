"""
Server address resolution.

Turns user-configured address strings into ServerAddress values:
- "host" or "host:port" literal pairs
- "[::1]:28015" bracketed IPv6 pairs
- URL-like strings with a scheme ("rethinkdb://db-1:28015")

All addresses are resolved before any connection is attempted, so a
single malformed entry aborts the gather call with zero network I/O.
"""

from dataclasses import dataclass
from urllib.parse import urlsplit

from collector_rethinkdb.errors import ParseError

DEFAULT_PORT = 28015
DEFAULT_HOST = "localhost"


@dataclass(frozen=True)
class ServerAddress:
    """
    Normalized address of one RethinkDB server.

    Attributes:
        host: Hostname or IP. Empty for the default address, in which
            case connections go to localhost.
        port: Driver port (1-65535).
    """

    host: str
    port: int = DEFAULT_PORT

    @property
    def connect_host(self) -> str:
        """Host handed to the driver."""
        return self.host or DEFAULT_HOST

    @property
    def tag(self) -> str:
        """The host:port string used to connect, as emitted in the host tag."""
        host = self.connect_host
        if ":" in host:
            host = f"[{host}]"
        return f"{host}:{self.port}"

    def __str__(self) -> str:
        return self.tag


# Used when no servers are configured at all
DEFAULT_ADDRESS = ServerAddress(host="", port=DEFAULT_PORT)


def _parse_port(raw: str, port: str) -> int:
    # ASCII digits only
    if not (port.isascii() and port.isdecimal()):
        raise ParseError(raw, f"invalid port '{port}'")
    value = int(port)
    if not 0 < value < 65536:
        raise ParseError(raw, f"port {value} out of range")
    return value


def _split_host_port(raw: str, hostport: str) -> ServerAddress:
    """Split a literal host[:port] pair."""
    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            raise ParseError(raw, "missing ']' in IPv6 address")
        host = hostport[1:end]
        rest = hostport[end + 1 :]
        if not host:
            raise ParseError(raw, "empty host")
        if not rest:
            return ServerAddress(host=host)
        if not rest.startswith(":"):
            raise ParseError(raw, f"unexpected '{rest}' after IPv6 address")
        return ServerAddress(host=host, port=_parse_port(raw, rest[1:]))

    if "]" in hostport:
        raise ParseError(raw, "unexpected ']' in address")

    # More than one colon without brackets is a bare IPv6 address
    if hostport.count(":") > 1:
        return ServerAddress(host=hostport)

    host, sep, port = hostport.partition(":")
    if not host:
        raise ParseError(raw, "empty host")
    if not sep:
        return ServerAddress(host=host)
    return ServerAddress(host=host, port=_parse_port(raw, port))


def resolve_address(raw: str) -> ServerAddress:
    """
    Resolve one configured address string.

    Strings containing "://" are parsed as URLs and only their network
    location is used. Anything else is treated as a literal host[:port]
    pair. The port defaults to 28015.

    Args:
        raw: Address as configured (e.g., "10.0.0.1:28015", "localhost").

    Returns:
        The normalized ServerAddress.

    Raises:
        ParseError: If the address cannot be parsed.
    """
    value = raw.strip()
    if not value:
        raise ParseError(raw, "empty address")

    if "://" not in value:
        return _split_host_port(raw, value)

    try:
        parts = urlsplit(value)
    except ValueError as e:
        raise ParseError(raw, str(e)) from e

    # Drop any userinfo; authentication is not supported
    netloc = parts.netloc.rpartition("@")[2]
    if not netloc:
        raise ParseError(raw, "missing host")
    return _split_host_port(raw, netloc)


def resolve_servers(servers: list[str]) -> list[ServerAddress]:
    """
    Resolve every configured server, or the default address if none.

    Args:
        servers: Configured address strings.

    Returns:
        One ServerAddress per configured server, in order. An empty
        configuration yields [DEFAULT_ADDRESS].

    Raises:
        ParseError: On the first address that cannot be parsed.
    """
    if not servers:
        return [DEFAULT_ADDRESS]
    return [resolve_address(s) for s in servers]
