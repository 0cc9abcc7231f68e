"""
Server version gate.

Every poll checks the node's self-reported version before reading stats.
Nodes older than MIN_SUPPORTED_MAJOR do not expose the stats table in the
shape we decode, so their polls stop here with a VersionError.
"""

import logging
import re
from dataclasses import dataclass

from pydantic import ValidationError

from collector_rethinkdb.address import ServerAddress
from collector_rethinkdb.errors import VersionError
from collector_rethinkdb.session import DRIVER_ERRORS, SessionProtocol
from collector_rethinkdb.types import ServerStatusDocument

logger = logging.getLogger(__name__)

MIN_SUPPORTED_MAJOR = 2

VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)")


@dataclass
class VersionInfo:
    """
    Version extracted from a process version string.

    Attributes:
        raw: Full string as reported (e.g., "rethinkdb 2.4.1~0bionic (GCC 7.3.0)")
        major: Major version; the only component that gates compatibility
        minor: Minor version (informational)
        patch: Patch version (informational)
    """

    raw: str
    major: int
    minor: int
    patch: int

    @property
    def number(self) -> str:
        """Dotted version number without the surrounding text."""
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def supported(self) -> bool:
        return self.major >= MIN_SUPPORTED_MAJOR


def parse_version(address: ServerAddress, raw: str) -> VersionInfo:
    """
    Extract and validate the version from a process version string.

    Args:
        address: Server the string came from, for error context.
        raw: Self-reported process version.

    Returns:
        VersionInfo for a supported version.

    Raises:
        VersionError: If the string holds no x.y.z number or the major
            version is below MIN_SUPPORTED_MAJOR.
    """
    match = VERSION_PATTERN.search(raw)
    if match is None:
        raise VersionError(
            address,
            f"could not determine the RethinkDB server version: malformed version string ({raw})",
        )

    major, minor, patch = (int(g) for g in match.groups())
    info = VersionInfo(raw=raw, major=major, minor=minor, patch=patch)
    if not info.supported:
        raise VersionError(address, f"unsupported version {info.number}")
    return info


async def check_version(session: SessionProtocol) -> VersionInfo:
    """
    Check that the session's server runs a supported version.

    Args:
        session: Open session to the server.

    Returns:
        VersionInfo of the server.

    Raises:
        VersionError: If the status query fails, returns no rows, cannot
            be decoded, lacks process.version, or reports an unsupported
            or malformed version.
    """
    address = session.address
    try:
        rows = await session.server_status()
    except DRIVER_ERRORS as e:
        raise VersionError(address, f"status query failed, {e}") from e

    if not rows:
        raise VersionError(
            address,
            "could not determine the RethinkDB server version: "
            "no rows returned from the server_status table",
        )

    try:
        status = ServerStatusDocument.model_validate(rows[0])
    except ValidationError as e:
        raise VersionError(address, "could not parse server_status document") from e

    if not status.process.version:
        raise VersionError(
            address,
            "could not determine the RethinkDB server version: process.version key missing",
        )

    info = parse_version(address, status.process.version)
    logger.debug(f"{address.tag} runs RethinkDB {info.number}")
    return info
