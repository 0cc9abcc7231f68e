"""
Exception classes for RethinkDB stats collection.

This module defines the error taxonomy used by the collector:
- ParseError: Invalid address configuration, fatal to the whole gather call
- ServerError: Base for failures isolated to a single server
  - ConnectError: Session could not be established
  - VersionError: Server version is unsupported or undeterminable
  - FetchError: Stats query failed at the transport level
  - DecodeError: Stats document does not have the expected shape
- GatherError: Aggregate of every per-server failure from one gather call

Per project patterns:
- Inherit from Exception for base exception type
- Store context data in attributes for error handling
- Include descriptive message with relevant details
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collector_rethinkdb.address import ServerAddress
    from collector_rethinkdb.collector import GatherOutcome


class Stage(str, Enum):
    """Poll stage in which a per-server failure occurred."""

    CONNECT = "connect"
    VERSION = "version"
    FETCH = "fetch"
    DECODE = "decode"


class CollectorError(Exception):
    """Base class for all collector errors."""


class ParseError(CollectorError):
    """
    Raised when a configured server address cannot be parsed.

    Address configuration is validated before any network I/O, so this
    error aborts the whole gather call.

    Attributes:
        raw: The address string as configured
        reason: Why the address was rejected
    """

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Unable to parse address '{raw}': {reason}")


class ServerError(CollectorError):
    """
    Base class for failures isolated to one server.

    Subclasses set the stage class attribute so aggregated reports can
    say where each poll stopped.

    Attributes:
        address: The server the poll was running against
        reason: Human-readable cause
    """

    stage: Stage

    def __init__(self, address: "ServerAddress", reason: str) -> None:
        self.address = address
        self.reason = reason
        super().__init__(f"{self.stage.value} failed for {address.tag}: {reason}")


class ConnectError(ServerError):
    """Raised when a session to a server cannot be opened."""

    stage = Stage.CONNECT


class VersionError(ServerError):
    """Raised when a server's version is unsupported or cannot be determined."""

    stage = Stage.VERSION


class FetchError(ServerError):
    """Raised when the cluster stats query fails at the transport level."""

    stage = Stage.FETCH


class DecodeError(ServerError):
    """Raised when the cluster stats document cannot be mapped to ClusterStats."""

    stage = Stage.DECODE


class GatherError(CollectorError):
    """
    Raised when one or more servers failed during a gather call.

    Every failure is preserved; metrics from servers that succeeded have
    already been emitted when this is raised.

    Attributes:
        failures: One ServerError per failing server, in configuration order
        outcomes: All per-server outcomes of the call
    """

    def __init__(
        self,
        failures: list[ServerError],
        outcomes: list["GatherOutcome"],
    ) -> None:
        self.failures = failures
        self.outcomes = outcomes
        details = "; ".join(str(f) for f in failures)
        super().__init__(
            f"{len(failures)} of {len(outcomes)} RethinkDB server(s) failed: {details}"
        )

    @property
    def failed_hosts(self) -> list[str]:
        """Tags of every failing server."""
        return [f.address.tag for f in self.failures]
