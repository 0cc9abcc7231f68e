"""
Per-poll RethinkDB sessions.

This module provides the session layer of the collector:
- SessionProtocol: What the version gate and stats decoder need from a session
- Connector: Callable that opens a session for a ServerAddress
- RethinkDBSession / RethinkDBConnector: Implementations backed by the
  official rethinkdb driver
- open_session: Async context manager scoping a session to one poll

A session belongs to exactly one poll. It is a local value inside the
poll coroutine and is closed on every exit path, including cancellation.

The driver's blocking API is run in worker threads via asyncio.to_thread
so a slow server never stalls sibling polls on the event loop.
"""

import asyncio
import functools
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from rethinkdb import RethinkDB
from rethinkdb.errors import ReqlError

from collector_rethinkdb.address import ServerAddress
from collector_rethinkdb.errors import ConnectError

logger = logging.getLogger(__name__)

# Errors the driver raises for network and query failures
DRIVER_ERRORS = (ReqlError, OSError)

SYSTEM_DB = "rethinkdb"
CLUSTER_STATS_KEY = ["cluster"]


@runtime_checkable
class SessionProtocol(Protocol):
    """
    Protocol for a connection to one RethinkDB server.

    Query methods raise driver errors (ReqlError, OSError) on transport
    failure; callers translate them into stage-specific errors.
    """

    address: ServerAddress

    async def server_status(self) -> list[dict[str, Any]]:
        """Return at most one row of rethinkdb.server_status."""
        ...

    async def cluster_stats(self) -> dict[str, Any] | None:
        """Return the rethinkdb.stats row keyed by ["cluster"], or None."""
        ...

    async def close(self) -> None:
        """Release the underlying connection."""
        ...


class Connector(Protocol):
    """
    Protocol for session factories.

    Raises:
        ConnectError: If the session cannot be established.
    """

    async def __call__(self, address: ServerAddress) -> SessionProtocol: ...


@dataclass
class RethinkDBSession:
    """
    Session wrapping one open rethinkdb driver connection.

    Attributes:
        address: Server this session is connected to
        conn: Open driver connection
        r: Driver query root the connection was opened with
    """

    address: ServerAddress
    conn: Any
    r: RethinkDB

    async def server_status(self) -> list[dict[str, Any]]:
        query = self.r.db(SYSTEM_DB).table("server_status").limit(1)
        return await asyncio.to_thread(lambda: list(query.run(self.conn)))

    async def cluster_stats(self) -> dict[str, Any] | None:
        query = self.r.db(SYSTEM_DB).table("stats").get(CLUSTER_STATS_KEY)
        return await asyncio.to_thread(query.run, self.conn)

    async def close(self) -> None:
        await asyncio.to_thread(self.conn.close)


def _close_abandoned(address: ServerAddress, connect: asyncio.Future) -> None:
    """Close a connection whose connect finished after the poll was cancelled."""
    if connect.cancelled() or connect.exception() is not None:
        return
    try:
        connect.result().close()
    except DRIVER_ERRORS as e:
        logger.warning(f"Failed to close abandoned connection to {address.tag}: {e}")
        return
    logger.debug(f"Closed abandoned connection to {address.tag}")


@dataclass
class RethinkDBConnector:
    """
    Opens RethinkDBSession instances with the rethinkdb driver.

    Attributes:
        timeout: Connect timeout in seconds passed to the driver
        r: Driver query root (one per connector)

    Example:
        connector = RethinkDBConnector(timeout=5.0)
        async with open_session(resolve_address("db-1"), connector) as session:
            rows = await session.server_status()
    """

    timeout: float = 20.0
    r: RethinkDB = field(default_factory=RethinkDB)

    async def __call__(self, address: ServerAddress) -> RethinkDBSession:
        connect = asyncio.ensure_future(
            asyncio.to_thread(
                self.r.connect,
                host=address.connect_host,
                port=address.port,
                timeout=self.timeout,
            )
        )
        try:
            # The worker thread outlives a cancelled await; its connection is closed on completion
            conn = await asyncio.shield(connect)
        except asyncio.CancelledError:
            connect.add_done_callback(functools.partial(_close_abandoned, address))
            raise
        except DRIVER_ERRORS as e:
            raise ConnectError(address, f"unable to connect to RethinkDB, {e}") from e
        return RethinkDBSession(address=address, conn=conn, r=self.r)


@asynccontextmanager
async def open_session(
    address: ServerAddress, connector: Connector
) -> AsyncIterator[SessionProtocol]:
    """
    Open a session scoped to one poll.

    The session is closed when the block exits, whatever the reason.
    A failure to close is logged and never replaces the poll's own result.

    Args:
        address: Server to connect to.
        connector: Session factory.

    Yields:
        The open session.

    Raises:
        ConnectError: If the session cannot be established.
    """
    session = await connector(address)
    logger.debug(f"Opened session to {address.tag}")
    try:
        yield session
    finally:
        try:
            await session.close()
        except DRIVER_ERRORS as e:
            logger.warning(f"Failed to close session to {address.tag}: {e}")
