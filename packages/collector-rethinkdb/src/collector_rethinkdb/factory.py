"""
Factory functions for creating RethinkDB collector instances.

This module replaces module-level plugin self-registration: the host
process calls a factory explicitly to get a configured collector.
"""

import os

from collector_rethinkdb.collector import RethinkDBCollector
from collector_rethinkdb.session import Connector, RethinkDBConnector

DEFAULT_CONNECT_TIMEOUT = 20.0


def create_rethinkdb_collector(
    servers: list[str] | None = None,
    timeout: float | None = None,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    connector: Connector | None = None,
) -> RethinkDBCollector:
    """
    Create a RethinkDB collector.

    Args:
        servers: Addresses to gather from (e.g., ["localhost", "10.0.0.1:28015"]).
            None or empty means localhost on the default port.
        timeout: Optional limit in seconds for a whole gather call.
        connect_timeout: Driver connect timeout in seconds. Ignored when
            connector is given.
        connector: Optional pre-configured session factory.
            If None, a RethinkDBConnector is created.

    Returns:
        RethinkDBCollector ready for gather().

    Example:
        collector = create_rethinkdb_collector(["db-1", "db-2:28016"], timeout=10.0)
        await collector.gather(acc)
    """
    if connector is None:
        connector = RethinkDBConnector(timeout=connect_timeout)

    return RethinkDBCollector(
        servers=list(servers or []),
        timeout=timeout,
        connector=connector,
    )


def _float_env(name: str) -> float | None:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"{name} must be a number of seconds, got '{value}'") from e


def create_rethinkdb_collector_from_env(
    connector: Connector | None = None,
) -> RethinkDBCollector:
    """
    Create a RethinkDB collector configured from environment variables.

    Environment variables:
        RETHINKDB_SERVERS: Comma separated addresses (default: localhost)
        RETHINKDB_GATHER_TIMEOUT: Seconds allowed for a whole gather call
        RETHINKDB_CONNECT_TIMEOUT: Driver connect timeout in seconds

    Raises:
        ValueError: If a timeout variable is not a number.
    """
    raw_servers = os.environ.get("RETHINKDB_SERVERS", "")
    servers = [s.strip() for s in raw_servers.split(",") if s.strip()]

    connect_timeout = _float_env("RETHINKDB_CONNECT_TIMEOUT")

    return create_rethinkdb_collector(
        servers=servers,
        timeout=_float_env("RETHINKDB_GATHER_TIMEOUT"),
        connect_timeout=connect_timeout if connect_timeout is not None else DEFAULT_CONNECT_TIMEOUT,
        connector=connector,
    )
