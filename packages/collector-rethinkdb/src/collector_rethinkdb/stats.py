"""
Cluster stats fetching, decoding and emission.

Reads the cluster-wide counters a node exposes in rethinkdb.stats,
maps them onto ClusterStats and emits one sample per metric declared in
RETHINKDB_METRICS.
"""

from dataclasses import asdict, dataclass
from typing import Any

from pydantic import ValidationError

from collector_protocols import AccumulatorProtocol, MetricDefinition
from collector_rethinkdb.address import ServerAddress
from collector_rethinkdb.errors import DecodeError, FetchError
from collector_rethinkdb.session import DRIVER_ERRORS, SessionProtocol
from collector_rethinkdb.types import ClusterStatsDocument


@dataclass
class ClusterStats:
    """
    Cluster-wide query engine counters, decoded from one server.

    Attributes:
        client_connections: Open client connections
        clients_active: Clients with a query in flight
        queries_per_sec: Queries executed per second
        read_docs_per_sec: Documents read per second
        written_docs_per_sec: Documents written per second
    """

    client_connections: int
    clients_active: int
    queries_per_sec: int
    read_docs_per_sec: int
    written_docs_per_sec: int


# Emitted metric name -> ClusterStats field
RETHINKDB_METRICS = [
    MetricDefinition(
        "active_clients",
        "clients_active",
        unit="count",
        description="Clients with a query in flight",
    ),
    MetricDefinition(
        "clients",
        "client_connections",
        unit="count",
        description="Open client connections",
    ),
    MetricDefinition(
        "queries_per_sec",
        "queries_per_sec",
        unit="per_sec",
        description="Queries executed per second across the cluster",
    ),
    MetricDefinition(
        "read_docs_per_sec",
        "read_docs_per_sec",
        unit="per_sec",
        description="Documents read per second across the cluster",
    ),
    MetricDefinition(
        "written_docs_per_sec",
        "written_docs_per_sec",
        unit="per_sec",
        description="Documents written per second across the cluster",
    ),
]


def decode_cluster_stats(
    address: ServerAddress, document: dict[str, Any] | None
) -> ClusterStats:
    """
    Map a raw stats document onto ClusterStats.

    Args:
        address: Server the document came from, for error context.
        document: The rethinkdb.stats row, or None if it was not found.

    Returns:
        Decoded ClusterStats.

    Raises:
        DecodeError: If the document is missing or any of the five
            counters is missing or not a number.
    """
    if document is None:
        raise DecodeError(address, "failure to parse cluster stats: no cluster stats document")

    try:
        engine = ClusterStatsDocument.model_validate(document).query_engine
    except ValidationError as e:
        raise DecodeError(address, f"failure to parse cluster stats, {e}") from e

    return ClusterStats(**engine.model_dump())


async def fetch_cluster_stats(session: SessionProtocol) -> ClusterStats:
    """
    Query and decode the cluster stats of the session's server.

    Raises:
        FetchError: On query transport failure.
        DecodeError: If the returned document cannot be decoded.
    """
    try:
        document = await session.cluster_stats()
    except DRIVER_ERRORS as e:
        raise FetchError(session.address, f"cluster stats query error, {e}") from e
    return decode_cluster_stats(session.address, document)


def emit_cluster_stats(
    stats: ClusterStats,
    address: ServerAddress,
    acc: AccumulatorProtocol,
) -> None:
    """
    Emit one sample per RETHINKDB_METRICS entry, tagged with the server.

    Callers pass fully decoded stats, so a server contributes either all
    of its samples or none. Each sample gets its own copy of the tag set.

    Exceptions raised by acc.emit are not caught. Samples emitted before
    the failing call stay in the accumulator, and since the error is not a
    ServerError it propagates out of the gather call and cancels sibling
    polls. Accumulators must therefore not raise on emit.
    """
    values = asdict(stats)
    for metric in RETHINKDB_METRICS:
        acc.emit(metric.name, values[metric.source], {"host": address.tag})
