"""
RethinkDB collector implementation.

This package gathers cluster-wide query engine counters from one or many
RethinkDB servers and emits them to an accumulator defined by
collector-protocols. It includes:

- RethinkDBCollector: Concurrent multi-server gather orchestration
- Address resolution for configured server strings
- Per-poll sessions backed by the rethinkdb driver
- Version gate rejecting servers older than 2.x
- Pydantic document types for system table decoding
- Error taxonomy with per-server stage context
"""

from collector_rethinkdb.address import (
    DEFAULT_ADDRESS,
    DEFAULT_PORT,
    ServerAddress,
    resolve_address,
    resolve_servers,
)
from collector_rethinkdb.collector import (
    RETHINKDB_CONFIG,
    GatherOutcome,
    RethinkDBCollector,
)
from collector_rethinkdb.errors import (
    CollectorError,
    ConnectError,
    DecodeError,
    FetchError,
    GatherError,
    ParseError,
    ServerError,
    Stage,
    VersionError,
)
from collector_rethinkdb.factory import (
    create_rethinkdb_collector,
    create_rethinkdb_collector_from_env,
)
from collector_rethinkdb.session import (
    Connector,
    RethinkDBConnector,
    RethinkDBSession,
    SessionProtocol,
    open_session,
)
from collector_rethinkdb.stats import (
    RETHINKDB_METRICS,
    ClusterStats,
    decode_cluster_stats,
    emit_cluster_stats,
    fetch_cluster_stats,
)
from collector_rethinkdb.types import (
    ClusterStatsDocument,
    ProcessInfo,
    QueryEngineStats,
    ServerStatusDocument,
)
from collector_rethinkdb.version import (
    MIN_SUPPORTED_MAJOR,
    VersionInfo,
    check_version,
    parse_version,
)

__all__ = [
    # Collector
    "RethinkDBCollector",
    "RETHINKDB_CONFIG",
    "GatherOutcome",
    # Factories
    "create_rethinkdb_collector",
    "create_rethinkdb_collector_from_env",
    # Addresses
    "ServerAddress",
    "DEFAULT_ADDRESS",
    "DEFAULT_PORT",
    "resolve_address",
    "resolve_servers",
    # Sessions
    "SessionProtocol",
    "Connector",
    "RethinkDBSession",
    "RethinkDBConnector",
    "open_session",
    # Version gate
    "VersionInfo",
    "MIN_SUPPORTED_MAJOR",
    "check_version",
    "parse_version",
    # Stats
    "ClusterStats",
    "RETHINKDB_METRICS",
    "decode_cluster_stats",
    "fetch_cluster_stats",
    "emit_cluster_stats",
    # Document types
    "ProcessInfo",
    "ServerStatusDocument",
    "QueryEngineStats",
    "ClusterStatsDocument",
    # Errors
    "CollectorError",
    "ParseError",
    "ServerError",
    "ConnectError",
    "VersionError",
    "FetchError",
    "DecodeError",
    "GatherError",
    "Stage",
]
