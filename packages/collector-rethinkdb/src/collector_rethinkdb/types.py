"""
RethinkDB-specific Pydantic document types.

This module provides Pydantic models for validating documents read from
RethinkDB's system tables:
- rethinkdb.server_status: Per-server process information (version)
- rethinkdb.stats: Cluster-wide counters, keyed by ["cluster"]

These are wire document types for external data validation. Internal
types (VersionInfo, ClusterStats) are dataclasses in the modules that
produce them.

Notes:
- System table documents carry many more fields than we read; extras
  are ignored
- Rate counters such as queries_per_sec are reported as floats and are
  truncated to int
- A missing or non-numeric counter is a validation error, never zero
"""

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _whole_number(value: Any) -> int:
    """Coerce a JSON number to int, rejecting anything that is not a number."""
    # bool is a subclass of int; a boolean counter is garbage
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"expected a finite number, got {value}")
        return int(value)
    return value


Counter = Annotated[int, BeforeValidator(_whole_number)]


# =============================================================================
# server_status Documents
# =============================================================================
# Shape: {"id": "...", "name": "...", "process": {"version": "rethinkdb 2.4.1 ..."}}


class ProcessInfo(BaseModel):
    """
    The nested 'process' object of a server_status row.

    version holds the full self-reported string, e.g.
    "rethinkdb 2.4.1~0bionic (GCC 7.3.0)".
    """

    model_config = ConfigDict(extra="ignore")

    version: str = ""


class ServerStatusDocument(BaseModel):
    """
    One row of rethinkdb.server_status.

    Only the process version is read. A row without a process object
    decodes with an empty version so the caller can report the missing
    field explicitly.
    """

    model_config = ConfigDict(extra="ignore")

    process: ProcessInfo = Field(default_factory=ProcessInfo)


# =============================================================================
# stats Documents
# =============================================================================
# Shape: {"id": ["cluster"], "query_engine": {"client_connections": 3, ...}}


class QueryEngineStats(BaseModel):
    """
    The nested 'query_engine' object of the cluster stats row.

    All five counters are required.
    """

    model_config = ConfigDict(extra="ignore")

    client_connections: Counter
    clients_active: Counter
    queries_per_sec: Counter
    read_docs_per_sec: Counter
    written_docs_per_sec: Counter


class ClusterStatsDocument(BaseModel):
    """
    The rethinkdb.stats row with id ["cluster"].

    Example document:
    {
        "id": ["cluster"],
        "query_engine": {
            "client_connections": 4,
            "clients_active": 1,
            "queries_per_sec": 120.5,
            "read_docs_per_sec": 800,
            "written_docs_per_sec": 35
        }
    }
    """

    model_config = ConfigDict(extra="ignore")

    query_engine: QueryEngineStats
