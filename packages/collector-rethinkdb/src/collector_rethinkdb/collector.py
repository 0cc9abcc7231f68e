"""
RethinkDBCollector - concurrent stats gathering across RethinkDB servers.

RethinkDBCollector:
- Resolves every configured address before any network I/O
- Polls each server in its own task: connect, version gate, fetch, emit
- Joins every poll before returning, under an optional call timeout
- Reports every failing server in a single GatherError
- Provides get_config() for capability registration

Each poll owns its session as a local value and returns its own
GatherOutcome; nothing is written to shared state except the accumulator.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from collector_protocols import AccumulatorProtocol, CollectorConfig

from collector_rethinkdb.address import DEFAULT_ADDRESS, ServerAddress, resolve_servers
from collector_rethinkdb.errors import GatherError, ServerError
from collector_rethinkdb.session import Connector, RethinkDBConnector, open_session
from collector_rethinkdb.stats import (
    RETHINKDB_METRICS,
    ClusterStats,
    emit_cluster_stats,
    fetch_cluster_stats,
)
from collector_rethinkdb.version import VersionInfo, check_version

logger = logging.getLogger(__name__)


SAMPLE_CONFIG = """
# An array of address to gather stats about. Specify an ip on hostname
# with optional port. ie localhost, 10.10.3.33:18832, etc.
#
# If no servers are specified, then localhost is used as the host.
servers = ["localhost"]"""


# RethinkDB collector configuration for capability registration
RETHINKDB_CONFIG = CollectorConfig(
    name="rethinkdb",
    description="Read metrics from one or many RethinkDB servers",
    sample_config=SAMPLE_CONFIG,
    metrics=RETHINKDB_METRICS,
)


@dataclass
class GatherOutcome:
    """
    Result of polling one server.

    Attributes:
        address: Server that was polled
        error: Failure of the poll, None on success
        version: Server version, set once the version gate passed
        stats: Decoded stats, set on success
    """

    address: ServerAddress
    error: ServerError | None = None
    version: VersionInfo | None = None
    stats: ClusterStats | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RethinkDBCollector:
    """
    Gathers cluster stats from one or many RethinkDB servers.

    Attributes:
        servers: Configured addresses ("host", "host:port" or URL). Empty
            means a single poll against localhost on the default port.
        timeout: Optional limit in seconds for a whole gather call. When
            it expires every in-flight poll is cancelled.
        connector: Session factory; defaults to the rethinkdb driver.

    Example:
        collector = RethinkDBCollector(servers=["10.0.0.1", "10.0.0.2:28016"])
        acc = InMemoryAccumulator()
        try:
            await collector.gather(acc)
        except GatherError as e:
            for failure in e.failures:
                print(f"{failure.address}: {failure.reason}")
    """

    servers: list[str] = field(default_factory=list)
    timeout: float | None = None
    connector: Connector = field(default_factory=RethinkDBConnector)

    @classmethod
    def get_config(cls) -> CollectorConfig:
        """
        Return RethinkDB collector configuration for capability registration.

        Returns:
            CollectorConfig with the description, sample configuration and
            emitted metrics.
        """
        return RETHINKDB_CONFIG

    def description(self) -> str:
        return RETHINKDB_CONFIG.description

    def sample_config(self) -> str:
        return RETHINKDB_CONFIG.sample_config

    async def gather(self, acc: AccumulatorProtocol) -> list[GatherOutcome]:
        """
        Read stats from all configured servers into the accumulator.

        Addresses are resolved first; a malformed one aborts the call
        before any connection is made. Each server is then polled
        concurrently and independently. Servers that succeed have their
        metrics emitted even when siblings fail.

        Args:
            acc: Accumulator receiving the samples.

        Returns:
            One GatherOutcome per server, in configuration order, when
            every server succeeded.

        Raises:
            ParseError: If a configured address cannot be parsed.
            GatherError: If one or more servers failed; carries every
                failure and all outcomes.
            TimeoutError: If timeout expired before all polls finished.
        """
        addresses = resolve_servers(self.servers)

        async with asyncio.timeout(self.timeout):
            if not self.servers:
                outcomes = [await self._poll(DEFAULT_ADDRESS, acc)]
            else:
                async with asyncio.TaskGroup() as tg:
                    tasks = [
                        tg.create_task(self._poll(address, acc), name=f"poll-{address.tag}")
                        for address in addresses
                    ]
                outcomes = [task.result() for task in tasks]

        failures = [o.error for o in outcomes if o.error is not None]
        if failures:
            raise GatherError(failures, outcomes)
        return outcomes

    async def _poll(self, address: ServerAddress, acc: AccumulatorProtocol) -> GatherOutcome:
        """
        Poll one server: connect, check version, fetch stats, emit.

        Only ServerError is captured into the outcome; anything else
        propagates to the gather call.
        """
        outcome = GatherOutcome(address=address)
        try:
            async with open_session(address, self.connector) as session:
                outcome.version = await check_version(session)
                outcome.stats = await fetch_cluster_stats(session)
        except ServerError as e:
            logger.warning(f"Error gathering RethinkDB stats from {address.tag}: {e.reason}")
            outcome.error = e
            return outcome

        emit_cluster_stats(outcome.stats, address, acc)
        logger.debug(f"Gathered cluster stats from {address.tag}")
        return outcome
