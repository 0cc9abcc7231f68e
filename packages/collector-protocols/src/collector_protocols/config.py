"""
Collector configuration types for declarative capability registration.

This module provides dataclasses for collectors to declare what they emit
without relying on a global plugin registry. Each collector defines a
CollectorConfig that the host process can inspect at runtime.

Example:
    A RethinkDB collector declares its metrics:

    ```python
    from collector_protocols.config import CollectorConfig, MetricDefinition

    rethinkdb_config = CollectorConfig(
        name="rethinkdb",
        description="Read metrics from one or many RethinkDB servers",
        metrics=[
            MetricDefinition("clients", "client_connections",
                             description="Open client connections"),
        ],
    )
    ```

    The host process uses this config to:
    - Show a sample configuration to users
    - Document which metrics will appear in the accumulator
"""

from dataclasses import dataclass, field


@dataclass
class MetricDefinition:
    """
    Describes one metric emitted by a collector.

    Attributes:
        name: Metric name as it appears in the accumulator.
        source: Field of the decoded stats record the value comes from.
        unit: Unit of measurement (e.g., "count", "per_sec").
        description: Human-readable description of the metric.

    Example:
        MetricDefinition("active_clients", "clients_active", unit="count",
                         description="Clients with an in-flight query")
    """

    name: str
    source: str
    unit: str = ""
    description: str = ""


@dataclass
class CollectorConfig:
    """
    Complete description of a collector.

    Attributes:
        name: Collector identifier (e.g., "rethinkdb").
        description: One-line summary of what the collector reads.
        sample_config: Example configuration text shown to users.
        metrics: Metrics the collector emits on every successful poll.
    """

    name: str
    description: str = ""
    sample_config: str = ""
    metrics: list[MetricDefinition] = field(default_factory=list)

    def get_metric(self, name: str) -> MetricDefinition | None:
        """Get a metric definition by name."""
        for metric in self.metrics:
            if metric.name == name:
                return metric
        return None

    def metric_names(self) -> list[str]:
        """Return the names of all declared metrics."""
        return [m.name for m in self.metrics]
