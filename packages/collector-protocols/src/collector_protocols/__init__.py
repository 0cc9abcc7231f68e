"""
Protocol definitions for metric collectors.

This package provides the generic Protocol and data types shared by any
collector implementation (RethinkDB, etc.). It has zero dependencies on
other collector-* packages.

Key protocols:
- AccumulatorProtocol: Sink that receives tagged metric samples

Key types:
- MetricSample: A single emitted (name, value, tags) triple
- InMemoryAccumulator: Thread-safe accumulator collecting samples in a list
- CollectorConfig: Declarative description of a collector's capabilities
- MetricDefinition: One metric a collector emits
"""

from collector_protocols.accumulator import AccumulatorProtocol, InMemoryAccumulator
from collector_protocols.config import CollectorConfig, MetricDefinition
from collector_protocols.types import MetricSample, Tags

__all__ = [
    # Protocols
    "AccumulatorProtocol",
    # Data types
    "MetricSample",
    "Tags",
    "InMemoryAccumulator",
    # Configuration
    "CollectorConfig",
    "MetricDefinition",
]
