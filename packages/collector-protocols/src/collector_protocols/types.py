"""
Generic types for the collector protocol system.

This module defines the data structures exchanged between collectors and
the accumulator that stores or forwards their output.
"""

from dataclasses import dataclass, field


# Type aliases for common patterns
Tags = dict[str, str]
"""Tag set attached to a metric sample (e.g., {"host": "db-1:28015"})."""


@dataclass
class MetricSample:
    """
    A single metric sample emitted by a collector.

    Attributes:
        name: Metric name (e.g., "queries_per_sec").
        value: Numeric value of the sample.
        tags: Tag set identifying the source of the sample. Each sample
            owns its own copy so later mutation by the emitter cannot
            change recorded samples.
    """

    name: str
    value: float
    tags: Tags = field(default_factory=dict)
