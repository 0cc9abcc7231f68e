"""
Accumulator protocol definition.

The AccumulatorProtocol defines the sink every collector writes metric
samples to. Accumulators are shared by all concurrent polls of a gather
call, so implementations must accept concurrent writes without any
locking on the caller's side.
"""

import threading
from typing import Protocol, runtime_checkable

from collector_protocols.types import MetricSample, Tags


@runtime_checkable
class AccumulatorProtocol(Protocol):
    """
    Protocol for metric accumulators.

    An accumulator receives (name, value, tags) triples from collectors.
    Storage and transport of the samples are up to the implementation.
    emit() must not raise; a failing emit leaves a partial batch behind.

    Example:
        acc = InMemoryAccumulator()
        acc.emit("clients", 12, {"host": "10.0.0.1:28015"})
    """

    def emit(self, name: str, value: float, tags: Tags) -> None:
        """
        Record one metric sample.

        Args:
            name: Metric name.
            value: Numeric value.
            tags: Tag set for the sample.
        """
        ...


class InMemoryAccumulator:
    """
    Accumulator that keeps every sample in memory.

    Writes are guarded by a lock so the accumulator can be shared by
    tasks on an event loop as well as by worker threads.

    Attributes:
        samples: Recorded samples in emission order.
    """

    def __init__(self) -> None:
        self.samples: list[MetricSample] = []
        self._lock = threading.Lock()

    def emit(self, name: str, value: float, tags: Tags) -> None:
        """Record one metric sample."""
        sample = MetricSample(name=name, value=value, tags=dict(tags))
        with self._lock:
            self.samples.append(sample)

    def for_host(self, host: str) -> list[MetricSample]:
        """Return samples whose "host" tag equals host."""
        with self._lock:
            return [s for s in self.samples if s.tags.get("host") == host]

    def clear(self) -> None:
        """Drop all recorded samples."""
        with self._lock:
            self.samples.clear()
