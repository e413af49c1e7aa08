"""
The two benchmark runs: point read + query, and key/value set + get.

Both are linear: every operation runs once, to completion, on the calling
thread, and its wall-clock time is logged and recorded.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from cosmosbench.config import StoreConfig
from cosmosbench.errors import OperationKind, policy_for
from cosmosbench.kv import KeyValueStore
from cosmosbench.logging_config import get_logger
from cosmosbench.operations import DEFAULT_STORE_ID, query_documents, read_document
from cosmosbench.store import DocumentStore
from cosmosbench.timer import OperationTiming, format_duration, time_operation

logger = get_logger(__name__)


@dataclass
class BenchmarkReport:
    """Container for the results of one benchmark run."""

    timings: List[OperationTiming] = field(default_factory=list)
    read_ids: List[str] = field(default_factory=list)
    query_ids: List[str] = field(default_factory=list)
    value: Optional[bytes] = None

    @property
    def total_elapsed(self) -> float:
        return sum(timing.elapsed for timing in self.timings)

    def timing(self, name: str) -> Optional[OperationTiming]:
        for timing in self.timings:
            if timing.name == name:
                return timing
        return None


def format_report(report: BenchmarkReport) -> str:
    """Format benchmark timings for display."""
    lines = ["", "Benchmark Results:", "=================="]
    for timing in report.timings:
        status = "ok" if timing.succeeded else f"failed ({timing.error})"
        lines.append(f"- {timing.name}: {format_duration(timing.elapsed)} [{status}]")
    lines.append(f"- total: {format_duration(report.total_elapsed)}")
    return "\n".join(lines)


def run_read_query(
        store: DocumentStore,
        config: StoreConfig,
        item_id: str = "bar",
        store_id: str = DEFAULT_STORE_ID,
) -> BenchmarkReport:
    """
    Time a point read and a filtered query of an existing document.

    Read failures are reported and the run continues; a failed query page
    propagates as QueryPageError after the items of earlier pages were
    reported.
    """
    report = BenchmarkReport()
    partition_key = config.partition_key_string
    logger.info("Reading item %r from partition %r", item_id, partition_key)

    def read():
        document = read_document(store, item_id, partition_key)
        if document is not None:
            report.read_ids.append(document.id)

    def query():
        report.query_ids.extend(query_documents(store, item_id, partition_key, store_id))

    report.timings.append(time_operation(read, "read", policy=policy_for(OperationKind.POINT_READ)))
    report.timings.append(time_operation(query, "query", policy=policy_for(OperationKind.QUERY_PAGE)))
    return report


def run_set_get(kv: KeyValueStore, key: str = "key", value: str = "value") -> BenchmarkReport:
    """Time an upsert of ``key`` followed by a read of the same key."""
    report = BenchmarkReport()

    def set_value():
        kv.set(key, value.encode("utf-8"))

    def get_value():
        report.value = kv.get(key)

    report.timings.append(time_operation(set_value, "set", policy=policy_for(OperationKind.KV_WRITE)))
    report.timings.append(time_operation(get_value, "get", policy=policy_for(OperationKind.KV_READ)))

    if report.value is None:
        print("key not found")
    else:
        print(f"Value is: {report.value.decode('utf-8', errors='replace')!r}")
    return report
