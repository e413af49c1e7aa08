"""Latency benchmarks for Azure Cosmos DB point reads, queries and key/value access."""

from cosmosbench.config import StoreConfig, load_config
from cosmosbench.kv import KeyValueStore
from cosmosbench.models import Document
from cosmosbench.store import CosmosDocumentStore, DocumentStore
from cosmosbench.timer import OperationTiming, time_operation, timed

__all__ = [
    "CosmosDocumentStore",
    "Document",
    "DocumentStore",
    "KeyValueStore",
    "OperationTiming",
    "StoreConfig",
    "load_config",
    "time_operation",
    "timed",
]
