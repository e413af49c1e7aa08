"""
Error taxonomy and failure policies for cosmosbench.

Every error raised by cosmosbench derives from ``CosmosBenchError``. Store
errors wrap the underlying ``azure-cosmos`` exception as ``__cause__``.
"""

from enum import Enum


class CosmosBenchError(Exception):
    """Base class for all cosmosbench errors."""


class ConfigError(CosmosBenchError):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, problems: dict[str, str]):
        self.problems = dict(problems)
        details = "; ".join(f"{name}: {reason}" for name, reason in self.problems.items())
        super().__init__(f"Invalid configuration ({details})")


class ClientConstructionError(CosmosBenchError):
    """Raised when the store client or container handle cannot be built."""


class ContainerNotFoundError(ClientConstructionError):
    """Raised when the configured database or container does not exist."""


class StoreOperationError(CosmosBenchError):
    """Base class for failures of a single store operation."""


class ReadError(StoreOperationError):
    """Raised when a point read fails."""


class NotFoundError(ReadError):
    """Raised when a point read targets a document that does not exist."""


class WriteError(StoreOperationError):
    """Raised when an upsert or delete fails."""


class QueryPageError(StoreOperationError):
    """Raised when fetching a page of query results fails."""


class DeserializationError(StoreOperationError):
    """Raised when a returned item does not match the Document shape."""


class FailurePolicy(str, Enum):
    """What happens to the run when an operation fails."""
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class OperationKind(str, Enum):
    """The kinds of operation the benchmarks issue."""
    CLIENT_CONSTRUCTION = "client_construction"
    POINT_READ = "point_read"
    QUERY_PAGE = "query_page"
    QUERY_ITEM = "query_item"
    KV_WRITE = "kv_write"
    KV_READ = "kv_read"


# Point reads and per-item query deserialization are logged and skipped,
# page fetches and key/value operations abort the run.
OPERATION_POLICIES: dict[OperationKind, FailurePolicy] = {
    OperationKind.CLIENT_CONSTRUCTION: FailurePolicy.FATAL,
    OperationKind.POINT_READ: FailurePolicy.RECOVERABLE,
    OperationKind.QUERY_PAGE: FailurePolicy.FATAL,
    OperationKind.QUERY_ITEM: FailurePolicy.RECOVERABLE,
    OperationKind.KV_WRITE: FailurePolicy.FATAL,
    OperationKind.KV_READ: FailurePolicy.FATAL,
}


def policy_for(kind: OperationKind) -> FailurePolicy:
    """Return the failure policy for an operation kind."""
    return OPERATION_POLICIES[kind]
