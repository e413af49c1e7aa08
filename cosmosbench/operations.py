"""
Point read and filtered query of documents.

Results are reported on stdout, failures are logged and then handled
according to the failure policy of their operation kind.
"""

from typing import Any, Dict, Iterator, List, Optional

from cosmosbench.errors import (
    DeserializationError,
    FailurePolicy,
    OperationKind,
    QueryPageError,
    ReadError,
    StoreOperationError,
    policy_for,
)
from cosmosbench.logging_config import get_logger
from cosmosbench.models import Document
from cosmosbench.store import DocumentStore, QueryParameters

logger = get_logger(__name__)

DEFAULT_STORE_ID = "cosmos/default"

FILTERED_QUERY = "SELECT * FROM c WHERE c.id = @id AND c.store_id = @store_id"


class DocumentQuery:
    """
    A finite, lazy sequence of documents matching a query.

    Every ``iter()`` re-issues the query and starts over at the first page.
    The iterator it returns only moves forward.
    """

    def __init__(
            self,
            store: DocumentStore,
            query: str,
            parameters: Optional[QueryParameters] = None,
            partition_key: Optional[str] = None,
            max_item_count: Optional[int] = None,
    ):
        self.store = store
        self.query = query
        self.parameters = parameters or []
        self.partition_key = partition_key
        self.max_item_count = max_item_count

    def pages(self) -> Iterator[List[Dict[str, Any]]]:
        return self.store.query_pages(
            self.query,
            parameters=self.parameters,
            partition_key=self.partition_key,
            max_item_count=self.max_item_count,
        )

    def __iter__(self) -> Iterator[Document]:
        for page in self.pages():
            for item in page:
                yield Document.from_item(item)

    def __repr__(self) -> str:
        return f"DocumentQuery({self.query!r}, partition_key={self.partition_key!r})"


def filtered_query(
        store: DocumentStore,
        item_id: str,
        partition_key: str,
        store_id: str = DEFAULT_STORE_ID,
) -> DocumentQuery:
    """Query for a document by id and store id inside one partition."""
    parameters = [
        {"name": "@id", "value": item_id},
        {"name": "@store_id", "value": store_id},
    ]
    return DocumentQuery(store, FILTERED_QUERY, parameters=parameters, partition_key=partition_key)


def handle_failure(kind: OperationKind, error: StoreOperationError, message: str) -> None:
    """Log a failed operation, then re-raise it unless its kind is recoverable."""
    policy = policy_for(kind)
    logger.error("%s (%s, %s): %s", message, kind.value, policy.value, error)
    if policy is FailurePolicy.FATAL:
        raise error
    print(message)


def read_document(store: DocumentStore, item_id: str, partition_key: str) -> Optional[Document]:
    """
    Read a single document by id and partition key.

    Returns:
        The document, or None when the read or its deserialization failed
    """
    try:
        document = Document.from_item(store.read_item(item_id, partition_key))
    except DeserializationError as e:
        handle_failure(OperationKind.POINT_READ, e, "Failed to deserialize item")
        return None
    except ReadError as e:
        handle_failure(OperationKind.POINT_READ, e, "Failed to read item")
        return None

    print(f"[READ] Item ID: {document.id}")
    return document


def query_documents(
        store: DocumentStore,
        item_id: str,
        partition_key: str,
        store_id: str = DEFAULT_STORE_ID,
) -> List[str]:
    """
    Run the filtered query and report every returned id in page order.

    An item that cannot be deserialized ends the iteration; a failed page
    fetch raises QueryPageError.

    Returns:
        The ids reported before the query finished or stopped
    """
    ids = []
    try:
        for document in filtered_query(store, item_id, partition_key, store_id):
            print(f"[QUERY] Item ID: {document.id}")
            ids.append(document.id)
    except DeserializationError as e:
        handle_failure(OperationKind.QUERY_ITEM, e, "Failed to deserialize item")
    except QueryPageError as e:
        handle_failure(OperationKind.QUERY_PAGE, e, "Failed to query items")
    return ids
