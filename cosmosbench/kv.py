"""
Key/value façade over a document container.

Each pair is stored as a Document whose id is the key. When a store id is
configured, pairs of several stores can share a container and are
partitioned by store id; otherwise a pair is partitioned by its own key.
"""

from typing import Iterable, List, Optional, Tuple

from cosmosbench.logging_config import get_logger
from cosmosbench.models import Document
from cosmosbench.operations import DocumentQuery
from cosmosbench.store import DocumentStore

logger = get_logger(__name__)


def make_store_id(app_id: Optional[str], store_name: Optional[str]) -> Optional[str]:
    """Combine an app id and a store name into ``app_id/store_name``."""
    if store_name is None:
        return None
    if app_id is None:
        return store_name
    return f"{app_id}/{store_name}"


class KeyValueStore:
    def __init__(self, store: DocumentStore, app_id: Optional[str] = None, store_name: Optional[str] = None):
        self.store = store
        self.app_id = app_id
        self.store_name = store_name
        self.store_id = make_store_id(app_id, store_name)

    def partition_key(self, key: str) -> str:
        return self.store_id if self.store_id is not None else key

    def get(self, key: str) -> Optional[bytes]:
        pair = self.get_pair(key)
        return pair.value if pair is not None else None

    def set(self, key: str, value: bytes) -> None:
        pair = Document(id=key, value=value, store_id=self.store_id)
        self.store.upsert_item(pair.to_item())
        logger.debug("Set key %r (%d bytes)", key, len(value))

    def delete(self, key: str) -> None:
        if self.exists(key):
            self.store.delete_item(key, self.partition_key(key))
            logger.debug("Deleted key %r", key)

    def exists(self, key: str) -> bool:
        return self.get_pair(key) is not None

    def get_many(self, keys: List[str]) -> List[Tuple[str, Optional[bytes]]]:
        """Fetch several keys with one cross-partition query; missing keys are omitted."""
        if not keys:
            return []
        placeholders = [f"@key{i}" for i in range(len(keys))]
        parameters = [{"name": name, "value": key} for name, key in zip(placeholders, keys)]
        query = f"SELECT * FROM c WHERE c.id IN ({', '.join(placeholders)})"
        query, parameters = self._with_store_id(query, parameters, condition_already_exists=True)
        return [(pair.id, pair.value) for pair in DocumentQuery(self.store, query, parameters)]

    def set_many(self, key_values: Iterable[Tuple[str, bytes]]) -> None:
        for key, value in key_values:
            self.set(key, value)

    def delete_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.delete(key)

    def get_pair(self, key: str) -> Optional[Document]:
        query, parameters = self._with_store_id(
            "SELECT * FROM c WHERE c.id = @id",
            [{"name": "@id", "value": key}],
            condition_already_exists=True,
        )
        # Keys are unique, only the first result matters
        documents = DocumentQuery(
            self.store, query, parameters, partition_key=self.partition_key(key), max_item_count=1
        )
        return next(iter(documents), None)

    def get_keys(self) -> List[str]:
        query, parameters = self._with_store_id("SELECT * FROM c", [], condition_already_exists=False)
        return [pair.id for pair in DocumentQuery(self.store, query, parameters)]

    def _with_store_id(self, query: str, parameters: list, condition_already_exists: bool) -> tuple[str, list]:
        if self.store_id is None:
            return query, parameters
        keyword = "AND" if condition_already_exists else "WHERE"
        return (
            f"{query} {keyword} c.store_id = @store_id",
            parameters + [{"name": "@store_id", "value": self.store_id}],
        )
