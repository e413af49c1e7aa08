"""
Test configuration and fixtures for the cosmosbench test suite.
Provides fake document stores and environment helpers.
"""

import pytest
from typing import Any, Dict, Iterator, List, Optional

from cosmosbench.errors import NotFoundError
from cosmosbench.store import DocumentStore


CONFIG_ENV_VARS = [
    "ACCOUNT_NAME", "COSMOS_ACCOUNT",
    "AUTH_KEY", "COSMOS_AUTH_KEY",
    "DATABASE_NAME", "COSMOS_DATABASE",
    "CONTAINER_NAME", "COSMOS_CONTAINER",
    "PARTITION_KEY_STRING", "COSMOS_PARTITION_KEY_STRING",
    "ENDPOINT_DOMAIN",
    "COSMOSBENCH_LOG_LEVEL", "COSMOSBENCH_ENV", "COSMOSBENCH_LOG_FILE",
]

TEST_ENV = {
    "ACCOUNT_NAME": "benchaccount",
    "AUTH_KEY": "c2VjcmV0LWtleQ==",
    "DATABASE_NAME": "benchdb",
    "CONTAINER_NAME": "benchcontainer",
}


def make_item(item_id: str, store_id: Optional[str] = "cosmos/default", value: Any = None) -> Dict[str, Any]:
    """Build an item the way the service returns it."""
    item = {
        "id": item_id,
        "value": [118, 97, 108, 117, 101] if value is None else value,
        "_rid": "rid-" + item_id,
        "_self": f"dbs/db/colls/c/docs/{item_id}/",
        "_etag": '"00000000-0000-0000-0000-000000000000"',
        "_attachments": "attachments/",
        "_ts": 1700000000,
    }
    if store_id is not None:
        item["store_id"] = store_id
    return item


class FakeDocumentStore(DocumentStore):
    """
    Scripted store: point reads come from ``items``, every query yields
    ``pages``. An exception in either place is raised when reached.
    Calls are recorded for assertions.
    """

    def __init__(self, items: Optional[Dict[str, Any]] = None, pages: Optional[List[Any]] = None):
        self.items = items or {}
        self.pages = pages or []
        self.read_calls: List[tuple] = []
        self.query_calls: List[Dict[str, Any]] = []
        self.upserts: List[Dict[str, Any]] = []
        self.deletes: List[tuple] = []

    def read_item(self, item_id: str, partition_key: str) -> Dict[str, Any]:
        self.read_calls.append((item_id, partition_key))
        if item_id not in self.items:
            raise NotFoundError(f"{item_id} not found")
        result = self.items[item_id]
        if isinstance(result, Exception):
            raise result
        return result

    def query_pages(self, query, parameters=None, partition_key=None, max_item_count=None) -> Iterator[list]:
        self.query_calls.append({
            "query": query,
            "parameters": parameters,
            "partition_key": partition_key,
            "max_item_count": max_item_count,
        })
        return self._iter_pages()

    def _iter_pages(self):
        for page in self.pages:
            if isinstance(page, Exception):
                raise page
            yield list(page)

    def upsert_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
        self.upserts.append(body)
        return body

    def delete_item(self, item_id: str, partition_key: str) -> None:
        self.deletes.append((item_id, partition_key))


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed store that understands the parameterized queries issued by
    the key/value façade: filters on ``@id``, ``@keyN`` and ``@store_id``.
    """

    def __init__(self, page_size: int = 2):
        self.documents: Dict[tuple, Dict[str, Any]] = {}
        self.page_size = page_size
        self.query_calls: List[Dict[str, Any]] = []

    @staticmethod
    def _partition_key(body: Dict[str, Any]) -> str:
        return body.get("store_id") or body["id"]

    def read_item(self, item_id: str, partition_key: str) -> Dict[str, Any]:
        try:
            return dict(self.documents[(item_id, partition_key)])
        except KeyError:
            raise NotFoundError(item_id)

    def query_pages(self, query, parameters=None, partition_key=None, max_item_count=None):
        self.query_calls.append({
            "query": query,
            "parameters": parameters,
            "partition_key": partition_key,
            "max_item_count": max_item_count,
        })
        params = {p["name"]: p["value"] for p in parameters or []}
        keys = {value for name, value in params.items() if name.startswith("@key")}

        matches = []
        for (item_id, pk), body in self.documents.items():
            if partition_key is not None and pk != partition_key:
                continue
            if "@id" in params and item_id != params["@id"]:
                continue
            if keys and item_id not in keys:
                continue
            if "@store_id" in params and body.get("store_id") != params["@store_id"]:
                continue
            matches.append(dict(body))

        size = max_item_count or self.page_size
        return iter([matches[i:i + size] for i in range(0, len(matches), size)])

    def upsert_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
        self.documents[(body["id"], self._partition_key(body))] = dict(body)
        return body

    def delete_item(self, item_id: str, partition_key: str) -> None:
        if (item_id, partition_key) not in self.documents:
            raise NotFoundError(item_id)
        del self.documents[(item_id, partition_key)]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove every configuration variable so tests start from a known state."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def store_env(monkeypatch):
    """Set the required configuration variables."""
    for name, value in TEST_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(TEST_ENV)


@pytest.fixture
def fake_store_factory():
    return FakeDocumentStore


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore()


@pytest.fixture
def item_factory():
    return make_item
