"""
Thin adapter over the azure-cosmos container client.

The benchmarks only talk to ``DocumentStore``; ``CosmosDocumentStore``
translates SDK exceptions into the cosmosbench error taxonomy.
"""

from abc import ABC
from typing import Any, Dict, Iterator, List, Optional

from azure.core.exceptions import AzureError
from azure.cosmos import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from cosmosbench.config import StoreConfig
from cosmosbench.errors import (
    ClientConstructionError,
    ContainerNotFoundError,
    NotFoundError,
    QueryPageError,
    ReadError,
    WriteError,
)
from cosmosbench.logging_config import get_logger
from cosmosbench.timer import timed

logger = get_logger(__name__)

QueryParameters = List[Dict[str, Any]]


class DocumentStore(ABC):
    """The store operations the benchmarks issue."""

    def read_item(self, item_id: str, partition_key: str) -> Dict[str, Any]:
        raise NotImplementedError()

    def query_pages(
            self,
            query: str,
            parameters: Optional[QueryParameters] = None,
            partition_key: Optional[str] = None,
            max_item_count: Optional[int] = None,
    ) -> Iterator[List[Dict[str, Any]]]:
        """Yield query results one page at a time; each fetch may fail on its own."""
        raise NotImplementedError()

    def upsert_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError()

    def delete_item(self, item_id: str, partition_key: str) -> None:
        raise NotImplementedError()


class CosmosDocumentStore(DocumentStore):
    def __init__(self, container: ContainerProxy):
        self._container = container

    @classmethod
    @timed("client construction")
    def connect(cls, config: StoreConfig, verify: bool = True) -> "CosmosDocumentStore":
        """
        Build a client for the configured account and resolve the container.

        Args:
            config: Connection settings
            verify: Read the container once so a missing database or
                container fails here instead of at the first timed operation

        Raises:
            ClientConstructionError: if the client cannot be created
            ContainerNotFoundError: if the database or container does not exist
        """
        logger.info("Connecting to %s", config.endpoint)
        try:
            client = CosmosClient(config.endpoint, credential=config.auth_key.get_secret_value())
        except (AzureError, ValueError) as e:
            raise ClientConstructionError(f"Failed to create Cosmos DB client for {config.endpoint}: {e}") from e

        container = client.get_database_client(config.database_name).get_container_client(
            config.container_name
        )
        if verify:
            try:
                container.read()
            except CosmosResourceNotFoundError as e:
                raise ContainerNotFoundError(
                    f"Container {config.database_name}/{config.container_name} not found"
                ) from e
            except AzureError as e:
                raise ClientConstructionError(f"Failed to get container client: {e}") from e

        return cls(container)

    def read_item(self, item_id: str, partition_key: str) -> Dict[str, Any]:
        try:
            return self._container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError as e:
            raise NotFoundError(f"Item {item_id!r} not found in partition {partition_key!r}") from e
        except AzureError as e:
            raise ReadError(f"Failed to read item {item_id!r}: {e}") from e

    def query_pages(
            self,
            query: str,
            parameters: Optional[QueryParameters] = None,
            partition_key: Optional[str] = None,
            max_item_count: Optional[int] = None,
    ) -> Iterator[List[Dict[str, Any]]]:
        kwargs: Dict[str, Any] = {"parameters": parameters or []}
        if partition_key is not None:
            kwargs["partition_key"] = partition_key
        else:
            kwargs["enable_cross_partition_query"] = True
        if max_item_count is not None:
            kwargs["max_item_count"] = max_item_count

        try:
            pages = self._container.query_items(query=query, **kwargs).by_page()
        except AzureError as e:
            raise QueryPageError(f"Failed to query items: {e}") from e

        page_number = 0
        while True:
            try:
                page = next(pages)
                items = list(page)
            except StopIteration:
                return
            except AzureError as e:
                raise QueryPageError(f"Failed to fetch page {page_number + 1}: {e}") from e
            page_number += 1
            logger.debug("Fetched page %d with %d items", page_number, len(items))
            yield items

    def upsert_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self._container.upsert_item(body=body)
        except AzureError as e:
            raise WriteError(f"Failed to upsert item {body.get('id')!r}: {e}") from e

    def delete_item(self, item_id: str, partition_key: str) -> None:
        try:
            self._container.delete_item(item=item_id, partition_key=partition_key)
        except AzureError as e:
            raise WriteError(f"Failed to delete item {item_id!r}: {e}") from e
