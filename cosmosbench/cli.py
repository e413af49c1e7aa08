"""Command line entry points for the cosmosbench latency benchmarks."""

from typing import Optional

import typer

from cosmosbench.bench import format_report, run_read_query, run_set_get
from cosmosbench.config import StoreConfig, load_config
from cosmosbench.errors import ClientConstructionError, ConfigError, StoreOperationError
from cosmosbench.kv import KeyValueStore
from cosmosbench.logging_config import get_logger, setup_logging
from cosmosbench.operations import DEFAULT_STORE_ID
from cosmosbench.store import CosmosDocumentStore

logger = get_logger(__name__)

app = typer.Typer(help="Measure Cosmos DB operation latency.", no_args_is_help=True)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (defaults to COSMOSBENCH_LOG_LEVEL or INFO)"
    ),
):
    setup_logging(log_level)


def _connect() -> tuple[StoreConfig, CosmosDocumentStore]:
    try:
        config = load_config()
        store = CosmosDocumentStore.connect(config)
    except (ConfigError, ClientConstructionError) as e:
        logger.error("%s", e)
        raise typer.Exit(1)
    return config, store


@app.command("read-query")
def read_query(
    item_id: str = typer.Option("bar", "--item-id", help="Id of an existing document"),
    store_id: str = typer.Option(DEFAULT_STORE_ID, "--store-id", help="store_id the query filters on"),
):
    """Time a point read and a filtered query of one document."""
    config, store = _connect()
    try:
        report = run_read_query(store, config, item_id=item_id, store_id=store_id)
    except StoreOperationError as e:
        logger.error("Benchmark aborted: %s", e)
        raise typer.Exit(1)
    logger.info(format_report(report))


@app.command("set-get")
def set_get(
    key: str = typer.Option("key", "--key", help="Key to write and read back"),
    value: str = typer.Option("value", "--value", help="Value to write"),
    app_id: Optional[str] = typer.Option("cosmos", "--app-id", help="App id part of the store id"),
    store_name: Optional[str] = typer.Option("default", "--store-name", help="Store name part of the store id"),
):
    """Time an upsert and a read of one key/value pair."""
    _, store = _connect()
    kv = KeyValueStore(store, app_id=app_id, store_name=store_name)
    try:
        report = run_set_get(kv, key=key, value=value)
    except StoreOperationError as e:
        logger.error("Benchmark aborted: %s", e)
        raise typer.Exit(1)
    logger.info(format_report(report))
