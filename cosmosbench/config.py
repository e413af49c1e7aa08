"""Configuration management for cosmosbench."""

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cosmosbench.errors import ConfigError
from cosmosbench.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PARTITION_KEY = "cosmos/default"
DEFAULT_ENDPOINT_DOMAIN = "documents.azure.com:443"

# Field name -> primary environment variable, used in error reports
FIELD_ENV_VARS = {
    "account_name": "ACCOUNT_NAME",
    "auth_key": "AUTH_KEY",
    "database_name": "DATABASE_NAME",
    "container_name": "CONTAINER_NAME",
    "partition_key_string": "PARTITION_KEY_STRING",
    "endpoint_domain": "ENDPOINT_DOMAIN",
}


class StoreConfig(BaseSettings):
    """Connection settings for the benchmarked Cosmos DB container.

    Each value is read from its unprefixed variable first and from the
    ``COSMOS_``-prefixed name second.
    """

    account_name: str = Field(
        ..., min_length=1,
        validation_alias=AliasChoices("ACCOUNT_NAME", "COSMOS_ACCOUNT", "account_name"),
    )
    auth_key: SecretStr = Field(
        ...,
        validation_alias=AliasChoices("AUTH_KEY", "COSMOS_AUTH_KEY", "auth_key"),
    )
    database_name: str = Field(
        ..., min_length=1,
        validation_alias=AliasChoices("DATABASE_NAME", "COSMOS_DATABASE", "database_name"),
    )
    container_name: str = Field(
        ..., min_length=1,
        validation_alias=AliasChoices("CONTAINER_NAME", "COSMOS_CONTAINER", "container_name"),
    )
    partition_key_string: str = Field(
        DEFAULT_PARTITION_KEY,
        validation_alias=AliasChoices(
            "PARTITION_KEY_STRING", "COSMOS_PARTITION_KEY_STRING", "partition_key_string"
        ),
    )
    endpoint_domain: str = Field(
        DEFAULT_ENDPOINT_DOMAIN,
        min_length=1,
        validation_alias=AliasChoices("ENDPOINT_DOMAIN", "endpoint_domain"),
    )

    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    @field_validator("auth_key")
    @classmethod
    def _auth_key_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("must not be empty")
        return value

    @property
    def endpoint(self) -> str:
        return f"https://{self.account_name}.{self.endpoint_domain}/"


def _env_name(loc: tuple) -> str:
    name = str(loc[0]) if loc else "?"
    return FIELD_ENV_VARS.get(name, name.upper())


def load_config(**overrides) -> StoreConfig:
    """
    Build the configuration from the environment, failing fast.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        Validated StoreConfig

    Raises:
        ConfigError: listing every missing or invalid variable at once
    """
    try:
        config = StoreConfig(**overrides)
    except ValidationError as e:
        problems = {}
        for error in e.errors():
            reason = "is not set" if error["type"] == "missing" else error["msg"]
            problems[_env_name(error["loc"])] = reason
        raise ConfigError(problems) from e

    logger.debug(
        "Loaded configuration for %s (database=%s, container=%s, partition_key=%s)",
        config.endpoint, config.database_name, config.container_name, config.partition_key_string,
    )
    return config
