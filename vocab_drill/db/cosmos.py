"""
Cosmos DB client and connection management, plus a Cosmos-backed key-value store.

Authentication modes:
1. Azure Managed Identity (production): Uses DefaultAzureCredential for passwordless auth
2. Azure CLI credential (local dev with Azure): Uses your `az login` session
3. Cosmos DB Emulator (local dev): Uses emulator key for local development

The authentication mode is automatically selected based on environment:
- If COSMOS_EMULATOR=true, uses emulator with default key
- Otherwise, uses DefaultAzureCredential (works with Managed Identity in Azure,
  Azure CLI locally, or other credential providers)
"""

import base64
import binascii
import logging
import os
from functools import lru_cache
from urllib.parse import quote

from azure.core.exceptions import AzureError
from azure.cosmos import ContainerProxy, CosmosClient, DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential

from vocab_drill.db.kv import StorageError

logger = logging.getLogger(__name__)

# Cosmos DB Emulator well-known key (public, not a secret)
# https://learn.microsoft.com/en-us/azure/cosmos-db/emulator#authentication
EMULATOR_KEY = "C2y6yDjf5/R+ob0N8A7Cgv30VRDJIWEHLM+4QDU5DE2nQ9nDuVTqobD4b8mGGyPMbIZnqyMsEcaGQy67XIw/Jw=="
EMULATOR_ENDPOINT = "https://localhost:8081"


class CosmosDBSettings:
    """Settings for Cosmos DB connection."""

    def __init__(self):
        self.endpoint = os.getenv("COSMOS_ENDPOINT", "")
        self.database_name = os.getenv("COSMOS_DB_NAME", "vocabdrill")
        self.stats_container = os.getenv("COSMOS_STATS_CONTAINER", "reviewstats")
        # Emulator mode for local development
        self.use_emulator = os.getenv("COSMOS_EMULATOR", "false").lower() == "true"

    def is_configured(self) -> bool:
        """Check if Cosmos DB is configured."""
        if self.use_emulator:
            return True  # Emulator always uses well-known endpoint
        return bool(self.endpoint)


@lru_cache()
def get_settings() -> CosmosDBSettings:
    """Get cached Cosmos DB settings."""
    return CosmosDBSettings()


_client: CosmosClient | None = None
_database: DatabaseProxy | None = None


def get_client() -> CosmosClient:
    """
    Get or create the Cosmos DB client.

    For local development with the emulator, set COSMOS_EMULATOR=true.
    """
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.is_configured():
            raise RuntimeError(
                "Cosmos DB is not configured. "
                "Set COSMOS_ENDPOINT environment variable, or COSMOS_EMULATOR=true for local emulator."
            )

        if settings.use_emulator:
            logger.info("Using Cosmos DB Emulator at %s", EMULATOR_ENDPOINT)
            _client = CosmosClient(
                EMULATOR_ENDPOINT,
                credential=EMULATOR_KEY,
                connection_verify=False,  # Emulator uses self-signed cert
            )
        else:
            logger.info("Using DefaultAzureCredential for Cosmos DB at %s", settings.endpoint)
            credential = DefaultAzureCredential()
            _client = CosmosClient(settings.endpoint, credential=credential)

    return _client


def get_database() -> DatabaseProxy:
    """Get or create the database proxy."""
    global _database
    if _database is None:
        settings = get_settings()
        client = get_client()
        _database = client.get_database_client(settings.database_name)
    return _database


def get_stats_container() -> ContainerProxy:
    """Get the review stats container."""
    settings = get_settings()
    return get_database().get_container_client(settings.stats_container)


def close_client():
    """Drop the cached client and database proxies."""
    global _client, _database
    # CosmosClient manages connections internally; clearing references is enough
    _client = None
    _database = None


class CosmosKeyValueStore:
    """Key-value store keeping one document per key.

    Documents look like {"id": <key>, "userId": <partition>, "value": <base64 bytes>}.
    The container is partitioned on /userId, so each learner has their own blobs.

    Any Azure SDK failure, including transport and credential errors, is
    raised as StorageError.
    """

    def __init__(self, container: ContainerProxy | None = None, partition_key: str = "default"):
        self._container = container
        self._partition_key = partition_key

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            try:
                self._container = get_stats_container()
            except (RuntimeError, AzureError) as e:
                raise StorageError(str(e)) from e
        return self._container

    @staticmethod
    def _doc_id(key: str) -> str:
        # Cosmos ids may not contain '/', '\\', '?' or '#'
        return quote(key, safe="")

    def get(self, key: str) -> bytes | None:
        try:
            item = self.container.read_item(item=self._doc_id(key), partition_key=self._partition_key)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise StorageError(f"Failed to read {key!r} from Cosmos DB: {e}") from e

        try:
            return base64.b64decode(item["value"], validate=True)
        except (KeyError, TypeError, binascii.Error) as e:
            raise StorageError(f"Document {key!r} has no readable value") from e

    def set(self, key: str, value: bytes) -> None:
        body = {
            "id": self._doc_id(key),
            "userId": self._partition_key,
            "value": base64.b64encode(value).decode("ascii"),
        }
        try:
            self.container.upsert_item(body=body)
        except AzureError as e:
            raise StorageError(f"Failed to write {key!r} to Cosmos DB: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.container.delete_item(item=self._doc_id(key), partition_key=self._partition_key)
        except CosmosResourceNotFoundError:
            pass
        except AzureError as e:
            raise StorageError(f"Failed to delete {key!r} from Cosmos DB: {e}") from e
