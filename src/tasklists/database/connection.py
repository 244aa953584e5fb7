"""
Database connection management
"""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from ..errors import UpstreamUnavailable
from ..logging import get_logger
from .gateway import DataStore

logger = get_logger(__name__)


async def connect_store(
    uri: str,
    db_name: str,
    server_selection_timeout_ms: int = 5000,
) -> DataStore:
    """
    Connect to MongoDB once and return the shared DataStore.

    Pings the server and ensures indexes so a bad URI fails at startup rather
    than on the first request.

    Raises:
        UpstreamUnavailable: If the server cannot be reached or rejects setup
    """
    client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=server_selection_timeout_ms)
    store = DataStore(client[db_name])

    try:
        await store.ping()
        await store.ensure_indexes()
    except UpstreamUnavailable:
        client.close()
        raise
    except PyMongoError as e:
        client.close()
        logger.error("Document store setup failed", db_name=db_name, error=str(e))
        raise UpstreamUnavailable(f"Document store setup failed: {e}") from e

    logger.info("Connected to document store", db_name=db_name)
    return store


def close_store(store: DataStore) -> None:
    """Close the client behind ``store``."""
    # Motor client's close() is not async
    store.database.client.close()
    logger.info("Document store connection closed")
