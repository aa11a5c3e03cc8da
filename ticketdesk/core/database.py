# ticketdesk/core/database.py
import asyncio
import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from ticketdesk.core.config import Settings, get_settings
from ticketdesk.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

LOCAL_MONGODB_URI = "mongodb://127.0.0.1:27017"

# Process-wide client; every caller awaits the same connect task
_connecting: asyncio.Task | None = None


async def _connect(settings: Settings) -> AsyncMongoClient:
    uri = settings.MONGODB_URI
    if not uri:
        logger.warning("MONGODB_URI not set, using local MongoDB at %s", LOCAL_MONGODB_URI)
        uri = LOCAL_MONGODB_URI

    client = AsyncMongoClient(
        uri,
        maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
        minPoolSize=settings.MONGODB_MIN_POOL_SIZE,
        serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        connectTimeoutMS=settings.MONGODB_CONNECT_TIMEOUT_MS,
        socketTimeoutMS=settings.MONGODB_SOCKET_TIMEOUT_MS,
        tz_aware=True,
    )
    try:
        await client.admin.command("ping")
    except PyMongoError:
        await client.close()
        raise
    logger.info(
        "MongoDB connected (database=%s, %s)",
        settings.MONGODB_DB,
        "remote" if settings.MONGODB_URI else "local",
    )
    return client


async def get_client() -> AsyncMongoClient:
    """Return the shared client, connecting on first use."""
    global _connecting
    task = _connecting
    if task is None:
        task = asyncio.ensure_future(_connect(get_settings()))
        _connecting = task
    try:
        return await asyncio.shield(task)
    except PyMongoError as exc:
        if _connecting is task:
            _connecting = None
        logger.error("MongoDB connection failed: %s", exc)
        raise StoreUnavailable() from exc


async def close_client() -> None:
    """Close the shared client, waiting for a connect still in flight."""
    global _connecting
    task, _connecting = _connecting, None
    if task is None:
        return
    try:
        client = await task
    except PyMongoError:
        return
    await client.close()
    logger.info("MongoDB connection closed")


async def get_database() -> AsyncDatabase:
    client = await get_client()
    return client[get_settings().MONGODB_DB]


async def get_collection(name: str) -> AsyncCollection:
    database = await get_database()
    return database[name]


async def ping(database: AsyncDatabase) -> None:
    try:
        await database.command("ping")
    except PyMongoError as exc:
        raise StoreUnavailable() from exc
