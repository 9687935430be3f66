"""Process-wide MongoClient.

The client is built lazily from MONGO_URL and kept for the life of the
process; pymongo reconnects it on its own. Each call pings the server, so an
outage yields None (and a 503 upstream) only while the server is actually
down. An unusable MONGO_URL is retried on the next call rather than latched.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'users_api')
USERS_COLLECTION_NAME = 'users'

CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 10,
    'retryWrites': True,
    'retryReads': True,
}

_client: MongoClient | None = None
# None until the first check; log only when this flips
_available: bool | None = None


def close_client():
    """Close and forget the cached client (app shutdown, tests)."""
    global _client, _available
    if _client is not None:
        _client.close()
    _client = None
    _available = None


def get_mongodb_client() -> MongoClient | None:
    """Return a client whose server answers ping, or None."""
    global _client, _available

    if not MONGO_URL:
        if _available is not False:
            logger.error("[MONGODB] MONGO_URL not configured")
        _available = False
        return None

    try:
        if _client is None:
            _client = MongoClient(MONGO_URL, **CLIENT_OPTIONS)
        _client.admin.command('ping')
    except PyMongoError as e:
        if _available is not False:
            logger.error("[MONGODB] Unavailable", extra={"error": str(e)[:200]})
        _available = False
        return None

    if _available is not True:
        logger.info(f"[MONGODB] Connected to {DATABASE_NAME}")
        _available = True
    return _client
