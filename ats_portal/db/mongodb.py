"""
MongoDB Connection Utility

MongoDB stores a single collection:
- users: credentials, profile fields and the latest resume analysis

Resumes and AI replies are processed per request and never stored.
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ats_portal.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
}


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the application database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection."""
    db = get_mongo_db()
    return db[name]


def get_users_collection() -> Collection:
    return get_collection(COLLECTIONS["users"])


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes(collection: Collection = None):
    """
    Create indexes. Call this once during app startup.

    The unique index on email is what actually guarantees one account per
    address; the pre-insert lookup in the signup flow only gives a nicer
    error in the common case.
    """
    users = collection if collection is not None else get_users_collection()
    users.create_index([("email", ASCENDING)], unique=True)
    users.create_index([("createdAt", ASCENDING)])
    logger.info("MongoDB indexes created successfully")


def close_mongo_connection():
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
