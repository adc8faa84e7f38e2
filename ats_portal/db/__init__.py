"""
Database module - MongoDB connection.
"""
from ats_portal.db.mongodb import get_mongo_db, get_users_collection, test_mongo_connection

__all__ = [
    "get_mongo_db",
    "get_users_collection",
    "test_mongo_connection"
]
