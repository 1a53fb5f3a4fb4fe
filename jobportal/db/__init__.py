"""
Database module - MongoDB connection and collection helpers.
"""
from jobportal.db.mongodb import get_mongo_db, get_collection, init_mongo_indexes, ping_mongo

__all__ = [
    "get_mongo_db",
    "get_collection",
    "init_mongo_indexes",
    "ping_mongo"
]
