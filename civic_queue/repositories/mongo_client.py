"""MongoDB Client - Connection and Collection Management"""
from typing import Any, Dict, Optional
from pymongo import MongoClient as PyMongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import ConnectionFailure, PyMongoError

from ..config.settings import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Collection names
ISSUES = "issues"
ISSUE_QUEUE = "issue_queue"
ROUTE_CONFIGS = "route_configs"
SEVERITY_CONFIGS = "severity_configs"

# Global client instance
_client: Optional[PyMongoClient] = None
_database: Optional[Database] = None


def get_client() -> PyMongoClient:
    """Get or create MongoDB client"""
    global _client
    if _client is None:
        logger.info(f"Connecting to MongoDB: {settings.mongo_uri}")
        _client = PyMongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
        )
        try:
            _client.admin.command("ping")
            logger.info("MongoDB connection successful")
        except ConnectionFailure as e:
            logger.error(f"MongoDB connection failed: {e}")
            raise
    return _client


def get_database() -> Database:
    """Get the application database"""
    global _database
    if _database is None:
        client = get_client()
        _database = client[settings.mongo_db]
        logger.info(f"Using database: {settings.mongo_db}")
    return _database


def get_collection(name: str, db: Optional[Database] = None) -> Collection:
    """Get a collection from the given database, or the application database"""
    database = db if db is not None else get_database()
    return database[name]


def close_connection() -> None:
    """Close MongoDB connection"""
    global _client, _database
    if _client is not None:
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


def create_indexes(db: Optional[Database] = None) -> None:
    """Create all required indexes"""
    db = db if db is not None else get_database()
    logger.info("Creating MongoDB indexes...")

    # Issues collection (_id is the complaint ID)
    issues = db[ISSUES]
    issues.create_index("complaint_id", unique=True)
    issues.create_index("status")
    issues.create_index("created_at", background=True)

    # Queue collection - complaint_id is deliberately not unique
    issue_queue = db[ISSUE_QUEUE]
    issue_queue.create_index("complaint_id")
    issue_queue.create_index([("status", ASCENDING), ("priority", ASCENDING), ("enqueued_at", ASCENDING)])
    issue_queue.create_index([("department_id", ASCENDING), ("status", ASCENDING)])
    issue_queue.create_index([("complaint_id", ASCENDING), ("enqueued_at", DESCENDING)])

    # Routing configuration
    db[ROUTE_CONFIGS].create_index("order")

    logger.info("MongoDB indexes created successfully")


def health_check() -> Dict[str, Any]:
    """Check MongoDB health"""
    try:
        client = get_client()
        client.admin.command("ping")
        return {
            "status": "healthy",
            "database": settings.mongo_db,
            "connection": "ok"
        }
    except PyMongoError as e:
        logger.error(f"MongoDB health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": settings.mongo_db,
            "error": str(e)
        }
