from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure
import logging
from .config import get_db_config

logger = logging.getLogger(__name__)

def get_mongodb_client() -> MongoClient:
    """Get MongoDB client with proper connection settings."""
    db_config = get_db_config()
    uri = db_config.get("uri")
    options = db_config.get("options", {})
    
    try:
        # Initialize client with connection options from config
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=options.get("serverSelectionTimeoutMS", 30000),
            socketTimeoutMS=options.get("socketTimeoutMS", 45000),
            connectTimeoutMS=options.get("connectTimeoutMS", 30000)
        )
        
        # Test connection
        client.admin.command('ping')
        logger.info("Successfully connected to MongoDB")
        return client
    except ConnectionFailure as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise

def get_database(client: MongoClient) -> Database:
    """Return the application database from a connected client."""
    return client[get_db_config()["database"]]

def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and ObjectId.is_valid(value)

def iso_timestamp(now: Optional[datetime] = None) -> str:
    """
    Format a UTC instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    The width is fixed so string order matches chronological order.
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Replace ``_id`` with a string ``id`` and stringify ObjectId references."""
    result = {}
    for key, value in document.items():
        if key == "_id":
            result["id"] = str(value)
        elif isinstance(value, ObjectId):
            result[key] = str(value)
        else:
            result[key] = value
    return result
