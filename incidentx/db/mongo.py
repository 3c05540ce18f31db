"""
MongoDB integration for Incident Extract.
"""

import datetime
import hashlib
from typing import Dict, List

from incidentx import __version__
from incidentx.config import MongoDBConfig
from incidentx.log import get_logger
from incidentx.model import Incident, MongoDBError

logger = get_logger(__name__)

try:
    import pymongo
    MONGODB_AVAILABLE = True
except ImportError:
    logger.warning("pymongo not installed. MongoDB integration will not be available.")
    MONGODB_AVAILABLE = False


def write_mongodb(incidents: List[Incident], cfg: MongoDBConfig) -> Dict:
    """
    Write incidents to MongoDB.

    Re-running the same corpus updates the existing documents instead of
    adding new ones.

    Args:
        incidents: Incidents to write
        cfg: MongoDB configuration

    Returns:
        Dictionary with operation counts
    """
    if not MONGODB_AVAILABLE:
        raise MongoDBError("pymongo not installed. Install with: pip install pymongo")

    if not cfg.enabled:
        logger.warning("MongoDB integration is disabled in configuration")
        return {"matched": 0, "modified": 0, "upserted": 0}

    logger.info(f"Writing {len(incidents)} incidents to MongoDB")

    try:
        client = pymongo.MongoClient(cfg.uri, retryWrites=True)
        collection = client[cfg.database][cfg.collection]

        operations = []
        for incident in incidents:
            doc = to_mongodb_doc(incident, cfg.tenant)
            update = {
                "$set": {
                    "_tenant": doc["_tenant"],
                    "date": doc["date"],
                    "victims": doc["victims"],
                    "location": doc["location"],
                    "description": doc["description"],
                    "source.file": doc["source"]["file"],
                    "source.extractor_version": doc["source"]["extractor_version"],
                },
                "$setOnInsert": {"source.ingested_at": doc["source"]["ingested_at"]},
            }
            operations.append(pymongo.UpdateOne({"_id": doc["_id"]}, update, upsert=True))

        if operations:
            result = collection.bulk_write(operations, ordered=False)
            return {
                "matched": result.matched_count,
                "modified": result.modified_count,
                "upserted": len(result.upserted_ids or {}),
            }

        return {"matched": 0, "modified": 0, "upserted": 0}
    except Exception as e:
        logger.error(f"Error writing to MongoDB: {e}")
        raise MongoDBError(f"Error writing to MongoDB: {e}")


def to_mongodb_doc(incident: Incident, tenant: str) -> Dict:
    """
    Convert an incident to a MongoDB document.

    Args:
        incident: Incident to convert
        tenant: Tenant identifier

    Returns:
        MongoDB document
    """
    return {
        "_id": keyify(tenant, incident),
        "_tenant": tenant,
        "date": incident["date"],
        "victims": incident["victims"],
        "location": incident["location"],
        "description": incident["description"],
        "source": {
            "file": incident["source"],
            "ingested_at": datetime.datetime.now(datetime.timezone.utc),
            "extractor_version": __version__,
        },
    }


def keyify(tenant: str, incident: Incident) -> str:
    """
    Generate a deterministic ID for an incident.

    The ID covers the source file and the extracted content, so the same
    incident reported by two different pages keeps two documents.

    Args:
        tenant: Tenant identifier
        incident: Incident

    Returns:
        Deterministic ID
    """
    content = "|".join([
        incident["date"],
        str(incident["victims"]),
        incident["location"],
        incident["description"],
    ])
    digest = hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]
    return f"{tenant}::{incident['source']}::{digest}"


def setup_mongodb(cfg: MongoDBConfig) -> None:
    """
    Set up the incidents collection and its indexes.

    Args:
        cfg: MongoDB configuration
    """
    if not MONGODB_AVAILABLE:
        logger.warning("pymongo not installed. MongoDB setup not available.")
        return

    if not cfg.enabled:
        logger.warning("MongoDB integration is disabled in configuration")
        return

    logger.info("Setting up MongoDB collections and indexes")

    try:
        client = pymongo.MongoClient(cfg.uri)
        db = client[cfg.database]

        if cfg.collection not in db.list_collection_names():
            db.create_collection(
                cfg.collection,
                validator={
                    "$jsonSchema": {
                        "bsonType": "object",
                        "required": ["_tenant", "date", "victims", "location", "description", "source"],
                        "properties": {
                            "_tenant": {"bsonType": "string", "minLength": 1},
                            "date": {"bsonType": "string"},
                            "victims": {"bsonType": ["int", "long"], "minimum": 1},
                            "location": {"bsonType": "string", "minLength": 1},
                            "description": {"bsonType": "string"},
                            "source": {
                                "bsonType": "object",
                                "required": ["file", "ingested_at"],
                                "properties": {
                                    "file": {"bsonType": "string"},
                                    "ingested_at": {"bsonType": "date"},
                                    "extractor_version": {"bsonType": "string"},
                                },
                            },
                        },
                    }
                },
                validationLevel="moderate",
            )

        collection = db[cfg.collection]
        collection.create_index([("_tenant", pymongo.ASCENDING), ("source.file", pymongo.ASCENDING)])
        collection.create_index([("location", pymongo.ASCENDING)])
        collection.create_index([("date", pymongo.ASCENDING)])

        logger.info("MongoDB setup complete")
    except Exception as e:
        logger.error(f"Error setting up MongoDB: {e}")
        raise MongoDBError(f"Error setting up MongoDB: {e}")
