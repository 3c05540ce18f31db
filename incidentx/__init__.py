"""
Incident Extract - Shooting Incident Extraction System.

A system for extracting structured shooting incident records from scanned
newspaper page images.
"""

__version__ = "0.1.0"

from incidentx.model import Incident, IncidentXError, CorpusError, OutputError
from incidentx.config import Config, MongoDBConfig, load_config
from incidentx.classifier import is_relevant
from incidentx.extractor import (
    extract_date,
    extract_victim_count,
    extract_location,
    extract_description,
    extract_incident,
    is_accepted,
)
from incidentx.batch import run_batch, process_images, process_directory
from incidentx.corpus import list_images
from incidentx.ocr import recognize_image
from incidentx.writers import write_json, write_csv, write_ndjson, write_outputs
from incidentx.db.mongo import write_mongodb

__all__ = [
    "Incident",
    "IncidentXError",
    "CorpusError",
    "OutputError",
    "Config",
    "MongoDBConfig",
    "load_config",
    "is_relevant",
    "extract_date",
    "extract_victim_count",
    "extract_location",
    "extract_description",
    "extract_incident",
    "is_accepted",
    "run_batch",
    "process_images",
    "process_directory",
    "list_images",
    "recognize_image",
    "write_json",
    "write_csv",
    "write_ndjson",
    "write_outputs",
    "write_mongodb",
]
