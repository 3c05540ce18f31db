"""
Output writers for Incident Extract.
"""

import contextlib
import csv
import json
import os
import tempfile
from typing import Dict, Iterator, List, Optional, TextIO

from incidentx.config import Config
from incidentx.log import get_logger
from incidentx.model import INCIDENT_FIELDS, Incident, OutputError

logger = get_logger(__name__)


def write_outputs(incidents: List[Incident], cfg: Config) -> None:
    """
    Write incidents to all configured outputs.

    Args:
        incidents: Incidents to write
        cfg: Application configuration
    """
    logger.info(f"Writing {len(incidents)} incidents to outputs")

    # Validate incidents
    validation_errors = validate_incidents(incidents)
    if validation_errors:
        for error in validation_errors:
            logger.warning(f"Validation error: {error}")

    # Write JSON if configured
    if cfg.output.json_path:
        write_json(incidents, cfg.output.json_path, cfg.output.pretty_json)

    # Write CSV if configured
    if cfg.output.csv_path:
        write_csv(incidents, cfg.output.csv_path)

    # Write NDJSON if configured
    if cfg.output.ndjson_path:
        write_ndjson(incidents, cfg.output.ndjson_path)

    # Write to MongoDB if enabled
    if cfg.mongodb and cfg.mongodb.enabled:
        from incidentx.db.mongo import write_mongodb

        write_mongodb(incidents, cfg.mongodb)


@contextlib.contextmanager
def atomic_write(path: str, newline: Optional[str] = None) -> Iterator[TextIO]:
    """
    Open a temporary file next to path and move it over path on success.

    Args:
        path: Final output path
        newline: Newline mode passed to open()

    Yields:
        Text file to write to
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".incidentx-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline=newline) as f:
            yield f
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def to_document(incident: Incident) -> Dict:
    """
    Return the persisted form of an incident.
    """
    return {field: incident.get(field) for field in INCIDENT_FIELDS}


def write_json(incidents: List[Incident], path: str, pretty: bool = True) -> None:
    """
    Write incidents to a JSON file as one array.

    Args:
        incidents: Incidents to write
        path: Output file path
        pretty: Whether to pretty-print the JSON
    """
    logger.info(f"Writing JSON to {path}")

    documents = [to_document(incident) for incident in incidents]
    try:
        with atomic_write(path) as f:
            if pretty:
                json.dump(documents, f, indent=4, ensure_ascii=False)
                f.write("\n")
            else:
                json.dump(documents, f, ensure_ascii=False)

        logger.info(f"Wrote {len(documents)} incidents to {path}")
    except Exception as e:
        logger.error(f"Error writing JSON to {path}: {e}")
        raise OutputError(f"Error writing JSON to {path}: {e}")


def write_csv(incidents: List[Incident], path: str) -> None:
    """
    Write incidents to a CSV file, one row per incident.

    Args:
        incidents: Incidents to write
        path: Output file path
    """
    logger.info(f"Writing CSV to {path}")

    try:
        with atomic_write(path, newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(INCIDENT_FIELDS))
            writer.writeheader()
            for incident in incidents:
                writer.writerow(to_document(incident))

        logger.info(f"Wrote {len(incidents)} rows to {path}")
    except Exception as e:
        logger.error(f"Error writing CSV to {path}: {e}")
        raise OutputError(f"Error writing CSV to {path}: {e}")


def write_ndjson(incidents: List[Incident], path: str) -> None:
    """
    Write incidents to an NDJSON file, one line per incident.

    Args:
        incidents: Incidents to write
        path: Output file path
    """
    logger.info(f"Writing NDJSON to {path}")

    try:
        with atomic_write(path) as f:
            for incident in incidents:
                f.write(json.dumps(to_document(incident), ensure_ascii=False) + "\n")

        logger.info(f"Wrote {len(incidents)} lines to {path}")
    except Exception as e:
        logger.error(f"Error writing NDJSON to {path}: {e}")
        raise OutputError(f"Error writing NDJSON to {path}: {e}")


def validate_incidents(incidents: List[Incident]) -> List[str]:
    """
    Check that every incident carries all persisted fields.

    Args:
        incidents: Incidents to validate

    Returns:
        List of validation errors
    """
    errors = []

    for i, incident in enumerate(incidents):
        for field in INCIDENT_FIELDS:
            if field not in incident:
                errors.append(f"Incident {i}: Missing {field}")

    return errors
