"""
Data models for Incident Extract.
"""

from typing import TypedDict


class Incident(TypedDict):
    """
    Represents a shooting incident extracted from one scanned page.
    """

    date: str  # First "Month D, YYYY" found in the text, or ""
    victims: int  # First victim count found, 0 if none
    location: str  # Capitalized place name, optionally ", XX", or ""
    description: str  # Matched sentence or the leading text of the page
    source: str  # Image filename the text was recognized from


INCIDENT_FIELDS = ("date", "victims", "location", "description", "source")


class IncidentXError(Exception):
    """Base class for all incidentx exceptions."""

    pass


class ExtractionError(IncidentXError):
    """Exception raised when an extracted field cannot be represented."""

    pass


class CorpusError(IncidentXError):
    """Exception raised when the image corpus cannot be enumerated."""

    pass


class ConfigError(IncidentXError):
    """Exception raised for configuration errors."""

    pass


class OutputError(IncidentXError):
    """Exception raised for output errors."""

    pass


class MongoDBError(IncidentXError):
    """Exception raised for MongoDB errors."""

    pass
