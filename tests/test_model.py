"""
Tests for the model module.
"""

import pytest

from incidentx.model import (
    INCIDENT_FIELDS,
    ConfigError,
    CorpusError,
    ExtractionError,
    Incident,
    IncidentXError,
    MongoDBError,
    OutputError,
)


def test_incident_type():
    """Test Incident type."""
    incident: Incident = {
        "date": "July 4, 1921",
        "victims": 2,
        "location": "Tulsa, OK",
        "description": "shooting at the rail yard.",
        "source": "world_p2.jpg",
    }

    assert incident["date"] == "July 4, 1921"
    assert incident["victims"] == 2
    assert incident["location"] == "Tulsa, OK"
    assert incident["source"] == "world_p2.jpg"


def test_incident_fields():
    """Test the persisted field order."""
    assert INCIDENT_FIELDS == ("date", "victims", "location", "description", "source")
    assert set(INCIDENT_FIELDS) == set(Incident.__annotations__)


@pytest.mark.parametrize("error_class", [
    ExtractionError, CorpusError, ConfigError, OutputError, MongoDBError,
])
def test_exception_hierarchy(error_class):
    """Test that every error derives from IncidentXError."""
    assert issubclass(error_class, IncidentXError)

    with pytest.raises(IncidentXError) as excinfo:
        raise error_class("Test error")

    assert str(excinfo.value) == "Test error"
