"""
Pytest configuration and fixtures.
"""

import os
import tempfile
from typing import Dict, List

import pytest

from incidentx.config import Config
from incidentx.model import Incident


@pytest.fixture
def sample_config():
    """Return a sample configuration."""
    return Config()


@pytest.fixture
def sample_incident() -> Incident:
    """Return a sample incident."""
    return {
        "date": "March 3, 2021",
        "victims": 4,
        "location": "Chicago",
        "description": "shooting left four dead outside a tavern.",
        "source": "tribune_1921_p3.png",
    }


@pytest.fixture
def sample_incidents() -> List[Incident]:
    """Return a list of sample incidents."""
    return [
        {
            "date": "March 3, 2021",
            "victims": 4,
            "location": "Chicago",
            "description": "shooting left four dead outside a tavern.",
            "source": "tribune_1921_p3.png",
        },
        {
            "date": "",
            "victims": 12,
            "location": "Springfield, IL",
            "description": "mass shooting at the county fair.",
            "source": "register_p1.tiff",
        },
    ]


@pytest.fixture
def relevant_text() -> str:
    """Return recognized text describing a shooting."""
    return (
        "SPRINGFIELD DAILY REGISTER\n"
        "On March 3, 2021, police said a gunman opened fire at a diner.\n"
        "The shooting occurred in Springfield, IL shortly after noon.\n"
        "12 people were killed and 5 injured.\n"
    )


@pytest.fixture
def irrelevant_text() -> str:
    """Return recognized text with no vocabulary term."""
    return (
        "The city council approved a new budget for the public library on Tuesday.\n"
        "Members praised the volunteers who organized the book fair.\n"
    )


@pytest.fixture
def ocr_texts() -> Dict[str, str]:
    """Return mocked OCR output keyed by image path."""
    return {
        "scans/a.png": "A gunman opened fire in Chicago on Monday. 4 people were wounded.",
        "scans/b.jpg": "The council approved a new budget for the public library.",
        "scans/c.tiff": "the shooting left 3 people wounded near the old mill.",
    }


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield tmp_dir


@pytest.fixture
def temp_file():
    """Create a temporary file."""
    with tempfile.NamedTemporaryFile(delete=False) as tmp:
        tmp_path = tmp.name

    yield tmp_path

    # Clean up
    if os.path.exists(tmp_path):
        os.unlink(tmp_path)
