"""
Configuration module for Incident Extract.
"""

import json
import os
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from incidentx.model import ConfigError

DEFAULT_CHAR_WHITELIST = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789.,!?-_'\"()"
)


class InputConfig(BaseModel):
    """
    Configuration for input.
    """

    directory: str = "./images"  # Corpus directory of scanned pages
    extensions: List[str] = [".png", ".jpg", ".jpeg", ".tiff"]  # Accepted image extensions


class OCRConfig(BaseModel):
    """
    Configuration for OCR.
    """

    lang: str = "eng"  # Tesseract language
    oem: int = 1  # Engine mode (1 = LSTM only)
    psm: int = 3  # Page segmentation mode (3 = fully automatic)
    dpi: int = 300  # Resolution assumed for images without DPI metadata
    char_whitelist: Optional[str] = DEFAULT_CHAR_WHITELIST  # None disables the whitelist
    timeout: Optional[float] = None  # Per-image timeout in seconds (None = wait forever)


class ExtractionConfig(BaseModel):
    """
    Configuration for field extraction.
    """

    description_chars: int = 500  # Length of the fallback description
    max_victims: int = 2**31 - 1  # Victim counts above this are rejected
    extra_terms: List[str] = []  # Added to the built-in relevance vocabulary


class OutputConfig(BaseModel):
    """
    Configuration for output.
    """

    json_path: Optional[str] = "./out/incidents.json"  # JSON output path
    csv_path: Optional[str] = None  # CSV output path (disabled by default)
    ndjson_path: Optional[str] = None  # NDJSON output path (disabled by default)
    pretty_json: bool = True  # Whether to pretty-print JSON


class LoggingConfig(BaseModel):
    """
    Configuration for logging.
    """

    level: str = "INFO"  # Logging level (DEBUG/INFO/WARN/ERROR)


class PerformanceConfig(BaseModel):
    """
    Configuration for performance.
    """

    workers: Optional[int] = None  # Worker threads (None = CPU count)


class MongoDBConfig(BaseModel):
    """
    Configuration for MongoDB integration.
    """

    enabled: bool = False  # Whether MongoDB integration is enabled
    uri: str = "mongodb://localhost:27017"  # MongoDB connection URI
    database: str = "incidents"  # Database name
    collection: str = "shooting_incidents"  # Collection name
    tenant: str = "DEFAULT"  # Multi-tenant identifier


class Config(BaseModel):
    """
    Main configuration.
    """

    input: InputConfig = Field(default_factory=InputConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)
    mongodb: Optional[MongoDBConfig] = None  # MongoDB config (optional)


def load_config(path: Optional[str] = None) -> Config:
    """
    Load configuration from a file.

    Args:
        path: Path to the configuration file

    Returns:
        Configuration object
    """
    if path:
        if path.endswith(".yaml") or path.endswith(".yml"):
            loader = yaml.safe_load
        elif path.endswith(".json"):
            loader = json.load
        else:
            raise ConfigError(f"Unsupported configuration file format: {path}")

        with open(path, "r", encoding="utf-8") as f:
            config_dict = loader(f) or {}

        try:
            return Config(**config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e
    else:
        # Try to load from default locations
        default_locations = [
            "./config.yaml",
            "./config.yml",
            "./config.json",
            os.path.expanduser("~/.config/incidentx/config.yaml"),
        ]

        for loc in default_locations:
            if os.path.exists(loc):
                return load_config(loc)

        # Return default configuration
        return Config()
