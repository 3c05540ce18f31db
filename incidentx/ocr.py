"""
OCR utilities for Incident Extract.
"""

import shlex
from typing import Callable, Optional

import pytesseract
from PIL import Image

from incidentx.config import Config, OCRConfig
from incidentx.log import get_logger

logger = get_logger(__name__)


def check_ocr_dependencies() -> bool:
    """
    Check if the tesseract binary is reachable.

    Returns:
        True if tesseract can be run, False otherwise
    """
    try:
        version = pytesseract.get_tesseract_version()
        logger.debug(f"Using tesseract {version}")
        return True
    except OSError:
        logger.error("tesseract not found. Install it and make sure it is on PATH")
        return False


def build_tesseract_config(cfg: OCRConfig) -> str:
    """
    Build the tesseract command-line options for an OCR configuration.

    Args:
        cfg: OCR configuration

    Returns:
        Options string passed to pytesseract
    """
    options = f"--oem {cfg.oem} --psm {cfg.psm} --dpi {cfg.dpi}"
    if cfg.char_whitelist:
        # pytesseract splits the options with shlex, so quote the quotes
        options += " -c " + shlex.quote(f"tessedit_char_whitelist={cfg.char_whitelist}")
    return options


def apply_ocr_to_image(image, lang: str = "eng", config: str = "", timeout: Optional[float] = None) -> str:
    """
    Apply OCR to an image.

    Args:
        image: Image object
        lang: OCR language
        config: Extra tesseract options
        timeout: Seconds before tesseract is killed (None = no limit)

    Returns:
        Extracted text as a string
    """
    try:
        return pytesseract.image_to_string(image, lang=lang, config=config, timeout=timeout or 0)
    except Exception as e:
        logger.error(f"Error applying OCR: {e}")
        return ""


def recognize_image(image_path: str, lang: str = "eng", config: str = "", timeout: Optional[float] = None) -> str:
    """
    Apply OCR to an image file.

    Unreadable or undecodable images give "" rather than an error.

    Args:
        image_path: Path to a PNG, JPEG or TIFF image
        lang: OCR language
        config: Extra tesseract options
        timeout: Seconds before tesseract is killed (None = no limit)

    Returns:
        Extracted text as a string
    """
    logger.debug(f"Applying OCR to {image_path}")

    try:
        with Image.open(image_path) as image:
            image.load()
            return apply_ocr_to_image(image, lang, config, timeout)
    except Exception as e:
        logger.error(f"Error reading image {image_path}: {e}")
        return ""


def make_recognizer(cfg: Config) -> Callable[[str], str]:
    """
    Bind recognize_image to the configured language, options and timeout.

    Args:
        cfg: Application configuration

    Returns:
        Function taking an image path and returning its text
    """
    options = build_tesseract_config(cfg.ocr)

    def recognize(image_path: str) -> str:
        return recognize_image(image_path, cfg.ocr.lang, options, cfg.ocr.timeout)

    return recognize
