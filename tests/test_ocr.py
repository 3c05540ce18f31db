"""
Tests for the OCR module.
"""

import shlex
from unittest.mock import patch

import pytest

from incidentx.config import DEFAULT_CHAR_WHITELIST, Config, OCRConfig
from incidentx.ocr import (
    apply_ocr_to_image,
    build_tesseract_config,
    check_ocr_dependencies,
    make_recognizer,
    recognize_image,
)


@patch("incidentx.ocr.pytesseract")
def test_check_ocr_dependencies_installed(mock_pytesseract):
    """Test checking OCR dependencies when tesseract is installed."""
    mock_pytesseract.get_tesseract_version.return_value = "5.3.0"
    assert check_ocr_dependencies() is True


@patch("incidentx.ocr.pytesseract")
def test_check_ocr_dependencies_not_installed(mock_pytesseract):
    """Test checking OCR dependencies when tesseract is missing."""
    mock_pytesseract.get_tesseract_version.side_effect = OSError("tesseract is not installed")
    assert check_ocr_dependencies() is False


def test_build_tesseract_config_default():
    """Test the default tesseract options."""
    options = build_tesseract_config(OCRConfig())

    assert shlex.split(options) == [
        "--oem", "1",
        "--psm", "3",
        "--dpi", "300",
        "-c", f"tessedit_char_whitelist={DEFAULT_CHAR_WHITELIST}",
    ]


def test_build_tesseract_config_without_whitelist():
    """Test tesseract options with the whitelist disabled."""
    options = build_tesseract_config(OCRConfig(char_whitelist=None, psm=6, dpi=200))
    assert options == "--oem 1 --psm 6 --dpi 200"


@patch("incidentx.ocr.pytesseract")
def test_apply_ocr_to_image(mock_pytesseract):
    """Test applying OCR to an image."""
    # Mock pytesseract
    mock_pytesseract.image_to_string.return_value = "OCR text"

    # Apply OCR
    text = apply_ocr_to_image("dummy_image", "eng")

    # Verify text
    assert text == "OCR text"
    mock_pytesseract.image_to_string.assert_called_once_with("dummy_image", lang="eng", config="", timeout=0)


@patch("incidentx.ocr.pytesseract")
def test_apply_ocr_to_image_timeout(mock_pytesseract):
    """Test passing a timeout to tesseract."""
    mock_pytesseract.image_to_string.return_value = "OCR text"

    apply_ocr_to_image("dummy_image", "deu", "--psm 3", 30)

    mock_pytesseract.image_to_string.assert_called_once_with("dummy_image", lang="deu", config="--psm 3", timeout=30)


@patch("incidentx.ocr.pytesseract")
def test_apply_ocr_to_image_error(mock_pytesseract):
    """Test error handling when applying OCR to an image."""
    # Mock pytesseract to raise an exception
    mock_pytesseract.image_to_string.side_effect = RuntimeError("Tesseract process timeout")

    # Apply OCR
    text = apply_ocr_to_image("dummy_image", "eng")

    # Verify text is empty
    assert text == ""


@patch("incidentx.ocr.pytesseract")
@patch("incidentx.ocr.Image")
def test_recognize_image(mock_image, mock_pytesseract):
    """Test applying OCR to an image file."""
    opened = mock_image.open.return_value.__enter__.return_value
    mock_pytesseract.image_to_string.return_value = "Page text"

    text = recognize_image("scans/page.tiff", "eng", "--psm 3")

    assert text == "Page text"
    mock_image.open.assert_called_once_with("scans/page.tiff")
    opened.load.assert_called_once()
    mock_pytesseract.image_to_string.assert_called_once_with(opened, lang="eng", config="--psm 3", timeout=0)


@patch("incidentx.ocr.pytesseract")
@patch("incidentx.ocr.Image")
def test_recognize_image_unreadable(mock_image, mock_pytesseract):
    """Test that an undecodable image gives empty text."""
    mock_image.open.side_effect = OSError("cannot identify image file")

    assert recognize_image("scans/broken.png") == ""
    mock_pytesseract.image_to_string.assert_not_called()


def test_recognize_image_missing_file(temp_dir):
    """Test that a missing image gives empty text."""
    assert recognize_image(f"{temp_dir}/missing.png") == ""


@patch("incidentx.ocr.recognize_image", return_value="text")
def test_make_recognizer(mock_recognize_image):
    """Test binding the configured OCR settings."""
    cfg = Config(ocr=OCRConfig(lang="fra", timeout=15))

    recognize = make_recognizer(cfg)

    assert recognize("scans/page.png") == "text"
    mock_recognize_image.assert_called_once_with(
        "scans/page.png", "fra", build_tesseract_config(cfg.ocr), 15
    )
