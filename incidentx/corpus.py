"""
Image corpus enumeration for Incident Extract.
"""

from pathlib import Path
from typing import Iterable, List

from incidentx.log import get_logger
from incidentx.model import CorpusError

logger = get_logger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".tiff")


def list_images(directory: str, extensions: Iterable[str] = IMAGE_EXTENSIONS) -> List[str]:
    """
    List the image files directly inside a directory.

    Args:
        directory: Corpus directory
        extensions: Accepted file extensions, with leading dot

    Returns:
        Sorted list of image paths

    Raises:
        CorpusError: If the directory is missing or cannot be read
    """
    folder = Path(directory)
    if not folder.exists():
        raise CorpusError(f"Image directory not found: {directory}")
    if not folder.is_dir():
        raise CorpusError(f"Not a directory: {directory}")

    wanted = {ext.lower() for ext in extensions}

    try:
        paths = [
            str(entry)
            for entry in folder.iterdir()
            if entry.is_file() and entry.suffix.lower() in wanted
        ]
    except OSError as e:
        raise CorpusError(f"Error reading image directory {directory}: {e}") from e

    logger.info(f"Found {len(paths)} images in {directory}")
    return sorted(paths)
