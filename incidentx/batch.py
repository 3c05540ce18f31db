"""
Batch processing for Incident Extract.

The image list is cut into one contiguous shard per worker. Each worker runs
OCR, classification and extraction over its own shard and returns the
incidents it accepted; the lists are merged once every worker has finished.
Workers share nothing while they run, so no lock is needed.
"""

import concurrent.futures
import functools
import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from incidentx.classifier import build_vocabulary, is_relevant
from incidentx.config import Config
from incidentx.corpus import list_images
from incidentx.extractor import extract_incident, is_accepted
from incidentx.log import get_logger
from incidentx.model import Incident
from incidentx.ocr import make_recognizer

logger = get_logger(__name__)

Recognizer = Callable[[str], str]
Classifier = Callable[[str], bool]
Extractor = Callable[[str, str], Incident]
Source = Tuple[str, Recognizer]


def resolve_workers(workers: Optional[int] = None) -> int:
    """
    Return the configured worker count, or the CPU count when unset.
    """
    if workers is None:
        return os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"Worker count must be at least 1, got {workers}")
    return workers


def partition(count: int, workers: int) -> List[Tuple[int, int]]:
    """
    Split count items into contiguous [start, end) shards.

    Every shard gets count // workers items and the last one also takes the
    remainder. Never more shards than items.

    Args:
        count: Number of items
        workers: Requested number of shards

    Returns:
        List of (start, end) index pairs
    """
    if workers < 1:
        raise ValueError(f"Worker count must be at least 1, got {workers}")
    if count == 0:
        return []

    workers = min(workers, count)
    size = count // workers

    shards = []
    for i in range(workers):
        start = i * size
        end = count if i == workers - 1 else (i + 1) * size
        shards.append((start, end))
    return shards


def process_item(
    image_path: str,
    recognize: Recognizer,
    classify: Classifier = is_relevant,
    extract: Extractor = extract_incident,
) -> Optional[Incident]:
    """
    Run one image through OCR, classification and extraction.

    Args:
        image_path: Path to the image
        recognize: OCR function
        classify: Relevance test
        extract: Field extractor

    Returns:
        The incident if it was accepted, None otherwise
    """
    source = Path(image_path).name

    try:
        text = recognize(image_path) or ""
    except Exception as e:
        logger.error(f"OCR failed for {source}: {e}")
        text = ""

    if not classify(text):
        logger.debug(f"{source}: not relevant")
        return None

    incident = extract(text, source)
    if not is_accepted(incident):
        logger.debug(f"{source}: rejected (victims={incident['victims']}, location={incident['location']!r})")
        return None

    logger.debug(f"{source}: accepted ({incident['victims']} victims in {incident['location']})")
    return incident


def process_shard(
    sources: Sequence[Source],
    start: int,
    end: int,
    classify: Classifier = is_relevant,
    extract: Extractor = extract_incident,
) -> List[Incident]:
    """
    Process sources[start:end] sequentially.

    Returns:
        Incidents accepted in this shard
    """
    logger.debug(f"Processing shard [{start}, {end})")

    accepted = []
    for image_path, recognize in sources[start:end]:
        incident = process_item(image_path, recognize, classify, extract)
        if incident is not None:
            accepted.append(incident)
    return accepted


def run_batch(
    sources: Sequence[Source],
    workers: Optional[int] = None,
    classify: Classifier = is_relevant,
    extract: Extractor = extract_incident,
) -> List[Incident]:
    """
    Process (image_path, recognize) pairs on a fixed pool of worker threads.

    The order of the returned incidents is unspecified.

    Args:
        sources: Image paths paired with the OCR function to use for each
        workers: Number of workers (None = CPU count)
        classify: Relevance test
        extract: Field extractor

    Returns:
        Accepted incidents from all shards
    """
    shards = partition(len(sources), resolve_workers(workers))
    if not shards:
        logger.info("No images to process")
        return []

    logger.info(f"Processing {len(sources)} images with {len(shards)} workers")

    incidents: List[Incident] = []
    with concurrent.futures.ThreadPoolExecutor(
        max_workers=len(shards), thread_name_prefix="incidentx"
    ) as executor:
        futures = [
            executor.submit(process_shard, sources, start, end, classify, extract)
            for start, end in shards
        ]
        for future in futures:
            incidents.extend(future.result())

    logger.info(f"Accepted {len(incidents)} of {len(sources)} images")
    return incidents


def process_images(paths: Sequence[str], cfg: Config) -> List[Incident]:
    """
    Process image files with the configured OCR, vocabulary and extractor.

    Args:
        paths: Image paths
        cfg: Application configuration

    Returns:
        Accepted incidents
    """
    recognize = make_recognizer(cfg)
    vocabulary = build_vocabulary(cfg.extraction.extra_terms)

    classify = functools.partial(is_relevant, terms=vocabulary)
    extract = functools.partial(
        extract_incident,
        fallback_chars=cfg.extraction.description_chars,
        max_victims=cfg.extraction.max_victims,
    )

    sources = [(path, recognize) for path in paths]
    return run_batch(sources, cfg.performance.workers, classify, extract)


def process_directory(directory: str, cfg: Config) -> List[Incident]:
    """
    Process every image in a corpus directory.

    Raises:
        CorpusError: If the directory cannot be listed
    """
    paths = list_images(directory, cfg.input.extensions)
    return process_images(paths, cfg)
