"""
Field extraction for Incident Extract.

Every field uses the first match in the text and ignores later ones, even when
a later match would be more specific. Each field function can be swapped out on
its own; extract_incident only composes them.
"""

import re

from incidentx.log import get_logger
from incidentx.model import ExtractionError, Incident

logger = get_logger(__name__)

DEFAULT_DESCRIPTION_CHARS = 500
MAX_VICTIMS = 2**31 - 1

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Regex patterns
# "March 3, 2021"
DATE_REGEX = re.compile(r"\b(?:" + "|".join(MONTHS) + r")\s+\d{1,2},\s+\d{4}\b")
# "12 people", "4 dead", "3 fatally shot"
VICTIMS_REGEX = re.compile(
    r"(?P<count>\d+)\s*(?:people|individuals|persons|victims|killed|dead|fatally shot|injured)"
)
# "in Springfield, IL", "in New Orleans"
LOCATION_REGEX = re.compile(r"in\s+(?P<place>(?:[A-Z][a-z]+\s*)+(?:,\s*[A-Z]{2})?)")
# Lazy up to the first period or line break; "." does not cross lines
DESCRIPTION_REGEX = re.compile(r"(?:mass\s+shooting|shooting|incident).*?(?:\.|\n)")


def extract_date(text: str) -> str:
    """
    Extract the first "Month D, YYYY" date from text.

    Args:
        text: Recognized text

    Returns:
        The date exactly as written, or "" if there is none
    """
    match = DATE_REGEX.search(text)
    return match.group(0) if match else ""


def extract_victim_count(text: str, max_count: int = MAX_VICTIMS) -> int:
    """
    Extract the first victim count from text.

    "12 people were killed and 5 injured" gives 12, and "4 injured, 12 dead"
    gives 4. Only the first count is considered.

    Args:
        text: Recognized text
        max_count: Largest count accepted

    Returns:
        The count, or 0 if no count is found

    Raises:
        ExtractionError: If the count is larger than max_count
    """
    match = VICTIMS_REGEX.search(text)
    if not match:
        return 0

    digits = match.group("count")
    try:
        count = int(digits)
    except ValueError as e:
        # Longer than the interpreter's int conversion limit
        raise ExtractionError(f"Victim count of {len(digits)} digits cannot be parsed") from e

    if count > max_count:
        raise ExtractionError(f"Victim count {digits} exceeds {max_count}")
    return count


def extract_location(text: str) -> str:
    """
    Extract the first "in <Capitalized Words>[, XX]" place name from text.

    Args:
        text: Recognized text

    Returns:
        The place name without trailing whitespace, or "" if there is none
    """
    match = LOCATION_REGEX.search(text)
    return match.group("place").rstrip() if match else ""


def extract_description(text: str, fallback_chars: int = DEFAULT_DESCRIPTION_CHARS) -> str:
    """
    Extract the first sentence starting with "mass shooting", "shooting" or
    "incident".

    Args:
        text: Recognized text
        fallback_chars: Number of leading characters used when no sentence matches

    Returns:
        The matched sentence verbatim, or the leading text of the page
    """
    match = DESCRIPTION_REGEX.search(text)
    if match:
        return match.group(0)
    return text[:fallback_chars]


def extract_incident(
    text: str,
    source: str,
    fallback_chars: int = DEFAULT_DESCRIPTION_CHARS,
    max_victims: int = MAX_VICTIMS,
) -> Incident:
    """
    Build an incident from recognized text.

    Never raises: each field falls back to "" or 0 on its own.

    Args:
        text: Recognized text
        source: Name of the image the text came from
        fallback_chars: Length of the fallback description
        max_victims: Largest victim count accepted

    Returns:
        Incident built from the text
    """
    text = text or ""

    try:
        victims = extract_victim_count(text, max_victims)
    except ExtractionError as e:
        logger.warning(f"{source}: {e}, treating victim count as unknown")
        victims = 0

    return {
        "date": extract_date(text),
        "victims": victims,
        "location": extract_location(text),
        "description": extract_description(text, fallback_chars),
        "source": source,
    }


def is_accepted(incident: Incident) -> bool:
    """
    Check if an incident has a victim count and a location.
    """
    return incident["victims"] > 0 and bool(incident["location"])
