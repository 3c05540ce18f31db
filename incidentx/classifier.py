"""
Relevance classifier for Incident Extract.

Decides whether a page of recognized text talks about a shooting. The test is
a plain case-insensitive substring search over a fixed vocabulary, so "rage"
also fires inside "average" and "shot" inside "shotgun". That trades precision
for recall; the extractor and the acceptance filter weed out the noise.
"""

from typing import Iterable, List, Optional

RELEVANT_TERMS = frozenset([
    "altercation", "bullet", "bullets", "casing", "casings",
    "dead", "deadly", "death", "death penalty", "death sentence", "deaths",
    "dispute", "domestic", "drive-by", "drug related",
    "erupted", "executed", "execution",
    "family killing", "family murder", "fatal", "fatalities", "fatality",
    "gun", "gunfire", "gunman", "gunmen", "gunned down", "guns", "gunshot",
    "handgun", "heinous",
    "kill", "killed", "killer", "killing",
    "life sentence",
    "mass murder", "mass shooting", "massacre", "massacred",
    "multiple counts", "multiple dead", "multiple homicide", "multiple murder", "multiple shot",
    "murder", "murder suicide", "murdered", "murderer", "murdering",
    "quadruple homicide", "quadruple murder",
    "rage", "rampage", "retaliation", "revenge", "rifle",
    "serial killer", "serial murder",
    "shoot", "shooter", "shooting", "shot", "shot dead", "shotgun",
    "slain", "slaughter", "slaughtered", "slay", "slayed", "slaying",
    "spree", "stand-off", "standoff", "suicide", "suspect dead",
    "tragedy", "tragic",
    "wound", "wounded", "wounding",
])


def is_relevant(text: str, terms: Optional[Iterable[str]] = None) -> bool:
    """
    Check if text mentions any term of the relevance vocabulary.

    Args:
        text: Recognized text of one page
        terms: Vocabulary to use instead of RELEVANT_TERMS

    Returns:
        True if at least one term occurs as a substring, False otherwise
    """
    if not text:
        return False

    lowered = text.lower()
    vocabulary = RELEVANT_TERMS if terms is None else terms
    return any(term.lower() in lowered for term in vocabulary)


def matched_terms(text: str, terms: Optional[Iterable[str]] = None) -> List[str]:
    """
    List the vocabulary terms found in text, sorted alphabetically.
    """
    lowered = (text or "").lower()
    vocabulary = RELEVANT_TERMS if terms is None else terms
    return sorted({term for term in vocabulary if term.lower() in lowered})


def build_vocabulary(extra_terms: Iterable[str] = ()) -> frozenset:
    # Blank entries would match every text
    extras = {term.strip().lower() for term in extra_terms if term and term.strip()}
    return RELEVANT_TERMS | extras
