"""Name normalization shared by the location and vessel resolvers."""
from __future__ import annotations

import re

from unidecode import unidecode

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_name(name: str | None) -> str:
    """Transliterate to ASCII, case-fold and collapse punctuation to single spaces.

    "Thunder-Horse  PROD." -> "thunder horse prod"
    """
    if not name:
        return ""
    folded = unidecode(str(name)).casefold()
    return _NON_ALNUM.sub(" ", folded).strip()


def tokenize(name: str | None) -> tuple[str, ...]:
    normalized = normalize_name(name)
    return tuple(normalized.split()) if normalized else ()


def compress(name: str | None) -> str:
    """Normalized form with all spacing removed ("Pelican Island" -> "pelicanisland")."""
    return normalize_name(name).replace(" ", "")


def contains_tokens(haystack: tuple[str, ...], needle: tuple[str, ...]) -> bool:
    """True when *needle* occurs as a contiguous run of whole tokens in *haystack*."""
    if not needle or len(needle) > len(haystack):
        return False
    span = len(needle)
    return any(haystack[i:i + span] == needle for i in range(len(haystack) - span + 1))
