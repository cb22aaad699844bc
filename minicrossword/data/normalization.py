"""Shared helpers for word normalization."""

from __future__ import annotations

import re
import unicodedata

LIGATURES = {
    "œ": "oe",
    "Œ": "OE",
    "æ": "ae",
    "Æ": "AE",
    "ß": "ss",
}

WORD_RE = re.compile(r"[^A-Za-z]")


def strip_diacritics(text: str) -> str:
    """Drop combining marks after canonical decomposition (``é`` -> ``e``)."""

    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``."""

    if not text:
        return ""
    transformed = []
    for char in text:
        if char in LIGATURES:
            transformed.append(LIGATURES[char])
        else:
            transformed.append(char)
    ascii_word = WORD_RE.sub("", strip_diacritics("".join(transformed)))
    return ascii_word.upper()


def is_clean(text: str) -> bool:
    """True when ``text`` already is an uppercase ASCII word."""

    return bool(text) and text.isascii() and text.isalpha() and text.isupper()


__all__ = ["clean_word", "is_clean", "strip_diacritics", "LIGATURES"]
