"""Dictionary loading and candidate retrieval."""

from __future__ import annotations

import json
from collections import Counter, defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from ..core.constants import MAX_WORD_LENGTH, MIN_WORD_LENGTH
from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import clean_word, is_clean, strip_diacritics


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class DictionaryEntry:
    """A normalized word with its display form and definition."""

    word: str
    original: str
    definition: str

    @property
    def length(self) -> int:
        return len(self.word)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and filtering."""

    path: Path | str
    min_length: int = MIN_WORD_LENGTH
    max_length: int = MAX_WORD_LENGTH
    encoding: str = "utf-8"


class DictionaryIndex:
    """Read-only index of entries grouped by word length.

    Entries keep their input order inside each length bucket. Duplicate
    normalized words collapse to the first occurrence. Once built the index
    is never mutated, so it may be shared freely between threads.
    """

    def __init__(self, entries: Iterable[DictionaryEntry] = ()) -> None:
        self._entries_by_length: Dict[int, List[DictionaryEntry]] = defaultdict(list)
        self._entry_by_word: Dict[str, DictionaryEntry] = {}
        # Positional index: length -> (position, letter) -> set of words
        self._position_index: Dict[int, Dict[Tuple[int, str], Set[str]]] = defaultdict(
            lambda: defaultdict(set)
        )
        for entry in entries:
            if entry.word in self._entry_by_word:
                continue
            self._entry_by_word[entry.word] = entry
            self._entries_by_length[entry.length].append(entry)
            length_index = self._position_index[entry.length]
            for pos, char in enumerate(entry.word):
                length_index[(pos, char)].add(entry.word)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._entry_by_word)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entry_by_word.values())

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def contains(self, word: str) -> bool:
        return clean_word(word) in self._entry_by_word

    def get(self, word: str) -> Optional[DictionaryEntry]:
        return self._entry_by_word.get(clean_word(word))

    def for_length(self, length: int) -> List[DictionaryEntry]:
        """Entries of ``length`` in input order; empty when there are none."""

        return list(self._entries_by_length.get(length, ()))

    def lengths(self) -> List[int]:
        return sorted(length for length, entries in self._entries_by_length.items() if entries)

    def length_distribution(self) -> Dict[int, int]:
        return dict(sorted(Counter(entry.length for entry in self).items()))

    def find_candidates(
        self,
        length: int,
        pattern: Optional[Sequence[Optional[str]]] = None,
        banned: Optional[Set[str]] = None,
    ) -> List[DictionaryEntry]:
        """Return entries of ``length`` compatible with ``pattern``.

        ``pattern`` holds one item per cell: a fixed letter or ``None``.
        Words in ``banned`` are left out. Result order follows the index.
        """

        entries = self.for_length(length)
        if not entries:
            return []
        matching = self._index_lookup(length, pattern)
        if matching is None:
            candidates = entries
        else:
            candidates = [entry for entry in entries if entry.word in matching]
        if banned:
            candidates = [entry for entry in candidates if entry.word not in banned]
        return candidates

    def _index_lookup(
        self,
        length: int,
        pattern: Optional[Sequence[Optional[str]]],
    ) -> Optional[Set[str]]:
        """Intersect the positional sets; ``None`` means no position is fixed."""

        length_index = self._position_index.get(length, {})
        constraints: List[Set[str]] = []
        if pattern:
            for pos, letter in enumerate(pattern):
                if letter is None:
                    continue
                match_set = length_index.get((pos, letter))
                if not match_set:
                    return set()
                constraints.append(match_set)

        if not constraints:
            return None

        # Intersect smallest sets first for speed
        constraints.sort(key=len)
        result = set(constraints[0])
        for other in constraints[1:]:
            result &= other
            if not result:
                break
        return result

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------
    def merged(self, entries: Iterable[DictionaryEntry]) -> "DictionaryIndex":
        """Return a new index with ``entries`` appended where the word is new."""

        added = [entry for entry in entries if entry.word not in self._entry_by_word]
        LOGGER.debug("Merging %d new entries into index of %d", len(added), len(self))
        return DictionaryIndex(list(self) + added)


def parse_entries(
    records: Iterable[dict],
    min_length: int = MIN_WORD_LENGTH,
    max_length: int = MAX_WORD_LENGTH,
) -> List[DictionaryEntry]:
    """Turn raw ``{word, original, def}`` records into entries, skipping bad ones."""

    entries: List[DictionaryEntry] = []
    for record in records:
        if not isinstance(record, dict):
            LOGGER.debug("Skipping non-object dictionary record: %r", record)
            continue
        raw = str(record.get("word") or "").strip()
        original = str(record.get("original") or raw).strip()
        definition = str(record.get("def") or record.get("definition") or "").strip()
        if not raw or not definition:
            LOGGER.debug("Skipping record without word or definition: %r", record)
            continue
        if not strip_diacritics(raw).isalpha():
            LOGGER.debug("Skipping word with punctuation: %s", raw)
            continue
        word = clean_word(raw)
        if not is_clean(word) or not (min_length <= len(word) <= max_length):
            LOGGER.debug("Skipping word outside length range: %s", raw)
            continue
        entries.append(DictionaryEntry(word=word, original=original, definition=definition))
    return entries


def load_dictionary(config: DictionaryConfig) -> DictionaryIndex:
    """Load a JSON dictionary file (a list of ``{word, original, def}``)."""

    source = Path(config.path)
    if not source.exists():
        raise DictionaryLoadError(f"Missing dictionary JSON: {source}")
    try:
        payload = json.loads(source.read_text(encoding=config.encoding))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DictionaryLoadError(f"Unreadable dictionary {source}: {exc}") from exc
    if not isinstance(payload, list):
        raise DictionaryLoadError(f"Dictionary {source} must hold a JSON list")

    entries = parse_entries(payload, config.min_length, config.max_length)
    index = DictionaryIndex(entries)
    LOGGER.info(
        "Loaded %d entries from %s (%d records skipped)",
        len(index),
        source,
        len(payload) - len(entries),
    )
    return index
