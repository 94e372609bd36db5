"""
lemmatizer.py - Lexical Normalizer
==================================
Maps free text to a sequence of canonical word forms.

The canonicalization table is read once at startup from a word list of the form

    lemma[/frequency] -> form1,form2,...

and is immutable afterwards. Every request shares the same table.
"""

import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Union

from modules.errors import LexiconLoadError

logger = logging.getLogger(__name__)

# Anything that is not an ASCII letter, digit or whitespace becomes a space,
# so "state-of-the-art" yields four tokens instead of "stateoftheart".
_PUNCTUATION_RE = re.compile(r"[^a-z0-9\s]")

_LEMMA_LINE_RE = re.compile(r"^([^/]+)[^->]*->(.+)$")


def parse_lemma_lines(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parse word-list lines into a {form: lemma} mapping.

    Lines that do not match the ``lemma -> forms`` layout are skipped.
    When a form is listed under several lemmas the last one wins.
    """
    mapping: Dict[str, str] = {}
    for line in lines:
        match = _LEMMA_LINE_RE.match(line.strip())
        if not match:
            continue
        lemma = match.group(1).strip().lower()
        if not lemma:
            continue
        for form in match.group(2).split(","):
            form = form.strip().lower()
            if form:
                mapping[form] = lemma
    return mapping


class Lexicon:
    """
    Immutable canonicalization table plus the normalization routine.

    Args:
        lemmas: Mapping from inflected form to lemma
    """

    def __init__(self, lemmas: Mapping[str, str]):
        self._lemmas = MappingProxyType(dict(lemmas))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Lexicon":
        """
        Load the canonicalization table from a word-list file.

        Raises:
            LexiconLoadError: If the file is missing, unreadable or yields no entries
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                lemmas = parse_lemma_lines(f)
        except (OSError, UnicodeDecodeError) as e:
            raise LexiconLoadError(f"Failed to load lemma table from {path}: {e}") from e

        if not lemmas:
            raise LexiconLoadError(f"Lemma table {path} contains no entries")

        logger.info(f"[LEXICON] Loaded {len(lemmas)} word forms from {path}")
        return cls(lemmas)

    def __len__(self) -> int:
        return len(self._lemmas)

    def lemma(self, word: str) -> str:
        """Return the lemma for ``word`` or the word itself when unknown."""
        return self._lemmas.get(word, word)

    def normalize(self, text: str) -> List[str]:
        """
        Turn raw text into canonical terms, keeping order and duplicates.

        Args:
            text: Raw query or document text

        Returns:
            List of lemmatized, lower-case tokens
        """
        if not text:
            return []
        cleaned = _PUNCTUATION_RE.sub(" ", text.lower())
        return [self.lemma(token) for token in cleaned.split()]
