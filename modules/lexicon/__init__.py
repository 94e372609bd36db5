"""
Lexicon module for the search service.

Provides the canonicalization table and query normalization.
"""

from .lemmatizer import Lexicon, parse_lemma_lines

__all__ = ["Lexicon", "parse_lemma_lines"]
