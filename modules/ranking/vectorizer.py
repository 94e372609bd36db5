"""Term-frequency vectorizer for canonical token sequences."""

from collections import Counter
from typing import Dict, Sequence


def term_frequencies(tokens: Sequence[str]) -> Dict[str, float]:
    """
    Compute normalized term frequencies.
    TF(t) = count(t) / len(tokens)

    Args:
        tokens: Canonical query terms, duplicates included

    Returns:
        Dictionary mapping each distinct term to its frequency; empty for empty input
    """
    total = len(tokens)
    if total == 0:
        return {}
    return {term: count / total for term, count in Counter(tokens).items()}
