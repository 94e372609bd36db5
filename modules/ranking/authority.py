"""
Site authority table.

A static popularity ordering of domains (1 = most authoritative), loaded once
at startup from a one-domain-per-line list and used only as a tie-break.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from modules.errors import AuthorityLoadError

logger = logging.getLogger(__name__)

# Sort key for hosts missing from the table: after every real rank.
UNRANKED = float("inf")


def extract_host(url: str) -> Optional[str]:
    """Return the lower-case host of ``url`` or None when it has none."""
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


class SiteAuthorityTable:
    """Immutable mapping from domain host to authority rank."""

    def __init__(self, ranks: Mapping[str, int]):
        self._ranks = MappingProxyType(dict(ranks))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SiteAuthorityTable":
        """
        Load the table from a list with one domain per line, best first.

        Lines may also be ``rank,domain`` (Tranco/Alexa CSV); the rank is
        always the position among non-blank lines. Duplicates keep their
        first (best) rank.

        Raises:
            AuthorityLoadError: If the file cannot be read
        """
        path = Path(path)
        ranks: Dict[str, int] = {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                rank = 0
                for line in f:
                    domain = line.strip()
                    if not domain:
                        continue
                    rank += 1
                    if "," in domain:
                        domain = domain.split(",", 1)[1].strip()
                    ranks.setdefault(domain.lower(), rank)
        except (OSError, UnicodeDecodeError) as e:
            raise AuthorityLoadError(f"Failed to load top domains from {path}: {e}") from e

        logger.info(f"[AUTHORITY] Loaded {len(ranks)} ranked domains from {path}")
        return cls(ranks)

    def __len__(self) -> int:
        return len(self._ranks)

    def rank(self, url: str) -> Optional[int]:
        """Authority rank of the URL's host, or None when unranked."""
        host = extract_host(url)
        if host is None:
            return None
        return self._ranks.get(host)

    def sort_key(self, url: str) -> float:
        """Rank usable as an ascending sort key; unranked hosts sort last."""
        rank = self.rank(url)
        return UNRANKED if rank is None else rank
