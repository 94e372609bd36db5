"""
result_formatter.py - Result Assembler
======================================
Shapes ranked webpages into response records.
"""

from typing import Any, Collection, Dict, List, Optional

from modules.ranking.authority import SiteAuthorityTable
from modules.types import Document, ScoredDocument


def _matched_keywords(document: Document, terms: Optional[Collection[str]]) -> List[Dict[str, Any]]:
    matched = [
        (keyword.word, occurrences)
        for keyword, occurrences in document.keywords.items()
        if terms is None or keyword.word in terms
    ]
    matched.sort(key=lambda pair: (-pair[1], pair[0]))
    return [{"keyword": word, "occurrences": occurrences} for word, occurrences in matched]


def format_result(
    score: float,
    document: Document,
    authority: SiteAuthorityTable,
    include_links: bool,
    terms: Optional[Collection[str]] = None,
) -> Dict[str, Any]:
    """
    Build the output record for one ranked webpage.

    ``top_website_rank`` is None for unranked hosts. Link fields appear only
    when links were requested and the store returned data for this page, so
    an absent field means "not requested", never "zero links".

    Args:
        score: Similarity score
        document: Ranked webpage
        authority: Site authority table
        include_links: Whether link enrichment was requested
        terms: Canonical query terms; restricts ``keywords`` to matched ones

    Returns:
        JSON-serializable result dict
    """
    result: Dict[str, Any] = {
        "title": document.title,
        "url": document.url,
        "description": document.description,
        "score": score,
        "keywords": _matched_keywords(document, terms),
        "top_website_rank": authority.rank(document.url),
    }

    if include_links and document.links is not None:
        result["inbound_link_count"] = document.links.inbound_count
        result["links_from"] = [
            {"link": link, "occurrences": count}
            for link, count in sorted(document.links.sources.items(), key=lambda pair: (-pair[1], pair[0]))
        ]

    return result


def format_results(
    ranked: List[ScoredDocument],
    authority: SiteAuthorityTable,
    include_links: bool,
    terms: Optional[Collection[str]] = None,
) -> List[Dict[str, Any]]:
    return [format_result(item.score, item.document, authority, include_links, terms) for item in ranked]
