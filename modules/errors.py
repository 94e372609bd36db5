"""
Exception hierarchy for the search service.

Startup errors (lexicon, authority table) are fatal: the service must not
serve requests with a partially loaded normalizer. Store errors are caught at
the pipeline boundary and turned into structured responses.
"""


class SearchError(Exception):
    """Base class for all search service errors."""
    pass


class LexiconLoadError(SearchError):
    """Raised when the canonicalization word list cannot be loaded."""
    pass


class AuthorityLoadError(SearchError):
    """Raised when the site authority table cannot be loaded."""
    pass


class StoreError(SearchError):
    """Raised when the document store cannot answer a query."""
    pass
