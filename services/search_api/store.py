"""
store.py - Document Store
=========================
Read access to the crawled corpus: candidate webpages for a set of terms,
inbound link annotations and the corpus size.

SqliteDocumentStore works on the crawler's relational schema:

    websites(id, title, url, description, word_count)
    keywords(id, word, documents_containing_word)
    website_keywords(website_id, keyword_id, keyword_occurrences)
    website_links(id, source_website_id, target_website)

A fresh connection is opened per call so request threads never share one.
"""

import logging
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Set, Union

from modules.errors import StoreError
from modules.types import Document, Keyword, LinkData

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """
    Minimal, stable interface the ranking pipeline needs from the corpus.
    """

    def fetch_candidates(self, terms: Set[str]) -> List[Document]:
        """Webpages containing at least one of ``terms``, with per-term counts."""
        ...

    def fetch_link_data(self, ids: Set[int]) -> Dict[int, LinkData]:
        """Inbound link annotations for the given webpage ids."""
        ...

    def corpus_document_count(self) -> int:
        """Total number of webpages in the corpus."""
        ...


SCHEMA = """
CREATE TABLE IF NOT EXISTS websites (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL DEFAULT '',
    url TEXT NOT NULL UNIQUE,
    description TEXT NOT NULL DEFAULT '',
    word_count INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS keywords (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    word TEXT NOT NULL UNIQUE,
    documents_containing_word INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS website_keywords (
    website_id INTEGER NOT NULL REFERENCES websites(id),
    keyword_id INTEGER NOT NULL REFERENCES keywords(id),
    keyword_occurrences INTEGER NOT NULL,
    PRIMARY KEY (website_id, keyword_id)
);
CREATE TABLE IF NOT EXISTS website_links (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    source_website_id INTEGER NOT NULL REFERENCES websites(id),
    target_website TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_website_links_target ON website_links(target_website);
"""

_CANDIDATES_SQL = """
    SELECT
        w.id AS website_id,
        w.title,
        w.url,
        w.description,
        w.word_count,
        k.id AS keyword_id,
        k.word,
        k.documents_containing_word,
        wk.keyword_occurrences
    FROM websites w
    JOIN website_keywords wk ON w.id = wk.website_id
    JOIN keywords k ON wk.keyword_id = k.id
    WHERE k.word IN ({placeholders})
"""

_LINKS_SQL = """
    SELECT
        w.id AS website_id,
        ws.url AS source_website,
        COUNT(*) AS occurrences
    FROM websites w
    JOIN website_links wl ON wl.target_website = w.url
    JOIN websites ws ON ws.id = wl.source_website_id
    WHERE w.id IN ({placeholders})
    GROUP BY w.id, ws.url
"""


def _placeholders(count: int) -> str:
    return ",".join("?" * count)


class SqliteDocumentStore:
    """
    Document store backed by a SQLite database file.

    Args:
        db_path: Path to the SQLite database
        timeout: Seconds to wait on a locked database
    """

    def __init__(self, db_path: Union[str, Path], timeout: float = 5.0):
        self.db_path = str(db_path)
        self.timeout = timeout

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            with closing(sqlite3.connect(self.db_path, timeout=self.timeout)) as conn:
                conn.row_factory = sqlite3.Row
                with conn:
                    yield conn
        except sqlite3.Error as e:
            raise StoreError(f"SQLite store at {self.db_path} failed: {e}") from e

    # ----------------------------------------
    # Read path
    # ----------------------------------------

    def fetch_candidates(self, terms: Set[str]) -> List[Document]:
        """
        Fetch every webpage containing at least one term.

        Each returned Document carries only the matched keywords, with their
        occurrence counts and corpus-wide document frequencies.
        """
        words = sorted(terms)
        if not words:
            return []

        query = _CANDIDATES_SQL.format(placeholders=_placeholders(len(words)))
        with self._connect() as conn:
            rows = conn.execute(query, words).fetchall()

        webpages: Dict[int, Document] = {}
        for row in rows:
            webpage_id = row["website_id"]
            webpage = webpages.get(webpage_id)
            if webpage is None:
                webpage = Document(
                    id=webpage_id,
                    title=row["title"],
                    url=row["url"],
                    description=row["description"],
                    word_count=row["word_count"],
                )
                webpages[webpage_id] = webpage
            keyword = Keyword(
                word=row["word"],
                documents_containing_word=row["documents_containing_word"],
                id=row["keyword_id"],
            )
            webpage.keywords[keyword] = row["keyword_occurrences"]

        logger.debug(f"[STORE] {len(rows)} keyword rows -> {len(webpages)} webpages for {len(words)} terms")
        return list(webpages.values())

    def fetch_link_data(self, ids: Set[int]) -> Dict[int, LinkData]:
        """
        Fetch inbound link annotations for the given webpages.

        Webpages nobody links to are present with an inbound count of zero.
        """
        id_list = sorted(ids)
        if not id_list:
            return {}

        links: Dict[int, LinkData] = {webpage_id: LinkData(inbound_count=0) for webpage_id in id_list}
        query = _LINKS_SQL.format(placeholders=_placeholders(len(id_list)))
        with self._connect() as conn:
            for row in conn.execute(query, id_list):
                entry = links[row["website_id"]]
                entry.sources[row["source_website"]] = row["occurrences"]
                entry.inbound_count += row["occurrences"]
        return links

    def corpus_document_count(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM websites").fetchone()[0]

    # ----------------------------------------
    # Loading helpers (local development, tests)
    # ----------------------------------------

    def init_schema(self):
        """Create the tables if they do not exist."""
        with self._connect() as conn:
            conn.executescript(SCHEMA)

    def add_webpage(
        self,
        url: str,
        keywords: Dict[str, int],
        title: str = "",
        description: str = "",
        word_count: Optional[int] = None,
    ) -> int:
        """
        Insert a webpage and its keyword counts, updating document frequencies.

        Args:
            url: Unique page URL
            keywords: {canonical word: occurrences in this page}
            title: Page title
            description: Page description
            word_count: Total words on the page (defaults to the sum of keyword counts)

        Returns:
            The new webpage id
        """
        if word_count is None:
            word_count = sum(keywords.values())
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO websites (title, url, description, word_count) VALUES (?, ?, ?, ?)",
                (title, url, description, word_count),
            )
            webpage_id = cursor.lastrowid
            for word, occurrences in keywords.items():
                conn.execute(
                    "INSERT INTO keywords (word, documents_containing_word) VALUES (?, 1) "
                    "ON CONFLICT(word) DO UPDATE SET documents_containing_word = documents_containing_word + 1",
                    (word,),
                )
                keyword_id = conn.execute("SELECT id FROM keywords WHERE word = ?", (word,)).fetchone()[0]
                conn.execute(
                    "INSERT INTO website_keywords (website_id, keyword_id, keyword_occurrences) VALUES (?, ?, ?)",
                    (webpage_id, keyword_id, occurrences),
                )
        return webpage_id

    def add_links(self, source_id: int, targets: Iterable[str]):
        """Record one outbound link from ``source_id`` per target URL."""
        with self._connect() as conn:
            conn.executemany(
                "INSERT INTO website_links (source_website_id, target_website) VALUES (?, ?)",
                [(source_id, target) for target in targets],
            )
