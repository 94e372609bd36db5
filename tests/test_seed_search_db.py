"""
Tests for the JSONL corpus seeding script.
"""

import json

from scripts.seed_search_db import seed


def write_dump(path, pages):
    path.write_text(
        "\n".join(p if isinstance(p, str) else json.dumps(p) for p in pages) + "\n",
        encoding="utf-8",
    )
    return path


def keyword_map(document):
    return {k.word: occurrences for k, occurrences in document.keywords.items()}


def test_seeds_pages_and_links(tmp_path, sqlite_store, lexicon):
    dump = write_dump(tmp_path / "crawl.jsonl", [
        {"url": "https://a.example/", "title": "Foxes", "text": "foxes running",
         "links": ["https://b.example/"]},
        {"url": "https://b.example/", "title": "Dogs", "description": "About dogs", "text": "dogs ran"},
    ])
    assert seed(dump, sqlite_store, lexicon) == 2

    docs = {d.url: d for d in sqlite_store.fetch_candidates({"fox", "dog", "run"})}
    assert keyword_map(docs["https://a.example/"]) == {"fox": 2, "run": 1}
    assert docs["https://a.example/"].word_count == 3
    assert docs["https://b.example/"].description == "About dogs"

    links = sqlite_store.fetch_link_data({docs["https://b.example/"].id})
    assert links[docs["https://b.example/"].id].sources == {"https://a.example/": 1}


def test_duplicate_url_skipped_and_links_still_written(tmp_path, sqlite_store, lexicon):
    dump = write_dump(tmp_path / "crawl.jsonl", [
        {"url": "https://a.example/", "title": "A", "text": "fox", "links": ["https://b.example/"]},
        {"url": "https://b.example/", "title": "B", "text": "dog"},
        {"url": "https://a.example/", "title": "A again", "text": "fox fox"},
    ])
    assert seed(dump, sqlite_store, lexicon) == 2
    assert sqlite_store.corpus_document_count() == 2

    b = sqlite_store.fetch_candidates({"dog"})[0]
    assert sqlite_store.fetch_link_data({b.id})[b.id].inbound_count == 1


def test_null_fields_coerced_to_empty(tmp_path, sqlite_store, lexicon):
    dump = write_dump(tmp_path / "crawl.jsonl", [
        {"url": "https://a.example/", "title": None, "description": None, "text": "fox", "links": None},
    ])
    assert seed(dump, sqlite_store, lexicon) == 1

    doc = sqlite_store.fetch_candidates({"fox"})[0]
    assert doc.title == ""
    assert doc.description == ""
    assert sqlite_store.fetch_candidates({"none"}) == []


def test_invalid_lines_skipped(tmp_path, sqlite_store, lexicon):
    dump = write_dump(tmp_path / "crawl.jsonl", [
        "{not json",
        {"title": "no url", "text": "fox"},
        "[1, 2]",
        "",
        {"url": "https://a.example/", "text": "fox"},
    ])
    assert seed(dump, sqlite_store, lexicon) == 1


def test_limit(tmp_path, sqlite_store, lexicon):
    dump = write_dump(tmp_path / "crawl.jsonl", [
        {"url": f"https://site{i}.example/", "text": "fox"} for i in range(5)
    ])
    assert seed(dump, sqlite_store, lexicon, limit=3) == 3
    assert sqlite_store.corpus_document_count() == 3
