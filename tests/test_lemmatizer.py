"""
Unit tests for the lexical normalizer.
"""

import pytest

from modules.errors import LexiconLoadError
from modules.lexicon import Lexicon, parse_lemma_lines


class TestParseLemmaLines:

    def test_frequency_format(self):
        mapping = parse_lemma_lines(["run/123 -> ran,running,runs"])
        assert mapping == {"ran": "run", "running": "run", "runs": "run"}

    def test_plain_format_and_whitespace(self):
        mapping = parse_lemma_lines(["  fox ->  foxes , Foxen  "])
        assert mapping == {"foxes": "fox", "foxen": "fox"}

    def test_skips_malformed_lines(self):
        mapping = parse_lemma_lines(["", "# comment", "no arrow here", "dog/5 -> dogs"])
        assert mapping == {"dogs": "dog"}

    def test_last_lemma_wins(self):
        mapping = parse_lemma_lines(["a -> x", "b -> x"])
        assert mapping["x"] == "b"


class TestLexiconNormalize:

    def test_lemmatises_sentence(self, lexicon):
        terms = lexicon.normalize("The quick brown foxes are jumping over the lazy dogs")
        assert terms == ["the", "quick", "brown", "fox", "be", "jump", "over", "the", "lazy", "dog"]

    def test_keeps_order_and_duplicates(self, lexicon):
        assert lexicon.normalize("running ran runs") == ["run", "run", "run"]

    def test_punctuation_becomes_space(self, lexicon):
        assert lexicon.normalize("state-of-the-art, rust!") == ["state", "of", "the", "art", "rust"]
        assert lexicon.normalize("hello,world") == ["hello", "world"]

    def test_non_ascii_is_stripped(self, lexicon):
        assert lexicon.normalize("café naïve") == ["caf", "na", "ve"]

    def test_empty_and_punctuation_only(self, lexicon):
        assert lexicon.normalize("") == []
        assert lexicon.normalize("   ") == []
        assert lexicon.normalize("?!...") == []

    def test_running_lemmatises_to_run(self, lexicon):
        assert lexicon.normalize("Running") == ["run"]

    def test_idempotent_on_canonical_text(self, lexicon):
        canonical = "the fox be jump over the lazy dog run"
        once = lexicon.normalize(canonical)
        assert once == canonical.split()
        assert lexicon.normalize(" ".join(once)) == once

    def test_normalize_output_is_stable(self, lexicon):
        once = lexicon.normalize("Foxes ARE running, dogs jumped!")
        assert lexicon.normalize(" ".join(once)) == once

    def test_table_is_read_only(self, lexicon):
        with pytest.raises(TypeError):
            lexicon._lemmas["new"] = "word"


class TestLexiconFromFile:

    def test_loads_word_list(self, tmp_path):
        path = tmp_path / "lemmas.txt"
        path.write_text("run/10 -> running,ran\njump -> jumped\n", encoding="utf-8")
        lexicon = Lexicon.from_file(path)
        assert len(lexicon) == 3
        assert lexicon.normalize("Running jumped") == ["run", "jump"]

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(LexiconLoadError):
            Lexicon.from_file(tmp_path / "missing.txt")

    def test_empty_file_is_fatal(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("nothing useful\n", encoding="utf-8")
        with pytest.raises(LexiconLoadError, match="no entries"):
            Lexicon.from_file(path)

    def test_bundled_word_list_loads(self):
        from services.search_api import settings
        lexicon = Lexicon.from_file(settings.LEMMA_PATH)
        assert lexicon.normalize("running foxes") == ["run", "fox"]
