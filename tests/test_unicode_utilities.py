"""Tests for text normalization applied before measuring and rendering."""

import pytest

from unicode_utilities import clean_text, fold_typography, normalize_unicode, remove_invisible_chars

LEFT_DQ, RIGHT_DQ = "\u201c", "\u201d"
LEFT_SQ, RIGHT_SQ = "\u2018", "\u2019"
EN_DASH, EM_DASH = "\u2013", "\u2014"


class TestFoldTypography:
    def test_curly_quotes_become_ascii(self) -> None:
        assert fold_typography(f"{LEFT_DQ}Hi{RIGHT_DQ}") == '"Hi"'
        assert fold_typography(f"it{RIGHT_SQ}s {LEFT_SQ}ok{RIGHT_SQ}") == "it's 'ok'"

    def test_long_dashes_become_hyphens(self) -> None:
        assert fold_typography(f"a {EN_DASH} b {EM_DASH} c") == "a - b - c"

    def test_plain_ascii_unchanged(self) -> None:
        text = 'Plain "ASCII" text - nothing to do'
        assert fold_typography(text) == text

    def test_none_is_empty(self) -> None:
        assert fold_typography(None) == ""

    @pytest.mark.parametrize("text", [
        f"{LEFT_DQ}quoted{RIGHT_DQ} {EM_DASH} it{RIGHT_SQ}s",
        "no changes",
        "",
    ])
    def test_idempotent(self, text: str) -> None:
        once = fold_typography(text)
        assert fold_typography(once) == once


class TestCleanText:
    def test_combines_all_steps(self) -> None:
        raw = f"cafe\u0301\u200b {LEFT_DQ}x{RIGHT_DQ}"
        assert clean_text(raw) == 'caf\u00e9 "x"'

    def test_idempotent(self) -> None:
        raw = f"It{RIGHT_SQ}s\u00ad {EN_DASH} fine\ufeff"
        once = clean_text(raw)
        assert clean_text(once) == once
        assert once == "It's - fine"

    def test_none_is_empty(self) -> None:
        assert clean_text(None) == ""

    def test_keeps_newlines(self) -> None:
        assert clean_text("a\nb") == "a\nb"


class TestHelpers:
    def test_normalize_unicode_non_string(self) -> None:
        assert normalize_unicode(42) == "42"

    def test_remove_invisible_chars(self) -> None:
        assert remove_invisible_chars("hello\u200bworld") == "helloworld"
        assert remove_invisible_chars("tab\tkept") == "tab\tkept"
