"""Tests for text and answer normalization."""

from knowcode.engine.normalizer import choices_match, normalize_choice, normalize_text


class TestNormalizeText:
    def test_uppercases(self):
        assert normalize_text("cq cq de w6jsv") == "CQ CQ DE W6JSV"

    def test_collapses_whitespace(self):
        assert normalize_text("  hello   world  ") == "HELLO WORLD"

    def test_tabs_and_newlines(self):
        assert normalize_text("CQ\tCQ\n\nDE  W6JSV\r\n") == "CQ CQ DE W6JSV"

    def test_empty(self):
        assert normalize_text("") == ""
        assert normalize_text(" \n\t ") == ""

    def test_idempotent(self):
        for text in ["", "  a  b ", "cq <bt> =\tde", "Mixed Case\nLines"]:
            once = normalize_text(text)
            assert normalize_text(once) == once

    def test_case_insensitive(self):
        assert normalize_text("cq cq") == normalize_text("CQ CQ")

    def test_keeps_punctuation(self):
        assert normalize_text("test <bt> = ?") == "TEST <BT> = ?"


class TestChoices:
    def test_normalize_choice(self):
        assert normalize_choice(" b ") == "B"

    def test_match_case_insensitive(self):
        assert choices_match("a", "A")

    def test_no_match(self):
        assert not choices_match("B", "A")
