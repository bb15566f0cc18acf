"""Tests for contact_vcard.line_folding -- folding, unfolding and escaping."""

import pytest

from contact_vcard.line_folding import (
    CRLF,
    DEFAULT_MAX_LENGTH,
    InvalidConfiguration,
    esc,
    fold,
    unfold,
)


SAMPLE_LINES = [
    "NOTE:" + "word " * 30,
    "X" * 200,
    "NOTE:" + ("lorem ipsum, dolor sit amet; consectetur. " * 6),
    "ADR;TYPE=\"HOME,WORK\";PREF=1:;;" + "Very-Long-Street-Name_" * 8,
    "KEY:data:application/pgp-keys;base64," + "QUJDREVGR0hJSktMTU5PUA" * 12,
]


class TestFold:
    def test_short_line_unchanged(self):
        assert fold("BEGIN:VCARD") == "BEGIN:VCARD"

    def test_line_one_below_limit_unchanged(self):
        line = "A" * (DEFAULT_MAX_LENGTH - 1)
        assert fold(line) == line

    def test_line_exactly_at_limit_unchanged(self):
        line = "A" * DEFAULT_MAX_LENGTH
        assert fold(line) == line

    def test_empty_line(self):
        assert fold("", 20) == ""

    def test_no_trailing_terminator(self):
        assert not fold("X" * 200).endswith(CRLF)

    @pytest.mark.parametrize("width", [0, 1, 19])
    def test_width_below_minimum_raises(self, width):
        with pytest.raises(InvalidConfiguration, match="20"):
            fold("short", width)

    def test_error_suggests_default(self):
        with pytest.raises(InvalidConfiguration) as exc_info:
            fold("X" * 100, 10)
        assert "78" in str(exc_info.value)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            fold("X", 5)

    def test_minimum_width_accepted(self):
        assert fold("X" * 19, 20) == "X" * 19

    def test_cuts_after_punctuation(self):
        line = "NOTE:" + "word " * 30
        first = fold(line).split(CRLF)[0]
        # Index 74 is the last space inside the first 78 characters
        assert first == line[:75]
        assert first.endswith(" ")

    def test_no_boundary_cuts_mid_word(self):
        parts = fold("X" * 200).split(CRLF)
        assert [len(part) for part in parts] == [78, 78, 46]
        assert parts[0] == "X" * 78
        assert parts[1] == " " + "X" * 77
        assert parts[2] == " " + "X" * 45

    def test_leading_punctuation_is_not_a_boundary(self):
        line = "," + "X" * 100
        parts = fold(line, 20).split(CRLF)
        assert parts[0] == line[:20]

    def test_continuations_start_with_single_space(self):
        parts = fold("NOTE:" + "word " * 30).split(CRLF)
        assert not parts[0].startswith(" ")
        for part in parts[1:]:
            assert part.startswith(" ")

    @pytest.mark.parametrize("width", [20, 40, 78])
    @pytest.mark.parametrize("line", SAMPLE_LINES)
    def test_physical_lines_within_width(self, line, width):
        for part in fold(line, width).split(CRLF):
            assert len(part) <= width

    @pytest.mark.parametrize("width", [20, 33, 78])
    @pytest.mark.parametrize("line", SAMPLE_LINES)
    def test_unfold_restores_line(self, line, width):
        assert unfold(fold(line, width)) == line

    def test_content_space_after_cut_survives(self):
        line = "NOTE:" + "end. " * 40
        assert unfold(fold(line, 20)) == line


class TestUnfold:
    def test_removes_crlf_and_space(self):
        assert unfold("NOTE:abc\r\n def") == "NOTE:abcdef"

    def test_removes_crlf_and_tab(self):
        assert unfold("NOTE:abc\r\n\tdef") == "NOTE:abcdef"

    def test_removes_only_one_whitespace(self):
        assert unfold("abc\r\n  def") == "abc def"

    def test_all_occurrences_removed(self):
        assert unfold("a\r\n b\r\n c\r\n d") == "abcd"

    def test_plain_line_breaks_kept(self):
        text = "BEGIN:VCARD\r\nVERSION:4.0"
        assert unfold(text) == text

    def test_unfolded_text_passes_through(self):
        assert unfold("FN:Jane Doe") == "FN:Jane Doe"


class TestEsc:
    def test_escapes_commas(self):
        assert esc("a,b,c") == "a\\,b\\,c"

    def test_default_is_empty(self):
        assert esc() == ""

    def test_none_is_empty(self):
        assert esc(None) == ""

    def test_other_characters_unchanged(self):
        assert esc("Main St; Apt 4: rear\\side") == "Main St; Apt 4: rear\\side"
