"""Tests for whitespace tokenization."""

import types

import pytest

from arena_xml_parser.tokenization import (
    TokenizationResult,
    WhitespaceTokenizer,
    is_ascii_whitespace,
    iter_tokens,
    tokenize,
)


class TestTokenize:
    """Test the tokenize and iter_tokens functions."""

    @pytest.mark.parametrize("text", ["", " ", "\n\t\r\x0c  \n"])
    def test_empty_and_whitespace_only(self, text):
        """Test inputs without tokens."""
        assert tokenize(text) == []

    def test_collapses_leading_trailing_and_repeated_whitespace(self):
        """Test delimiter runs are discarded."""
        assert tokenize("  a   b\n\n\tc  ") == ["a", "b", "c"]

    def test_markup_is_not_split_at_angle_brackets(self):
        """Test that only whitespace delimits tokens."""
        assert tokenize('<a x="1">hi</a> <b/>') == ['<a', 'x="1">hi</a>', "<b/>"]

    def test_form_feed_and_carriage_return_are_whitespace(self):
        """Test ASCII whitespace members."""
        assert tokenize("a\x0cb\rc") == ["a", "b", "c"]

    @pytest.mark.parametrize("text", ["a\x0bb", "a\u00a0b", "a\u2003b"])
    def test_other_spaces_are_token_content(self, text):
        """Test vertical tab and non-ASCII spaces stay inside tokens."""
        assert tokenize(text) == [text]

    def test_never_yields_empty_tokens(self):
        """Test no empty strings for any spacing."""
        assert all(tokenize(" \n x \n\n y\t\t"))

    def test_iter_tokens_is_lazy(self):
        """Test the generator form."""
        tokens = iter_tokens("a b")
        assert isinstance(tokens, types.GeneratorType)
        assert next(tokens) == "a"
        assert list(tokens) == ["b"]


class TestIsAsciiWhitespace:
    """Test the whitespace predicate."""

    @pytest.mark.parametrize("char", [" ", "\t", "\n", "\r", "\x0c"])
    def test_whitespace(self, char):
        assert is_ascii_whitespace(char)

    @pytest.mark.parametrize("char", ["", "a", "\x0b", "\u00a0", "<"])
    def test_not_whitespace(self, char):
        assert not is_ascii_whitespace(char)


class TestWhitespaceTokenizer:
    """Test the tokenizer class."""

    def test_result_metrics(self):
        """Test counts reported with the tokens."""
        result = WhitespaceTokenizer(correlation_id="t-1").tokenize("<a> b </a>")

        assert isinstance(result, TokenizationResult)
        assert result.tokens == ["<a>", "b", "</a>"]
        assert result.token_count == 3
        assert result.character_count == 10
        assert result.processing_time_ms >= 0.0
        assert not result.is_empty

    def test_empty_input(self):
        """Test tokenizing an empty document."""
        result = WhitespaceTokenizer().tokenize("")
        assert result.is_empty
        assert result.token_count == 0
