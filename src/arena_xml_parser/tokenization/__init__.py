"""Tokenization stage for arena XML parsing.

Key Components:
    WhitespaceTokenizer: Class form producing TokenizationResult objects
    TokenizationResult: Tokens of one document with basic metrics
    iter_tokens / tokenize: Lazy and eager whitespace splitting
"""

from .tokenizer import (
    ASCII_WHITESPACE,
    TokenizationResult,
    WhitespaceTokenizer,
    is_ascii_whitespace,
    iter_tokens,
    tokenize,
)

__all__ = [
    "ASCII_WHITESPACE",
    "TokenizationResult",
    "WhitespaceTokenizer",
    "is_ascii_whitespace",
    "iter_tokens",
    "tokenize",
]
