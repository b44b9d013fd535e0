"""Whitespace tokenizer for the arena XML parser.

The tokenizer reduces a document to its maximal runs of non-whitespace
characters. Whitespace itself is thrown away; the tree builder later restores a
single space at each token boundary where the space is meaningful (text runs
and attribute buffers), so nothing the grammar needs is lost here.
"""

import re
import time
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from arena_xml_parser.shared import get_logger

# ASCII whitespace as the grammar defines it: space, tab, LF, FF, CR.
# Vertical tab and non-ASCII spaces are ordinary token content.
ASCII_WHITESPACE = " \t\n\x0c\r"

_TOKEN_PATTERN = re.compile(r"[^ \t\n\x0c\r]+")

MS_PER_SECOND = 1000


def is_ascii_whitespace(char: str) -> bool:
    """Check if a single character is grammar whitespace."""
    return char != "" and char in ASCII_WHITESPACE


def iter_tokens(text: str) -> Iterator[str]:
    """Yield whitespace-delimited tokens of ``text`` in document order.

    Never yields an empty string. Empty or all-whitespace input yields nothing.
    """
    for match in _TOKEN_PATTERN.finditer(text):
        yield match.group()


def tokenize(text: str) -> List[str]:
    """Split ``text`` into its ordered list of whitespace-delimited tokens."""
    return list(iter_tokens(text))


@dataclass
class TokenizationResult:
    """Result of tokenizing one document."""

    tokens: List[str] = field(default_factory=list)
    character_count: int = 0
    processing_time_ms: float = 0.0

    @property
    def token_count(self) -> int:
        """Get the total number of tokens."""
        return len(self.tokens)

    @property
    def is_empty(self) -> bool:
        """Check if the document held no tokens at all."""
        return not self.tokens


class WhitespaceTokenizer:
    """Tokenizer producing :class:`TokenizationResult` objects.

    Tokenization cannot fail: every string is accepted.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the tokenizer.

        Args:
            correlation_id: Optional correlation ID for tracking requests
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tokenizer")

    def tokenize(self, text: str) -> TokenizationResult:
        """Tokenize a complete document.

        Args:
            text: Entire document content

        Returns:
            TokenizationResult with tokens and basic metrics
        """
        start_time = time.time()
        tokens = tokenize(text)
        processing_time = (time.time() - start_time) * MS_PER_SECOND

        self.logger.debug(
            "Tokenization completed",
            extra={
                "character_count": len(text),
                "token_count": len(tokens),
                "processing_time_ms": processing_time,
            }
        )

        return TokenizationResult(
            tokens=tokens,
            character_count=len(text),
            processing_time_ms=processing_time,
        )
