"""Core parser API for arena XML parsing.

This module provides module-level functions for one-off parsing and the
reusable :class:`ArenaXMLParser` class. All of them run the same two stages:
whitespace tokenization followed by the tree-building state machine.
"""

import time
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, TextIO, Union

from arena_xml_parser.shared import ParserConfig, get_logger
from arena_xml_parser.tokenization import WhitespaceTokenizer
from arena_xml_parser.tree import Document, ParseResult, TreeBuilder

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, TextIO, Path]

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


def parse(
    input_data: InputType, config: Optional[ParserConfig] = None
) -> ParseResult:
    """Parse a document from a string, bytes, file-like object or Path.

    Args:
        input_data: Document content or a source to read it from
        config: Optional parser configuration

    Returns:
        ParseResult containing the node arena and diagnostics

    Examples:
        >>> result = parse('<root><item>value</item></root>')
        >>> result.document.find('item').tag
        'item'
    """
    config = config or ParserConfig()
    logger = get_logger(__name__, config.correlation_id, "parse")
    logger.debug(
        "Starting universal parse operation",
        extra={"input_type": type(input_data).__name__}
    )

    if isinstance(input_data, Path):
        return parse_file(input_data, config)
    if isinstance(input_data, (str, bytes)):
        return _parse_content(input_data, config)
    if hasattr(input_data, "read"):
        return _parse_content(input_data.read(), config)
    raise TypeError(
        f"Unsupported input type: {type(input_data).__name__}"
    )


def parse_string(
    text: str, config: Optional[ParserConfig] = None
) -> ParseResult:
    """Parse a document held in a string.

    Examples:
        >>> result = parse_string('<a x=1>hi</a>')
        >>> result.document[1].get_attribute('x')
        '1'
    """
    config = config or ParserConfig()
    logger = get_logger(__name__, config.correlation_id, "parse_string")
    logger.debug(
        "Starting string parse operation",
        extra={
            "content_length": len(text),
            "preview": (
                text[:PREVIEW_LENGTH] + "..."
                if len(text) > PREVIEW_LENGTH else text
            ),
        }
    )
    return _parse_content(text, config)


def parse_file(
    file_path: Union[str, Path], config: Optional[ParserConfig] = None
) -> ParseResult:
    """Parse a document stored in a file.

    The file is decoded with the configured encoding; undecodable bytes are
    replaced rather than raising.

    Raises:
        OSError: If the file cannot be read
    """
    config = config or ParserConfig()
    path = Path(file_path)
    logger = get_logger(__name__, config.correlation_id, "parse_file")
    logger.debug("Reading document file", extra={"file_path": str(path)})

    with path.open(encoding=config.encoding, errors="replace") as file:
        content = file.read()
    return _parse_content(content, config)


def build_document_tree(text: str) -> Document:
    """Tokenize and build ``text`` with default settings, returning the arena."""
    return parse_string(text).document


def _parse_content(
    content: Union[str, bytes], config: ParserConfig
) -> ParseResult:
    """Run tokenizer and tree builder over complete in-memory content."""
    start_time = time.time()
    if isinstance(content, bytes):
        content = content.decode(config.encoding, errors="replace")

    tokenization = WhitespaceTokenizer(config.correlation_id).tokenize(content)
    result = TreeBuilder(config).build(tokenization)

    result.performance.characters_processed = len(content)
    result.performance.processing_time_ms = (
        (time.time() - start_time) * MS_PER_SECOND
    )
    return result


class ArenaXMLParser:
    """Reusable parser with configuration and usage statistics.

    Examples:
        >>> parser = ArenaXMLParser()
        >>> results = [parser.parse(doc) for doc in ('<a/>', '<b></b>')]
        >>> parser.statistics['total_parses']
        2
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize parser.

        Args:
            config: Parser configuration (defaults to lenient)
        """
        self.config = config or ParserConfig()
        self.correlation_id = self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "arena_xml_parser")

        self._parse_count = 0
        self._total_processing_time = 0.0
        self._warning_count = 0

    def parse(self, input_data: InputType) -> ParseResult:
        """Parse one document with this parser's configuration.

        Raises:
            ParseError: In strict mode, on the first malformed construct
        """
        self._parse_count += 1
        result = parse(input_data, self.config)

        self._total_processing_time += result.performance.processing_time_ms
        if result.has_warnings:
            self._warning_count += 1

        self.logger.info(
            "Configured parse completed",
            extra={
                "node_count": result.node_count,
                "processing_time_ms": result.performance.processing_time_ms,
                "total_parses": self._parse_count,
            }
        )
        return result

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the parser configuration."""
        self.config = config
        self.correlation_id = config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "arena_xml_parser")
        self.logger.info(
            "Parser reconfigured",
            extra={"error_policy": config.error_policy.value}
        )

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "parses_with_warnings": self._warning_count,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._total_processing_time = 0.0
        self._warning_count = 0
