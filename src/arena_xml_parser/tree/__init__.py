"""Tree building engine for arena XML parsing.

Key Components:
    TreeBuilder: State machine turning tokens into a node arena
    Document: Append-only node arena rooted at index 0
    Node / Attribute: Arena entries and their attributes
    ParseResult: Document plus diagnostics and metrics
    ParseError: Raised for malformed markup in strict mode
"""

from .attributes import parse_attributes, split_attribute_tokens
from .builder import (
    ParseError,
    ParseErrorKind,
    ParseResult,
    ParserState,
    TreeBuilder,
)
from .document import (
    DOCUMENT_TAG,
    ROOT_INDEX,
    TEXT_TAG,
    Attribute,
    Document,
    Node,
)
from .render import format_node_header, print_node, render_node

__all__ = [
    "DOCUMENT_TAG",
    "ROOT_INDEX",
    "TEXT_TAG",
    "Attribute",
    "Document",
    "Node",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "ParserState",
    "TreeBuilder",
    "format_node_header",
    "parse_attributes",
    "print_node",
    "render_node",
    "split_attribute_tokens",
]
