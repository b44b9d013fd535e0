"""Arena XML Parser.

A small parser for an XML-like markup dialect. Documents are split into
whitespace-delimited tokens, then a character-level state machine builds a
flat arena of nodes linked by index.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: Configured parser - ArenaXMLParser class
- Level 3: Pipeline stages - WhitespaceTokenizer and TreeBuilder
"""

__version__ = "0.1.0"
__author__ = "Arena XML Parser Team"

from .api import (
    ArenaXMLParser,
    build_document_tree,
    parse,
    parse_file,
    parse_string,
)
from .shared.config import ErrorPolicy, ParserConfig
from .tokenization import WhitespaceTokenizer, tokenize
from .tree import (
    Attribute,
    Document,
    Node,
    ParseError,
    ParseErrorKind,
    ParseResult,
    TreeBuilder,
    print_node,
    render_node,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_string",
    "parse_file",
    "build_document_tree",

    # Level 2: Configured parser
    "ArenaXMLParser",
    "ParserConfig",
    "ErrorPolicy",

    # Level 3: Pipeline stages
    "WhitespaceTokenizer",
    "TreeBuilder",
    "tokenize",

    # Result objects and data structures
    "Attribute",
    "Document",
    "Node",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "print_node",
    "render_node",
]
