"""Public parsing API for arena XML parsing.

Provides simple functions (parse, parse_string, parse_file,
build_document_tree), the reusable ArenaXMLParser class, and converters to
lxml and pandas structures.
"""

from .adapters import (
    is_lxml_available,
    is_pandas_available,
    node_records,
    to_dataframe,
    to_lxml,
)
from .parser import (
    ArenaXMLParser,
    build_document_tree,
    parse,
    parse_file,
    parse_string,
)

__all__ = [
    "ArenaXMLParser",
    "build_document_tree",
    "parse",
    "parse_file",
    "parse_string",
    "is_lxml_available",
    "is_pandas_available",
    "node_records",
    "to_dataframe",
    "to_lxml",
]
