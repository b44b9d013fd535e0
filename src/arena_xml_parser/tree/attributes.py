"""Attribute sub-parser.

The tree builder hands over the raw attribute text of one tag, already
space-normalized and with its double quotes still in place. Splitting happens
on whitespace outside quotes, then on the first ``=`` of each piece. Values
keep their quote characters.
"""

from typing import List

from arena_xml_parser.tokenization import is_ascii_whitespace

from .document import Attribute


def split_attribute_tokens(buffer: str) -> List[str]:
    """Split an attribute buffer on whitespace lying outside double quotes."""
    pieces: List[str] = []
    current: List[str] = []
    quoted = False
    for char in buffer:
        if char == '"':
            quoted = not quoted
        elif not quoted and is_ascii_whitespace(char):
            if current:
                pieces.append("".join(current))
                current = []
            continue
        current.append(char)
    if current:
        pieces.append("".join(current))
    return pieces


def parse_attributes(buffer: str) -> List[Attribute]:
    """Parse a raw attribute buffer into attributes, in source order.

    Examples:
        >>> [(a.name, a.value) for a in parse_attributes('x=1 y="2 3" z')]
        [('x', '1'), ('y', '"2 3"'), ('z', None)]
    """
    attributes = []
    for piece in split_attribute_tokens(buffer):
        name, sep, value = piece.partition("=")
        attributes.append(Attribute(name=name, value=value if sep else None))
    return attributes
