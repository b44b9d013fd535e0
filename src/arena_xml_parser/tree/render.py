"""Plain-text rendering of a node arena for inspection."""

import sys
from typing import List, Optional, TextIO

from .document import ROOT_INDEX, Document, Node

INDENT = "  "


def format_node_header(node: Node, depth: int) -> List[str]:
    """Format one node as its header line plus, for text, its value line."""
    parts = [INDENT * depth, node.tag]
    for attribute in node.attributes:
        value = attribute.value if attribute.value is not None else ""
        parts.append(f" [{attribute.name}={value}]")
    lines = ["".join(parts)]
    if node.value is not None:
        lines.append(INDENT * (depth + 1) + node.value)
    return lines


def render_node(document: Document, index: int = ROOT_INDEX) -> str:
    """Render the subtree at ``index`` depth-first, one node per line."""
    lines: List[str] = []
    for node_index, depth in document.iter_depth_first(index):
        lines.extend(format_node_header(document[node_index], depth))
    return "\n".join(lines)


def print_node(
    document: Document, index: int = ROOT_INDEX, file: Optional[TextIO] = None
) -> None:
    """Print the subtree at ``index`` to ``file`` (stdout by default)."""
    print(render_node(document, index), file=file or sys.stdout)
