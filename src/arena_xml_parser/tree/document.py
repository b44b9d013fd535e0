"""Node arena holding a parsed document.

Nodes live in one append-only list and refer to each other by index. Index 0 is
always the synthetic ``#document`` root, which is its own parent. Because nodes
are appended in document order under an already existing parent, every
non-root node's parent index is smaller than its own and the tree cannot
contain cycles.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

ROOT_INDEX = 0
DOCUMENT_TAG = "#document"
TEXT_TAG = "#text"
DECLARATION_PREFIXES = ("!", "?")


@dataclass(frozen=True)
class Attribute:
    """A tag attribute; ``value`` is None for valueless attributes."""

    name: str
    value: Optional[str] = None

    @property
    def unquoted_value(self) -> Optional[str]:
        """Get the value with one pair of surrounding double quotes removed."""
        value = self.value
        if value is not None and len(value) >= 2 and value[0] == value[-1] == '"':
            return value[1:-1]
        return value


@dataclass(eq=False)
class Node:
    """One element, declaration, or text run in the arena."""

    tag: str
    parent: int = ROOT_INDEX
    attributes: List[Attribute] = field(default_factory=list)
    children: List[int] = field(default_factory=list)
    value: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate node values."""
        if not self.tag:
            raise ValueError("Node tag cannot be empty")
        if self.value is not None and self.tag != TEXT_TAG:
            raise ValueError("Only #text nodes can carry a value")

    @property
    def is_text(self) -> bool:
        """Check if this node is a text run.

        Markup may name an element `#text`; only text runs carry a value.
        """
        return self.tag == TEXT_TAG and self.value is not None

    @property
    def is_declaration(self) -> bool:
        """Check if this node is a comment, doctype or processing instruction."""
        return self.tag.startswith(DECLARATION_PREFIXES)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return default

    def has_attribute(self, name: str) -> bool:
        return any(attribute.name == name for attribute in self.attributes)


class Document:
    """Append-only arena of nodes rooted at index 0."""

    def __init__(self) -> None:
        self.nodes: List[Node] = [Node(tag=DOCUMENT_TAG, parent=ROOT_INDEX)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    @property
    def root(self) -> Node:
        return self.nodes[ROOT_INDEX]

    def append(self, node: Node) -> int:
        """Add ``node`` under its parent and return its index.

        Raises:
            IndexError: If the node's parent is not already in the arena
        """
        if not (0 <= node.parent < len(self.nodes)):
            raise IndexError(f"Parent index {node.parent} is not in the document")
        index = len(self.nodes)
        self.nodes.append(node)
        self.nodes[node.parent].children.append(index)
        return index

    def is_root(self, index: int) -> bool:
        return index == ROOT_INDEX

    def parent_of(self, index: int) -> Optional[int]:
        """Get the parent index of a node, or None for the root."""
        if index == ROOT_INDEX:
            return None
        return self.nodes[index].parent

    def children_of(self, index: int) -> List[Node]:
        return [self.nodes[child] for child in self.nodes[index].children]

    def depth_of(self, index: int) -> int:
        """Get the depth of a node (root = 0)."""
        depth = 0
        while index != ROOT_INDEX:
            index = self.nodes[index].parent
            depth += 1
        return depth

    def iter_depth_first(self, start: int = ROOT_INDEX) -> Iterator[Tuple[int, int]]:
        """Yield ``(index, depth)`` pairs in pre-order starting at ``start``."""
        stack = [(start, 0)]
        while stack:
            index, depth = stack.pop()
            yield index, depth
            children = self.nodes[index].children
            stack.extend((child, depth + 1) for child in reversed(children))

    def find_all(self, tag: str) -> List[Node]:
        """Find all nodes with a matching tag, in document order."""
        return [self.nodes[index] for index, _ in self.iter_depth_first()
                if self.nodes[index].tag == tag]

    def find(self, tag: str) -> Optional[Node]:
        """Find the first node with a matching tag."""
        for index, _ in self.iter_depth_first():
            if self.nodes[index].tag == tag:
                return self.nodes[index]
        return None

    def text_nodes(self) -> List[Node]:
        return [node for node in self.nodes if node.is_text]

    def to_dict(self, index: int = ROOT_INDEX) -> Dict[str, Any]:
        """Convert the subtree at ``index`` to a nested dictionary."""
        converted: Dict[int, Dict[str, Any]] = {}
        for node_index, _ in self.iter_depth_first(index):
            node = self.nodes[node_index]
            entry: Dict[str, Any] = {"index": node_index, "tag": node.tag}
            if node.attributes:
                entry["attributes"] = [
                    {"name": attribute.name, "value": attribute.value}
                    for attribute in node.attributes
                ]
            if node.value is not None:
                entry["value"] = node.value
            if node.children:
                entry["children"] = []
            converted[node_index] = entry
            # Pre-order: the parent entry already exists
            if node_index != index:
                converted[node.parent]["children"].append(entry)
        return converted[index]
