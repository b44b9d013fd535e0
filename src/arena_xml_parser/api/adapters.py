"""Conversion of parsed documents into third-party structures.

Two targets are supported: ``lxml.etree`` element trees, for XPath and
serialization, and a ``pandas.DataFrame`` with one row per arena node, for
analysis. Both libraries are imported when a conversion is requested.
"""

from typing import Any, Dict, List, Optional

from arena_xml_parser.shared import get_logger
from arena_xml_parser.tree import ROOT_INDEX, Document, Node

logger = get_logger(__name__, component="adapters")

DATAFRAME_COLUMNS = [
    "index", "tag", "parent", "depth", "value", "attribute_count", "attributes"
]


def is_lxml_available() -> bool:
    """Check if lxml can be imported."""
    try:
        import lxml.etree  # noqa: F401
        return True
    except ImportError:
        return False


def is_pandas_available() -> bool:
    """Check if pandas can be imported."""
    try:
        import pandas  # noqa: F401
        return True
    except ImportError:
        return False


def to_lxml(document: Document, root_tag: Optional[str] = None) -> Any:
    """Convert a document to an ``lxml.etree`` element.

    Element nodes become elements and text runs become ``text`` or ``tail``.
    Declarations, comments and processing instructions are skipped. Attribute
    values lose their surrounding quotes; valueless attributes become ``""``.
    Duplicate attributes collapse to the last one, as lxml allows one value
    per name.

    Args:
        document: Parsed node arena
        root_tag: Tag of a wrapper element holding all top-level content.
            Required when the document has other than one top-level element.

    Returns:
        lxml.etree._Element

    Raises:
        ValueError: If no single root element exists and no ``root_tag`` was
            given, or if a tag or attribute name is not a valid XML name
    """
    import lxml.etree as etree

    if root_tag is not None:
        wrapper = etree.Element(root_tag)
        _append_subtree(document, ROOT_INDEX, wrapper, etree)
        return wrapper

    top_level = [
        index for index in document.root.children
        if not document[index].is_text and not document[index].is_declaration
    ]
    if len(top_level) != 1:
        raise ValueError(
            f"Document has {len(top_level)} top-level elements; "
            f"pass root_tag to wrap them"
        )

    top = document[top_level[0]]
    element = etree.Element(top.tag)
    _set_attributes(top, element)
    _append_subtree(document, top_level[0], element, etree)
    logger.debug(
        "Converted document to lxml",
        extra={"element_count": len(element.xpath("//*"))}
    )
    return element


def _set_attributes(node: Node, element: Any) -> None:
    for attribute in node.attributes:
        element.set(attribute.name, attribute.unquoted_value or "")


def _append_subtree(
    document: Document, start: int, element: Any, etree: Any
) -> None:
    """Convert everything below ``start`` into children of ``element``.

    Iterative, so nesting depth is bounded only by memory.
    """
    elements = {start: element}
    last_child: Dict[int, Any] = {}
    for index, _ in document.iter_depth_first(start):
        if index == start:
            continue
        node = document[index]
        parent = elements.get(node.parent)
        if parent is None:
            # Below a skipped declaration
            continue
        if node.is_text:
            previous = last_child.get(node.parent)
            if previous is None:
                parent.text = (parent.text or "") + node.value
            else:
                previous.tail = (previous.tail or "") + node.value
        elif not node.is_declaration:
            child = etree.SubElement(parent, node.tag)
            _set_attributes(node, child)
            elements[index] = child
            last_child[node.parent] = child


def node_records(document: Document) -> List[Dict[str, Any]]:
    """Describe every node as a flat record, in depth-first order."""
    records = []
    for index, depth in document.iter_depth_first():
        node = document[index]
        records.append({
            "index": index,
            "tag": node.tag,
            "parent": None if index == ROOT_INDEX else node.parent,
            "depth": depth,
            "value": node.value,
            "attribute_count": len(node.attributes),
            "attributes": [
                (attribute.name, attribute.value) for attribute in node.attributes
            ],
        })
    return records


def to_dataframe(document: Document) -> Any:
    """Convert a document to a ``pandas.DataFrame`` indexed by node index."""
    import pandas as pd

    df = pd.DataFrame(node_records(document), columns=DATAFRAME_COLUMNS)
    logger.debug("Converted document to DataFrame", extra={"row_count": len(df)})
    return df.set_index("index")
