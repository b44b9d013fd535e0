#!/usr/bin/env python3
"""
Quick Start Guide for the Arena XML Parser.

Parses the bundled catalog, prints the node tree and shows how
malformed markup is reported.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from arena_xml_parser import ParseError, ParserConfig, parse_file, parse_string, print_node


def quick_start_example():
    """Parse the sample catalog and print it."""
    result = parse_file(Path(__file__).parent / "books.xml")

    print_node(result.document)
    print()
    print(f"Nodes: {result.node_count}, elements: {result.element_count}")

    for book in result.document.find_all("book"):
        print(f"book {book.get_attribute('id')}")


def malformed_input_example():
    """Show warnings in recover mode and errors in strict mode."""
    broken = "<a><b></b></a></a>"

    result = parse_string(broken)
    for diagnostic in result.diagnostics:
        print(f"{diagnostic.severity.name}: {diagnostic.message}")

    try:
        parse_string(broken, ParserConfig.strict_mode())
    except ParseError as e:
        print(f"strict: {e}")


if __name__ == "__main__":
    quick_start_example()
    print()
    malformed_input_example()
