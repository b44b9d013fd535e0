"""Command-line interface module for Arena XML Parser.

This module provides the arena-xml tool for printing parsed trees, dumping
tokens, and summarizing parse results across files.
"""

from .main import main

__all__ = ["main"]
