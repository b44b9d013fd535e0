"""Shared utilities for arena XML parsing.

This module provides the configuration object, diagnostic and metric types,
and logging helpers used across the tokenization and tree layers.
"""

from .config import ErrorPolicy, ParserConfig
from .logging import CorrelationLogger, get_logger
from .result import DiagnosticEntry, DiagnosticSeverity, PerformanceMetrics

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "ErrorPolicy",
    "ParserConfig",
    "CorrelationLogger",
    "get_logger",
]
