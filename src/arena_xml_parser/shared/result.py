"""Diagnostic and metric types shared by the parsing layers.

Diagnostics are how the tree builder reports malformed input it recovered
from; performance metrics describe one run of the tokenize/build pipeline.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    INFO = auto()       # Noteworthy but expected, e.g. discarded trailing text
    WARNING = auto()    # Malformed input that was recovered from
    ERROR = auto()      # Malformed input that stopped a strict parse


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
        }


@dataclass
class PerformanceMetrics:
    """Performance metrics for one parse."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    tokens_generated: int = 0
    nodes_created: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens consumed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_generated * 1000.0) / self.processing_time_ms
