"""Tests for correlation-aware logging and diagnostic types."""

import logging

import pytest

from arena_xml_parser.shared import (
    CorrelationLogger,
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    get_logger,
)


class TestCorrelationLogger:
    """Test logger adapter behaviour."""

    def test_get_logger(self):
        """Test logger construction."""
        logger = get_logger("arena_xml_parser.tree.builder", "req-1")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "builder"
        assert logger.correlation_id == "req-1"
        assert logger.logger.name == "arena_xml_parser.tree.builder"

    def test_records_carry_correlation_info(self, caplog):
        """Test component and correlation id on emitted records."""
        logger = get_logger("arena_test.logging", "req-2", "unit")

        with caplog.at_level(logging.INFO, logger="arena_test.logging"):
            logger.info("hello", extra={"token_count": 3})

        record = caplog.records[0]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "req-2"
        assert record.token_count == 3


class TestDiagnosticEntry:
    """Test diagnostic entry validation."""

    def test_empty_message_raises_error(self):
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "x")

    def test_empty_component_raises_error(self):
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "m", "")

    def test_to_dict(self):
        """Test JSON-friendly form."""
        entry = DiagnosticEntry(
            DiagnosticSeverity.WARNING, "m", "tree_builder",
            position={"token": 0, "column": 1},
        )
        assert entry.to_dict() == {
            "severity": "WARNING",
            "message": "m",
            "component": "tree_builder",
            "position": {"token": 0, "column": 1},
            "details": None,
        }


class TestPerformanceMetrics:
    """Test derived rates."""

    def test_rates(self):
        metrics = PerformanceMetrics(
            processing_time_ms=500.0, characters_processed=100, tokens_generated=10
        )
        assert metrics.characters_per_second == 200.0
        assert metrics.tokens_per_second == 20.0

    def test_rates_without_time(self):
        assert PerformanceMetrics().characters_per_second == 0.0
        assert PerformanceMetrics().tokens_per_second == 0.0
