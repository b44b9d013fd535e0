"""Correlation-aware logging for the parsing pipeline.

Every record emitted through :func:`get_logger` carries the component name and
the correlation id of the parse it belongs to, so log lines from several
documents parsed by one process can be told apart.
"""

import logging
from typing import Any, Dict, MutableMapping, Optional, Tuple


class CorrelationLogger(logging.LoggerAdapter):
    """Logger adapter that merges correlation info into each record's extra."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
        """
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]
        super().__init__(
            logging.getLogger(name),
            {"component": self.component, "correlation_id": correlation_id},
        )

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Combine the adapter's correlation info with per-call extra data."""
        combined: Dict[str, Any] = dict(self.extra or {})
        call_extra = kwargs.get("extra")
        if call_extra:
            combined.update(call_extra)
        kwargs["extra"] = combined
        return msg, kwargs


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
