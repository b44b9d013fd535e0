"""Configuration for the arena XML parser.

A single :class:`ParserConfig` controls how malformed input is treated, how
byte input is decoded, and whether informational diagnostics are recorded.
"""

import json
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union


class ErrorPolicy(Enum):
    """What the tree builder does when it meets malformed markup."""

    RECOVER = "recover"  # Record a warning, apply the defined recovery, continue
    STRICT = "strict"    # Raise ParseError at the first malformed construct


@dataclass
class ParserConfig:
    """Configuration for tokenization and tree building."""

    error_policy: ErrorPolicy = ErrorPolicy.RECOVER
    encoding: str = "utf-8"
    enable_diagnostics: bool = True
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if isinstance(self.error_policy, str):
            try:
                self.error_policy = ErrorPolicy(self.error_policy.lower())
            except ValueError:
                raise ValueError(
                    f"error_policy must be one of "
                    f"{[policy.value for policy in ErrorPolicy]}"
                ) from None
        if not isinstance(self.error_policy, ErrorPolicy):
            raise TypeError("error_policy must be an ErrorPolicy")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")
        try:
            "".encode(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding}") from None

    @property
    def strict(self) -> bool:
        """Check if malformed input raises instead of being recovered."""
        return self.error_policy is ErrorPolicy.STRICT

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Create configuration that recovers from malformed input."""
        return cls()  # Default configuration is lenient

    @classmethod
    def strict_mode(cls) -> "ParserConfig":
        """Create configuration that raises on malformed input."""
        return cls(error_policy=ErrorPolicy.STRICT)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from a dictionary, ignoring unknown keys."""
        known = {key: data[key] for key in cls.__dataclass_fields__ if key in data}
        return cls(**known)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from a JSON file."""
        with Path(config_path).open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        data = asdict(self)
        data["error_policy"] = self.error_policy.value
        return data
