"""Tests for parser configuration."""

import json

import pytest

from arena_xml_parser.shared import ErrorPolicy, ParserConfig


class TestParserConfig:
    """Test ParserConfig defaults, validation and loading."""

    def test_defaults(self):
        """Test default configuration values."""
        config = ParserConfig()

        assert config.error_policy is ErrorPolicy.RECOVER
        assert config.encoding == "utf-8"
        assert config.enable_diagnostics is True
        assert config.correlation_id is None
        assert config.strict is False

    def test_presets(self):
        """Test the lenient and strict presets."""
        assert ParserConfig.lenient().error_policy is ErrorPolicy.RECOVER
        assert ParserConfig.strict_mode().strict is True

    def test_policy_from_string(self):
        """Test string policies are converted."""
        assert ParserConfig(error_policy="STRICT").error_policy is ErrorPolicy.STRICT

    def test_invalid_policy_raises_error(self):
        """Test unknown policy names."""
        with pytest.raises(ValueError, match="error_policy must be one of"):
            ParserConfig(error_policy="sometimes")

    def test_invalid_policy_type_raises_error(self):
        """Test non-string, non-enum policies."""
        with pytest.raises(TypeError, match="error_policy must be an ErrorPolicy"):
            ParserConfig(error_policy=1)

    def test_unknown_encoding_raises_error(self):
        """Test encoding validation."""
        with pytest.raises(ValueError, match="Unknown encoding"):
            ParserConfig(encoding="no-such-codec")

    def test_empty_encoding_raises_error(self):
        with pytest.raises(ValueError, match="encoding cannot be empty"):
            ParserConfig(encoding="")

    def test_from_dict_ignores_unknown_keys(self):
        """Test dictionary loading."""
        config = ParserConfig.from_dict({
            "error_policy": "strict",
            "encoding": "latin-1",
            "batch_size": 10,
        })

        assert config.strict
        assert config.encoding == "latin-1"

    def test_from_file(self, tmp_path):
        """Test loading configuration from a JSON file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "error_policy": "strict",
            "enable_diagnostics": False,
            "correlation_id": "batch-1",
        }))

        config = ParserConfig.from_file(config_path)

        assert config.strict
        assert config.enable_diagnostics is False
        assert config.correlation_id == "batch-1"

    def test_from_file_requires_object(self, tmp_path):
        """Test rejection of non-object JSON."""
        config_path = tmp_path / "config.json"
        config_path.write_text("[1, 2]")

        with pytest.raises(ValueError, match="must contain a JSON object"):
            ParserConfig.from_file(config_path)

    def test_to_dict_round_trip(self):
        """Test serialization back into an equal configuration."""
        config = ParserConfig(error_policy=ErrorPolicy.STRICT, correlation_id="x")
        data = config.to_dict()

        assert data["error_policy"] == "strict"
        assert ParserConfig.from_dict(data) == config
