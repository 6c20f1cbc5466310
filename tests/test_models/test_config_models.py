"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from stratus.models.config import (
    CloudConfig,
    LoggingConfig,
    PollConfig,
    RegistryConfig,
    StratusConfig,
)


class TestLoggingConfig:
    """Test LoggingConfig model."""

    def test_log_level_validation(self):
        """Test log level validation."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            assert LoggingConfig(level=level).level == level

        assert LoggingConfig(level="debug").level == "DEBUG"

        with pytest.raises(ValidationError) as exc_info:
            LoggingConfig(level="INVALID")

        assert "level" in str(exc_info.value)


class TestPollConfig:
    """Test PollConfig model."""

    def test_defaults(self):
        """Test default polling budget."""
        config = PollConfig()

        assert config.interval == 1.0
        assert config.max_attempts == 300

    def test_bounds(self):
        """Test polling budget bounds."""
        with pytest.raises(ValidationError):
            PollConfig(max_attempts=0)

        with pytest.raises(ValidationError):
            PollConfig(interval=-1)


class TestStratusConfig:
    """Test StratusConfig model."""

    def test_default_config(self):
        """Test default configuration."""
        config = StratusConfig()

        assert isinstance(config.cloud, CloudConfig)
        assert isinstance(config.registry, RegistryConfig)
        assert config.cloud.provider == "ec2"
        assert config.cloud.default_key_name is None
        assert config.cloud.default_security_groups == []
        assert config.registry.endpoint == "http://127.0.0.1:25777"
        assert config.agent == {}

    def test_full_config(self):
        """Test full configuration with all sections."""
        config = StratusConfig(
            logging={"level": "debug"},
            cloud={"region": "eu-west-1", "default_key_name": "bosh"},
            registry={"endpoint": "http://registry:25777", "user": "admin", "password": "secret"},
            poll={"interval": 0.5, "max_attempts": 10},
            agent={"ntp": ["pool.ntp.org"]},
        )

        assert config.logging.level == "DEBUG"
        assert config.cloud.region == "eu-west-1"
        assert config.cloud.default_key_name == "bosh"
        assert config.registry.user == "admin"
        assert config.poll.max_attempts == 10
        assert config.agent["ntp"] == ["pool.ntp.org"]

    def test_extra_fields_ignored(self):
        """Test that extra fields are ignored."""
        config = StratusConfig(extra_field="ignored")

        assert not hasattr(config, "extra_field")
