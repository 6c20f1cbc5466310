"""Configuration models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class CloudConfig(BaseModel):
    """Compute provider configuration."""
    provider: str = Field(default="ec2")
    region: str = Field(default="us-east-1")
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint_url: Optional[str] = None
    default_key_name: Optional[str] = None
    default_security_groups: List[str] = Field(default_factory=list)


class RegistryConfig(BaseModel):
    """Settings registry configuration."""
    endpoint: str = Field(default="http://127.0.0.1:25777")
    user: Optional[str] = None
    password: Optional[str] = None
    timeout: float = Field(default=10.0, gt=0)


class PollConfig(BaseModel):
    """Polling budget for waiting on provider state."""
    interval: float = Field(default=1.0, ge=0)
    max_attempts: int = Field(default=300, ge=1)


class StratusConfig(BaseModel):
    """Main configuration model."""
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cloud: CloudConfig = Field(default_factory=CloudConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    poll: PollConfig = Field(default_factory=PollConfig)
    agent: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")
