# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Runtime settings and logging configuration for the Bedrock nodes.

Settings are read from environment variables, the same way the hosting
process configures every other component.
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .models import (
    BedrockClaudeConfig,
    BedrockEmbeddingConfig,
    BedrockEmbeddingServiceConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"


class Settings(BaseModel):
    """Environment-driven settings"""

    default_region: str = Field(
        default=DEFAULT_REGION,
        description="Region used when a credential does not carry one",
    )
    log_level: str = Field(default="INFO", description="Package log level")
    bedrock_log_level: str = Field(
        default="INFO", description="Log level for the Bedrock client module"
    )
    connect_timeout: int = Field(default=10, description="Connect timeout (s)")
    read_timeout: int = Field(default=300, description="Read timeout (s)")

    @field_validator("connect_timeout", "read_timeout", mode="before")
    @classmethod
    def parse_timeout(cls, v):
        """Parse timeouts from env strings"""
        if isinstance(v, str):
            return int(v.strip())
        return v

    @field_validator("log_level", "bedrock_log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return str(v).upper() if v else "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        values = {
            "default_region": os.environ.get("AWS_REGION"),
            "log_level": os.environ.get("LOG_LEVEL"),
            "bedrock_log_level": os.environ.get("BEDROCK_LOG_LEVEL"),
            "connect_timeout": os.environ.get("BEDROCK_CONNECT_TIMEOUT"),
            "read_timeout": os.environ.get("BEDROCK_READ_TIMEOUT"),
        }
        return cls.model_validate({k: v for k, v in values.items() if v})


_settings: Optional[Settings] = None


def get_settings(force_refresh: bool = False) -> Settings:
    """Return the process settings, reading the environment on first use."""
    global _settings
    if _settings is None or force_refresh:
        _settings = Settings.from_env()
    return _settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply LOG_LEVEL to the package and BEDROCK_LOG_LEVEL to the client module."""
    settings = settings or get_settings()
    logging.getLogger("bedrock_nodes").setLevel(settings.log_level)
    logging.getLogger("bedrock_nodes.bedrock.client").setLevel(
        settings.bedrock_log_level
    )
    logger.debug(
        f"Logging configured: level={settings.log_level}, bedrock={settings.bedrock_log_level}"
    )


__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "DEFAULT_REGION",
    "BedrockClaudeConfig",
    "BedrockEmbeddingConfig",
    "BedrockEmbeddingServiceConfig",
]
