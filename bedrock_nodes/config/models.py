# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Pydantic models for Bedrock node configuration.

The workflow host delivers node configuration as camelCase JSON with values
that may still be strings after template resolution. These models accept both
camelCase and snake_case keys and coerce string representations
(e.g., "0.5" -> 0.5, "true" -> True).

Usage:
    from bedrock_nodes.config.models import BedrockClaudeConfig

    config = BedrockClaudeConfig.model_validate(node_config)
    if config.enable_tools:
        schema = config.tool_schema
"""

from typing import Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..templating import to_text

DEFAULT_CLAUDE_MODEL = "us.anthropic.claude-3-5-sonnet-20241022-v2:0"
DEFAULT_EMBEDDING_MODEL = "amazon.titan-embed-text-v2:0"
DEFAULT_EMBEDDING_DIMENSIONS = 1024


def _is_blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


def _parse_bool(v: Any) -> Optional[bool]:
    if _is_blank(v):
        return None
    if isinstance(v, str):
        return v.strip().lower() in ("true", "1", "yes")
    return bool(v)


def _parse_number(v: Any, cast: Callable[[Any], Any]) -> Any:
    try:
        return cast(v.strip() if isinstance(v, str) else v)
    except (TypeError, ValueError):
        raise ValueError(f"Expected a number, got {v!r}") from None


def _parse_optional_int(v: Any) -> Optional[int]:
    if _is_blank(v):
        return None
    return _parse_number(v, int)


def _parse_optional_text(v: Any) -> Optional[str]:
    # Whole-placeholder templates resolve to raw input values
    return None if v is None else to_text(v)


class NodeConfig(BaseModel):
    """Base for node configuration models"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Hosts add bookkeeping keys to node config; ignore them
        extra="ignore",
    )


class BedrockClaudeConfig(NodeConfig):
    """Configuration for the BedrockClaude node"""

    model: str = Field(default=DEFAULT_CLAUDE_MODEL, description="Claude model id")
    temperature: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Sampling temperature"
    )
    max_tokens: int = Field(
        default=256, ge=1, le=4096, description="Maximum tokens to generate"
    )
    system_prompt: Optional[str] = Field(default=None, description="System prompt")
    prompt: str = Field(default="", description="User prompt")
    include_image_url: bool = Field(
        default=False, description="Attach the image at image_url"
    )
    image_url: Optional[str] = Field(default=None, description="Image URL")
    enable_tools: bool = Field(default=False, description="Enable tool use")
    tool_choice: Optional[Literal["required", "auto"]] = Field(
        default="required", description="How Claude should use tools"
    )
    tool_schema: Optional[Union[str, Dict[str, Any], List[Dict[str, Any]]]] = Field(
        default=None, description="Tool schema as JSON text or parsed object"
    )

    @field_validator("temperature", mode="before")
    @classmethod
    def parse_float(cls, v: Any, info: ValidationInfo) -> float:
        """Parse float from string or number; null or blank means the default"""
        if _is_blank(v):
            return cls.model_fields[info.field_name].default
        return _parse_number(v, float)

    @field_validator("max_tokens", mode="before")
    @classmethod
    def parse_int(cls, v: Any, info: ValidationInfo) -> int:
        """Parse int from string or number; null or blank means the default"""
        if _is_blank(v):
            return cls.model_fields[info.field_name].default
        return _parse_number(v, int)

    @field_validator("prompt", mode="before")
    @classmethod
    def parse_prompt(cls, v: Any) -> str:
        return to_text(v)

    @field_validator("system_prompt", "image_url", mode="before")
    @classmethod
    def parse_optional_text(cls, v: Any) -> Optional[str]:
        return _parse_optional_text(v)

    @field_validator("include_image_url", "enable_tools", mode="before")
    @classmethod
    def parse_flags(cls, v: Any) -> bool:
        return bool(_parse_bool(v))

    @field_validator("tool_choice", mode="before")
    @classmethod
    def parse_tool_choice(cls, v: Any) -> Optional[str]:
        if _is_blank(v):
            return None
        return v


class BedrockEmbeddingConfig(NodeConfig):
    """Configuration for the BedrockEmbedding node"""

    text_template: str = Field(default="", description="Resolved text to embed")
    model: str = Field(default="", description="Embedding model id")
    dimensions: Optional[int] = Field(default=None, description="Output dimensions")
    normalize: Optional[bool] = Field(default=None, description="Normalize vectors")

    @field_validator("text_template", mode="before")
    @classmethod
    def parse_text(cls, v: Any) -> str:
        return to_text(v)

    @field_validator("dimensions", mode="before")
    @classmethod
    def parse_dimensions(cls, v: Any) -> Optional[int]:
        return _parse_optional_int(v)

    @field_validator("normalize", mode="before")
    @classmethod
    def parse_normalize(cls, v: Any) -> Optional[bool]:
        return _parse_bool(v)


class BedrockEmbeddingServiceConfig(NodeConfig):
    """Configuration for the BedrockEmbeddingService node"""

    model: str = Field(default="", description="Embedding model id")
    normalize: Optional[bool] = Field(default=None, description="Normalize vectors")
    dimensions: Optional[int] = Field(default=None, description="Output dimensions")
    text_template: Optional[str] = Field(default=None, description="Unused template")

    @field_validator("dimensions", mode="before")
    @classmethod
    def parse_dimensions(cls, v: Any) -> Optional[int]:
        """Service callers send dimensions as "512" as often as 512"""
        return _parse_optional_int(v)

    @field_validator("text_template", mode="before")
    @classmethod
    def parse_text(cls, v: Any) -> Optional[str]:
        return _parse_optional_text(v)

    @field_validator("normalize", mode="before")
    @classmethod
    def parse_normalize(cls, v: Any) -> Optional[bool]:
        return _parse_bool(v)

    @classmethod
    def from_service_config(
        cls, config: Optional[Dict[str, Any]]
    ) -> "BedrockEmbeddingServiceConfig":
        """Build from a service-call config, unwrapping a nested "config" key."""
        config = config or {}
        if isinstance(config.get("config"), dict):
            config = config["config"]
        return cls.model_validate(config)
