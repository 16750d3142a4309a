# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Claude text generation via the Bedrock Converse API.

This module builds a single-turn Converse request from a BedrockClaudeConfig
(optionally with an image fetched from a URL and a tool schema), sends it
with a cached Bedrock runtime client and flattens the response into text,
tool use and token usage.
"""

import copy
import json
import logging
import time
from typing import Any, Dict, List, Optional

import requests
from botocore.exceptions import ClientError

from ..bedrock.client import initialize_bedrock_client
from ..client_cache import ClientCache
from ..config.models import BedrockClaudeConfig
from ..credentials import CredentialResolver, CredentialSource
from ..exceptions import BedrockResponseError, ImageFetchError

logger = logging.getLogger(__name__)

IMAGE_FETCH_TIMEOUT = 30  # seconds

TOOL_CHOICES = {
    "required": {"any": {}},
    "auto": {"auto": {}},
}


def detect_image_format(content_type: str, url: str) -> str:
    """Pick the Converse image format from the content type or URL extension."""
    content_type = (content_type or "").lower()
    url = (url or "").lower()
    for image_format in ("png", "webp", "gif"):
        if image_format in content_type or f".{image_format}" in url:
            return image_format
    return "jpeg"


def fetch_image_block(image_url: str) -> Dict[str, Any]:
    """
    Download an image and wrap it as a Converse image content block.

    Raises:
        ImageFetchError: If the image cannot be downloaded
    """
    logger.info(f"Including image URL in message: {image_url}")
    try:
        response = requests.get(image_url, timeout=IMAGE_FETCH_TIMEOUT)
        if not response.ok:
            raise ImageFetchError(
                f"Failed to fetch image: {response.status_code} {response.reason}"
            )
        image_bytes = response.content
    except (requests.RequestException, ImageFetchError) as e:
        logger.error(f"Failed to fetch image from URL {image_url}: {e}")
        raise ImageFetchError(f"Failed to fetch image from URL: {e}") from e

    content_type = response.headers.get("content-type", "")
    image_format = detect_image_format(content_type, image_url)
    logger.info(
        f"Image fetched successfully: {len(image_bytes)} bytes, "
        f"content-type '{content_type}', format {image_format}"
    )
    return {"image": {"format": image_format, "source": {"bytes": image_bytes}}}


def parse_tool_schema(tool_schema: Any) -> List[Dict[str, Any]]:
    """
    Normalize a tool schema into a list of Converse tool specs.

    Raises:
        ValueError: If a JSON string schema cannot be parsed
    """
    tools = json.loads(tool_schema) if isinstance(tool_schema, str) else tool_schema
    if not tools:
        return []
    return tools if isinstance(tools, list) else [tools]


def build_tool_config(
    tool_schema: Any, tool_choice: Optional[str]
) -> Optional[Dict[str, Any]]:
    """Build the Converse toolConfig, or None when the schema yields no tools."""
    try:
        tools = parse_tool_schema(tool_schema)
    except (ValueError, TypeError) as e:
        logger.warning(f"Failed to configure tools: {e}")
        return None

    logger.info(
        f"Parsed tools: count={len(tools)}, first={tools[0].get('name') if tools else None}"
    )
    if not tools:
        return None

    tool_config: Dict[str, Any] = {"tools": tools}
    if tool_choice in TOOL_CHOICES:
        tool_config["toolChoice"] = copy.deepcopy(TOOL_CHOICES[tool_choice])
    return tool_config


def build_converse_request(config: BedrockClaudeConfig) -> Dict[str, Any]:
    """Build the Converse request parameters for a Claude config."""
    content: List[Dict[str, Any]] = []
    if config.include_image_url and config.image_url:
        content.append(fetch_image_block(config.image_url))
    content.append({"text": config.prompt})

    converse_params: Dict[str, Any] = {
        "modelId": config.model,
        "messages": [{"role": "user", "content": content}],
        "inferenceConfig": {
            "temperature": config.temperature,
            "maxTokens": config.max_tokens,
        },
    }

    if config.system_prompt:
        converse_params["system"] = [{"text": config.system_prompt}]

    if config.enable_tools and config.tool_schema:
        logger.info(f"Tool configuration enabled, toolChoice={config.tool_choice}")
        tool_config = build_tool_config(config.tool_schema, config.tool_choice)
        if tool_config:
            converse_params["toolConfig"] = tool_config
    else:
        logger.info(
            f"Tools not enabled or no schema: enableTools={config.enable_tools}, "
            f"hasToolSchema={bool(config.tool_schema)}"
        )

    return converse_params


def parse_converse_response(response: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten a Converse response into text, toolUse and usage.

    Raises:
        BedrockResponseError: If the response carries no output
    """
    output = response.get("output")
    if not output:
        raise BedrockResponseError("No output received from Bedrock")

    result: Dict[str, Any] = {"text": ""}
    for block in (output.get("message") or {}).get("content") or []:
        if block.get("text"):
            result["text"] += block["text"]
        elif block.get("toolUse"):
            result["toolUse"] = {
                "toolName": block["toolUse"].get("name"),
                "toolInput": block["toolUse"].get("input"),
            }

    usage = response.get("usage")
    if usage:
        result["usage"] = {
            "inputTokens": usage.get("inputTokens") or 0,
            "outputTokens": usage.get("outputTokens") or 0,
            "totalTokens": usage.get("totalTokens") or 0,
        }
    return result


def _sanitize_request_for_logging(converse_params: Dict[str, Any]) -> Dict[str, Any]:
    sanitized = copy.deepcopy(converse_params)
    for message in sanitized.get("messages", []):
        for item in message.get("content", []):
            if "image" in item:
                item["image"] = "[image_data]"
    return sanitized


def call_bedrock_claude(
    config: BedrockClaudeConfig,
    credentials: CredentialSource,
    cache: Optional[ClientCache] = None,
    resolver: Optional[CredentialResolver] = None,
) -> Dict[str, Any]:
    """
    Call a Claude model via AWS Bedrock.

    Args:
        config: Claude node configuration
        credentials: Direct credentials or an execution scope to resolve
        cache: Client cache (defaults to the platform cache)
        resolver: Credential resolver (defaults to the platform resolver)

    Returns:
        Dict with ``text`` and, when present, ``toolUse`` and ``usage``

    Raises:
        ImageFetchError: If the configured image cannot be downloaded
        BedrockResponseError: If Bedrock returns no output
        botocore.exceptions.ClientError: Provider errors, unchanged
    """
    client = initialize_bedrock_client(credentials, cache=cache, resolver=resolver)
    converse_params = build_converse_request(config)

    logger.info(
        f"Calling Bedrock Claude API: model={config.model}, "
        f"temperature={config.temperature}, maxTokens={config.max_tokens}, "
        f"hasToolConfig={'toolConfig' in converse_params}"
    )
    logger.debug(f"Request: {_sanitize_request_for_logging(converse_params)}")

    start_time = time.time()
    try:
        response = client.converse(**converse_params)
    except ClientError as e:
        logger.error(
            f"Bedrock Claude API call failed: {e.response.get('Error', {}).get('Code')} - {e}"
        )
        raise

    result = parse_converse_response(response)
    logger.info(
        f"Bedrock Claude API call successful in {time.time() - start_time:.2f}s: "
        f"textLength={len(result['text'])}, hasToolUse={'toolUse' in result}, "
        f"usage={result.get('usage')}"
    )
    return result
