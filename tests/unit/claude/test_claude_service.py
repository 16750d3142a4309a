# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""Unit tests for the Claude Converse service."""

from unittest.mock import MagicMock, patch

import pytest
import requests
from botocore.exceptions import ClientError
from bedrock_nodes.claude.service import (
    build_converse_request,
    build_tool_config,
    call_bedrock_claude,
    detect_image_format,
    parse_converse_response,
)
from bedrock_nodes.config.models import BedrockClaudeConfig
from bedrock_nodes.credentials import ContextCredentials
from bedrock_nodes.exceptions import BedrockResponseError, ImageFetchError

TOOL = {
    "toolSpec": {
        "name": "classify",
        "description": "Classify the text",
        "inputSchema": {"json": {"type": "object", "properties": {}}},
    }
}


def make_credentials():
    return ContextCredentials(
        workflow_id="wf-1",
        execution_id="exec-1",
        node_id="node-1",
        node_type="BedrockClaude",
    )


def image_response(status=200, content_type="image/png", content=b"\x89PNG"):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.reason = "OK" if response.ok else "Not Found"
    response.content = content
    response.headers = {"content-type": content_type}
    return response


@pytest.mark.unit
class TestDetectImageFormat:
    @pytest.mark.parametrize(
        "content_type,url,expected",
        [
            ("image/png", "https://x/img", "png"),
            ("", "https://x/photo.webp", "webp"),
            ("image/gif", "https://x/a", "gif"),
            ("image/jpeg", "https://x/a.jpg", "jpeg"),
            ("", "https://x/unknown", "jpeg"),
        ],
    )
    def test_formats(self, content_type, url, expected):
        assert detect_image_format(content_type, url) == expected


@pytest.mark.unit
class TestBuildConverseRequest:
    def test_minimal_request(self):
        config = BedrockClaudeConfig(prompt="Hello", temperature=0.3, max_tokens=100)

        params = build_converse_request(config)

        assert params == {
            "modelId": config.model,
            "messages": [{"role": "user", "content": [{"text": "Hello"}]}],
            "inferenceConfig": {"temperature": 0.3, "maxTokens": 100},
        }

    def test_system_prompt(self):
        params = build_converse_request(
            BedrockClaudeConfig(prompt="Hi", system_prompt="You are terse")
        )
        assert params["system"] == [{"text": "You are terse"}]

    def test_empty_system_prompt_omitted(self):
        params = build_converse_request(BedrockClaudeConfig(prompt="Hi", system_prompt=""))
        assert "system" not in params

    @patch("bedrock_nodes.claude.service.requests.get")
    def test_image_block_precedes_text(self, mock_get):
        mock_get.return_value = image_response()
        config = BedrockClaudeConfig(
            prompt="Describe", include_image_url=True, image_url="https://x/cat.png"
        )

        params = build_converse_request(config)

        content = params["messages"][0]["content"]
        assert content[0] == {"image": {"format": "png", "source": {"bytes": b"\x89PNG"}}}
        assert content[1] == {"text": "Describe"}
        mock_get.assert_called_once()
        assert mock_get.call_args.args[0] == "https://x/cat.png"

    @patch("bedrock_nodes.claude.service.requests.get")
    def test_image_ignored_when_flag_off(self, mock_get):
        build_converse_request(
            BedrockClaudeConfig(prompt="Hi", include_image_url=False, image_url="https://x/a.png")
        )
        mock_get.assert_not_called()

    @patch("bedrock_nodes.claude.service.requests.get")
    def test_image_http_error(self, mock_get):
        mock_get.return_value = image_response(status=404)
        config = BedrockClaudeConfig(
            prompt="Hi", include_image_url=True, image_url="https://x/missing.png"
        )

        with pytest.raises(ImageFetchError, match="Failed to fetch image from URL: .*404"):
            build_converse_request(config)

    @patch("bedrock_nodes.claude.service.requests.get")
    def test_image_connection_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")
        config = BedrockClaudeConfig(
            prompt="Hi", include_image_url=True, image_url="https://x/a.png"
        )

        with pytest.raises(ImageFetchError, match="unreachable"):
            build_converse_request(config)

    def test_tools_required(self):
        config = BedrockClaudeConfig(
            prompt="Hi", enable_tools=True, tool_choice="required", tool_schema=TOOL
        )

        params = build_converse_request(config)

        assert params["toolConfig"] == {"tools": [TOOL], "toolChoice": {"any": {}}}

    def test_tools_auto_from_json_list(self):
        config = BedrockClaudeConfig(
            prompt="Hi",
            enable_tools=True,
            tool_choice="auto",
            tool_schema='[{"toolSpec": {"name": "a"}}, {"toolSpec": {"name": "b"}}]',
        )

        params = build_converse_request(config)

        assert len(params["toolConfig"]["tools"]) == 2
        assert params["toolConfig"]["toolChoice"] == {"auto": {}}

    def test_tools_disabled_ignores_schema(self):
        params = build_converse_request(
            BedrockClaudeConfig(prompt="Hi", enable_tools=False, tool_schema=TOOL)
        )
        assert "toolConfig" not in params

    def test_malformed_schema_omits_tools(self):
        params = build_converse_request(
            BedrockClaudeConfig(prompt="Hi", enable_tools=True, tool_schema="{not json")
        )
        assert "toolConfig" not in params

    def test_empty_schema_omits_tools(self):
        assert build_tool_config("[]", "required") is None
        assert build_tool_config("{}", "required") is None


@pytest.mark.unit
class TestParseConverseResponse:
    def test_text_blocks_concatenated(self):
        response = {
            "output": {"message": {"content": [{"text": "Hello "}, {"text": "world"}]}},
            "usage": {"inputTokens": 10, "outputTokens": 2, "totalTokens": 12},
        }

        result = parse_converse_response(response)

        assert result == {
            "text": "Hello world",
            "usage": {"inputTokens": 10, "outputTokens": 2, "totalTokens": 12},
        }

    def test_tool_use_block(self):
        response = {
            "output": {
                "message": {
                    "content": [
                        {"toolUse": {"name": "classify", "input": {"label": "invoice"}}}
                    ]
                }
            }
        }

        result = parse_converse_response(response)

        assert result["text"] == ""
        assert result["toolUse"] == {
            "toolName": "classify",
            "toolInput": {"label": "invoice"},
        }
        assert "usage" not in result

    def test_missing_usage_counts_default_to_zero(self):
        result = parse_converse_response(
            {"output": {"message": {"content": []}}, "usage": {"inputTokens": 5}}
        )
        assert result["usage"] == {"inputTokens": 5, "outputTokens": 0, "totalTokens": 0}

    def test_missing_output_raises(self):
        with pytest.raises(BedrockResponseError, match="No output received from Bedrock"):
            parse_converse_response({"usage": {}})


@pytest.mark.unit
class TestCallBedrockClaude:
    def test_calls_converse_with_cached_client(
        self, bedrock_runtime, client_cache, credential_resolver
    ):
        bedrock_runtime.converse.return_value = {
            "output": {"message": {"content": [{"text": "ok"}]}},
            "usage": {"inputTokens": 1, "outputTokens": 1, "totalTokens": 2},
        }
        config = BedrockClaudeConfig(prompt="Hi")

        first = call_bedrock_claude(
            config, make_credentials(), cache=client_cache, resolver=credential_resolver
        )
        call_bedrock_claude(
            config, make_credentials(), cache=client_cache, resolver=credential_resolver
        )

        assert first["text"] == "ok"
        assert bedrock_runtime.converse.call_count == 2
        assert bedrock_runtime.factory.call_count == 1
        assert bedrock_runtime.converse.call_args.kwargs["modelId"] == config.model

    def test_provider_error_propagates_unchanged(
        self, bedrock_runtime, client_cache, credential_resolver
    ):
        error = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "Converse"
        )
        bedrock_runtime.converse.side_effect = error

        with pytest.raises(ClientError) as exc_info:
            call_bedrock_claude(
                BedrockClaudeConfig(prompt="Hi"),
                make_credentials(),
                cache=client_cache,
                resolver=credential_resolver,
            )

        assert exc_info.value is error
        assert len(client_cache) == 1
