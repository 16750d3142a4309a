# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
BedrockClaude node.

Text generation with AWS Bedrock Claude models, with optional image input and
tool use for structured outputs.
"""

import time
from typing import Any, Dict, Mapping

from ..config.models import DEFAULT_CLAUDE_MODEL, BedrockClaudeConfig
from ..platform import NodeDefinition, NodeExecutionContext, NodeInputType, PromiseNode
from .service import call_bedrock_claude

LOGO_URL = "https://res.cloudinary.com/sonik/image/upload/v1749137717/gravity/icons/vdyfnijyuyk8ajqtp3nu.webp"

CLAUDE_MODELS = [
    "us.anthropic.claude-sonnet-4-20250514-v1:0",
    "us.anthropic.claude-3-5-sonnet-20241022-v2:0",
    "us.anthropic.claude-3-5-haiku-20241022-v1:0",
]


def create_node_definition() -> NodeDefinition:
    return NodeDefinition(
        type="BedrockClaude",
        name="Bedrock Claude",
        description="AWS Bedrock Claude models with optional tool support",
        package_version="1.0.28",
        logo_url=LOGO_URL,
        is_service=False,
        inputs=[
            {
                "name": "signal",
                "type": NodeInputType.OBJECT,
                "description": "Input to prompt",
            }
        ],
        outputs=[
            {
                "name": "output",
                "type": NodeInputType.OBJECT,
                "description": "Response object",
            },
            {"name": "usage", "type": NodeInputType.OBJECT, "description": "Token burn"},
            {
                "name": "toolUse",
                "type": NodeInputType.OBJECT,
                "description": "Selected Tool",
            },
        ],
        config_schema={
            "type": "object",
            "properties": {
                "model": {
                    "type": "string",
                    "title": "Model",
                    "description": "Select the Claude model to use",
                    "enum": CLAUDE_MODELS,
                    "enumNames": [
                        "Claude Sonnet 4 (Latest)",
                        "Claude 3.5 Sonnet",
                        "Claude 3.5 Haiku",
                    ],
                    "default": DEFAULT_CLAUDE_MODEL,
                },
                "maxTokens": {
                    "type": "number",
                    "title": "Max Tokens",
                    "description": "Maximum number of tokens to generate",
                    "default": 256,
                    "minimum": 1,
                    "maximum": 4096,
                },
                "temperature": {
                    "type": "number",
                    "title": "Temperature",
                    "description": "Controls randomness (0-1)",
                    "default": 0.7,
                    "minimum": 0,
                    "maximum": 1,
                    "step": 0.1,
                },
                "systemPrompt": {
                    "type": "string",
                    "title": "System Prompt",
                    "description": "System message prompt. Supports template syntax like {{input.fieldName}} to reference input data.",
                    "default": "",
                    "ui:field": "template",
                },
                "prompt": {
                    "type": "string",
                    "title": "Prompt",
                    "description": "User message/prompt. Supports template syntax like {{input.fieldName}} to reference input data.",
                    "default": "",
                    "ui:field": "template",
                },
                "includeImageUrl": {
                    "type": "boolean",
                    "title": "Include Image URL",
                    "description": "Enable image analysis by providing an image URL",
                    "default": False,
                    "ui:widget": "toggle",
                },
                "imageUrl": {
                    "type": "string",
                    "title": "Image URL",
                    "description": "URL of the image to analyze. Supports template syntax like {{input.imageUrl}}",
                    "default": "",
                    "ui:field": "template",
                    "ui:dependencies": {"includeImageUrl": True},
                },
                "enableTools": {
                    "type": "boolean",
                    "title": "Enable Tools",
                    "description": "Enable tool usage for structured outputs",
                    "default": False,
                    "ui:widget": "toggle",
                },
                "toolChoice": {
                    "type": "string",
                    "title": "Tool Choice",
                    "description": "How Claude should use tools",
                    "enum": ["required", "auto"],
                    "enumNames": [
                        "Required - Must use tools",
                        "Auto - Optional tool use",
                    ],
                    "default": "required",
                    "ui:dependencies": {"enableTools": True},
                },
                "toolSchema": {
                    "type": "object",
                    "title": "Tool Schema",
                    "description": "JSON schema for the tool function",
                    "default": "{}",
                    "ui:field": "template",
                    "ui:dependencies": {"enableTools": True},
                },
            },
            "required": ["model"],
        },
        credentials=[
            {
                "name": "awsCredential",
                "required": True,
                "displayName": "AWS Credentials",
                "description": "AWS credentials for Bedrock API access (accessKeyId, secretAccessKey, region)",
            }
        ],
    )


class BedrockClaudeExecutor(PromiseNode):
    """Executes a single Claude generation per incoming signal."""

    definition = create_node_definition()
    config_model = BedrockClaudeConfig

    def __init__(self, platform=None):
        super().__init__("BedrockClaude", platform=platform)

    def execute_node(
        self,
        inputs: Mapping[str, Any],
        config: BedrockClaudeConfig,
        context: NodeExecutionContext,
    ) -> Dict[str, Any]:
        node_id = context.node_id
        start_time = time.time()
        self.logger.info(f"[BedrockClaude] Starting execution for node: {node_id}")

        result = call_bedrock_claude(
            config,
            self.build_credential_context(context),
            cache=self.platform.client_cache,
            resolver=self.platform.credential_resolver,
        )

        # Tool output takes precedence over text
        output = result["text"]
        tool_use = result.get("toolUse")
        if tool_use and tool_use.get("toolInput"):
            output = tool_use["toolInput"]

        self.logger.info(
            f"[BedrockClaude] Returning result for node: {node_id}, "
            f"total execution: {(time.time() - start_time) * 1000:.0f}ms"
        )
        return {
            "__outputs": {
                "output": output,
                "usage": result.get("usage"),
                "toolUse": tool_use,
            }
        }
