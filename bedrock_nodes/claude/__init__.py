# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""BedrockClaude node and Converse service."""

from .node import BedrockClaudeExecutor, create_node_definition
from .service import call_bedrock_claude

__all__ = ["BedrockClaudeExecutor", "create_node_definition", "call_bedrock_claude"]
