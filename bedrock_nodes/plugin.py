# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Plugin entrypoint.

The host calls ``plugin.setup(api)`` once per process. Setup installs the
platform dependencies from the API object and registers the Bedrock nodes and
the AWS credential definition.

Example:
    from bedrock_nodes.plugin import plugin

    plugin.setup(host_api)
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type

from . import __version__
from .claude.node import BedrockClaudeExecutor
from .config import configure_logging
from .credentials import AWS_CREDENTIAL_NAME
from .embedding.node import BedrockEmbeddingExecutor
from .embedding_service.node import BedrockEmbeddingServiceExecutor
from .platform import PromiseNode, initialize_platform_from_api

logger = logging.getLogger(__name__)

PLUGIN_NAME = "bedrock_nodes"
PLUGIN_DESCRIPTION = "AWS Bedrock Claude and Titan embedding nodes"

NODE_EXECUTORS: List[Type[PromiseNode]] = [
    BedrockClaudeExecutor,
    BedrockEmbeddingExecutor,
    BedrockEmbeddingServiceExecutor,
]

AWS_CREDENTIAL: Dict[str, Any] = {
    "name": AWS_CREDENTIAL_NAME,
    "displayName": "AWS Credentials",
    "description": "AWS access keys for Amazon Bedrock",
    "properties": {
        "accessKeyId": {"type": "string", "title": "Access Key ID", "required": True},
        "secretAccessKey": {
            "type": "string",
            "title": "Secret Access Key",
            "required": True,
            "secret": True,
        },
        "region": {"type": "string", "title": "Region", "default": "us-east-1"},
    },
}


@dataclass
class Plugin:
    name: str
    version: str
    description: str
    setup: Callable[[Any], None]


def setup(api: Any) -> None:
    """
    Register the Bedrock nodes with the host.

    Args:
        api: Host plugin API exposing ``register_node(definition, executor)``,
            ``register_credential(definition)`` and optionally
            ``get_node_credentials(context, name)``
    """
    configure_logging()
    initialize_platform_from_api(api)

    for executor in NODE_EXECUTORS:
        api.register_node(executor.definition, executor)
        logger.info(f"Registered node {executor.definition.type}")

    api.register_credential(AWS_CREDENTIAL)
    logger.info(f"Registered credential {AWS_CREDENTIAL_NAME}")


def create_plugin() -> Plugin:
    return Plugin(
        name=PLUGIN_NAME,
        version=__version__,
        description=PLUGIN_DESCRIPTION,
        setup=setup,
    )


plugin = create_plugin()
