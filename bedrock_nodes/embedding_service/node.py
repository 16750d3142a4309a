# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
BedrockEmbeddingService node.

A pure service node: it has no workflow inputs or outputs and only answers
service calls (createEmbedding, createBatchEmbeddings) from other nodes.
"""

from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import ValidationError

from ..config.models import BedrockEmbeddingServiceConfig
from ..embedding.node import (
    DIMENSIONS_PROPERTY,
    EMBEDDING_MODEL_PROPERTY,
    LOGO_URL,
    NORMALIZE_PROPERTY,
)
from ..exceptions import (
    ConfigValidationError,
    ServiceNodeInvocationError,
    UnsupportedMethodError,
)
from ..platform import NodeDefinition, NodeExecutionContext, PromiseNode
from .methods import create_batch_embeddings, create_embedding


class ServiceMethod(str, Enum):
    CREATE_EMBEDDING = "createEmbedding"
    CREATE_BATCH_EMBEDDINGS = "createBatchEmbeddings"

    @classmethod
    def from_name(cls, name: str) -> "ServiceMethod":
        """
        Raises:
            UnsupportedMethodError: If name is not a supported method
        """
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedMethodError(name, [m.value for m in cls]) from None


SERVICE_HANDLERS: Dict[ServiceMethod, Callable[..., Dict[str, Any]]] = {
    ServiceMethod.CREATE_EMBEDDING: create_embedding,
    ServiceMethod.CREATE_BATCH_EMBEDDINGS: create_batch_embeddings,
}


def create_node_definition() -> NodeDefinition:
    return NodeDefinition(
        type="BedrockEmbeddingService",
        name="Embedding Service",
        description="AWS Bedrock embedding service provider - responds to SERVICE_CALL signals",
        package_version="1.0.25",
        logo_url=LOGO_URL,
        is_service=True,
        service_connectors=[
            {
                "name": "embeddingService",
                "description": "Provides embedding generation services",
                "serviceType": "embedding",
                "methods": [m.value for m in ServiceMethod],
            }
        ],
        config_schema={
            "type": "object",
            "properties": {
                "model": dict(EMBEDDING_MODEL_PROPERTY),
                "normalize": dict(NORMALIZE_PROPERTY),
                "dimensions": dict(DIMENSIONS_PROPERTY),
            },
            "required": ["model"],
        },
        credentials=[
            {
                "name": "awsCredential",
                "required": True,
                "displayName": "AWS Credentials",
                "description": "AWS credentials for accessing Bedrock API",
            }
        ],
    )


class BedrockEmbeddingServiceExecutor(PromiseNode):
    """Dispatches host service calls to the embedding service methods."""

    definition = create_node_definition()
    config_model = BedrockEmbeddingServiceConfig

    def __init__(self, platform=None):
        super().__init__("BedrockEmbeddingService", platform=platform)

    def execute_node(
        self,
        inputs: Mapping[str, Any],
        config: BedrockEmbeddingServiceConfig,
        context: NodeExecutionContext,
    ) -> Dict[str, Any]:
        raise ServiceNodeInvocationError(
            "BedrockEmbeddingService is a service node - it should only be invoked "
            "via SERVICE_CALL signals, not regular workflow execution"
        )

    def parse_service_config(
        self, config: Optional[Dict[str, Any]]
    ) -> BedrockEmbeddingServiceConfig:
        try:
            return BedrockEmbeddingServiceConfig.from_service_config(config)
        except ValidationError as e:
            raise ConfigValidationError(
                f"Invalid {self.node_type} configuration: {e}"
            ) from e

    def handle_service_call(
        self,
        method: str,
        params: Optional[Dict[str, Any]],
        config: Optional[Dict[str, Any]],
        context: NodeExecutionContext,
    ) -> Dict[str, Any]:
        """
        Run the named service method and return its result.

        Raises:
            UnsupportedMethodError: If method is not a supported service method
            ConfigValidationError: If the config or params are invalid
        """
        self.logger.info(f"Handling SERVICE_CALL: {method} for node {context.node_id}")

        try:
            handler = SERVICE_HANDLERS[ServiceMethod.from_name(method)]
            service_config = self.parse_service_config(config)
            result = handler(
                params or {},
                service_config,
                self.build_credential_context(context),
                cache=self.platform.client_cache,
                resolver=self.platform.credential_resolver,
            )
        except Exception as e:
            self.logger.error(
                f"SERVICE_CALL failed: {method} for node {context.node_id}: {e}"
            )
            raise

        self.logger.info(f"SERVICE_CALL completed: {method} for node {context.node_id}")
        return result
