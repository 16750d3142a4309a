# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
BedrockEmbedding node.

Generates vector embeddings from text using AWS Bedrock Titan models.
"""

from typing import Any, Dict, Mapping

from ..bedrock.error_messages import to_embedding_error
from ..config.models import (
    DEFAULT_EMBEDDING_DIMENSIONS,
    DEFAULT_EMBEDDING_MODEL,
    BedrockEmbeddingConfig,
)
from ..platform import (
    NodeDefinition,
    NodeExecutionContext,
    NodeInputType,
    PromiseNode,
    ValidationResult,
)
from .service import EmbeddingRequestConfig, generate_embedding

LOGO_URL = "https://res.cloudinary.com/sonik/image/upload/v1749137717/gravity/icons/vdyfnijyuyk8ajqtp3nu.webp"

MAX_TEXT_TEMPLATE_LENGTH = 8192

EMBEDDING_MODEL_PROPERTY = {
    "type": "string",
    "title": "Model",
    "description": "Select the Bedrock embedding model to use",
    "enum": ["amazon.titan-embed-text-v2:0", "amazon.titan-embed-text-v1"],
    "enumNames": ["Titan Text Embeddings v2", "Titan Text Embeddings v1"],
    "default": DEFAULT_EMBEDDING_MODEL,
}

NORMALIZE_PROPERTY = {
    "type": "boolean",
    "title": "Normalize Embeddings",
    "description": "Whether to normalize the embedding vectors (recommended for similarity search)",
    "default": True,
    "ui:widget": "toggle",
}

DIMENSIONS_PROPERTY = {
    "type": "number",
    "title": "Output Dimensions",
    "description": "Number of dimensions for the output embedding",
    "enum": [256, 512, 1024],
    "enumNames": ["256 dimensions", "512 dimensions", "1024 dimensions"],
    "default": DEFAULT_EMBEDDING_DIMENSIONS,
}


def create_node_definition() -> NodeDefinition:
    return NodeDefinition(
        type="BedrockEmbedding",
        name="Bedrock Embedding",
        description="Generate vector embeddings from text using AWS Bedrock Titan models",
        package_version="1.0.30",
        logo_url=LOGO_URL,
        inputs=[
            {
                "name": "text",
                "type": NodeInputType.STRING,
                "description": "Text to convert into embeddings",
            }
        ],
        outputs=[
            {
                "name": "embedding",
                "type": NodeInputType.OBJECT,
                "description": "The embedding vector array",
            }
        ],
        config_schema={
            "type": "object",
            "properties": {
                "model": dict(EMBEDDING_MODEL_PROPERTY),
                "normalize": dict(NORMALIZE_PROPERTY),
                "dimensions": dict(DIMENSIONS_PROPERTY),
                "textTemplate": {
                    "type": "string",
                    "title": "Text Template",
                    "description": "Optional template to transform input text before embedding. Use {{text}} to reference the input.",
                    "default": "{{text}}",
                    "ui:field": "template",
                },
            },
            "required": ["model"],
        },
        credentials=[
            {
                "name": "awsCredential",
                "required": True,
                "displayName": "AWS Credentials",
                "description": "AWS credentials for accessing Bedrock",
            }
        ],
    )


class BedrockEmbeddingExecutor(PromiseNode):
    """Embeds the resolved text template once per incoming signal."""

    definition = create_node_definition()
    config_model = BedrockEmbeddingConfig

    def __init__(self, platform=None):
        super().__init__("BedrockEmbedding", platform=platform)

    def validate_config(self, config: BedrockEmbeddingConfig) -> ValidationResult:
        if not config.text_template:
            return ValidationResult(False, "Text is required for embedding generation")
        if len(config.text_template) > MAX_TEXT_TEMPLATE_LENGTH:
            return ValidationResult(
                False, "Text exceeds maximum length of 8192 characters"
            )
        if not config.model:
            return ValidationResult(False, "Model is required")
        return ValidationResult(True)

    def execute_node(
        self,
        inputs: Mapping[str, Any],
        config: BedrockEmbeddingConfig,
        context: NodeExecutionContext,
    ) -> Dict[str, Any]:
        text = config.text_template
        self.logger.info(
            f"Generating embedding using AWS Bedrock: model={config.model}, "
            f"textLength={len(text)}, dimensions={config.dimensions}, normalize={config.normalize}"
        )

        request_config = EmbeddingRequestConfig(
            model=config.model,
            dimensions=config.dimensions,
            normalize=config.normalize,
        )
        try:
            embedding = generate_embedding(
                text,
                request_config,
                self.build_credential_context(context),
                cache=self.platform.client_cache,
                resolver=self.platform.credential_resolver,
            )
        except Exception as e:
            raise to_embedding_error(e) from e

        self.logger.info(
            f"Successfully generated embedding: dimensions={len(embedding)}, "
            f"expected={config.dimensions}"
        )
        return {
            "__outputs": {
                "embedding": {
                    "embedding": embedding,
                    "dimensions": len(embedding),
                    "model": config.model,
                }
            }
        }
