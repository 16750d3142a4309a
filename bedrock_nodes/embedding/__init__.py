# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""BedrockEmbedding node, embedding service and validation helpers."""

from .node import BedrockEmbeddingExecutor, create_node_definition
from .service import (
    EmbeddingRequestConfig,
    generate_batch_embeddings,
    generate_embedding,
)

__all__ = [
    "BedrockEmbeddingExecutor",
    "create_node_definition",
    "EmbeddingRequestConfig",
    "generate_embedding",
    "generate_batch_embeddings",
]
