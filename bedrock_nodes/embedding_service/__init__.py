# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""BedrockEmbeddingService service node."""

from .methods import create_batch_embeddings, create_embedding
from .node import BedrockEmbeddingServiceExecutor, ServiceMethod, create_node_definition

__all__ = [
    "BedrockEmbeddingServiceExecutor",
    "ServiceMethod",
    "create_node_definition",
    "create_embedding",
    "create_batch_embeddings",
]
