# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Service methods exposed by the BedrockEmbeddingService node.

These are invoked by other nodes through host service calls, not by regular
workflow execution.
"""

import logging
from typing import Any, Dict, Optional

from ..client_cache import ClientCache
from ..config.models import BedrockEmbeddingServiceConfig
from ..credentials import ContextCredentials, CredentialResolver
from ..embedding.service import (
    EmbeddingRequestConfig,
    generate_batch_embeddings,
    generate_embedding,
)
from ..embedding.validation import (
    validate_bedrock_config,
    validate_embedding_input,
    validate_embedding_text,
)
from ..exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


def _request_config(config: BedrockEmbeddingServiceConfig) -> EmbeddingRequestConfig:
    request_config = EmbeddingRequestConfig(
        model=config.model,
        dimensions=config.dimensions,
        normalize=config.normalize,
    )
    validation = validate_bedrock_config(request_config.model, request_config.dimensions)
    if not validation.success:
        raise ConfigValidationError(validation.error)
    return request_config


def create_embedding(
    params: Dict[str, Any],
    config: BedrockEmbeddingServiceConfig,
    credentials: ContextCredentials,
    cache: Optional[ClientCache] = None,
    resolver: Optional[CredentialResolver] = None,
) -> Dict[str, Any]:
    """
    Service method: create a single embedding.

    Args:
        params: ``{"text": str}``
        config: Service node configuration
        credentials: Execution scope of the service node

    Returns:
        ``{"embedding", "dimensions", "model"}``

    Raises:
        ConfigValidationError: If the text or model configuration is invalid
    """
    validation = validate_embedding_input(params)
    if not validation.success:
        raise ConfigValidationError(validation.error)

    processed_text = params["text"].strip()
    validation = validate_embedding_text(processed_text)
    if not validation.success:
        raise ConfigValidationError(validation.error)

    request_config = _request_config(config)
    logger.info(
        f"createEmbedding called: textLength={len(processed_text)}, "
        f"model={request_config.model}, dimensions={request_config.dimensions}, "
        f"normalize={request_config.normalize}"
    )

    embedding = generate_embedding(
        processed_text, request_config, credentials, cache=cache, resolver=resolver
    )

    logger.info(f"Embedding generated successfully: length={len(embedding)}")
    return {
        "embedding": embedding,
        "dimensions": len(embedding),
        "model": request_config.model,
    }


def create_batch_embeddings(
    params: Dict[str, Any],
    config: BedrockEmbeddingServiceConfig,
    credentials: ContextCredentials,
    cache: Optional[ClientCache] = None,
    resolver: Optional[CredentialResolver] = None,
) -> Dict[str, Any]:
    """
    Service method: create embeddings for a list of texts.

    Args:
        params: ``{"texts": List[str]}``

    Returns:
        ``{"embeddings", "dimensions", "model", "count"}``

    Raises:
        ConfigValidationError: If texts is not a non-empty list, any text is
            invalid, or the model configuration is invalid
    """
    texts = (params or {}).get("texts")
    if not isinstance(texts, list):
        raise ConfigValidationError("texts must be an array")
    if not texts:
        raise ConfigValidationError("texts array cannot be empty")

    valid_texts = []
    for i, text in enumerate(texts):
        processed_text = text.strip() if isinstance(text, str) else ""
        validation = validate_embedding_text(processed_text)
        if not validation.success:
            raise ConfigValidationError(f"Text at index {i}: {validation.error}")
        valid_texts.append(processed_text)

    request_config = _request_config(config)
    logger.info(
        f"Creating batch embeddings for {len(valid_texts)} texts: "
        f"model={request_config.model}, dimensions={request_config.dimensions}"
    )

    embeddings = generate_batch_embeddings(
        valid_texts, request_config, credentials, cache=cache, resolver=resolver
    )

    logger.info(f"Successfully generated {len(embeddings)} embeddings")
    return {
        "embeddings": embeddings,
        "dimensions": len(embeddings[0]) if embeddings else 0,
        "model": request_config.model,
        "count": len(embeddings),
    }
