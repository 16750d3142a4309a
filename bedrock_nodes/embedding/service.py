# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Text embeddings via AWS Bedrock Titan models.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError

from ..bedrock.client import initialize_bedrock_client
from ..client_cache import ClientCache
from ..config.models import DEFAULT_EMBEDDING_DIMENSIONS, DEFAULT_EMBEDDING_MODEL
from ..credentials import CredentialResolver, CredentialSource

logger = logging.getLogger(__name__)


@dataclass
class EmbeddingRequestConfig:
    model: Optional[str] = None
    dimensions: Optional[int] = None
    normalize: Optional[bool] = None


def build_embedding_request(text: str, config: EmbeddingRequestConfig) -> Dict[str, Any]:
    """Build the InvokeModel body; only Titan v2 accepts dimensions and normalize."""
    model = config.model or DEFAULT_EMBEDDING_MODEL
    request_body: Dict[str, Any] = {"inputText": text}
    if "v2" in model:
        request_body["dimensions"] = config.dimensions or DEFAULT_EMBEDDING_DIMENSIONS
        if config.normalize is not None:
            request_body["normalize"] = config.normalize
    return request_body


def generate_embedding(
    text: str,
    config: EmbeddingRequestConfig,
    credentials: CredentialSource,
    cache: Optional[ClientCache] = None,
    resolver: Optional[CredentialResolver] = None,
) -> List[float]:
    """
    Generate a single embedding using AWS Bedrock.

    Args:
        text: The text to embed
        config: Model, dimensions and normalize options
        credentials: Direct credentials or an execution scope to resolve
        cache: Client cache (defaults to the platform cache)
        resolver: Credential resolver (defaults to the platform resolver)

    Returns:
        The embedding vector

    Raises:
        botocore.exceptions.ClientError: Provider errors, unchanged
    """
    client = initialize_bedrock_client(credentials, cache=cache, resolver=resolver)
    model = config.model or DEFAULT_EMBEDDING_MODEL
    request_body = build_embedding_request(text, config)

    logger.debug(f"Bedrock embedding request: model={model}, textLength={len(text)}")
    start_time = time.time()
    try:
        response = client.invoke_model(
            modelId=model,
            contentType="application/json",
            accept="application/json",
            body=json.dumps(request_body),
        )
    except ClientError as e:
        logger.error(
            f"AWS Bedrock embedding generation failed: {e} "
            f"(model={model}, textLength={len(text)})"
        )
        raise

    response_body = json.loads(response["body"].read())
    embedding = response_body.get("embedding", [])
    logger.debug(
        f"Generated embedding with {len(embedding)} dimensions in {time.time() - start_time:.2f}s"
    )
    return embedding


def generate_batch_embeddings(
    texts: List[str],
    config: EmbeddingRequestConfig,
    credentials: CredentialSource,
    cache: Optional[ClientCache] = None,
    resolver: Optional[CredentialResolver] = None,
) -> List[List[float]]:
    """
    Generate embeddings for multiple texts.

    Bedrock has no batch embedding API, so texts are embedded one at a time;
    the cached client is reused across the batch.
    """
    return [
        generate_embedding(text, config, credentials, cache=cache, resolver=resolver)
        for text in texts
    ]
