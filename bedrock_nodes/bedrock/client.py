# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Bedrock runtime client management.

Builds boto3 ``bedrock-runtime`` clients from AWS credentials and caches the
ones built for an execution scope in a ClientCache.
"""

import logging
from typing import Optional

import boto3
from botocore.config import Config

from ..client_cache import CacheKey, ClientCache
from ..config import get_settings
from ..credentials import (
    ContextCredentials,
    CredentialResolver,
    CredentialSource,
    DirectCredentials,
    resolve_credentials,
)
from ..platform import get_platform_dependencies

logger = logging.getLogger(__name__)


def create_bedrock_client(credentials: DirectCredentials):
    """
    Create a Bedrock runtime client for the given AWS keys.

    Args:
        credentials: AWS keys and optional region

    Returns:
        A boto3 bedrock-runtime client
    """
    settings = get_settings()
    region = credentials.region or settings.default_region
    config = Config(
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
    )
    logger.debug(f"Creating Bedrock runtime client in region {region}")
    return boto3.client(
        "bedrock-runtime",
        region_name=region,
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key,
        config=config,
    )


def initialize_bedrock_client(
    credentials: CredentialSource,
    cache: Optional[ClientCache] = None,
    resolver: Optional[CredentialResolver] = None,
):
    """
    Return a Bedrock runtime client for a credential source.

    Direct credentials always get a fresh client. Context credentials are
    resolved through the host and the resulting client is cached per
    (node id, node type, execution id) for the cache TTL.

    Args:
        credentials: DirectCredentials or ContextCredentials
        cache: Client cache (defaults to the platform cache)
        resolver: Credential resolver (defaults to the platform resolver)

    Raises:
        CredentialsNotFoundError: If the host has no AWS credential for the node
    """
    if isinstance(credentials, DirectCredentials):
        return create_bedrock_client(credentials)

    if not isinstance(credentials, ContextCredentials):
        raise TypeError(
            f"Unsupported credential source: {type(credentials).__name__}"
        )

    platform = get_platform_dependencies()
    if cache is None:
        cache = platform.client_cache
    if resolver is None:
        resolver = platform.credential_resolver

    key = CacheKey.from_context(credentials)
    created = False

    def factory():
        nonlocal created
        created = True
        return create_bedrock_client(resolve_credentials(credentials, resolver))

    client = cache.get_or_create(key, factory)
    if created:
        logger.debug(f"Created and cached new Bedrock client: {key}")
    else:
        logger.debug(f"Using cached Bedrock client: {key}")
    return client


def cleanup_client_cache(cache: Optional[ClientCache] = None) -> None:
    """Drop expired clients from the cache."""
    if cache is None:
        cache = get_platform_dependencies().client_cache
    cache.sweep()
