# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""Bedrock integration module for the Bedrock nodes package."""

from .client import (
    cleanup_client_cache,
    create_bedrock_client,
    initialize_bedrock_client,
)
from .error_messages import extract_error_code, to_embedding_error

__all__ = [
    "create_bedrock_client",
    "initialize_bedrock_client",
    "cleanup_client_cache",
    "extract_error_code",
    "to_embedding_error",
]
