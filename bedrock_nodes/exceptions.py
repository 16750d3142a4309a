# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Bedrock node exceptions.

Custom exception classes raised by the Bedrock workflow nodes.
"""

from typing import Iterable, Optional


class BedrockNodeError(Exception):
    """Base exception for all Bedrock node errors."""

    pass


class CredentialsNotFoundError(BedrockNodeError):
    """Raised when the host has no AWS credential configured for the node."""

    def __init__(self, message: str = "AWS credentials not found"):
        super().__init__(message)


class NodeContextError(BedrockNodeError):
    """
    Raised when the execution context is missing required identifiers.

    Examples:
        - execution_id missing
        - node_id missing
    """

    pass


class ConfigValidationError(BedrockNodeError):
    """
    Raised when node configuration fails validation.

    Examples:
        - Text template missing or too long
        - Unsupported embedding model
        - Invalid dimensions for Titan v2
    """

    pass


class ImageFetchError(BedrockNodeError):
    """Raised when an image referenced by URL cannot be downloaded."""

    pass


class BedrockResponseError(BedrockNodeError):
    """Raised when Bedrock returns a response without usable output."""

    pass


class EmbeddingError(BedrockNodeError):
    """Raised when embedding generation fails."""

    pass


class InvalidModelError(EmbeddingError):
    """Bedrock rejected the model id or request parameters."""

    def __init__(self, message: str = "Invalid model or parameters for Bedrock"):
        super().__init__(message)


class BedrockAccessDeniedError(EmbeddingError):
    """The AWS credential lacks permission to invoke the model."""

    def __init__(
        self, message: str = "AWS credentials lack permission to access Bedrock"
    ):
        super().__init__(message)


class ModelNotAvailableError(EmbeddingError):
    """The model is not available in the credential's region."""

    def __init__(
        self, message: str = "Selected model not available in your AWS region"
    ):
        super().__init__(message)


class ServiceNodeInvocationError(BedrockNodeError):
    """Raised when a service node is executed as a regular workflow step."""

    pass


class UnsupportedMethodError(BedrockNodeError):
    """Raised when a service call names a method the node does not provide."""

    def __init__(self, method: str, available: Optional[Iterable[str]] = None):
        self.method = method
        self.available = list(available or [])
        message = f"Unknown service method: {method}"
        if self.available:
            message += f". Available methods: {', '.join(self.available)}"
        super().__init__(message)
