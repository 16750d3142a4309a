# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Bedrock error classification.

Maps Bedrock service errors onto the user-reportable exceptions raised by the
embedding nodes. Provider errors for the Claude node are surfaced unchanged.
"""

import logging
import re
from typing import Dict, Optional, Type

import botocore.exceptions

from ..exceptions import (
    BedrockAccessDeniedError,
    EmbeddingError,
    InvalidModelError,
    ModelNotAvailableError,
)

logger = logging.getLogger(__name__)

EMBEDDING_ERROR_MAPPINGS: Dict[str, Type[EmbeddingError]] = {
    "ValidationException": InvalidModelError,
    "AccessDeniedException": BedrockAccessDeniedError,
    "ResourceNotFoundException": ModelNotAvailableError,
}


def extract_error_code(exception: Exception) -> Optional[str]:
    """
    Extract the Bedrock error code from an exception.

    Args:
        exception: The exception to analyze

    Returns:
        The error code if found, None otherwise
    """
    if isinstance(exception, botocore.exceptions.ClientError):
        error_code = exception.response.get("Error", {}).get("Code")
        if error_code:
            return error_code

        # EventStreamError format: "An error occurred (errorCode) when calling..."
        match = re.search(r"\((\w+)\)", str(exception))
        if match:
            return match.group(1)

    exception_name = type(exception).__name__
    if exception_name in EMBEDDING_ERROR_MAPPINGS:
        return exception_name

    message = str(exception)
    for error_code in EMBEDDING_ERROR_MAPPINGS:
        if error_code in message:
            return error_code

    return None


def to_embedding_error(exception: Exception) -> EmbeddingError:
    """Convert any failure from the embedding call into a user-facing EmbeddingError."""
    if isinstance(exception, EmbeddingError):
        return exception

    error_code = extract_error_code(exception)
    error_class = EMBEDDING_ERROR_MAPPINGS.get(error_code) if error_code else None
    if error_class is not None:
        logger.debug(f"Classified embedding failure as {error_class.__name__}")
        return error_class()

    return EmbeddingError(f"Failed to generate embedding: {exception}")
