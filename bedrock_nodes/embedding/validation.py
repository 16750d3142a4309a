# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Validation utilities for the Bedrock embedding nodes.
"""

from typing import Any, Optional

from ..platform import ValidationResult

SUPPORTED_EMBEDDING_MODELS = [
    "amazon.titan-embed-text-v1",
    "amazon.titan-embed-text-v2:0",
    "amazon.titan-embed-image-v1",
    "cohere.embed-english-v3",
    "cohere.embed-multilingual-v3",
]

TITAN_V2_DIMENSIONS = (256, 512, 1024)

# Bedrock token limits vary by model; reject very long texts up front
MAX_EMBEDDING_TEXT_LENGTH = 25000


def validate_bedrock_config(
    model: Optional[str], dimensions: Optional[int] = None
) -> ValidationResult:
    """Validate an embedding model id and its requested dimensions."""
    if not model or not isinstance(model, str):
        return ValidationResult(False, "Model name is missing or invalid")

    if not any(supported in model for supported in SUPPORTED_EMBEDDING_MODELS):
        return ValidationResult(
            False,
            f"Unsupported model: {model}. Supported models: {', '.join(SUPPORTED_EMBEDDING_MODELS)}",
        )

    if dimensions is not None:
        if isinstance(dimensions, bool) or not isinstance(dimensions, int) or dimensions <= 0:
            return ValidationResult(False, "Dimensions must be a positive number")
        if "titan-embed-text-v2" in model and dimensions not in TITAN_V2_DIMENSIONS:
            return ValidationResult(
                False, "Titan Embed Text v2 only supports dimensions: 256, 512, or 1024"
            )

    return ValidationResult(True)


def validate_embedding_text(text: Any) -> ValidationResult:
    """Validate a single text to embed."""
    if not text or not isinstance(text, str):
        return ValidationResult(False, "Text input is required and must be a string")

    if not text.strip():
        return ValidationResult(False, "Text input cannot be empty")

    if len(text) > MAX_EMBEDDING_TEXT_LENGTH:
        return ValidationResult(
            False, "Text input is too long (max ~25,000 characters)"
        )

    return ValidationResult(True)


def validate_embedding_input(params: Any) -> ValidationResult:
    """Validate createEmbedding service-call parameters."""
    if not isinstance(params, dict):
        return ValidationResult(False, "Input must be an object")

    if not params.get("text"):
        return ValidationResult(False, "Text is required")

    if not isinstance(params["text"], str):
        return ValidationResult(False, "Text must be a string")

    return ValidationResult(True)
