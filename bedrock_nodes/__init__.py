# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

# Use true lazy loading for all submodules
from typing import TYPE_CHECKING

__version__ = "1.0.28"

# Cache for lazy-loaded submodules
_submodules = {}

# Type hints are only evaluated during type checking, not at runtime
if TYPE_CHECKING:
    from .client_cache import CacheKey as CacheKey
    from .client_cache import ClientCache as ClientCache
    from .plugin import plugin as plugin


def __getattr__(name):
    """Lazy load submodules only when accessed"""
    if name in [
        "bedrock",
        "claude",
        "client_cache",
        "config",
        "credentials",
        "embedding",
        "embedding_service",
        "exceptions",
        "platform",
        "plugin",
        "templating",
    ]:
        if name not in _submodules:
            _submodules[name] = __import__(f"bedrock_nodes.{name}", fromlist=["*"])
        return _submodules[name]

    # Special handling for directly exposed classes
    if name in ["CacheKey", "ClientCache"]:
        client_cache = __getattr__("client_cache")
        return getattr(client_cache, name)

    raise AttributeError(f"module 'bedrock_nodes' has no attribute '{name}'")


__all__ = [
    "bedrock",
    "claude",
    "client_cache",
    "config",
    "credentials",
    "embedding",
    "embedding_service",
    "exceptions",
    "platform",
    "plugin",
    "templating",
    "CacheKey",
    "ClientCache",
]
