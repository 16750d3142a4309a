# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
AWS credential sources for the Bedrock nodes.

A node either carries its AWS keys directly (DirectCredentials) or names an
execution scope whose credential the host platform resolves on demand
(ContextCredentials). Only the latter goes through the client cache.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .exceptions import CredentialsNotFoundError

logger = logging.getLogger(__name__)

AWS_CREDENTIAL_NAME = "awsCredential"


@dataclass(frozen=True)
class DirectCredentials:
    """AWS keys supplied by the caller."""

    access_key_id: str
    secret_access_key: str
    region: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DirectCredentials":
        """
        Build from a host credential record.

        Accepts the host's camelCase keys (accessKeyId, secretAccessKey, region)
        as well as snake_case.
        """
        access_key_id = data.get("accessKeyId") or data.get("access_key_id")
        secret_access_key = data.get("secretAccessKey") or data.get(
            "secret_access_key"
        )
        if not access_key_id or not secret_access_key:
            raise CredentialsNotFoundError(
                "AWS credential is missing accessKeyId or secretAccessKey"
            )
        return cls(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            region=data.get("region") or None,
        )


@dataclass(frozen=True)
class ContextCredentials:
    """Execution scope whose AWS credential must be resolved by the host."""

    workflow_id: str
    execution_id: str
    node_id: str
    node_type: str
    config: Dict[str, Any] = field(default_factory=dict, compare=False)
    credentials: Dict[str, Any] = field(default_factory=dict, compare=False)


CredentialSource = Union[DirectCredentials, ContextCredentials]

# (context, credential name) -> credential record or None
CredentialResolver = Callable[[ContextCredentials, str], Optional[Mapping[str, Any]]]


def resolve_credentials(
    context: ContextCredentials,
    resolver: CredentialResolver,
    credential_name: str = AWS_CREDENTIAL_NAME,
) -> DirectCredentials:
    """
    Resolve the named credential for an execution scope.

    Raises:
        CredentialsNotFoundError: If the host has no such credential
    """
    logger.debug(
        f"Resolving credential '{credential_name}' for node {context.node_id} "
        f"in execution {context.execution_id}"
    )
    record = resolver(context, credential_name)
    if not record:
        raise CredentialsNotFoundError()
    if isinstance(record, DirectCredentials):
        return record
    return DirectCredentials.from_mapping(record)


def bundled_credential_resolver(
    context: ContextCredentials, credential_name: str
) -> Optional[Mapping[str, Any]]:
    """
    Resolve a credential from the bundle the host attached to the context.

    Used when no platform resolver has been installed.
    """
    return context.credentials.get(credential_name)
