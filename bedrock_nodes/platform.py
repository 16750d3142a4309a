# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Workflow host contract.

Defines the execution context the host hands to every node invocation, the
dependencies the host provides (credential resolution, the shared client
cache), and the PromiseNode base class the Bedrock nodes extend.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import ValidationError

from .client_cache import ClientCache
from .config.models import NodeConfig
from .credentials import (
    ContextCredentials,
    CredentialResolver,
    bundled_credential_resolver,
)
from .exceptions import ConfigValidationError, NodeContextError
from .templating import resolve_config_templates

logger = logging.getLogger(__name__)


class NodeInputType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


@dataclass
class NodeExecutionContext:
    """Execution-scoped context supplied by the host to each node invocation."""

    execution_id: str
    node_id: str
    workflow_id: str = ""
    node_type: str = ""
    config: Dict[str, Any] = field(default_factory=dict)
    credentials: Dict[str, Any] = field(default_factory=dict)
    workflow: Optional[Dict[str, Any]] = None

    @property
    def resolved_workflow_id(self) -> str:
        if self.workflow_id:
            return self.workflow_id
        return (self.workflow or {}).get("id", "")


@dataclass
class ValidationResult:
    success: bool
    error: Optional[str] = None


@dataclass
class NodeDefinition:
    """Node metadata registered with the host."""

    type: str
    name: str
    description: str
    package_version: str
    category: str = "AI"
    color: str = "#10a37f"
    logo_url: str = ""
    is_service: bool = False
    inputs: List[Dict[str, Any]] = field(default_factory=list)
    outputs: List[Dict[str, Any]] = field(default_factory=list)
    config_schema: Dict[str, Any] = field(default_factory=dict)
    credentials: List[Dict[str, Any]] = field(default_factory=list)
    service_connectors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def template_fields(self) -> Tuple[str, ...]:
        """Config properties the host marks as templates."""
        properties = self.config_schema.get("properties", {})
        return tuple(
            name
            for name, schema in properties.items()
            if schema.get("ui:field") == "template"
        )


@dataclass
class PlatformDependencies:
    """Services the host provides to every node."""

    credential_resolver: CredentialResolver = bundled_credential_resolver
    client_cache: ClientCache = field(default_factory=ClientCache)


_platform: Optional[PlatformDependencies] = None


def initialize_platform(
    credential_resolver: Optional[CredentialResolver] = None,
    client_cache: Optional[ClientCache] = None,
) -> PlatformDependencies:
    """Install the process-wide platform dependencies."""
    global _platform
    _platform = PlatformDependencies(
        credential_resolver=credential_resolver or bundled_credential_resolver,
        client_cache=client_cache if client_cache is not None else ClientCache(),
    )
    logger.info("Platform dependencies initialized")
    return _platform


def initialize_platform_from_api(api: Any) -> PlatformDependencies:
    """Install platform dependencies from a host plugin API object."""
    resolver = getattr(api, "get_node_credentials", None)
    return initialize_platform(credential_resolver=resolver)


def get_platform_dependencies() -> PlatformDependencies:
    """Return the installed platform dependencies, creating defaults on first use."""
    global _platform
    if _platform is None:
        _platform = PlatformDependencies()
    return _platform


class PromiseNode:
    """
    Base class for nodes that run once per signal and return an output envelope.

    Subclasses set ``definition`` and ``config_model`` and implement
    ``execute_node``; they may override ``validate_config``.
    """

    definition: NodeDefinition
    config_model: Type[NodeConfig] = NodeConfig

    def __init__(self, node_type: str, platform: Optional[PlatformDependencies] = None):
        self.node_type = node_type
        self.platform = platform or get_platform_dependencies()
        self.logger = logging.getLogger(type(self).__module__)

    def execute(
        self,
        inputs: Mapping[str, Any],
        config: Mapping[str, Any],
        context: NodeExecutionContext,
    ) -> Dict[str, Any]:
        """
        Resolve templates, validate configuration and run the node.

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        resolved = resolve_config_templates(
            config, inputs, self.definition.template_fields
        )
        node_config = self.parse_config(resolved)

        validation = self.validate_config(node_config)
        if not validation.success:
            self.logger.warning(
                f"[{self.node_type}] Invalid configuration for node {context.node_id}: {validation.error}"
            )
            raise ConfigValidationError(validation.error)

        return self.execute_node(inputs, node_config, context)

    def parse_config(self, config: Mapping[str, Any]) -> NodeConfig:
        try:
            return self.config_model.model_validate(dict(config))
        except ValidationError as e:
            raise ConfigValidationError(
                f"Invalid {self.node_type} configuration: {e}"
            ) from e

    def validate_config(self, config: NodeConfig) -> ValidationResult:
        return ValidationResult(success=True)

    def execute_node(
        self,
        inputs: Mapping[str, Any],
        config: NodeConfig,
        context: NodeExecutionContext,
    ) -> Dict[str, Any]:
        raise NotImplementedError

    def validate_and_get_context(
        self, context: NodeExecutionContext
    ) -> Tuple[str, str, str]:
        """
        Return (workflow_id, execution_id, node_id) from the context.

        Raises:
            NodeContextError: If execution_id or node_id is missing
        """
        if not context.execution_id:
            raise NodeContextError("Execution context is missing execution_id")
        if not context.node_id:
            raise NodeContextError("Execution context is missing node_id")
        return context.resolved_workflow_id, context.execution_id, context.node_id

    def build_credential_context(
        self, context: NodeExecutionContext
    ) -> ContextCredentials:
        workflow_id, execution_id, node_id = self.validate_and_get_context(context)
        return ContextCredentials(
            workflow_id=workflow_id,
            execution_id=execution_id,
            node_id=node_id,
            node_type=self.node_type,
            config=dict(context.config or {}),
            credentials=dict(context.credentials or {}),
        )
