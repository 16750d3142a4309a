# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""Unit tests for Bedrock runtime client construction and caching."""

import logging
from unittest.mock import MagicMock, patch

import pytest
from bedrock_nodes.bedrock.client import (
    cleanup_client_cache,
    create_bedrock_client,
    initialize_bedrock_client,
)
from bedrock_nodes.client_cache import CacheKey
from bedrock_nodes.credentials import ContextCredentials, DirectCredentials
from bedrock_nodes.exceptions import CredentialsNotFoundError


def make_context(node_id="node-1", execution_id="exec-1"):
    return ContextCredentials(
        workflow_id="wf-1",
        execution_id=execution_id,
        node_id=node_id,
        node_type="BedrockClaude",
    )


@pytest.mark.unit
class TestCreateBedrockClient:
    @patch("bedrock_nodes.bedrock.client.boto3.client")
    def test_passes_keys_and_region(self, mock_client):
        create_bedrock_client(DirectCredentials("AKIA", "secret", "eu-central-1"))

        args, kwargs = mock_client.call_args
        assert args == ("bedrock-runtime",)
        assert kwargs["region_name"] == "eu-central-1"
        assert kwargs["aws_access_key_id"] == "AKIA"
        assert kwargs["aws_secret_access_key"] == "secret"
        assert kwargs["config"].read_timeout == 300

    @patch("bedrock_nodes.bedrock.client.get_settings")
    @patch("bedrock_nodes.bedrock.client.boto3.client")
    def test_defaults_region_when_missing(self, mock_client, mock_settings):
        mock_settings.return_value.default_region = "us-east-1"
        mock_settings.return_value.connect_timeout = 10
        mock_settings.return_value.read_timeout = 300

        create_bedrock_client(DirectCredentials("AKIA", "secret"))

        assert mock_client.call_args.kwargs["region_name"] == "us-east-1"


@pytest.mark.unit
class TestInitializeBedrockClient:
    def test_direct_credentials_are_not_cached(self, bedrock_runtime, client_cache):
        creds = DirectCredentials("AKIA", "secret", "us-west-2")

        initialize_bedrock_client(creds, cache=client_cache)
        initialize_bedrock_client(creds, cache=client_cache)

        assert bedrock_runtime.factory.call_count == 2
        assert len(client_cache) == 0

    def test_context_credentials_are_cached(
        self, bedrock_runtime, client_cache, credential_resolver
    ):
        context = make_context()

        first = initialize_bedrock_client(
            context, cache=client_cache, resolver=credential_resolver
        )
        second = initialize_bedrock_client(
            context, cache=client_cache, resolver=credential_resolver
        )

        assert first is bedrock_runtime
        assert second is bedrock_runtime
        credential_resolver.assert_called_once_with(context, "awsCredential")
        assert bedrock_runtime.factory.call_count == 1
        assert CacheKey("node-1", "BedrockClaude", "exec-1") in client_cache

    def test_resolved_credential_is_used_for_client(
        self, bedrock_runtime, client_cache, credential_resolver
    ):
        initialize_bedrock_client(
            make_context(), cache=client_cache, resolver=credential_resolver
        )

        kwargs = bedrock_runtime.factory.call_args.kwargs
        assert kwargs["aws_access_key_id"] == "AKIATESTKEY"
        assert kwargs["region_name"] == "us-west-2"

    def test_logs_creation_and_reuse(
        self, bedrock_runtime, client_cache, credential_resolver, caplog
    ):
        context = make_context()

        with caplog.at_level(
            logging.DEBUG, logger="bedrock_nodes.client_cache"
        ), caplog.at_level(logging.DEBUG, logger="bedrock_nodes.bedrock.client"):
            initialize_bedrock_client(
                context, cache=client_cache, resolver=credential_resolver
            )
            initialize_bedrock_client(
                context, cache=client_cache, resolver=credential_resolver
            )

        client_messages = [
            r.getMessage()
            for r in caplog.records
            if r.name == "bedrock_nodes.bedrock.client"
        ]
        assert (
            "Created and cached new Bedrock client: node-1_BedrockClaude_exec-1"
            in client_messages
        )
        assert (
            "Using cached Bedrock client: node-1_BedrockClaude_exec-1" in client_messages
        )
        cache_messages = [
            r.getMessage()
            for r in caplog.records
            if r.name == "bedrock_nodes.client_cache"
        ]
        assert cache_messages
        assert not any("Bedrock" in message for message in cache_messages)

    def test_expired_client_triggers_new_lookup(
        self, bedrock_runtime, client_cache, credential_resolver, clock
    ):
        context = make_context()
        initialize_bedrock_client(context, cache=client_cache, resolver=credential_resolver)

        clock.advance(300)
        initialize_bedrock_client(context, cache=client_cache, resolver=credential_resolver)

        assert credential_resolver.call_count == 2

    def test_other_execution_gets_its_own_client(
        self, bedrock_runtime, client_cache, credential_resolver
    ):
        initialize_bedrock_client(
            make_context(execution_id="exec-1"),
            cache=client_cache,
            resolver=credential_resolver,
        )
        initialize_bedrock_client(
            make_context(execution_id="exec-2"),
            cache=client_cache,
            resolver=credential_resolver,
        )

        assert len(client_cache) == 2

    def test_missing_credentials_raise_and_cache_nothing(
        self, bedrock_runtime, client_cache
    ):
        resolver = MagicMock(return_value=None)

        with pytest.raises(CredentialsNotFoundError, match="AWS credentials not found"):
            initialize_bedrock_client(make_context(), cache=client_cache, resolver=resolver)

        assert len(client_cache) == 0
        bedrock_runtime.factory.assert_not_called()

    def test_unknown_credential_source_rejected(self, client_cache):
        with pytest.raises(TypeError):
            initialize_bedrock_client({"accessKeyId": "AKIA"}, cache=client_cache)

    def test_cleanup_sweeps_cache(self, client_cache):
        client_cache.sweep = MagicMock()
        cleanup_client_cache(client_cache)
        client_cache.sweep.assert_called_once_with()
