# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""Unit tests for AWS credential sources."""

from unittest.mock import MagicMock

import pytest
from bedrock_nodes.credentials import (
    AWS_CREDENTIAL_NAME,
    ContextCredentials,
    DirectCredentials,
    bundled_credential_resolver,
    resolve_credentials,
)
from bedrock_nodes.exceptions import CredentialsNotFoundError


def make_context(credentials=None):
    return ContextCredentials(
        workflow_id="wf-1",
        execution_id="exec-1",
        node_id="node-1",
        node_type="BedrockClaude",
        credentials=credentials or {},
    )


@pytest.mark.unit
class TestDirectCredentials:
    def test_from_camel_case_mapping(self):
        creds = DirectCredentials.from_mapping(
            {"accessKeyId": "AKIA", "secretAccessKey": "secret", "region": "eu-west-1"}
        )
        assert creds == DirectCredentials("AKIA", "secret", "eu-west-1")

    def test_from_snake_case_mapping(self):
        creds = DirectCredentials.from_mapping(
            {"access_key_id": "AKIA", "secret_access_key": "secret"}
        )
        assert creds.access_key_id == "AKIA"
        assert creds.region is None

    def test_empty_region_becomes_none(self):
        creds = DirectCredentials.from_mapping(
            {"accessKeyId": "AKIA", "secretAccessKey": "secret", "region": ""}
        )
        assert creds.region is None

    def test_missing_secret_raises(self):
        with pytest.raises(CredentialsNotFoundError, match="secretAccessKey"):
            DirectCredentials.from_mapping({"accessKeyId": "AKIA"})


@pytest.mark.unit
class TestResolveCredentials:
    def test_resolver_receives_context_and_name(self):
        resolver = MagicMock(
            return_value={"accessKeyId": "AKIA", "secretAccessKey": "secret"}
        )
        context = make_context()

        creds = resolve_credentials(context, resolver)

        resolver.assert_called_once_with(context, AWS_CREDENTIAL_NAME)
        assert creds == DirectCredentials("AKIA", "secret")

    def test_resolver_may_return_direct_credentials(self):
        direct = DirectCredentials("AKIA", "secret", "us-west-2")
        assert resolve_credentials(make_context(), lambda c, n: direct) is direct

    @pytest.mark.parametrize("record", [None, {}])
    def test_missing_credential_raises_not_found(self, record):
        with pytest.raises(CredentialsNotFoundError, match="AWS credentials not found"):
            resolve_credentials(make_context(), lambda c, n: record)

    def test_bundled_resolver_reads_context_bundle(self):
        bundle = {"awsCredential": {"accessKeyId": "AKIA", "secretAccessKey": "s"}}
        context = make_context(bundle)

        assert bundled_credential_resolver(context, "awsCredential") == bundle[
            "awsCredential"
        ]
        assert bundled_credential_resolver(context, "other") is None

    def test_context_equality_ignores_config_and_bundle(self):
        assert make_context({"a": 1}) == make_context({"b": 2})
