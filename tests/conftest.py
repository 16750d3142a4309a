# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Pytest configuration file for the Bedrock nodes tests.
"""

import io
import json
import os
from unittest.mock import MagicMock, patch

import pytest

# Set up AWS credentials and region BEFORE any imports that might use boto3
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

from bedrock_nodes.client_cache import ClientCache  # noqa: E402
from bedrock_nodes.platform import (  # noqa: E402
    NodeExecutionContext,
    PlatformDependencies,
)

AWS_CREDENTIAL = {
    "accessKeyId": "AKIATESTKEY",
    "secretAccessKey": "test-secret",
    "region": "us-west-2",
}


class FakeClock:
    """Controllable clock for cache expiry tests."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with all AWS calls mocked")


@pytest.fixture
def embedding_response():
    """Build an InvokeModel response with a readable body."""

    def build(embedding):
        return {"body": io.BytesIO(json.dumps({"embedding": embedding}).encode("utf-8"))}

    return build


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client_cache(clock):
    return ClientCache(clock=clock)


@pytest.fixture
def credential_resolver():
    return MagicMock(return_value=dict(AWS_CREDENTIAL))


@pytest.fixture
def platform(credential_resolver, client_cache):
    return PlatformDependencies(
        credential_resolver=credential_resolver, client_cache=client_cache
    )


@pytest.fixture
def bedrock_runtime():
    """A mocked bedrock-runtime client returned by boto3.client."""
    runtime = MagicMock()
    with patch(
        "bedrock_nodes.bedrock.client.boto3.client", return_value=runtime
    ) as mock_client:
        runtime.factory = mock_client
        yield runtime


@pytest.fixture
def execution_context():
    return NodeExecutionContext(
        execution_id="exec-1",
        node_id="node-1",
        workflow_id="wf-1",
        config={},
        credentials={"awsCredential": dict(AWS_CREDENTIAL)},
    )
