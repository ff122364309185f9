"""Shared fixtures: credentials backed by mocked boto3 clients."""

import io
from collections import defaultdict
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from rich.console import Console

from skyform_aws.core import ProviderUI, State
from skyform_aws.utils import AwsCredentials


@pytest.fixture
def clients():
    """One MagicMock per service name, created on first use."""
    return defaultdict(MagicMock)


@pytest.fixture
def session(clients):
    session = MagicMock()
    session.region_name = 'us-east-1'
    session.client.side_effect = lambda service_name, **kwargs: clients[service_name]
    return session


@pytest.fixture
def credentials(session):
    return AwsCredentials(region='us-east-1', session=session)


@pytest.fixture
def state(credentials):
    return State(credentials=credentials)


@pytest.fixture
def ui():
    return ProviderUI(console=Console(file=io.StringIO()))


@pytest.fixture
def client_error():
    """Factory for ClientErrors carrying an AWS error code."""
    def make(code, operation='Describe'):
        return ClientError({'Error': {'Code': code, 'Message': f"{code} raised"}}, operation)
    return make


@pytest.fixture(autouse=True)
def sleep(monkeypatch):
    """Keep waits and retries from sleeping."""
    sleep = MagicMock()
    monkeypatch.setattr('skyform_aws.utils.retry.time.sleep', sleep)
    return sleep
