"""
Shared fixtures: configurations, a scripted transport and wired pipelines.
"""

import pytest

from square_sdk.client import SquareClient
from square_sdk.config.value_objects import ClientConfig, Environment, RetryConfig
from square_sdk.core.auth import create_auth_provider
from square_sdk.core.error_mapper import create_error_mapper_chain
from square_sdk.core.pipeline import RequestPipeline
from square_sdk.core.retry import RetryPolicy
from tests.fixtures import FakeHttpClient, RecordingSleep

TOKEN = "EAAAl-test-token"


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(environment=Environment.SANDBOX, access_token=TOKEN)


@pytest.fixture
def transport() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_pipeline(transport, sleep):
    """Factory for a pipeline over the fake transport with instant backoff."""

    def _make(config: ClientConfig | None = None, **retry_changes) -> RequestPipeline:
        config = config or ClientConfig(environment=Environment.SANDBOX, access_token=TOKEN)
        if retry_changes:
            config = config.with_overrides(
                retry_config=RetryConfig(**retry_changes)
            )
        return RequestPipeline(
            config=config,
            http_client=transport,
            auth_provider=create_auth_provider(config),
            retry_policy=RetryPolicy(config.retry_config),
            error_mapper=create_error_mapper_chain(),
            sleep=sleep,
        )

    return _make


@pytest.fixture
def client(client_config, transport, sleep) -> SquareClient:
    """SquareClient whose calls go to the fake transport."""
    square = SquareClient(client_config, http_client=transport)
    square.pipeline._sleep = sleep
    return square
