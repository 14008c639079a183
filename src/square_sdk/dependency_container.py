"""Dependency injection container for the Square client.

Wires the pipeline abstractions and their implementations together.
This is the single place where concrete implementations are chosen.

Usage:
    container = SquareDependencyContainer(config)
    pipeline = container.create_pipeline()
"""

from square_sdk.config.value_objects import ClientConfig
from square_sdk.connectors.aiohttp_client import AiohttpClient
from square_sdk.core.auth import create_auth_provider
from square_sdk.core.error_mapper import create_error_mapper_chain
from square_sdk.core.pipeline import RequestPipeline
from square_sdk.core.retry import RetryPolicy
from square_sdk.ports.http import IAuthProvider, IHttpClient
from square_sdk.ports.validators import IErrorMapper, IRetryPolicy


class SquareDependencyContainer:
    """Dependency injection container for the request pipeline.

    Responsible for:
    1. Choosing concrete implementations for each protocol
    2. Wiring dependencies together
    3. Providing factory methods for components

    Tests can subclass this and override methods, or pass ``http_client``,
    to inject fakes.
    """

    def __init__(self, config: ClientConfig, http_client: IHttpClient | None = None):
        """Initialize container with configuration.

        Args:
            config: Client configuration
            http_client: Transport to use instead of a new AiohttpClient
        """
        self.config = config
        self._http_client = http_client

    def create_http_client(self) -> IHttpClient:
        """Create HTTP client implementation.

        Returns:
            The injected transport, otherwise a new AiohttpClient
        """
        if self._http_client is not None:
            return self._http_client
        return AiohttpClient(self.config.http_config)

    def create_auth_provider(self) -> IAuthProvider:
        """Create auth provider implementation.

        Returns:
            CompositeAuthProvider with every configured scheme
        """
        return create_auth_provider(self.config)

    def create_retry_policy(self) -> IRetryPolicy:
        return RetryPolicy(self.config.retry_config)

    def create_error_mapper(self) -> IErrorMapper:
        return create_error_mapper_chain()

    def create_pipeline(self, http_client: IHttpClient | None = None) -> RequestPipeline:
        """Create fully-wired RequestPipeline.

        Args:
            http_client: Transport already created by the caller

        Returns:
            RequestPipeline with all dependencies injected
        """
        return RequestPipeline(
            config=self.config,
            http_client=http_client or self.create_http_client(),
            auth_provider=self.create_auth_provider(),
            retry_policy=self.create_retry_policy(),
            error_mapper=self.create_error_mapper(),
            strict_decoding=self.config.strict_decoding,
        )
