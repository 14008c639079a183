"""Entry point: ``SquareClient`` groups every resource area behind one config."""

from typing import Any

from square_sdk.config.value_objects import ClientConfig
from square_sdk.dependency_container import SquareDependencyContainer
from square_sdk.observability import get_sdk_logger
from square_sdk.ports.http import IHttpClient
from square_sdk.resources import (
    CatalogApi,
    CheckoutApi,
    CustomersApi,
    InventoryApi,
    LocationsApi,
    OrdersApi,
    PaymentsApi,
    TransactionsApi,
)

log = get_sdk_logger("client", layer="resources")


class SquareClient:
    """Async client for the Square API.

    Holds an immutable ClientConfig and one transport whose connection pool
    is shared by all calls made through this instance.

    Usage:
        >>> async with SquareClient(ClientConfig(access_token="...")) as client:
        ...     response = await client.locations.list_locations()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: IHttpClient | None = None,
        container_cls: type[SquareDependencyContainer] = SquareDependencyContainer,
        **config_overrides: Any,
    ):
        """Create a client.

        Args:
            config: Client configuration (defaults to production, no token)
            http_client: Transport to use instead of a new AiohttpClient
            container_cls: Container choosing the pipeline implementations
            **config_overrides: Applied on top of ``config``
        """
        config = config or ClientConfig()
        if config_overrides:
            config = config.with_overrides(**config_overrides)
        self.config = config
        self._container_cls = container_cls

        container = container_cls(config, http_client=http_client)
        self.http_client = container.create_http_client()
        self.pipeline = container.create_pipeline(self.http_client)

        self.catalog = CatalogApi(self.pipeline)
        self.checkout = CheckoutApi(self.pipeline)
        self.customers = CustomersApi(self.pipeline)
        self.inventory = InventoryApi(self.pipeline)
        self.locations = LocationsApi(self.pipeline)
        self.orders = OrdersApi(self.pipeline)
        self.payments = PaymentsApi(self.pipeline)
        self.transactions = TransactionsApi(self.pipeline)

        log.debug(
            "client_created",
            environment=config.environment.value,
            base_url=config.base_url,
            square_version=config.square_version,
            timeout=config.http_config.timeout,
            max_retries=config.retry_config.max_retries,
        )

    def with_overrides(
        self, http_client: IHttpClient | None = None, **changes: Any
    ) -> "SquareClient":
        """Return an independent client with ``changes`` merged into the config.

        The new client gets its own transport; this one is left untouched.
        """
        return SquareClient(
            self.config.with_overrides(**changes),
            http_client=http_client,
            container_cls=self._container_cls,
        )

    async def close(self) -> None:
        await self.http_client.close()

    async def __aenter__(self) -> "SquareClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
