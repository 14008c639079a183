"""Credential schemes.

Each call declares the named requirements it needs (today only
``"global"``, the bearer token). ``CompositeAuthProvider`` routes every
requirement to the provider registered under that name, so new schemes are
added by registration and call sites never change.
"""

from square_sdk.config.value_objects import ClientConfig
from square_sdk.core.errors import MissingCredentialsError
from square_sdk.ports.http import IAuthProvider

GLOBAL_AUTH = "global"


class BearerTokenProvider(IAuthProvider):
    """Attaches ``Authorization: Bearer <token>``."""

    def __init__(self, token: str | None):
        self._token = token

    def apply(self, headers: dict[str, str], requirements: tuple[str, ...]) -> dict[str, str]:
        if not self._token:
            raise MissingCredentialsError(
                "Bearer token required but no access_token is configured"
            )
        return {**headers, "Authorization": f"Bearer {self._token}"}

    def __repr__(self) -> str:
        return f"BearerTokenProvider(configured={bool(self._token)})"


class CompositeAuthProvider(IAuthProvider):
    """Dispatches each named requirement to its registered provider."""

    def __init__(self, providers: dict[str, IAuthProvider] | None = None):
        self._providers: dict[str, IAuthProvider] = dict(providers or {})

    def register(self, name: str, provider: IAuthProvider) -> None:
        """Register provider for a requirement name; later registrations win."""
        self._providers[name] = provider

    def apply(self, headers: dict[str, str], requirements: tuple[str, ...]) -> dict[str, str]:
        result = dict(headers)
        for name in requirements:
            provider = self._providers.get(name)
            if provider is None:
                raise MissingCredentialsError(f"No credentials configured for scheme: {name}")
            result = provider.apply(result, (name,))
        return result


def create_auth_provider(config: ClientConfig) -> CompositeAuthProvider:
    """Factory for the provider set a configuration supports."""
    return CompositeAuthProvider({GLOBAL_AUTH: BearerTokenProvider(config.bearer_token)})
