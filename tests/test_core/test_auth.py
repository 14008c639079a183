import pytest

from square_sdk.config.value_objects import BearerAuthCredentials, ClientConfig
from square_sdk.core.auth import (
    GLOBAL_AUTH,
    BearerTokenProvider,
    CompositeAuthProvider,
    create_auth_provider,
)
from square_sdk.core.errors import MissingCredentialsError


class ApiKeyProvider:
    """Second scheme used to exercise composition."""

    def apply(self, headers, requirements):
        return {**headers, "X-Api-Key": "key-1"}


class TestBearerTokenProvider:
    def test_attaches_bearer_header(self):
        headers = BearerTokenProvider("tok").apply({"Accept": "*/*"}, (GLOBAL_AUTH,))

        assert headers == {"Accept": "*/*", "Authorization": "Bearer tok"}

    def test_input_headers_are_not_mutated(self):
        original = {"Accept": "*/*"}

        BearerTokenProvider("tok").apply(original, (GLOBAL_AUTH,))

        assert original == {"Accept": "*/*"}

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token_fails_fast(self, token):
        with pytest.raises(MissingCredentialsError):
            BearerTokenProvider(token).apply({}, (GLOBAL_AUTH,))

    def test_repr_hides_token(self):
        assert "tok" not in repr(BearerTokenProvider("tok"))


class TestCompositeAuthProvider:
    def test_no_requirements_leaves_headers(self):
        provider = CompositeAuthProvider({GLOBAL_AUTH: BearerTokenProvider(None)})

        assert provider.apply({"A": "1"}, ()) == {"A": "1"}

    def test_each_requirement_is_dispatched(self):
        provider = CompositeAuthProvider({GLOBAL_AUTH: BearerTokenProvider("tok")})
        provider.register("api_key", ApiKeyProvider())

        headers = provider.apply({}, (GLOBAL_AUTH, "api_key"))

        assert headers == {"Authorization": "Bearer tok", "X-Api-Key": "key-1"}

    def test_unknown_scheme_fails(self):
        provider = CompositeAuthProvider()

        with pytest.raises(MissingCredentialsError, match="oauth"):
            provider.apply({}, ("oauth",))


class TestCreateAuthProvider:
    def test_uses_access_token(self):
        provider = create_auth_provider(ClientConfig(access_token="tok"))

        assert provider.apply({}, (GLOBAL_AUTH,))["Authorization"] == "Bearer tok"

    def test_structured_credentials_win(self):
        config = ClientConfig(
            access_token="old",
            bearer_auth_credentials=BearerAuthCredentials(access_token="new"),
        )

        headers = create_auth_provider(config).apply({}, (GLOBAL_AUTH,))

        assert headers["Authorization"] == "Bearer new"
