"""
Request assembly.

A resource method describes its call with ``RequestBuilder``: arguments are
validated and encoded through their schemas the moment they are added, so a
bad argument fails before anything touches the network. ``build()`` freezes
the result into a ``RequestDescriptor``.

Cross-cutting headers are layered on by ``REQUEST_STEPS``, an ordered tuple
of pure functions. Each step receives a descriptor and returns a new one;
nothing is mutated in place.

Usage:
    >>> descriptor = (
    ...     RequestBuilder("GET", "/v2/catalog/object/{object_id}")
    ...     .path_params(object_id="ABC 123")
    ...     .query("include_related_objects", True)
    ...     .requires_auth()
    ...     .build()
    ... )
"""

import asyncio
import re
import warnings
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import quote, urlencode

from square_sdk.config.value_objects import ClientConfig
from square_sdk.core import json_codec
from square_sdk.core.auth import GLOBAL_AUTH
from square_sdk.core.schema import Schema
from square_sdk.ports.http import (
    FileWrapper,
    IAuthProvider,
    JsonBody,
    JsonPart,
    MultipartBody,
    RequestBody,
)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def merge_headers(base: dict[str, str], extra: dict[str, str]) -> dict[str, str]:
    """Merge header maps; names compare case-insensitively and ``extra`` wins."""
    result = dict(base)
    for name, value in extra.items():
        for existing in [k for k in result if k.lower() == name.lower()]:
            del result[existing]
        result[name] = value
    return result


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides.

    Attributes:
        timeout: Seconds for each attempt of this call
        headers: Extra headers for this call only
        abort_signal: Setting the event aborts the call and stops retries
    """

    timeout: float | None = None
    headers: dict[str, str] = field(default_factory=dict)
    abort_signal: asyncio.Event | None = None


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to perform one logical call."""

    method: str
    path: str
    path_params: dict[str, str] = field(default_factory=dict)
    query: tuple[tuple[str, str], ...] = ()
    headers: dict[str, str] = field(default_factory=dict)
    body: RequestBody = None
    auth: tuple[str, ...] = ()
    deprecation: str | None = None

    def with_headers(self, headers: dict[str, str]) -> "RequestDescriptor":
        return replace(self, headers=merge_headers(self.headers, headers))

    def rendered_path(self) -> str:
        """Path with every ``{name}`` placeholder replaced and URL-encoded.

        Raises:
            ValueError: If a placeholder has no value
        """

        def substitute(match: re.Match) -> str:
            name = match.group(1)
            if name not in self.path_params:
                raise ValueError(f"Missing value for path parameter '{name}' in {self.path}")
            return quote(self.path_params[name], safe="")

        return _PLACEHOLDER.sub(substitute, self.path)

    def url(self, base_url: str) -> str:
        url = base_url.rstrip("/") + self.rendered_path()
        if self.query:
            url = f"{url}?{urlencode(self.query, quote_via=quote)}"
        return url


class RequestBuilder:
    """Fluent assembly of a RequestDescriptor."""

    def __init__(self, method: str, path: str):
        self._method = method.upper()
        self._path = path
        self._path_params: dict[str, str] = {}
        self._query: list[tuple[str, str]] = []
        self._headers: dict[str, str] = {}
        self._body: RequestBody = None
        self._auth: tuple[str, ...] = ()
        self._deprecation: str | None = None

    def path_params(self, **values: Any) -> "RequestBuilder":
        for name, value in values.items():
            if value is None:
                raise ValueError(f"Path parameter '{name}' must not be None")
            self._path_params[name] = _query_value(value)
        return self

    def query(self, name: str, value: Any, schema: Schema | None = None) -> "RequestBuilder":
        """Add a query parameter; ``None`` values are skipped."""
        if value is None:
            return self
        if schema is not None:
            value = schema.encode(value)
        if isinstance(value, (list, tuple)):
            self._query.extend((name, _query_value(v)) for v in value if v is not None)
        else:
            self._query.append((name, _query_value(value)))
        return self

    def header(self, name: str, value: str | None) -> "RequestBuilder":
        if value is not None:
            self._headers = merge_headers(self._headers, {name: value})
        return self

    def json_body(self, value: Any, schema: Schema) -> "RequestBuilder":
        """Validate ``value`` against ``schema`` and set it as a JSON body."""
        encoded = schema.encode(value)
        self._body = JsonBody(json_codec.stringify(encoded))
        self._headers = merge_headers(self._headers, {"Content-Type": JsonBody.content_type})
        return self

    def multipart(
        self,
        json_part_name: str,
        value: Any,
        schema: Schema,
        file_part_name: str,
        file: FileWrapper | None,
    ) -> "RequestBuilder":
        """Combine a JSON part and an optional binary file part."""
        parts: list[tuple[str, JsonPart | FileWrapper]] = []
        if value is not None:
            parts.append((json_part_name, JsonPart(json_codec.stringify(schema.encode(value)))))
        if file is not None:
            parts.append((file_part_name, file))
        self._body = MultipartBody(tuple(parts))
        # the transport writes the boundary
        self._headers = {k: v for k, v in self._headers.items() if k.lower() != "content-type"}
        return self

    def requires_auth(self, *schemes: str) -> "RequestBuilder":
        self._auth = schemes or (GLOBAL_AUTH,)
        return self

    def deprecated(self, note: str) -> "RequestBuilder":
        self._deprecation = note
        return self

    def build(self) -> RequestDescriptor:
        descriptor = RequestDescriptor(
            method=self._method,
            path=self._path,
            path_params=dict(self._path_params),
            query=tuple(self._query),
            headers=dict(self._headers),
            body=self._body,
            auth=self._auth,
            deprecation=self._deprecation,
        )
        # fail on missing placeholders now, not at send time
        descriptor.rendered_path()
        return descriptor


# =============================================================================
# REQUEST STEPS - ordered, pure transformations
# =============================================================================


@dataclass(frozen=True)
class StepContext:
    config: ClientConfig
    auth_provider: IAuthProvider
    options: RequestOptions


RequestStep = Callable[[RequestDescriptor, StepContext], RequestDescriptor]


def set_user_agent(descriptor: RequestDescriptor, ctx: StepContext) -> RequestDescriptor:
    return descriptor.with_headers({"User-Agent": ctx.config.user_agent})


def set_version_header(descriptor: RequestDescriptor, ctx: StepContext) -> RequestDescriptor:
    return descriptor.with_headers({"Square-Version": ctx.config.square_version})


def set_additional_headers(descriptor: RequestDescriptor, ctx: StepContext) -> RequestDescriptor:
    return descriptor.with_headers(ctx.config.additional_headers)


def set_call_headers(descriptor: RequestDescriptor, ctx: StepContext) -> RequestDescriptor:
    return descriptor.with_headers(ctx.options.headers)


def apply_authentication(descriptor: RequestDescriptor, ctx: StepContext) -> RequestDescriptor:
    if not descriptor.auth:
        return descriptor
    return replace(
        descriptor, headers=ctx.auth_provider.apply(dict(descriptor.headers), descriptor.auth)
    )


REQUEST_STEPS: tuple[RequestStep, ...] = (
    set_user_agent,
    set_version_header,
    set_additional_headers,
    set_call_headers,
    apply_authentication,
)


def apply_steps(
    descriptor: RequestDescriptor,
    ctx: StepContext,
    steps: tuple[RequestStep, ...] = REQUEST_STEPS,
) -> RequestDescriptor:
    for step in steps:
        descriptor = step(descriptor, ctx)
    return descriptor


def warn_deprecated(descriptor: RequestDescriptor) -> None:
    """Emit the non-fatal notice for a sunset endpoint.

    Attributed to the code calling the resource method, four frames up:
    RequestPipeline.execute, BaseApi._execute, the facade method, the caller.
    """
    if descriptor.deprecation:
        warnings.warn(
            f"{descriptor.method} {descriptor.path} is deprecated. {descriptor.deprecation}",
            DeprecationWarning,
            stacklevel=5,
        )


def url_for(descriptor: RequestDescriptor, base_url: str) -> str:
    """Absolute URL: base URL, rendered path and percent-encoded query."""
    return descriptor.url(base_url)
