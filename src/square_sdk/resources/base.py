"""Shared plumbing for resource facades."""

from typing import Any, TypeVar

from square_sdk.core.pipeline import ApiResponse, RequestPipeline
from square_sdk.core.request_builder import RequestDescriptor, RequestOptions
from square_sdk.core.schema import Schema

T = TypeVar("T")


class BaseApi:
    """A resource area bound to one client's pipeline.

    Subclasses only describe calls; execution, retries and error mapping
    belong to the pipeline.
    """

    def __init__(self, pipeline: RequestPipeline):
        self._pipeline = pipeline

    @staticmethod
    def _path_arg(name: str, value: Any) -> str:
        """Validate a path argument before it is placed in the URL."""
        return Schema(str, name).validate(value)

    async def _execute(
        self,
        descriptor: RequestDescriptor,
        response_schema: Schema[T],
        options: RequestOptions | None = None,
    ) -> ApiResponse[T]:
        return await self._pipeline.execute(descriptor, response_schema, options)
