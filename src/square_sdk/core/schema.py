"""Declarative wire schemas.

Every request and response shape is a pydantic model deriving from
``SquareModel``. ``Schema`` wraps a model (or any type expression such as
``list[CatalogObject]``) and gives the request pipeline a symmetric pair of
operations:

    encode(value)  -> JSON-compatible object with wire field names
    decode(data)   -> native object

Recursive shapes refer to each other by class name. Models register
themselves on definition and ``Schema("CatalogObject")`` resolves the name on
first use, so cyclic graphs never recurse while schemas are being declared.
"""

import types
from functools import lru_cache
from typing import Any, Generic, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from square_sdk.core.errors import SchemaValidationError
from square_sdk.observability import get_sdk_logger

T = TypeVar("T")

log = get_sdk_logger("schema", layer="core")

_MODEL_REGISTRY: dict[str, type["SquareModel"]] = {}


class SquareModel(BaseModel):
    """Base for all wire models.

    Unknown keys are dropped on decode; subclasses that carry open
    attribute maps derive from ``OpenSquareModel`` instead.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        _MODEL_REGISTRY[cls.__name__] = cls


class OpenSquareModel(SquareModel):
    """Wire model that keeps unknown keys losslessly."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


def resolve_model(name: str) -> type[SquareModel]:
    """Look up a registered model class by name.

    Raises:
        KeyError: If no model with that name has been defined
    """
    try:
        return _MODEL_REGISTRY[name]
    except KeyError:
        raise KeyError(f"No schema registered under name: {name}") from None


def _error_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _to_schema_error(exc: ValidationError, prefix: str = "") -> SchemaValidationError:
    errors = exc.errors(include_url=False)
    first = errors[0] if errors else {"loc": (), "msg": str(exc)}
    path = _error_path(first.get("loc", ()))
    if prefix:
        path = f"{prefix}.{path}" if path else prefix
    return SchemaValidationError(first.get("msg", "invalid value"), path=path, errors=errors)


@lru_cache(maxsize=None)
def _adapter_for(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def _union_members(annotation: Any) -> tuple[Any, ...]:
    if get_origin(annotation) in (Union, types.UnionType):
        return tuple(arg for arg in get_args(annotation) if arg is not type(None))
    return (annotation,)


def _salvage_value(annotation: Any, raw: Any) -> Any:
    """Validate ``raw``; on failure rebuild only the parts that do not fit."""
    try:
        return _adapter_for(annotation).validate_python(raw)
    except (ValidationError, TypeError):
        pass
    for member in _union_members(annotation):
        origin = get_origin(member)
        if isinstance(member, type) and issubclass(member, BaseModel) and isinstance(raw, dict):
            return _salvage_model(member, raw)
        if origin is list and isinstance(raw, list):
            item_type = (get_args(member) or (Any,))[0]
            return [_salvage_value(item_type, item) for item in raw]
        if origin is dict and isinstance(raw, dict):
            value_type = get_args(member)[1] if len(get_args(member)) == 2 else Any
            return {key: _salvage_value(value_type, value) for key, value in raw.items()}
    return raw


def _salvage_model(model: type[BaseModel], data: dict[str, Any]) -> BaseModel:
    """Field-by-field construction: valid subtrees come back as typed objects."""
    values: dict[str, Any] = {}
    known: set[str] = set()
    for name, field in model.model_fields.items():
        known.update({name, field.alias or name})
        key = field.alias if field.alias in data else name
        if key in data:
            values[name] = _salvage_value(field.annotation, data[key])
    if model.model_config.get("extra") == "allow":
        values.update({k: v for k, v in data.items() if k not in known})
    return model.model_construct(**values)


class Schema(Generic[T]):
    """Encode/decode a value against a declared shape.

    Args:
        target: A model class, a registered model name, or any type
            expression pydantic understands (``list[Money]``, ``dict[str, str]``)
        name: Label used as the path prefix in validation errors
    """

    def __init__(self, target: Any, name: str | None = None):
        self._target = target
        self._name = name or ""
        self._resolved: Any = None
        self._adapter: TypeAdapter | None = None

    @property
    def target(self) -> Any:
        if self._resolved is None:
            if isinstance(self._target, str):
                self._resolved = resolve_model(self._target)
            else:
                self._resolved = self._target
        return self._resolved

    @property
    def adapter(self) -> TypeAdapter:
        if self._adapter is None:
            self._adapter = TypeAdapter(self.target)
        return self._adapter

    def validate(self, value: Any) -> T:
        """Validate and coerce a native value, raising SchemaValidationError."""
        try:
            return self.adapter.validate_python(value)
        except ValidationError as exc:
            raise _to_schema_error(exc, self._name) from exc

    def encode(self, value: Any) -> Any:
        """Validate ``value`` and dump it with wire field names.

        Optional fields that were never set are omitted. Fields explicitly
        set to ``None`` are emitted as JSON null.
        """
        validated = self.validate(value)
        return self.adapter.dump_python(
            validated, mode="json", by_alias=True, exclude_unset=True
        )

    def decode(self, data: Any, strict: bool = False) -> T:
        """Turn wire data back into native objects.

        Strict decoding disables type coercion and raises on any mismatch.
        Lenient decoding rebuilds a payload that does not fit field by field:
        every subtree that validates comes back typed, and only the offending
        objects are constructed without validation.
        """
        try:
            return self.adapter.validate_python(data, strict=strict)
        except ValidationError as exc:
            error = _to_schema_error(exc, self._name)
            target = self.target
            if (
                not strict
                and isinstance(data, dict)
                and isinstance(target, type)
                and issubclass(target, BaseModel)
            ):
                log.warning(
                    "schema_mismatch",
                    schema=target.__name__,
                    path=error.path,
                    error=str(error),
                )
                return _salvage_model(target, data)
            raise error from exc

    def __repr__(self) -> str:
        target = self._target if isinstance(self._target, str) else getattr(
            self._target, "__name__", repr(self._target)
        )
        return f"Schema({target})"
