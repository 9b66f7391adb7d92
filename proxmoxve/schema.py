"""Attribute schemas, resource state and provider configuration.

A ``Resource`` describes the attributes a data source exposes and the
function that fills them in. ``ResourceData`` holds the attribute values of
one read, and ``ProviderConfiguration`` hands out the API client.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "ConfigurationError",
    "ProviderConfiguration",
    "Resource",
    "ResourceData",
    "Schema",
    "ValueType",
]


class ValueType(enum.Enum):
    """The kind of value an attribute holds."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    LIST = "list"
    MAP = "map"
    SET = "set"


def _zero(value_type: ValueType) -> Any:
    if value_type is ValueType.BOOL:
        return False
    if value_type is ValueType.INT:
        return 0
    if value_type is ValueType.FLOAT:
        return 0.0
    if value_type is ValueType.STRING:
        return ""
    if value_type is ValueType.MAP:
        return {}
    return []


@dataclass
class Schema:
    """Description of a single attribute."""

    type: ValueType
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    elem: Schema | Resource | None = None
    max_items: int = 0
    default_func: Callable[[], Any] | None = None
    validate_func: Callable[[Any, str], Any] | None = None


@dataclass
class Resource:
    """A set of attribute schemas and the function that reads them."""

    schema: dict[str, Schema] = field(default_factory=dict)
    read: Callable[[ProviderConfiguration, ResourceData], None] | None = None

    def required_keys(self) -> set[str]:
        """Names of the attributes that must be given."""
        return {key for key, spec in self.schema.items() if spec.required}

    def computed_keys(self) -> set[str]:
        """Names of the attributes filled in by a read."""
        return {key for key, spec in self.schema.items() if spec.computed}

    def nested(self, key: str) -> Resource:
        """Return the nested resource schema of a block attribute."""
        if key not in self.schema:
            raise KeyError(f"unknown attribute {key!r}")
        elem = self.schema[key].elem
        if not isinstance(elem, Resource):
            raise ValueError(f"attribute {key!r} has no nested schema")
        return elem


@dataclass
class ResourceData:
    """Attribute values of one resource, checked against its schema."""

    resource: Resource | None = None
    values: dict[str, Any] = field(default_factory=dict)
    id: str = ""

    def _spec(self, key: str) -> Schema | None:
        if self.resource is None:
            return None
        try:
            return self.resource.schema[key]
        except KeyError:
            raise KeyError(f"invalid attribute {key!r}") from None

    def get(self, key: str) -> Any:
        """Return the value of an attribute, or its default when unset."""
        spec = self._spec(key)
        if key in self.values:
            return self.values[key]
        if spec is None:
            return None
        if spec.default_func is not None:
            return spec.default_func()
        return _zero(spec.type)

    def set(self, key: str, value: Any) -> None:
        """Store the value of an attribute."""
        self._spec(key)
        self.values[key] = value

    def set_id(self, value: str) -> None:
        """Set the identifier of the resource."""
        self.id = value


class ConfigurationError(Exception):
    """Raised when the provider is not configured for a request."""


@dataclass
class ProviderConfiguration:
    """Configured state shared by all data sources."""

    ve_client: Any = None

    def get_ve_client(self) -> Any:
        """Return the API client, or raise if none has been configured."""
        if self.ve_client is None:
            raise ConfigurationError(
                "you must specify the virtual environment details in the provider configuration"
            )
        return self.ve_client