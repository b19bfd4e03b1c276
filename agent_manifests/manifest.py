"""Base representation of the kubernetes style objects written by assets.

Manifests are dataclasses that serialize to YAML using the camelCase field
names of the kubernetes API. Decoding is strict: documents with fields that
are not part of the schema, or whose values have the wrong type, are rejected
rather than silently ignored or coerced.
"""

from dataclasses import dataclass, field, fields, is_dataclass
import types
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig
from mashumaro.exceptions import MissingField
import yaml

from .exceptions import DecodeError, InputException, SerializationError

__all__ = [
    "BaseManifest",
    "ObjectMeta",
    "LocalObjectReference",
    "LabelSelector",
    "read_document",
]


T = TypeVar("T", bound="BaseManifest")


def _strict_str(value: Any) -> str:
    """Deserialize a string without coercing other scalars."""
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__} {value!r}")
    return value


def _container_type(hint: Any) -> type | None:
    """Return the container a field value must be, looking inside Optional."""
    origin = get_origin(hint)
    if origin in (Union, types.UnionType):
        for arg in get_args(hint):
            if (container := _container_type(arg)) is not None:
                return container
        return None
    if hint is list or origin is list:
        return list
    if hint is dict or origin is dict or is_dataclass(hint):
        return dict
    return None


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all manifest objects."""

    def compact_dict(self) -> dict[str, Any]:
        """Return a dictionary representation using the serialized field names."""
        return self.to_dict()

    @classmethod
    def parse_yaml(cls: type[T], content: str | bytes) -> T:
        """Parse a serialized manifest, rejecting unknown or mistyped fields."""
        try:
            doc = yaml.safe_load(content)
        except yaml.YAMLError as err:
            raise DecodeError(f"Invalid YAML: {err}") from err
        if not isinstance(doc, dict):
            raise DecodeError(
                f"Expected a mapping for {cls.__name__}, got {type(doc).__name__}"
            )
        try:
            return cls.from_dict(doc)
        except (MissingField, ValueError, TypeError) as err:
            raise DecodeError(f"Invalid {cls.__name__}: {err}") from err

    @classmethod
    def __pre_deserialize__(cls, d: dict[Any, Any]) -> dict[Any, Any]:
        """Reject sequences and mappings of the wrong shape.

        mashumaro would otherwise iterate a string into a list of characters.
        """
        hints = get_type_hints(cls)
        for item in fields(cls):
            key = item.metadata.get("alias") or item.name
            if (value := d.get(key)) is None:
                continue
            container = _container_type(hints[item.name])
            if container is not None and not isinstance(value, container):
                raise TypeError(
                    f"field '{key}' expected a {container.__name__}, "
                    f"got {type(value).__name__} {value!r}"
                )
        return d

    def yaml(self) -> str:
        """Return a YAML string representation of the object."""
        try:
            return yaml.dump(self.to_dict(), sort_keys=False, explicit_start=True)
        except (yaml.YAMLError, ValueError, TypeError) as err:
            raise SerializationError(
                f"Failed to serialize {self.__class__.__name__}: {err}"
            ) from err

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True
        forbid_extra_keys = True
        serialization_strategy = {str: {"deserialize": _strict_str}}


@dataclass
class ObjectMeta(BaseManifest):
    """Standard object metadata."""

    name: str
    """The name of the object."""

    namespace: str | None = None
    """The namespace of the object."""

    labels: dict[str, str] | None = None
    """Labels attached to the object."""

    annotations: dict[str, str] | None = None
    """Annotations attached to the object."""


@dataclass
class LocalObjectReference(BaseManifest):
    """A reference to an object in the same namespace."""

    name: str
    """The name of the object."""


@dataclass
class LabelSelector(BaseManifest):
    """Selects objects by label."""

    match_labels: dict[str, str] | None = field(
        metadata=field_options(alias="matchLabels"), default=None
    )
    """Labels that a selected object must carry."""


def read_document(filename: str, content: str | bytes) -> dict[str, Any]:
    """Parse a single YAML document that is expected to be a mapping.

    Unlike `BaseManifest.parse_yaml` the document is not checked against a
    schema; callers pick out the fields they need.
    """
    try:
        doc = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise InputException(f"Invalid YAML in file {filename}: {err}") from err
    if doc is None:
        raise InputException(f"File {filename} is empty")
    if not isinstance(doc, dict):
        raise InputException(f"File {filename} does not contain a mapping: {doc}")
    return doc
