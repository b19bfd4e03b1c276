"""The asset lifecycle contract.

An asset is a unit of generated configuration. It declares the assets it
depends on, and the store hands it the resolved dependencies through
`Parents` before calling `generate`. A `WritableAsset` additionally produces
files and may be reconstructed from them with `load`.

Dependencies are identified by their asset type, so an asset never needs to
know how its parents were built.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, TypeVar, cast

from .exceptions import FetchError, MissingDependencyError

__all__ = [
    "Asset",
    "WritableAsset",
    "AssetState",
    "File",
    "FileFetcher",
    "Parents",
    "fetch_optional",
]

A = TypeVar("A", bound="Asset")


class AssetState(StrEnum):
    """Lifecycle state of an asset instance."""

    UNINITIALIZED = "Uninitialized"
    GENERATED = "Generated"
    LOADED = "Loaded"
    INVALID = "Invalid"
    SKIPPED = "Skipped"


@dataclass(frozen=True)
class File:
    """Serialized output of an asset."""

    filename: str
    """Path of the file relative to the asset directory."""

    data: bytes
    """Contents of the file."""


class FileFetcher(Protocol):
    """Reads asset files from storage."""

    def fetch_by_name(self, filename: str) -> File:
        """Return the named file.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file exists but could not be read.
        """


class Parents:
    """Resolved dependencies of an asset, keyed by asset type."""

    def __init__(self) -> None:
        """Initialize Parents."""
        self._assets: dict[type["Asset"], "Asset"] = {}

    def add(self, *assets: "Asset") -> None:
        """Record resolved assets."""
        for asset in assets:
            self._assets[type(asset)] = asset

    def get(self, asset_type: type[A]) -> A:
        """Return the resolved asset of the given type."""
        if (asset := self._assets.get(asset_type)) is None:
            raise MissingDependencyError(asset_type.__name__)
        return cast(A, asset)

    def __contains__(self, asset_type: type["Asset"]) -> bool:
        return asset_type in self._assets


class Asset(ABC):
    """Base class for all assets."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a human friendly name for the asset."""

    @abstractmethod
    def dependencies(self) -> list[type["Asset"]]:
        """Return the asset types directly needed to generate this asset."""

    @abstractmethod
    def generate(self, parents: Parents) -> None:
        """Generate the asset from its resolved dependencies."""


class WritableAsset(Asset):
    """An asset that produces files and can be loaded back from them."""

    @abstractmethod
    def files(self) -> list[File]:
        """Return the files produced by the asset."""

    @abstractmethod
    def load(self, fetcher: FileFetcher) -> bool:
        """Load the asset from storage.

        Returns False when the asset has not been written yet.
        """


def fetch_optional(fetcher: FileFetcher, filename: str) -> File | None:
    """Fetch a file, returning None if it has not been written."""
    try:
        return fetcher.fetch_by_name(filename)
    except FileNotFoundError:
        return None
    except OSError as err:
        raise FetchError(f"Failed to load {filename} file: {err}") from err
