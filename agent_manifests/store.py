"""Resolves assets and their dependencies.

The store walks the dependency graph depth first. Every dependency of an
asset is fully generated or loaded before the asset itself, and each asset
type is resolved at most once per store.

For a writable asset the store first tries to load it from previously
written files and only generates it when nothing was found. With
`AssetStoreConfig.regenerate` only assets without dependencies are loaded.
"""

import logging
from typing import TypeVar, cast

from .asset import Asset, Parents, FileFetcher, WritableAsset
from .config import AssetStoreConfig
from .context import trace_asset
from .exceptions import AssetException

__all__ = ["AssetStore"]

_LOGGER = logging.getLogger(__name__)

A = TypeVar("A", bound=Asset)


class AssetStore:
    """Builds assets in dependency order."""

    def __init__(
        self,
        fetcher: FileFetcher,
        config: AssetStoreConfig | None = None,
    ) -> None:
        """Initialize the AssetStore."""
        self._fetcher = fetcher
        self._config = config or AssetStoreConfig()
        self._assets: dict[type[Asset], Asset] = {}
        self._in_progress: list[type[Asset]] = []

    def add(self, asset: Asset) -> None:
        """Provide an already resolved asset, e.g. one built in memory."""
        self._assets[type(asset)] = asset

    def fetch(self, asset_type: type[A]) -> A:
        """Return the resolved asset, resolving its dependencies first."""
        if (existing := self._assets.get(asset_type)) is not None:
            return cast(A, existing)
        if asset_type in self._in_progress:
            cycle = " -> ".join(
                t.__name__ for t in self._in_progress + [asset_type]
            )
            raise AssetException(f"Dependency cycle detected: {cycle}")

        self._in_progress.append(asset_type)
        try:
            asset = asset_type()
            with trace_asset(asset.name):
                parents = Parents()
                for dependency in asset.dependencies():
                    parents.add(self.fetch(dependency))
                self._resolve(asset, parents)
        finally:
            self._in_progress.pop()

        self._assets[asset_type] = asset
        return asset

    def _resolve(self, asset: Asset, parents: Parents) -> None:
        if isinstance(asset, WritableAsset) and not (
            self._config.regenerate and asset.dependencies()
        ):
            if asset.load(self._fetcher):
                _LOGGER.info("Loaded %s from existing files", asset.name)
                return
            _LOGGER.debug("No files found for %s", asset.name)
        _LOGGER.info("Generating %s", asset.name)
        asset.generate(parents)
