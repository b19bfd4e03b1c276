"""Configuration objects for agent-manifests."""

from dataclasses import dataclass


@dataclass
class AssetStoreConfig:
    """Configuration for the AssetStore."""

    regenerate: bool = False
    """Ignore previously written files for assets that have dependencies.

    Assets without dependencies, such as the user supplied install config,
    are still loaded from disk.
    """
