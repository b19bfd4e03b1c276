"""
Generates the manifests consumed by the agent based installer.

Each generated file is produced by an asset. Assets declare the assets they
depend on and are resolved by an `agent_manifests.store.AssetStore`, which
either loads an asset from previously written files or generates it from its
dependencies.
"""

__all__ = [
    "arch",
    "asset",
    "manifest",
    "manifests",
    "store",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
