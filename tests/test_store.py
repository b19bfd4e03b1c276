"""Tests for resolving assets through the store."""

from pathlib import Path

import pytest

from agent_manifests.agent_config import AgentConfig
from agent_manifests.asset import Asset, AssetState, Parents
from agent_manifests.config import AssetStoreConfig
from agent_manifests.exceptions import AssetException, UnsupportedArchitectureError
from agent_manifests.install_config import InstallConfig, OptionalInstallConfig
from agent_manifests.manifests import INFRAENV_FILENAME, InfraEnvAsset
from agent_manifests.storage import DirectoryFileFetcher, InMemoryFileFetcher
from agent_manifests.store import AssetStore

INSTALL_CONFIG = """\
apiVersion: v1
metadata:
  name: ostest
sshKey: ssh-rsa AAAA user@host
controlPlane:
  architecture: amd64
"""

AGENT_CONFIG = """\
apiVersion: v1alpha1
additionalNTPSources:
  - 10.0.0.1
"""

EXISTING_INFRAENV = """\
apiVersion: agent-install.openshift.io/v1beta1
kind: InfraEnv
metadata:
  name: edited
  namespace: cluster0
spec:
  sshAuthorizedKey: ssh-rsa BBBB user@host
  cpuArchitecture: arm64
"""


@pytest.fixture(name="asset_dir")
def asset_dir_fixture(tmp_path: Path) -> Path:
    """Fixture for an asset directory holding the user configuration."""
    (tmp_path / "install-config.yaml").write_text(INSTALL_CONFIG)
    (tmp_path / "agent-config.yaml").write_text(AGENT_CONFIG)
    return tmp_path


def test_fetch_generates(asset_dir: Path) -> None:
    """Test dependencies are loaded and the InfraEnv is generated."""
    store = AssetStore(DirectoryFileFetcher(asset_dir))
    infraenv = store.fetch(InfraEnvAsset)

    assert infraenv.state == AssetState.GENERATED
    assert infraenv.config is not None
    assert infraenv.config.metadata.name == "ostest"
    assert infraenv.config.spec.cpu_architecture == "x86_64"
    assert infraenv.config.spec.additional_ntp_sources == ["10.0.0.1"]
    assert store.fetch(OptionalInstallConfig).state == AssetState.LOADED
    assert store.fetch(AgentConfig).state == AssetState.LOADED


def test_fetch_is_memoized(asset_dir: Path) -> None:
    """Test that each asset type is resolved once."""
    store = AssetStore(DirectoryFileFetcher(asset_dir))
    assert store.fetch(InfraEnvAsset) is store.fetch(InfraEnvAsset)


def test_fetch_loads_existing(asset_dir: Path) -> None:
    """Test that a previously written InfraEnv takes precedence."""
    (asset_dir / INFRAENV_FILENAME).parent.mkdir()
    (asset_dir / INFRAENV_FILENAME).write_text(EXISTING_INFRAENV)

    infraenv = AssetStore(DirectoryFileFetcher(asset_dir)).fetch(InfraEnvAsset)
    assert infraenv.state == AssetState.LOADED
    assert infraenv.config is not None
    assert infraenv.config.metadata.name == "edited"
    assert infraenv.config.spec.cpu_architecture == "aarch64"


def test_fetch_regenerate(asset_dir: Path) -> None:
    """Test ignoring a previously written InfraEnv."""
    (asset_dir / INFRAENV_FILENAME).parent.mkdir()
    (asset_dir / INFRAENV_FILENAME).write_text(EXISTING_INFRAENV)

    store = AssetStore(
        DirectoryFileFetcher(asset_dir), AssetStoreConfig(regenerate=True)
    )
    infraenv = store.fetch(InfraEnvAsset)
    assert infraenv.state == AssetState.GENERATED
    assert infraenv.config is not None
    assert infraenv.config.metadata.name == "ostest"
    assert store.fetch(OptionalInstallConfig).state == AssetState.LOADED


def test_fetch_without_install_config() -> None:
    """Test that the InfraEnv is skipped when there is no install config."""
    store = AssetStore(InMemoryFileFetcher())
    infraenv = store.fetch(InfraEnvAsset)
    assert infraenv.state == AssetState.SKIPPED
    assert infraenv.files() == []
    assert store.fetch(OptionalInstallConfig).state == AssetState.SKIPPED


def test_fetch_with_provided_asset() -> None:
    """Test providing an upstream asset built in memory."""
    store = AssetStore(InMemoryFileFetcher())
    store.add(OptionalInstallConfig(InstallConfig(name="memory", ssh_key="key")))
    infraenv = store.fetch(InfraEnvAsset)
    assert infraenv.state == AssetState.GENERATED
    assert infraenv.config is not None
    assert infraenv.config.metadata.name == "memory"


def test_fetch_invalid(asset_dir: Path) -> None:
    """Test that validation errors are reported to the caller."""
    (asset_dir / "install-config.yaml").write_text(
        INSTALL_CONFIG.replace("amd64", "sparc")
    )
    with pytest.raises(UnsupportedArchitectureError, match="sparc"):
        AssetStore(DirectoryFileFetcher(asset_dir)).fetch(InfraEnvAsset)


class LeftAsset(Asset):
    """Asset that depends on RightAsset."""

    @property
    def name(self) -> str:
        return "Left"

    def dependencies(self) -> list[type[Asset]]:
        return [RightAsset]

    def generate(self, parents: Parents) -> None:
        parents.get(RightAsset)


class RightAsset(Asset):
    """Asset that depends on LeftAsset."""

    @property
    def name(self) -> str:
        return "Right"

    def dependencies(self) -> list[type[Asset]]:
        return [LeftAsset]

    def generate(self, parents: Parents) -> None:
        parents.get(LeftAsset)


def test_dependency_cycle() -> None:
    """Test that dependency cycles are rejected."""
    store = AssetStore(InMemoryFileFetcher())
    with pytest.raises(
        AssetException,
        match="Dependency cycle detected: LeftAsset -> RightAsset -> LeftAsset",
    ):
        store.fetch(LeftAsset)
