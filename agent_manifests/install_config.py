"""Read-only view of the cluster install configuration.

Only the fields used to derive agent manifests are read from
``install-config.yaml``; everything else in the document is ignored.
"""

from dataclasses import dataclass
import logging
from typing import Any

from .asset import (
    Asset,
    AssetState,
    File,
    FileFetcher,
    Parents,
    WritableAsset,
    fetch_optional,
)
from .exceptions import InputException
from .manifest import read_document

__all__ = [
    "INSTALL_CONFIG_FILENAME",
    "InstallConfig",
    "InstallConfigProxy",
    "OptionalInstallConfig",
]

_LOGGER = logging.getLogger(__name__)

INSTALL_CONFIG_FILENAME = "install-config.yaml"
DEFAULT_CLUSTER_NAMESPACE = "cluster0"
NMSTATE_CONFIG_LABEL = "infraenvs.agent-install.openshift.io"


def _optional_str(doc: dict[str, Any], key: str, path: str) -> str | None:
    """Return a string field, rejecting values of any other type."""
    if (value := doc.get(key)) is None:
        return None
    if not isinstance(value, str):
        raise InputException(
            f"Invalid install config {path} is not a string: {value!r}"
        )
    return value


@dataclass
class InstallConfigProxy:
    """Cluster-wide proxy settings."""

    http_proxy: str | None = None
    https_proxy: str | None = None
    no_proxy: str | None = None

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "InstallConfigProxy":
        """Parse the proxy section of an install configuration."""
        return cls(
            http_proxy=_optional_str(doc, "httpProxy", "proxy.httpProxy"),
            https_proxy=_optional_str(doc, "httpsProxy", "proxy.httpsProxy"),
            no_proxy=_optional_str(doc, "noProxy", "proxy.noProxy"),
        )


@dataclass
class InstallConfig:
    """The fields of an install configuration used by agent manifests."""

    name: str
    """The cluster name."""

    namespace: str | None = None
    """Namespace for the generated cluster resources."""

    ssh_key: str = ""
    """Public key material authorized on the hosts."""

    control_plane_architecture: str | None = None
    """Control plane cpu architecture in Go/Debian naming, e.g. amd64."""

    proxy: InstallConfigProxy | None = None
    """Optional cluster-wide proxy."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "InstallConfig":
        """Parse an InstallConfig from an install-config document."""
        if not isinstance(metadata := doc.get("metadata"), dict):
            raise InputException(f"Invalid install config missing metadata: {doc}")
        if not (name := _optional_str(metadata, "name", "metadata.name")):
            raise InputException(
                f"Invalid install config missing metadata.name: {doc}"
            )
        control_plane = doc.get("controlPlane") or {}
        if not isinstance(control_plane, dict):
            raise InputException(
                f"Invalid install config controlPlane is not a mapping: {doc}"
            )
        proxy = None
        if (proxy_doc := doc.get("proxy")) is not None:
            if not isinstance(proxy_doc, dict):
                raise InputException(
                    f"Invalid install config proxy is not a mapping: {doc}"
                )
            proxy = InstallConfigProxy.parse_doc(proxy_doc)
        return cls(
            name=name,
            namespace=_optional_str(metadata, "namespace", "metadata.namespace"),
            ssh_key=_optional_str(doc, "sshKey", "sshKey") or "",
            control_plane_architecture=(
                _optional_str(control_plane, "architecture", "controlPlane.architecture")
                or None
            ),
            proxy=proxy,
        )

    @property
    def cluster_namespace(self) -> str:
        """Namespace shared by all generated cluster resources."""
        return self.namespace or DEFAULT_CLUSTER_NAMESPACE

    @property
    def infra_env_name(self) -> str:
        """Name of the InfraEnv resource."""
        return self.name

    @property
    def cluster_deployment_name(self) -> str:
        """Name of the ClusterDeployment resource."""
        return self.name

    @property
    def pull_secret_name(self) -> str:
        """Name of the pull secret resource."""
        return f"{self.cluster_deployment_name}-pull-secret"

    @property
    def nmstate_config_labels(self) -> dict[str, str]:
        """Labels identifying the NMStateConfigs that belong to the InfraEnv."""
        return {NMSTATE_CONFIG_LABEL: self.infra_env_name}


class OptionalInstallConfig(WritableAsset):
    """Install configuration supplied by the user, if any.

    The asset is never synthesized: generating it without a file on disk
    means the user opted out and `config` stays None.
    """

    def __init__(self, config: InstallConfig | None = None) -> None:
        """Initialize OptionalInstallConfig."""
        self.config = config
        self.file: File | None = None
        self.state = AssetState.UNINITIALIZED

    @property
    def name(self) -> str:
        return "Install Config"

    def dependencies(self) -> list[type[Asset]]:
        return []

    def generate(self, parents: Parents) -> None:
        if self.config is None:
            _LOGGER.debug("No %s provided", INSTALL_CONFIG_FILENAME)
            self.state = AssetState.SKIPPED
        else:
            self.state = AssetState.GENERATED

    def files(self) -> list[File]:
        if self.file is not None:
            return [self.file]
        return []

    def load(self, fetcher: FileFetcher) -> bool:
        if (file := fetch_optional(fetcher, INSTALL_CONFIG_FILENAME)) is None:
            return False
        self.config = InstallConfig.parse_doc(
            read_document(file.filename, file.data)
        )
        self.file = file
        self.state = AssetState.LOADED
        return True
