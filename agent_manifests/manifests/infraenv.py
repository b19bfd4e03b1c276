"""The InfraEnv asset.

An InfraEnv describes the environment agents boot into: which cluster they
join, the ssh key and pull secret to use, proxy and NTP settings and the cpu
architecture of the discovery image. It is derived from the install and agent
configuration and written to ``cluster-manifests/infraenv.yaml``.

Generated and loaded objects go through the same validation, so an InfraEnv
edited by hand on disk is held to the same rules as a freshly generated one.
"""

from dataclasses import dataclass, field
import logging
import posixpath

from mashumaro import field_options

from agent_manifests.agent_config import AgentConfig, AgentConfigView
from agent_manifests.arch import (
    ARCHITECTURE_AMD64,
    ARCHITECTURE_ARM64,
    ARCHITECTURE_PPC64LE,
    rpm_arch,
)
from agent_manifests.asset import (
    Asset,
    AssetState,
    File,
    FileFetcher,
    Parents,
    WritableAsset,
    fetch_optional,
)
from agent_manifests.exceptions import (
    AssetStateError,
    DecodeError,
    FetchError,
    MissingConfigurationError,
    UnsupportedArchitectureError,
    ValidationError,
)
from agent_manifests.install_config import InstallConfig, OptionalInstallConfig
from agent_manifests.manifest import (
    BaseManifest,
    LabelSelector,
    LocalObjectReference,
    ObjectMeta,
)

from .const import CLUSTER_MANIFEST_DIR

__all__ = [
    "INFRAENV_FILENAME",
    "SUPPORTED_ARCHITECTURES",
    "InfraEnv",
    "InfraEnvSpec",
    "InfraEnvAsset",
    "build_infraenv",
    "validate_infraenv",
]

_LOGGER = logging.getLogger(__name__)

INFRAENV_FILENAME = posixpath.join(CLUSTER_MANIFEST_DIR, "infraenv.yaml")
INFRAENV_API_VERSION = "agent-install.openshift.io/v1beta1"
INFRAENV_KIND = "InfraEnv"

SUPPORTED_ARCHITECTURES = frozenset(
    {
        rpm_arch(ARCHITECTURE_AMD64),
        rpm_arch(ARCHITECTURE_ARM64),
        rpm_arch(ARCHITECTURE_PPC64LE),
    }
)

# Characters stripped from both ends of the ssh key, which may be quoted as
# a YAML block scalar in the install config.
SSH_KEY_TRIM_CHARS = "| \t\r\n"


@dataclass
class ClusterReference(BaseManifest):
    """Reference to the ClusterDeployment the InfraEnv belongs to."""

    name: str
    namespace: str | None = None


@dataclass
class Proxy(BaseManifest):
    """Proxy settings for the discovery agents."""

    http_proxy: str | None = field(
        metadata=field_options(alias="httpProxy"), default=None
    )
    https_proxy: str | None = field(
        metadata=field_options(alias="httpsProxy"), default=None
    )
    no_proxy: str | None = field(metadata=field_options(alias="noProxy"), default=None)


@dataclass
class InfraEnvSpec(BaseManifest):
    """Desired state of an InfraEnv."""

    cluster_ref: ClusterReference | None = field(
        metadata=field_options(alias="clusterRef"), default=None
    )
    """The cluster that hosts booted from this InfraEnv join."""

    ssh_authorized_key: str | None = field(
        metadata=field_options(alias="sshAuthorizedKey"), default=None
    )
    """Public key authorized for the core user on discovered hosts."""

    pull_secret_ref: LocalObjectReference | None = field(
        metadata=field_options(alias="pullSecretRef"), default=None
    )
    """Secret holding the image pull secret."""

    nmstate_config_label_selector: LabelSelector = field(
        metadata=field_options(alias="nmStateConfigLabelSelector"),
        default_factory=LabelSelector,
    )
    """Selects the NMStateConfigs applied to hosts of this InfraEnv."""

    cpu_architecture: str | None = field(
        metadata=field_options(alias="cpuArchitecture"), default=None
    )
    """RPM name of the cpu architecture, e.g. x86_64."""

    proxy: Proxy | None = None
    """Proxy used by the discovery agents."""

    additional_ntp_sources: list[str] | None = field(
        metadata=field_options(alias="additionalNTPSources"), default=None
    )
    """NTP servers used in addition to the ones offered by DHCP."""


@dataclass(kw_only=True)
class InfraEnv(BaseManifest):
    """An agent-install InfraEnv resource."""

    api_version: str = field(
        metadata=field_options(alias="apiVersion"), default=INFRAENV_API_VERSION
    )
    kind: str = INFRAENV_KIND
    metadata: ObjectMeta
    spec: InfraEnvSpec = field(default_factory=InfraEnvSpec)

    @property
    def namespaced_name(self) -> str:
        """Return the namespace and name concatenated as an id."""
        if self.metadata.namespace:
            return f"{self.metadata.namespace}/{self.metadata.name}"
        return self.metadata.name


def build_infraenv(
    install_config: InstallConfig | None,
    agent_config: AgentConfigView | None,
) -> InfraEnv | None:
    """Build an InfraEnv from the install and agent configuration.

    Returns None when there is no install configuration, in which case no
    InfraEnv is produced at all.
    """
    if install_config is None:
        return None

    namespace = install_config.cluster_namespace
    spec = InfraEnvSpec(
        cluster_ref=ClusterReference(
            name=install_config.cluster_deployment_name,
            namespace=namespace,
        ),
        ssh_authorized_key=install_config.ssh_key.strip(SSH_KEY_TRIM_CHARS),
        pull_secret_ref=LocalObjectReference(name=install_config.pull_secret_name),
        nmstate_config_label_selector=LabelSelector(
            match_labels=install_config.nmstate_config_labels
        ),
    )
    # The install config uses Go/Debian names (amd64, arm64) while the
    # InfraEnv expects RPM names (x86_64, aarch64).
    if install_config.control_plane_architecture:
        spec.cpu_architecture = rpm_arch(install_config.control_plane_architecture)
    if (proxy := install_config.proxy) is not None:
        spec.proxy = Proxy(
            http_proxy=proxy.http_proxy,
            https_proxy=proxy.https_proxy,
            no_proxy=proxy.no_proxy,
        )
    if agent_config is not None:
        spec.additional_ntp_sources = agent_config.additional_ntp_sources

    return InfraEnv(
        metadata=ObjectMeta(name=install_config.infra_env_name, namespace=namespace),
        spec=spec,
    )


def validate_infraenv(config: InfraEnv | None) -> None:
    """Check that an InfraEnv only holds supported values."""
    if config is None:
        raise MissingConfigurationError("missing configuration or manifest file")
    architecture = config.spec.cpu_architecture
    if architecture and architecture not in SUPPORTED_ARCHITECTURES:
        raise UnsupportedArchitectureError(architecture)


class InfraEnvAsset(WritableAsset):
    """Generates the infraenv.yaml file."""

    def __init__(self) -> None:
        """Initialize InfraEnvAsset."""
        self.config: InfraEnv | None = None
        self.file: File | None = None
        self.state = AssetState.UNINITIALIZED

    @property
    def name(self) -> str:
        return "InfraEnv Config"

    def dependencies(self) -> list[type[Asset]]:
        return [OptionalInstallConfig, AgentConfig]

    def generate(self, parents: Parents) -> None:
        """Generate the InfraEnv manifest from the resolved configuration."""
        self._check_state("generate")
        install_config = parents.get(OptionalInstallConfig)
        agent_config = parents.get(AgentConfig)

        infraenv = build_infraenv(install_config.config, agent_config.config)
        if infraenv is None:
            _LOGGER.debug("Skipping %s, no install config provided", self.name)
            self.state = AssetState.SKIPPED
            return

        data = infraenv.yaml().encode()
        self.config = infraenv
        self.file = File(filename=INFRAENV_FILENAME, data=data)
        self._finish(AssetState.GENERATED)

    def files(self) -> list[File]:
        if self.file is not None:
            return [self.file]
        return []

    def load(self, fetcher: FileFetcher) -> bool:
        """Load the InfraEnv from a previously written manifest file."""
        self._check_state("load")
        try:
            file = fetch_optional(fetcher, INFRAENV_FILENAME)
        except FetchError:
            self.state = AssetState.INVALID
            raise
        if file is None:
            return False

        try:
            config = InfraEnv.parse_yaml(file.data)
        except DecodeError as err:
            raise DecodeError(
                f"failed to unmarshal {INFRAENV_FILENAME}: {err}"
            ) from err

        # Files written before architecture names were converted may still
        # hold Go/Debian names.
        if config.spec.cpu_architecture:
            config.spec.cpu_architecture = rpm_arch(config.spec.cpu_architecture)

        self.file, self.config = file, config
        self._finish(AssetState.LOADED)
        return True

    def _check_state(self, operation: str) -> None:
        if self.state != AssetState.UNINITIALIZED:
            raise AssetStateError(self.name, self.state, operation)

    def _finish(self, state: AssetState) -> None:
        try:
            validate_infraenv(self.config)
        except ValidationError:
            self.file = None
            self.state = AssetState.INVALID
            raise
        self.state = state
        _LOGGER.debug("%s %s", self.name, state)
