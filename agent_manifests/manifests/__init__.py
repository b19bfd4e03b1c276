"""Assets that produce the cluster manifests consumed by the agent installer."""

from .const import CLUSTER_MANIFEST_DIR
from .infraenv import (
    INFRAENV_FILENAME,
    InfraEnv,
    InfraEnvAsset,
    build_infraenv,
    validate_infraenv,
)

__all__ = [
    "CLUSTER_MANIFEST_DIR",
    "INFRAENV_FILENAME",
    "InfraEnv",
    "InfraEnvAsset",
    "build_infraenv",
    "validate_infraenv",
]
