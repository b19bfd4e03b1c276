"""Conversion between cpu architecture naming conventions.

Install configurations describe architectures the way Go and Debian do
(``amd64``, ``arm64``) while an InfraEnv expects RPM names (``x86_64``,
``aarch64``). Names that are the same in both conventions, such as
``ppc64le`` and ``s390x``, pass through unchanged.
"""

__all__ = [
    "ARCHITECTURE_AMD64",
    "ARCHITECTURE_ARM64",
    "ARCHITECTURE_PPC64LE",
    "ARCHITECTURE_S390X",
    "rpm_arch",
    "go_arch",
]

ARCHITECTURE_AMD64 = "amd64"
ARCHITECTURE_ARM64 = "arm64"
ARCHITECTURE_PPC64LE = "ppc64le"
ARCHITECTURE_S390X = "s390x"

_GO_TO_RPM = {
    ARCHITECTURE_AMD64: "x86_64",
    ARCHITECTURE_ARM64: "aarch64",
}
_RPM_TO_GO = {rpm: go for go, rpm in _GO_TO_RPM.items()}


def rpm_arch(architecture: str) -> str:
    """Return the RPM name for a Go/Debian architecture name.

    Values already in RPM form are returned unchanged so the conversion may
    be applied more than once.
    """
    return _GO_TO_RPM.get(architecture, architecture)


def go_arch(architecture: str) -> str:
    """Return the Go/Debian name for an RPM architecture name."""
    return _RPM_TO_GO.get(architecture, architecture)
