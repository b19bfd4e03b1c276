"""Exceptions related to agent-manifests."""

__all__ = [
    "AgentManifestsException",
    "InputException",
    "AssetException",
    "AssetStateError",
    "MissingDependencyError",
    "FetchError",
    "SerializationError",
    "DecodeError",
    "ValidationError",
    "MissingConfigurationError",
    "UnsupportedArchitectureError",
]


class AgentManifestsException(Exception):
    """Generic base exception used for this library."""


class InputException(AgentManifestsException):
    """Raised when the input files or values are not formatted as expected."""


class AssetException(AgentManifestsException):
    """Raised when an asset cannot be generated or loaded."""


class AssetStateError(AssetException):
    """Raised when an asset lifecycle operation is invoked in the wrong state."""

    def __init__(self, asset_name: str, state: str, operation: str) -> None:
        super().__init__(f"Cannot {operation} asset {asset_name} in state {state}")
        self.asset_name = asset_name
        self.state = state
        self.operation = operation


class MissingDependencyError(AssetException):
    """Raised when a declared dependency was not resolved before use."""

    def __init__(self, asset_name: str) -> None:
        super().__init__(f"Dependency {asset_name} has not been resolved")
        self.asset_name = asset_name


class FetchError(AssetException):
    """Raised when an asset file exists but could not be read."""


class SerializationError(AssetException):
    """Raised when a manifest object cannot be encoded."""


class DecodeError(AssetException):
    """Raised when a manifest file does not match the expected schema."""


class ValidationError(AssetException):
    """Raised when a manifest object holds unsupported values."""


class MissingConfigurationError(ValidationError):
    """Raised when validation runs without a manifest object."""


class UnsupportedArchitectureError(ValidationError):
    """Raised for a cpu architecture outside the supported set."""

    def __init__(self, architecture: str) -> None:
        super().__init__(
            f"Config.Spec.CpuArchitecture {architecture} is not supported"
        )
        self.architecture = architecture
