"""Read-only view of the agent installer configuration."""

from dataclasses import dataclass, field
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
    "AGENT_CONFIG_FILENAME",
    "AgentConfigView",
    "AgentConfig",
]

_LOGGER = logging.getLogger(__name__)

AGENT_CONFIG_FILENAME = "agent-config.yaml"


@dataclass
class AgentConfigView:
    """The fields of an agent configuration used by agent manifests."""

    additional_ntp_sources: list[str] | None = field(default=None)
    """Extra NTP servers configured on the hosts."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "AgentConfigView":
        """Parse an AgentConfigView from an agent-config document."""
        ntp_sources = doc.get("additionalNTPSources")
        if ntp_sources is not None and not isinstance(ntp_sources, list):
            raise InputException(
                f"Invalid agent config additionalNTPSources is not a list: {doc}"
            )
        return cls(
            additional_ntp_sources=(
                [str(source) for source in ntp_sources]
                if ntp_sources is not None
                else None
            )
        )


class AgentConfig(WritableAsset):
    """Agent installer configuration supplied by the user, if any."""

    def __init__(self, config: AgentConfigView | None = None) -> None:
        """Initialize AgentConfig."""
        self.config = config
        self.file: File | None = None
        self.state = AssetState.UNINITIALIZED

    @property
    def name(self) -> str:
        return "Agent Config"

    def dependencies(self) -> list[type[Asset]]:
        return []

    def generate(self, parents: Parents) -> None:
        if self.config is None:
            _LOGGER.debug("No %s provided", AGENT_CONFIG_FILENAME)
            self.state = AssetState.SKIPPED
        else:
            self.state = AssetState.GENERATED

    def files(self) -> list[File]:
        if self.file is not None:
            return [self.file]
        return []

    def load(self, fetcher: FileFetcher) -> bool:
        if (file := fetch_optional(fetcher, AGENT_CONFIG_FILENAME)) is None:
            return False
        self.config = AgentConfigView.parse_doc(read_document(file.filename, file.data))
        self.file = file
        self.state = AssetState.LOADED
        return True
