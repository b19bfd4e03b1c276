"""Agent-manifests create action."""

from argparse import (
    ArgumentParser,
    BooleanOptionalAction,
    _SubParsersAction as SubParsersAction,
)
import logging
import pathlib
from typing import cast

from agent_manifests.asset import AssetState
from agent_manifests.config import AssetStoreConfig
from agent_manifests.manifests import InfraEnvAsset
from agent_manifests.storage import DirectoryFileFetcher, write_files
from agent_manifests.store import AssetStore

_LOGGER = logging.getLogger(__name__)


class CreateAction:
    """Generate the cluster manifests from the install and agent config."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "create",
                help="Create the cluster manifests",
                description="""Reads install-config.yaml and agent-config.yaml
                    from the asset directory and writes the generated cluster
                    manifests below it. Manifests that already exist are
                    validated and kept unless --regenerate is given.""",
            ),
        )
        args.add_argument(
            "--dir",
            type=pathlib.Path,
            default=pathlib.Path("."),
            help="Asset directory holding the configuration files",
        )
        args.add_argument(
            "--regenerate",
            type=bool,
            action=BooleanOptionalAction,
            default=False,
            help="Replace existing manifests with freshly generated ones",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        dir: pathlib.Path,  # pylint: disable=redefined-builtin
        regenerate: bool,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        store = AssetStore(
            DirectoryFileFetcher(dir), AssetStoreConfig(regenerate=regenerate)
        )
        infraenv = store.fetch(InfraEnvAsset)
        if infraenv.state == AssetState.SKIPPED:
            _LOGGER.warning(
                "No install config found in %s, skipping %s", dir, infraenv.name
            )
            return
        for path in write_files(dir, infraenv):
            print(f"Wrote {path}")
