"""Agent-manifests get action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import logging
import pathlib
from typing import cast

from agent_manifests.exceptions import AssetException
from agent_manifests.manifests import INFRAENV_FILENAME, InfraEnvAsset
from agent_manifests.storage import DirectoryFileFetcher

from .format import PrintFormatter, YamlFormatter

_LOGGER = logging.getLogger(__name__)


class GetInfraEnvAction:
    """Print details about a previously written InfraEnv."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "infraenv",
                help="Get the InfraEnv manifest",
                description="Load, validate and print the InfraEnv manifest",
            ),
        )
        args.add_argument(
            "--dir",
            type=pathlib.Path,
            default=pathlib.Path("."),
            help="Asset directory holding the cluster manifests",
        )
        args.add_argument(
            "--output",
            "-o",
            choices=["yaml", "summary"],
            default="summary",
            help="Output format of the command",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        dir: pathlib.Path,  # pylint: disable=redefined-builtin
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        asset = InfraEnvAsset()
        if not asset.load(DirectoryFileFetcher(dir)):
            raise AssetException(f"No {INFRAENV_FILENAME} found in {dir}")
        if (infraenv := asset.config) is None:
            raise AssetException(f"{INFRAENV_FILENAME} in {dir} holds no InfraEnv")
        if output == "yaml":
            YamlFormatter().print([infraenv.compact_dict()])
            return
        spec = infraenv.spec
        PrintFormatter().print(
            [
                {
                    "name": infraenv.namespaced_name,
                    "cluster": spec.cluster_ref.name if spec.cluster_ref else "",
                    "arch": spec.cpu_architecture or "",
                    "proxy": "yes" if spec.proxy else "no",
                    "ntp": ",".join(spec.additional_ntp_sources or []),
                }
            ]
        )


class GetAction:
    """Get details about generated manifests."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "get",
                help="Print information about generated manifests",
                description="Print information about generated manifests",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        GetInfraEnvAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        # No-op given subcommands are always the dispatch target
