"""System-manifests platforms action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from pathlib import Path
from typing import Any, cast

from system_manifests import discovery

from .format import JSON, TABLE, YAML, formatter


class PlatformsAction:
    """Print the platforms and components of the repository."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "platforms",
                help="Print platforms and their components",
                description="Print the platforms and components found by convention",
            ),
        )
        args.add_argument(
            "--output",
            "-o",
            choices=[TABLE, JSON, YAML],
            default=TABLE,
            help="Output format of the command",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        system_manifests: Path,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        manifests = discovery.resolve(system_manifests)
        results: list[dict[str, Any]] = []
        for platform in manifests.platforms:
            names = [component.name for component in platform.components]
            results.append(
                {
                    "platform": platform.name,
                    "components": ",".join(names) if output == TABLE else names,
                }
            )
        if not results:
            print(f"No platforms found in {manifests.directory}")
            return
        formatter(output, ["platform", "components"]).print(results)
