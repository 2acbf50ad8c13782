"""System-manifests list action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import logging
from pathlib import Path
from typing import Any, cast

from system_manifests import stream

from . import selector
from .format import JSON, YAML, formatter

_LOGGER = logging.getLogger(__name__)


class ListAction:
    """List resources found in the manifests of all platforms."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "list",
                help="List resources found in platform manifests",
                description=(
                    "Print the provenance and metadata of resources found in "
                    "platform manifests, by default all secrets"
                ),
            ),
        )
        selector.add_selector_flags(args)
        args.add_argument(
            "--output",
            "-o",
            choices=[JSON, YAML],
            default=JSON,
            help="Output format of the command",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        system_manifests: Path,
        output: str,
        skip_errors: bool,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        query = selector.build_selector(**kwargs)
        items = stream.iter_resources(system_manifests)
        if skip_errors:
            resources = stream.skip_errors(items)
        else:
            resources = stream.raise_on_error(items)

        results: list[dict[str, Any]] = [
            resource.flatten().compact_dict() for resource in query.select(resources)
        ]
        _LOGGER.debug("Selected %d resources", len(results))
        formatter(output).print(results)
