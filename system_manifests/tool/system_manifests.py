"""Command line tool for inspecting a local system manifests repository."""

import argparse
import logging
import os
import pathlib
import sys
import traceback
from typing import Any

import yaml

from system_manifests.exceptions import SystemManifestsException

from . import list_resources, platforms

SYSTEM_MANIFESTS_ENV = "SYSTEM_MANIFESTS"


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for inspecting a system manifests repository.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )
    default_path = os.environ.get(SYSTEM_MANIFESTS_ENV)
    parser.add_argument(
        "--system-manifests",
        "-s",
        type=pathlib.Path,
        default=pathlib.Path(default_path) if default_path else None,
        required=default_path is None,
        help="Local clone of the system manifests repository "
        f"(default: ${SYSTEM_MANIFESTS_ENV})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    list_resources.ListAction.register(subparsers)
    platforms.PlatformsAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """System-manifests command line tool main entry point."""

    def str_presenter(dumper: yaml.Dumper, data: Any) -> Any:
        """Represent multi-line yaml strings as you'd expect.

        See https://github.com/yaml/pyyaml/issues/240
        """
        return dumper.represent_scalar(
            "tag:yaml.org,2002:str", data, style="|" if data.count("\n") > 0 else None
        )

    yaml.add_representer(str, str_presenter)

    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        action.run(**vars(args))
    except SystemManifestsException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("system-manifests error: ", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
