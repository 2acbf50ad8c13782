"""Library for common command line selector flags."""

from argparse import (
    Action,
    ArgumentError,
    ArgumentParser,
    BooleanOptionalAction,
    Namespace,
)
from typing import Any

from system_manifests.selector import SECRET_KINDS, ResourceSelector


class SelectorAppendAction(Action):
    """Append a key=value pair to the argument dict."""

    def __call__(
        self,
        parser: ArgumentParser,
        namespace: Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        values = values.split(",")
        if not values[0]:
            return
        result = getattr(namespace, self.dest) or {}
        for value in values:
            if value.count("=") != 1:
                raise ArgumentError(
                    self, f"Expected key=value format but got '{value}'"
                )
            k, v = value.split("=")
            result[k] = v
        setattr(namespace, self.dest, result)


def add_selector_flags(args: ArgumentParser) -> None:
    """Add resource selector flags to the arguments object."""
    args.add_argument(
        "--kinds",
        "-k",
        type=lambda x: [kind for kind in x.split(",") if kind],
        default=list(SECRET_KINDS),
        help="A comma separated list of resource kinds to select "
        f"(default: {','.join(SECRET_KINDS)})",
    )
    args.add_argument(
        "--platform",
        "-p",
        type=str,
        default=None,
        help="If present, only select resources from this platform",
    )
    args.add_argument(
        "--component",
        "-c",
        type=str,
        default=None,
        help="If present, only select resources from this component",
    )
    args.add_argument(
        "--namespace",
        "-n",
        type=str,
        default=None,
        help="If present, only select resources from this namespace",
    )
    args.add_argument(
        "--label-selector",
        "-l",
        action=SelectorAppendAction,
        help="Filter resources by label selector by name=value",
    )
    args.add_argument(
        "--skip-errors",
        default=False,
        action=BooleanOptionalAction,
        help="Log and skip manifests that can't be read instead of failing",
    )


def build_selector(  # type: ignore[no-untyped-def]
    **kwargs,
) -> ResourceSelector:
    """Build a selector object from the specified flags."""
    return ResourceSelector(
        kinds=kwargs.get("kinds"),
        platform=kwargs.get("platform"),
        component=kwargs.get("component"),
        namespace=kwargs.get("namespace"),
        label_selector=kwargs.get("label_selector"),
    )
