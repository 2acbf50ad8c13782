"""Tests for the selector library."""

from pathlib import Path

import pytest

from system_manifests import stream
from system_manifests.selector import SECRET_KINDS, ResourceSelector


@pytest.mark.parametrize(
    ("selector", "expected"),
    [
        (ResourceSelector(), ["x", "postgres", "postgres-credentials", "settings"]),
        (ResourceSelector(kinds=SECRET_KINDS), ["x", "postgres-credentials"]),
        (ResourceSelector(kinds=["ConfigMap"]), ["settings"]),
        (ResourceSelector(platform="staging"), ["settings"]),
        (
            ResourceSelector(platform="prod", component="db"),
            ["postgres", "postgres-credentials"],
        ),
        (ResourceSelector(namespace="auth"), ["x"]),
        (ResourceSelector(label_selector={"app": "auth"}), ["x"]),
        (ResourceSelector(label_selector={"app": "db"}), []),
        (ResourceSelector(kinds=["Secret"], platform="staging"), []),
    ],
)
def test_select(root: Path, selector: ResourceSelector, expected: list[str]) -> None:
    """Test selecting resources from a stream."""
    resources = stream.raise_on_error(stream.iter_resources(root))
    assert [
        resource.resource.metadata.name for resource in selector.select(resources)
    ] == expected
