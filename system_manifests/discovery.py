"""Library for discovering platforms and components in a system manifests repository.

The layout of a repository is fixed by convention:

```
<root>/
  clusters/<platform>/
  environments/<platform>/
  manifests/<platform>/<component>/*.yaml
```

The existence of a directory under `clusters/` implies a platform, and every
directory under `manifests/<platform>/` is a component of that platform. All
directories demanded by the convention are validated before they are trusted.

Example usage:

```python
from system_manifests import discovery

system_manifests = discovery.resolve(Path("/path/to/system-manifests"))
for platform in system_manifests.platforms:
    print(f"Found platform: {platform.name}")
    for component in platform.components:
        print(f"Found component: {component.name}")
```

Discovery is eager and atomic: either the whole repository is resolved or a
`DiscoveryError` is raised and nothing is returned.
"""

from collections.abc import Iterable
import logging
from pathlib import Path

from .exceptions import DiscoveryError
from .manifest import (
    CLUSTERS_DIR,
    ENVIRONMENTS_DIR,
    MANIFESTS_DIR,
    Component,
    Platform,
    SystemManifests,
)

__all__ = [
    "resolve",
    "build_platform",
    "discover_components",
    "validate_directories",
]

_LOGGER = logging.getLogger(__name__)

MISSING = "missing"
NOT_A_DIRECTORY = "not a directory"
UNREADABLE = "unreadable"


def validate_directories(paths: Iterable[Path], step: str) -> None:
    """Check that every path exists and is a directory.

    The first offending path raises a `DiscoveryError`.
    """
    for path in paths:
        if not path.exists():
            raise DiscoveryError(path, MISSING, step)
        if not path.is_dir():
            raise DiscoveryError(path, NOT_A_DIRECTORY, step)


def _list_subdirectories(path: Path, step: str) -> list[Path]:
    """Return the immediate subdirectories of path sorted by name."""
    try:
        return sorted(entry for entry in path.iterdir() if entry.is_dir())
    except OSError as err:
        raise DiscoveryError(path, f"{UNREADABLE}: {err}", step) from err


def discover_components(manifests_directory: Path) -> tuple[Component, ...]:
    """Return a Component for each subdirectory of a platform manifests directory."""
    components = []
    for path in _list_subdirectories(manifests_directory, "platform manifests"):
        validate_directories([path], "component manifests")
        _LOGGER.debug("Found component %s in %s", path.name, manifests_directory)
        components.append(Component(name=path.name, manifests_directory=path))
    return tuple(components)


def build_platform(root: Path, name: str) -> Platform:
    """Build the platform with the specified name from the repository root."""
    environment_directory = root / ENVIRONMENTS_DIR / name
    cluster_directory = root / CLUSTERS_DIR / name
    manifests_directory = root / MANIFESTS_DIR / name
    validate_directories(
        [environment_directory, cluster_directory, manifests_directory],
        f"platform {name}",
    )
    components = discover_components(manifests_directory)
    _LOGGER.debug("Found platform %s with %d components", name, len(components))
    return Platform(
        name=name,
        environment_directory=environment_directory,
        cluster_directory=cluster_directory,
        manifests_directory=manifests_directory,
        components=components,
    )


def resolve(root: Path) -> SystemManifests:
    """Resolve all platforms and components in the repository at root."""
    clusters_directory = root / CLUSTERS_DIR
    validate_directories([clusters_directory], "clusters")
    platforms = tuple(
        build_platform(root, path.name)
        for path in _list_subdirectories(clusters_directory, "clusters")
    )
    _LOGGER.info("Resolved %d platforms in %s", len(platforms), root)
    return SystemManifests(directory=root, platforms=platforms)
