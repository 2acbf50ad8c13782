"""Library for streaming resources out of the manifest files of a platform.

Every component of a platform holds manifest files, and every manifest file
holds one or more yaml documents. This module walks all of them and produces a
single lazy sequence of `ManifestResource` objects:

```python
from system_manifests import discovery, stream

system_manifests = discovery.resolve(Path("/path/to/system-manifests"))
for item in stream.resource_iter(system_manifests):
    if isinstance(item, StreamError):
        print(f"Failed: {item}")
        continue
    print(f"Found {item.resource.kind} in {item.file}")
```

Failures encountered while walking (a directory that can't be listed, a file
that can't be opened, a document that can't be decoded) are yielded as
`StreamError` items in place of the resources that could not be produced and
the walk continues. Use `raise_on_error` or `skip_errors` to apply a policy.

Nothing is read until the sequence is advanced, only one file is open at a time
and a file is closed as soon as its last document is produced or the generator
is closed.
"""

from collections.abc import Generator, Iterable, Iterator
import logging
import os
from pathlib import Path
import re
from typing import BinaryIO

import yaml

from .discovery import resolve
from .exceptions import (
    DecodeError,
    FileOpenError,
    InputException,
    ListingError,
    StreamError,
)
from .manifest import (
    Component,
    DynamicObject,
    ManifestResource,
    Platform,
    SystemManifests,
)

__all__ = [
    "ResourceResult",
    "iter_resources",
    "resource_iter",
    "platform_resources",
    "split_documents",
    "raise_on_error",
    "skip_errors",
]

_LOGGER = logging.getLogger(__name__)

MANIFEST_SUFFIXES = (".yaml", ".yml")

_DOCUMENT_START = re.compile(rb"^---(\s|$)")
_DOCUMENT_END = re.compile(rb"^\.\.\.(\s|$)")
_DIRECTIVE = b"%"
_COMMENT = b"#"

# Each item of a resource stream is either a resource or the error that
# prevented producing one.
ResourceResult = ManifestResource | StreamError


def split_documents(
    lines: Iterable[bytes],
) -> Generator[tuple[int, bytes], None, None]:
    """Split a yaml stream into the raw bytes of its individual documents.

    Yields tuples of the 1-based document index and the document bytes. Chunks
    with only blank lines, comments or directives are not documents and are
    not counted. Lines are matched as bytes so that invalid text in one
    document can only fail the decoding of that document.
    """
    index = 0
    chunk: list[bytes] = []
    started = False
    for line in lines:
        if _DOCUMENT_START.match(line):
            if started:
                index += 1
                yield index, b"".join(chunk)
                chunk = []
            chunk.append(line)
            started = True
            continue
        chunk.append(line)
        if _DOCUMENT_END.match(line):
            if started:
                index += 1
                yield index, b"".join(chunk)
            chunk = []
            started = False
            continue
        stripped = line.strip()
        if stripped and not stripped.startswith((_COMMENT, _DIRECTIVE)):
            started = True
    if started:
        index += 1
        yield index, b"".join(chunk)


def _manifest_files(directory: Path) -> Generator[Path | ListingError, None, None]:
    """Yield the manifest files in a component directory in name order."""
    entries: list[os.DirEntry[str]] = []
    listing_error: ListingError | None = None
    try:
        with os.scandir(directory) as it:
            for entry in it:
                entries.append(entry)
    except OSError as err:
        listing_error = ListingError(directory, str(err))
        listing_error.__cause__ = err

    for entry in sorted(entries, key=lambda e: e.name):
        path = Path(entry.path)
        try:
            is_file = entry.is_file()
        except OSError as err:
            error = ListingError(path, str(err))
            error.__cause__ = err
            yield error
            continue
        if not is_file or path.suffix not in MANIFEST_SUFFIXES:
            _LOGGER.debug("Skipping %s", path)
            continue
        yield path

    if listing_error is not None:
        yield listing_error


def _read_documents(
    manifest_file: BinaryIO,
) -> Generator[tuple[int, bytes], None, None]:
    """Yield the documents of an open file, closing it before the last one."""
    last: tuple[int, bytes] | None = None
    try:
        with manifest_file:
            for document in split_documents(manifest_file):
                if last is not None:
                    yield last
                last = document
    except OSError:
        if last is not None:
            yield last
        raise
    if last is not None:
        yield last


def _file_resources(
    platform: Platform, component: Component, path: Path
) -> Generator[ResourceResult, None, None]:
    """Yield a resource for every document in a manifest file."""
    _LOGGER.debug("Reading manifest file %s", path)
    manifest_file: BinaryIO
    try:
        manifest_file = path.open("rb")
    except OSError as err:
        open_error = FileOpenError(path, str(err))
        open_error.__cause__ = err
        yield open_error
        return

    try:
        for index, content in _read_documents(manifest_file):
            try:
                if (doc := yaml.safe_load(content)) is None:
                    continue
                resource = DynamicObject.parse_doc(doc)
            except (yaml.YAMLError, InputException) as err:
                decode_error = DecodeError(path, index, str(err))
                decode_error.__cause__ = err
                yield decode_error
                continue
            yield ManifestResource(
                file=path,
                component=component,
                platform=platform,
                resource=resource,
            )
    except OSError as err:
        read_error = FileOpenError(path, str(err))
        read_error.__cause__ = err
        yield read_error


def _component_resources(
    platform: Platform, component: Component
) -> Generator[ResourceResult, None, None]:
    for item in _manifest_files(component.manifests_directory):
        if isinstance(item, ListingError):
            yield item
            continue
        yield from _file_resources(platform, component, item)


def platform_resources(platform: Platform) -> Generator[ResourceResult, None, None]:
    """Yield every resource of every component of the platform."""
    for component in platform.components:
        _LOGGER.debug("Walking component %s/%s", platform.name, component.name)
        yield from _component_resources(platform, component)


def resource_iter(
    system_manifests: SystemManifests,
) -> Generator[ResourceResult, None, None]:
    """Yield every resource of every platform in the repository."""
    for platform in system_manifests.platforms:
        yield from platform_resources(platform)


def iter_resources(root: Path) -> Iterator[ResourceResult]:
    """Resolve the repository at root and return a lazy stream of its resources.

    Discovery happens immediately and raises a `DiscoveryError` when the
    repository does not match the expected layout. Files are only read as the
    returned iterator is advanced.
    """
    return resource_iter(resolve(root))


def raise_on_error(
    items: Iterable[ResourceResult],
) -> Generator[ManifestResource, None, None]:
    """Yield resources, raising the first error item encountered."""
    for item in items:
        if isinstance(item, StreamError):
            raise item
        yield item


def skip_errors(
    items: Iterable[ResourceResult],
) -> Generator[ManifestResource, None, None]:
    """Yield resources, logging and dropping error items."""
    for item in items:
        if isinstance(item, StreamError):
            _LOGGER.warning("Skipping: %s", item)
            continue
        yield item
