"""Representation of the contents of a system manifests repository.

A system manifests repository is a fleet of platforms. Each platform is made of
components, and each component holds one or more files of kubernetes resource
documents. The objects here are built by `system_manifests.discovery` and
`system_manifests.stream` and are immutable once constructed.

A `ManifestResource` keeps references back to the `Component` and `Platform`
it was read from, and may be projected into a `FlatManifestResource` that only
carries the provenance and identity metadata of the resource for output.
"""

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig
from mashumaro.exceptions import InvalidFieldValue, MissingField

from .exceptions import InputException

__all__ = [
    "ObjectMeta",
    "DynamicObject",
    "Component",
    "Platform",
    "SystemManifests",
    "ManifestResource",
    "FlatManifestResource",
]

CLUSTERS_DIR = "clusters"
ENVIRONMENTS_DIR = "environments"
MANIFESTS_DIR = "manifests"

# Keys consumed by DynamicObject, everything else is kept in `data`
_TYPE_KEYS = ("apiVersion", "kind", "metadata")


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all serializable manifest objects."""

    def compact_dict(self) -> dict[str, Any]:
        """Return a compact dictionary representation of the object."""
        return self.to_dict()

    class Config(BaseConfig):
        omit_none = True


@dataclass
class ObjectMeta(BaseManifest):
    """Identity metadata of a kubernetes resource."""

    name: str | None = None
    """The name of the resource."""

    generate_name: str | None = field(
        metadata=field_options(alias="generateName"), default=None
    )
    """Prefix used by the server to generate a unique name."""

    namespace: str | None = None
    """The namespace of the resource."""

    uid: str | None = None

    resource_version: str | None = field(
        metadata=field_options(alias="resourceVersion"), default=None
    )

    generation: int | None = None

    labels: dict[str, str] | None = None
    """Labels attached to the resource, unquoted scalars are coerced to strings."""

    annotations: dict[str, str] | None = None
    """Annotations attached to the resource, unquoted scalars are coerced to strings."""

    finalizers: list[str] | None = None

    owner_references: list[dict[str, Any]] | None = field(
        metadata=field_options(alias="ownerReferences"), default=None
    )

    class Config(BaseManifest.Config):
        serialize_by_alias = True


@dataclass
class DynamicObject:
    """A kubernetes resource of any kind.

    Only the type and identity metadata are interpreted, the remaining top level
    fields are kept verbatim in `data`.
    """

    api_version: str | None
    """The apiVersion of the object, if present."""

    kind: str | None
    """The kind of the object, if present."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    """The identity metadata of the object."""

    data: dict[str, Any] = field(default_factory=dict)
    """All other top level fields of the document."""

    @classmethod
    def parse_doc(cls, doc: Any) -> "DynamicObject":
        """Parse a DynamicObject from a decoded yaml document."""
        if not isinstance(doc, dict):
            raise InputException(
                f"Expected a mapping but was {type(doc).__name__}: {doc}"
            )
        api_version = doc.get("apiVersion")
        if api_version is not None and not isinstance(api_version, str):
            raise InputException(f"Invalid apiVersion, expected string: {api_version}")
        kind = doc.get("kind")
        if kind is not None and not isinstance(kind, str):
            raise InputException(f"Invalid kind, expected string: {kind}")
        metadata = ObjectMeta()
        if (meta_doc := doc.get("metadata")) is not None:
            if not isinstance(meta_doc, dict):
                raise InputException(f"Invalid metadata, expected mapping: {meta_doc}")
            try:
                metadata = ObjectMeta.from_dict(meta_doc)
            except (InvalidFieldValue, MissingField) as err:
                raise InputException(f"Invalid metadata: {err}") from err
        return cls(
            api_version=api_version,
            kind=kind,
            metadata=metadata,
            data={k: v for k, v in doc.items() if k not in _TYPE_KEYS},
        )

    @property
    def resource_id(self) -> str:
        """Identifier of the object used in log messages."""
        name = self.metadata.name or "<unnamed>"
        if self.metadata.namespace:
            name = f"{self.metadata.namespace}/{name}"
        return f"{self.kind or '<untyped>'}/{name}"


@dataclass(frozen=True)
class Component:
    """A named subdivision of a platform, holding manifest files."""

    name: str
    """The name of the component, unique within its platform."""

    manifests_directory: Path
    """Directory containing the manifest files of the component."""


@dataclass(frozen=True)
class Platform:
    """A deployment target made of components."""

    name: str
    """The name of the platform, unique within the repository."""

    environment_directory: Path
    cluster_directory: Path
    manifests_directory: Path

    components: tuple[Component, ...] = ()
    """Components in discovery order."""

    def component(self, name: str) -> Component | None:
        """Return the component with the specified name."""
        for component in self.components:
            if component.name == name:
                return component
        return None


@dataclass(frozen=True)
class SystemManifests:
    """Holds all platforms found in a system manifests repository."""

    directory: Path
    """The root directory of the repository."""

    platforms: tuple[Platform, ...] = ()
    """Platforms in discovery order."""

    def platform(self, name: str) -> Platform | None:
        """Return the platform with the specified name."""
        for platform in self.platforms:
            if platform.name == name:
                return platform
        return None


@dataclass(frozen=True)
class ManifestResource:
    """A resource document along with the file, component and platform it came from."""

    file: Path
    component: Component
    platform: Platform
    resource: DynamicObject

    def flatten(self) -> "FlatManifestResource":
        """Project the resource into a FlatManifestResource."""
        return FlatManifestResource.from_resource(self)


@dataclass
class FlatManifestResource(BaseManifest):
    """Provenance and identity metadata of a resource, used for output."""

    file: str
    """Path of the file the resource was read from."""

    component_name: str
    """Name of the component that owns the file."""

    platform_name: str
    """Name of the platform that owns the component."""

    resource_meta: ObjectMeta = field(default_factory=ObjectMeta)
    """Identity metadata of the resource."""

    @classmethod
    def from_resource(
        cls, manifest_resource: ManifestResource
    ) -> "FlatManifestResource":
        """Project a ManifestResource, keeping only provenance and metadata."""
        return cls(
            file=str(manifest_resource.file),
            component_name=manifest_resource.component.name,
            platform_name=manifest_resource.platform.name,
            resource_meta=copy.deepcopy(manifest_resource.resource.metadata),
        )
