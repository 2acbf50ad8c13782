"""Filters for selecting resources out of a resource stream."""

from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass
import logging

from .manifest import ManifestResource

__all__ = [
    "ResourceSelector",
    "SECRET_KINDS",
]

_LOGGER = logging.getLogger(__name__)

SECRET_KINDS = ["Secret", "ExternalSecret", "PushSecret"]


@dataclass
class ResourceSelector:
    """A filter for resources to select from the repository."""

    kinds: list[str] | None = None
    """Resources returned will have one of these kinds."""

    platform: str | None = None
    """Resources returned will be from this platform."""

    component: str | None = None
    """Resources returned will be from this component."""

    namespace: str | None = None
    """Resources returned will be from this namespace."""

    label_selector: dict[str, str] | None = None
    """Resources returned must have these labels."""

    @property
    def predicate(self) -> Callable[[ManifestResource], bool]:
        """A predicate that selects ManifestResource objects."""

        def predicate(obj: ManifestResource) -> bool:
            if self.kinds and obj.resource.kind not in self.kinds:
                return False
            if self.platform and obj.platform.name != self.platform:
                return False
            if self.component and obj.component.name != self.component:
                return False
            metadata = obj.resource.metadata
            if self.namespace and metadata.namespace != self.namespace:
                return False
            if self.label_selector:
                obj_labels = metadata.labels or {}
                for name, value in self.label_selector.items():
                    if (obj_value := obj_labels.get(name)) != value:
                        _LOGGER.debug(
                            "Label mismatch %s=%s on %s",
                            name,
                            obj_value,
                            obj.resource.resource_id,
                        )
                        return False
            return True

        return predicate

    def select(
        self, resources: Iterable[ManifestResource]
    ) -> Generator[ManifestResource, None, None]:
        """Yield only the resources matching the selector."""
        predicate = self.predicate
        for resource in resources:
            if predicate(resource):
                yield resource
