"""Tests for manifest library."""

from pathlib import Path

import pytest
import yaml

from system_manifests.exceptions import InputException
from system_manifests.manifest import (
    Component,
    DynamicObject,
    FlatManifestResource,
    ManifestResource,
    ObjectMeta,
    Platform,
)

SECRET = """
apiVersion: v1
kind: Secret
metadata:
  name: db-password
  namespace: db
  generateName: db-
  resourceVersion: "42"
  labels:
    app.kubernetes.io/name: postgres
  annotations:
    reloader.stakater.com/match: "true"
  ownerReferences:
  - kind: StatefulSet
    name: postgres
type: Opaque
data:
  password: aHVudGVyMg==
"""

PLATFORM = Platform(
    name="prod",
    environment_directory=Path("environments/prod"),
    cluster_directory=Path("clusters/prod"),
    manifests_directory=Path("manifests/prod"),
    components=(Component(name="db", manifests_directory=Path("manifests/prod/db")),),
)


def _resource(resource: DynamicObject) -> ManifestResource:
    return ManifestResource(
        file=Path("manifests/prod/db/secret.yaml"),
        component=PLATFORM.components[0],
        platform=PLATFORM,
        resource=resource,
    )


def test_parse_doc() -> None:
    """Test parsing a kubernetes resource document."""
    obj = DynamicObject.parse_doc(yaml.safe_load(SECRET))
    assert obj.api_version == "v1"
    assert obj.kind == "Secret"
    assert obj.metadata.name == "db-password"
    assert obj.metadata.namespace == "db"
    assert obj.metadata.generate_name == "db-"
    assert obj.metadata.resource_version == "42"
    assert obj.metadata.labels == {"app.kubernetes.io/name": "postgres"}
    assert obj.metadata.annotations == {"reloader.stakater.com/match": "true"}
    assert obj.metadata.owner_references == [{"kind": "StatefulSet", "name": "postgres"}]
    assert obj.data == {"type": "Opaque", "data": {"password": "aHVudGVyMg=="}}
    assert obj.resource_id == "Secret/db/db-password"


def test_parse_doc_untyped() -> None:
    """Test a document without type or metadata is still a resource."""
    obj = DynamicObject.parse_doc({"spec": {"replicas": 1}})
    assert obj.api_version is None
    assert obj.kind is None
    assert obj.metadata == ObjectMeta()
    assert obj.data == {"spec": {"replicas": 1}}
    assert obj.resource_id == "<untyped>/<unnamed>"


@pytest.mark.parametrize(
    ("doc", "match"),
    [
        (["a", "b"], "Expected a mapping but was list"),
        (42, "Expected a mapping but was int"),
        ({"kind": 1}, "Invalid kind"),
        ({"apiVersion": ["v1"]}, "Invalid apiVersion"),
        ({"metadata": "name"}, "Invalid metadata"),
        ({"metadata": {"finalizers": 5}}, "Invalid metadata"),
    ],
)
def test_parse_doc_invalid(doc: object, match: str) -> None:
    """Test documents that can't be parsed as a resource."""
    with pytest.raises(InputException, match=match):
        DynamicObject.parse_doc(doc)


def test_object_meta_compact_dict() -> None:
    """Test metadata is serialized with kubernetes field names, omitting unset fields."""
    obj = DynamicObject.parse_doc(yaml.safe_load(SECRET))
    assert obj.metadata.compact_dict() == {
        "name": "db-password",
        "generateName": "db-",
        "namespace": "db",
        "resourceVersion": "42",
        "labels": {"app.kubernetes.io/name": "postgres"},
        "annotations": {"reloader.stakater.com/match": "true"},
        "ownerReferences": [{"kind": "StatefulSet", "name": "postgres"}],
    }


def test_flatten() -> None:
    """Test projecting a resource to its provenance and metadata."""
    resource = _resource(DynamicObject.parse_doc(yaml.safe_load(SECRET)))
    flat = resource.flatten()
    assert flat == FlatManifestResource.from_resource(resource)
    assert flat.file == str(resource.file)
    assert flat.component_name == resource.component.name
    assert flat.platform_name == resource.platform.name
    assert flat.resource_meta == resource.resource.metadata
    assert flat.compact_dict() == {
        "file": "manifests/prod/db/secret.yaml",
        "component_name": "db",
        "platform_name": "prod",
        "resource_meta": {
            "name": "db-password",
            "generateName": "db-",
            "namespace": "db",
            "resourceVersion": "42",
            "labels": {"app.kubernetes.io/name": "postgres"},
            "annotations": {"reloader.stakater.com/match": "true"},
            "ownerReferences": [{"kind": "StatefulSet", "name": "postgres"}],
        },
    }


def test_flatten_without_metadata() -> None:
    """Test a resource without metadata projects to empty metadata."""
    flat = _resource(DynamicObject.parse_doc({"kind": "Secret"})).flatten()
    assert flat.compact_dict() == {
        "file": "manifests/prod/db/secret.yaml",
        "component_name": "db",
        "platform_name": "prod",
        "resource_meta": {},
    }


def test_flatten_does_not_share_metadata() -> None:
    """Test changing the projection leaves the source resource untouched."""
    resource = _resource(DynamicObject.parse_doc(yaml.safe_load(SECRET)))
    flat = resource.flatten()
    assert flat.resource_meta.labels is not None
    flat.resource_meta.labels["extra"] = "value"
    assert resource.resource.metadata.labels == {"app.kubernetes.io/name": "postgres"}
