"""Fixtures for system-manifests tests."""

from pathlib import Path

import pytest

SECRET = """---
apiVersion: v1
kind: Secret
metadata:
  name: x
  namespace: auth
  labels:
    app: auth
type: Opaque
stringData:
  password: hunter2
"""

DATABASE = """---
apiVersion: apps/v1
kind: StatefulSet
metadata:
  name: postgres
  namespace: db
---
apiVersion: external-secrets.io/v1beta1
kind: ExternalSecret
metadata:
  name: postgres-credentials
  namespace: db
  annotations:
    owner: dba
"""

CONFIG = """apiVersion: v1
kind: ConfigMap
metadata:
  name: settings
data:
  mode: production
"""


def write_platform(root: Path, name: str, components: dict[str, dict[str, str]]) -> None:
    """Create the directories of a platform and the files of its components."""
    (root / "clusters" / name).mkdir(parents=True)
    (root / "environments" / name).mkdir(parents=True)
    manifests = root / "manifests" / name
    manifests.mkdir(parents=True)
    for component, files in components.items():
        (manifests / component).mkdir()
        for filename, content in files.items():
            (manifests / component / filename).write_text(content)


@pytest.fixture(name="root")
def root_fixture(tmp_path: Path) -> Path:
    """A repository with a prod and staging platform."""
    write_platform(
        tmp_path,
        "prod",
        {
            "auth": {"secret.yaml": SECRET},
            "db": {"database.yml": DATABASE, "README.md": "# Database\n"},
        },
    )
    write_platform(tmp_path, "staging", {"web": {"config.yaml": CONFIG}})
    return tmp_path
