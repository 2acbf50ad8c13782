"""
A library for discovering and streaming the resources of a system manifests
repository.

A system manifests repository describes a fleet of platforms by convention:

```
<root>/
  clusters/<platform>/
  environments/<platform>/
  manifests/<platform>/<component>/*.yaml
```

Use `system_manifests.discovery.resolve` to find every platform and component,
then `system_manifests.stream.resource_iter` to lazily walk every resource
document in their manifest files.
"""

__all__ = [
    "discovery",
    "exceptions",
    "manifest",
    "selector",
    "stream",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
