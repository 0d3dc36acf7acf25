"""
helm2bundle packages a helm chart archive as a service bundle.

The library reads the `Chart.yaml` and `values.yaml` of a chart archive and
produces an `apb.yml` bundle manifest and a `Dockerfile` that copies the
chart into a bundle base image.
"""

__all__ = [
    "archive",
    "bundle",
    "manifest",
    "writer",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
