"""Fixtures for building chart archives."""

from collections.abc import Callable
import io
from pathlib import Path
import tarfile

import pytest

CHART_YAML = """apiVersion: v1
name: redis
version: 1.1.12
appVersion: 4.0.8
description: Open source, advanced key-value store.
icon: https://bitnami.com/assets/stacks/redis/img/redis-stack-220x234.png
keywords:
- redis
- keyvalue
"""

VALUES_YAML = """## Bitnami Redis image version
image: bitnami/redis:4.0.8-r0

## Use password authentication
usePassword: true

persistence:
  enabled: true
  accessMode: ReadWriteOnce
  size: 8Gi
"""

ArchiveFactory = Callable[..., Path]


def write_archive(
    path: Path, entries: list[tuple[str, str]], compress: bool = True
) -> Path:
    """Write a tarball containing the named entries to path."""
    with tarfile.open(path, mode="w:gz" if compress else "w") as tar:
        for name, content in entries:
            data = content.encode()
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return path


@pytest.fixture(name="chart_archive")
def chart_archive_fixture(tmp_path: Path) -> ArchiveFactory:
    """Fixture to create a chart archive with the specified entries."""

    def _create(
        entries: list[tuple[str, str]] | None = None,
        name: str = "redis-1.1.12.tgz",
    ) -> Path:
        if entries is None:
            entries = [
                ("redis/Chart.yaml", CHART_YAML),
                ("redis/values.yaml", VALUES_YAML),
                ("redis/templates/deployment.yaml", "kind: Deployment\n"),
            ]
        return write_archive(tmp_path / name, entries)

    return _create


@pytest.fixture(name="output_dir")
def output_dir_fixture(tmp_path: Path) -> Path:
    """Fixture for an empty directory to write outputs."""
    path = tmp_path / "out"
    path.mkdir()
    return path
