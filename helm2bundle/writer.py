"""Library for writing the bundle output files.

Both documents are rendered in memory before anything is written, so a
rendering failure leaves the output directory untouched. Each file is then
written in turn. If writing the `Dockerfile` fails, an `apb.yml` that was
already written is left in place.
"""

import logging
from pathlib import Path

import aiofiles
from aiofiles.ospath import exists
import yaml

from .bundle import render_dockerfile
from .exceptions import OutputExistsError, OutputWriteError
from .manifest import Bundle

__all__ = [
    "BUNDLE_FILENAME",
    "DOCKERFILE_FILENAME",
    "output_paths",
    "check_outputs",
    "write_outputs",
]

_LOGGER = logging.getLogger(__name__)


BUNDLE_FILENAME = "apb.yml"
DOCKERFILE_FILENAME = "Dockerfile"


def output_paths(output_dir: Path) -> list[Path]:
    """Return the paths of the files written to the output directory."""
    return [output_dir / BUNDLE_FILENAME, output_dir / DOCKERFILE_FILENAME]


async def check_outputs(output_dir: Path, force: bool = False) -> None:
    """Raise OutputExistsError if any output file exists, unless forced."""
    if force:
        return
    existing = [path for path in output_paths(output_dir) if await exists(path)]
    if existing:
        raise OutputExistsError(existing)


async def _write_file(path: Path, content: str) -> None:
    try:
        async with aiofiles.open(str(path), mode="w") as output_file:
            await output_file.write(content)
    except OSError as err:
        raise OutputWriteError(f"Unable to write {path}: {err}") from err
    _LOGGER.debug("Wrote %s", path)


async def write_outputs(
    output_dir: Path, bundle: Bundle, tarfile_name: str, force: bool = False
) -> list[Path]:
    """Write the bundle manifest and Dockerfile to the output directory."""
    await check_outputs(output_dir, force)
    try:
        bundle_content = bundle.yaml()
    except yaml.YAMLError as err:
        raise OutputWriteError(
            f"Unable to serialize bundle {bundle.name}: {err}"
        ) from err
    contents = [bundle_content, render_dockerfile(tarfile_name)]

    paths = output_paths(output_dir)
    for path, content in zip(paths, contents):
        await _write_file(path, content)
    return paths
