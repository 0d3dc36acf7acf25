"""Library for reading the chart files out of a packaged helm chart.

A chart archive is a gzip compressed tarball as produced by `helm package`,
with all chart files under a single top level directory named after the chart:

```
redis/Chart.yaml
redis/values.yaml
redis/templates/...
```

The archive is read as a stream so that scanning stops as soon as both the
`Chart.yaml` and `values.yaml` have been found:

```python
from helm2bundle.archive import read_chart_archive

values = read_chart_archive(Path("redis-1.1.12.tgz"))
print(values.chart.name)
```
"""

from collections.abc import Generator
import logging
from pathlib import Path
import tarfile
import zlib

from .exceptions import (
    ArchiveNotFoundError,
    ChartNotFoundError,
    ChartParseError,
    CorruptArchiveError,
    IncompleteArchiveError,
)
from .manifest import Chart, ChartValues

__all__ = [
    "match_entry",
    "read_chart_archive",
]

_LOGGER = logging.getLogger(__name__)


CHART_FILE = "Chart.yaml"
VALUES_FILE = "values.yaml"

# Errors raised by tarfile in stream mode for invalid compressed data
_ARCHIVE_ERRORS = (tarfile.TarError, EOFError, zlib.error)


def match_entry(name: str, filename: str) -> bool:
    """Return True if the entry is `filename` exactly one directory deep.

    This is equivalent to matching the glob `*/<filename>`, so `redis/Chart.yaml`
    matches while `Chart.yaml` and `redis/charts/sub/Chart.yaml` do not.
    """
    parts = name.split("/")
    return len(parts) == 2 and bool(parts[0]) and parts[1] == filename


def _decode(content: bytes, name: str) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as err:
        raise ChartParseError(
            f"Archive entry {name} is not valid UTF-8: {err}"
        ) from err


def iter_entries(tar: tarfile.TarFile) -> Generator[tuple[str, bytes], None, None]:
    """Yield the name and contents of the chart files in the archive.

    Entries are yielded lazily in archive order.
    """
    for member in tar:
        if not member.isfile():
            continue
        if not (
            match_entry(member.name, CHART_FILE)
            or match_entry(member.name, VALUES_FILE)
        ):
            continue
        if (fileobj := tar.extractfile(member)) is None:
            continue
        with fileobj:
            yield member.name, fileobj.read()


def _scan(tar: tarfile.TarFile, path: Path) -> tuple[Chart, str]:
    """Scan the archive until both the chart and its values have been read."""
    chart: Chart | None = None
    values: str | None = None
    for name, content in iter_entries(tar):
        if match_entry(name, CHART_FILE):
            _LOGGER.debug("Found chart %s in %s", name, path)
            chart = Chart.parse_yaml(_decode(content, name))
        else:
            _LOGGER.debug("Found values %s in %s", name, path)
            values = _decode(content, name)
        if chart is not None and chart.name and values:
            return chart, values

    if chart is None:
        raise ChartNotFoundError(f"{CHART_FILE} not found in archive {path}")
    if not chart.name:
        raise IncompleteArchiveError(
            f"{CHART_FILE} in archive {path} does not contain a chart name"
        )
    if values is None:
        raise IncompleteArchiveError(f"{VALUES_FILE} not found in archive {path}")
    raise IncompleteArchiveError(f"{VALUES_FILE} in archive {path} is empty")


def read_chart_archive(path: Path) -> ChartValues:
    """Read the chart and values from a gzip compressed chart archive."""
    try:
        archive_file = open(path, "rb")
    except OSError as err:
        raise ArchiveNotFoundError(
            f"Unable to open chart archive {path}: {err}"
        ) from err

    with archive_file:
        try:
            with tarfile.open(fileobj=archive_file, mode="r|gz") as tar:
                chart, values = _scan(tar, path)
        except _ARCHIVE_ERRORS as err:
            raise CorruptArchiveError(
                f"Chart archive {path} is not a valid gzip compressed tarball: {err}"
            ) from err

    return ChartValues(chart=chart, values=values, tarfile_name=Path(path).name)
