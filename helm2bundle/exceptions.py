"""Exceptions related to helm2bundle."""

from pathlib import Path

__all__ = [
    "Helm2BundleException",
    "InputException",
    "ArchiveNotFoundError",
    "CorruptArchiveError",
    "IncompleteArchiveError",
    "ChartNotFoundError",
    "ChartParseError",
    "OutputException",
    "OutputExistsError",
    "OutputWriteError",
]


class Helm2BundleException(Exception):
    """Generic base exception used for this library."""


class InputException(Helm2BundleException):
    """Raised when the chart archive is not formatted as expected."""


class ArchiveNotFoundError(InputException):
    """Raised when the chart archive does not exist or cannot be opened."""


class CorruptArchiveError(InputException):
    """Raised when the chart archive is not a valid gzip compressed tarball."""


class IncompleteArchiveError(InputException):
    """Raised when the archive is missing a Chart.yaml or values.yaml."""


class ChartNotFoundError(IncompleteArchiveError):
    """Raised when the archive was exhausted without finding a Chart.yaml."""


class ChartParseError(InputException):
    """Raised when a chart file in the archive can't be parsed."""


class OutputException(Helm2BundleException):
    """Raised when there is a failure producing the output files."""


class OutputExistsError(OutputException):
    """Raised when an output file exists and overwriting was not requested."""

    def __init__(self, paths: list[Path]) -> None:
        names = ", ".join(str(path) for path in paths)
        super().__init__(
            f"Output file(s) already exist: {names} (use --force to overwrite)"
        )
        self.paths = paths


class OutputWriteError(OutputException):
    """Raised when an output file could not be serialized or written."""
