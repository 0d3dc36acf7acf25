"""Representation of the chart inputs and the generated bundle.

A `Chart` is parsed from the `Chart.yaml` inside a chart archive and combined
with the raw `values.yaml` text into `ChartValues`. A `Bundle` is the service
bundle manifest that is serialized as `apb.yml`.
"""

from dataclasses import dataclass, field
from typing import Any

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig
import yaml

from .exceptions import ChartParseError

__all__ = [
    "Chart",
    "ChartValues",
    "Parameter",
    "Plan",
    "BundleMetadata",
    "Bundle",
]


BUNDLE_VERSION = 1.0
ASYNC_OPTIONAL = "optional"


# Line breaks that a loader folds to "\n" unless escaped in a double quoted scalar
_UNICODE_LINE_BREAKS = ("\x85", "\u2028", "\u2029")


def _str_presenter(dumper: yaml.SafeDumper, data: str) -> Any:
    """Represent multi-line yaml strings as you'd expect.

    See https://github.com/yaml/pyyaml/issues/240
    """
    style: str | None = None
    if any(line_break in data for line_break in _UNICODE_LINE_BREAKS):
        style = '"'
    elif "\n" in data:
        style = "|"
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=style)


class _BundleDumper(yaml.SafeDumper):
    """Dumper for bundle manifests with literal block multi-line strings."""


_BundleDumper.add_representer(str, _str_presenter)


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all manifest objects."""

    def yaml(self) -> str:
        """Return a YAML string representation of the object."""
        return yaml.dump(
            self.to_dict(),
            Dumper=_BundleDumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


def _str_field(doc: dict[str, Any], key: str) -> str:
    """Return the string value of a chart field, empty when missing or null."""
    if (value := doc.get(key)) is None:
        return ""
    return str(value)


@dataclass
class Chart(BaseManifest):
    """The descriptive fields of a helm chart from its Chart.yaml."""

    name: str = ""
    """The name of the chart."""

    description: str = ""
    """A single sentence description of the chart."""

    icon: str = ""
    """A URL to an SVG or PNG image to be used as an icon."""

    @classmethod
    def parse_doc(cls, doc: Any) -> "Chart":
        """Parse a Chart from the contents of a Chart.yaml document.

        Fields other than name, description and icon are ignored.
        """
        if doc is None:
            doc = {}
        if not isinstance(doc, dict):
            raise ChartParseError(f"Invalid Chart.yaml, expected a mapping: {doc!r}")
        return cls(
            name=_str_field(doc, "name"),
            description=_str_field(doc, "description"),
            icon=_str_field(doc, "icon"),
        )

    @classmethod
    def parse_yaml(cls, content: str) -> "Chart":
        """Parse a Chart from the serialized Chart.yaml content."""
        try:
            doc = yaml.safe_load(content)
        except yaml.YAMLError as err:
            raise ChartParseError(f"Unable to parse Chart.yaml: {err}") from err
        return cls.parse_doc(doc)


@dataclass(frozen=True)
class ChartValues:
    """Values extracted from a chart archive used to build a bundle."""

    chart: Chart
    """The parsed Chart.yaml."""

    values: str
    """The verbatim contents of values.yaml."""

    tarfile_name: str
    """The file name of the chart archive, without any directory."""


@dataclass
class Parameter(BaseManifest):
    """A user editable input to a bundle plan."""

    name: str
    """The name of the parameter passed to the bundle."""

    title: str
    """The human readable name shown when editing the parameter."""

    type: str
    """The type of the parameter value."""

    display_type: str
    """A hint for how the parameter should be presented for editing."""

    default: str
    """The default value of the parameter."""


@dataclass
class Plan(BaseManifest):
    """A deployment option of a bundle."""

    name: str
    """The name of the plan."""

    description: str
    """A description of what the plan deploys."""

    free: bool = True
    """True when the plan has no associated cost."""

    metadata: dict[str, str] = field(default_factory=dict)
    """Additional metadata about the plan."""

    parameters: list[Parameter] = field(default_factory=list)
    """The parameters accepted by the plan."""


@dataclass
class BundleMetadata(BaseManifest):
    """Display information for a bundle."""

    display_name: str = field(metadata=field_options(alias="displayName"))
    """The human readable name of the bundle."""

    image_url: str = field(metadata=field_options(alias="imageUrl"))
    """A URL of the icon shown for the bundle."""


@dataclass(kw_only=True)
class Bundle(BaseManifest):
    """A service bundle manifest, serialized as apb.yml."""

    version: float = BUNDLE_VERSION
    """The version of the bundle manifest format."""

    name: str
    """The name of the bundle."""

    description: str
    """A description of the bundle."""

    bindable: bool = False
    """True when the bundle supports bind operations."""

    async_: str = field(default=ASYNC_OPTIONAL, metadata=field_options(alias="async"))
    """Whether operations run asynchronously: required, optional or unsupported."""

    metadata: BundleMetadata
    """Display information for the bundle."""

    plans: list[Plan] = field(default_factory=list)
    """The deployment options of the bundle."""
