"""Library for mapping a helm chart to a service bundle.

The bundle has a single `default` plan whose only parameter is the chart's
`values.yaml`, so the operator can edit the chart values when provisioning.
The `Dockerfile` copies the chart archive into an image based on the helm
bundle base image, which installs the chart at runtime.
"""

from .manifest import Bundle, BundleMetadata, ChartValues, Parameter, Plan

__all__ = [
    "build_bundle",
    "render_dockerfile",
]


BUNDLE_SUFFIX = "-apb"
DISPLAY_NAME_TEMPLATE = "{name} (helm bundle)"
PLAN_NAME = "default"
PLAN_DESCRIPTION_TEMPLATE = "This default plan deploys helm chart {name}"
VALUES_PARAMETER = "values"
VALUES_TITLE = "Values"
VALUES_TYPE = "string"
VALUES_DISPLAY_TYPE = "textarea"

BASE_IMAGE = "ansibleplaybookbundle/helm-bundle-base"
CHART_IMAGE_PATH = "/opt/chart.tgz"
DOCKERFILE_TEMPLATE = f"""FROM {BASE_IMAGE}

COPY {{tarfile_name}} {CHART_IMAGE_PATH}

ENTRYPOINT ["entrypoint.sh"]
"""


def build_bundle(values: ChartValues) -> Bundle:
    """Return the bundle manifest for the chart values read from an archive.

    The bundle icon is the chart's own icon URL, left empty when the chart
    has none.
    """
    chart = values.chart
    return Bundle(
        name=f"{chart.name}{BUNDLE_SUFFIX}",
        description=chart.description,
        metadata=BundleMetadata(
            display_name=DISPLAY_NAME_TEMPLATE.format(name=chart.name),
            image_url=chart.icon,
        ),
        plans=[
            Plan(
                name=PLAN_NAME,
                description=PLAN_DESCRIPTION_TEMPLATE.format(name=chart.name),
                free=True,
                metadata={},
                parameters=[
                    Parameter(
                        name=VALUES_PARAMETER,
                        title=VALUES_TITLE,
                        type=VALUES_TYPE,
                        display_type=VALUES_DISPLAY_TYPE,
                        default=values.values,
                    )
                ],
            )
        ],
    )


def render_dockerfile(tarfile_name: str) -> str:
    """Return the Dockerfile that copies the named chart archive into the image."""
    return DOCKERFILE_TEMPLATE.format(tarfile_name=tarfile_name)
