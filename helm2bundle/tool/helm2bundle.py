"""Command line tool for packaging a helm chart archive as a service bundle."""

import argparse
import asyncio
import logging
import pathlib
import sys
import traceback
from typing import Any

from helm2bundle.archive import read_chart_archive
from helm2bundle.bundle import build_bundle
from helm2bundle.exceptions import Helm2BundleException
from helm2bundle.writer import write_outputs

_LOGGER = logging.getLogger(__name__)

USAGE_HINT = "Run 'helm2bundle --help' for usage."


class BundleAction:
    """Package a helm chart archive as a service bundle."""

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
        """Register the command arguments."""
        parser.add_argument(
            "chartfile",
            type=pathlib.Path,
            help="Path to the packaged helm chart archive e.g. redis-1.1.12.tgz",
        )
        parser.add_argument(
            "-f",
            "--force",
            default=False,
            action="store_true",
            help="Overwrite existing apb.yml and Dockerfile output files",
        )
        parser.add_argument(
            "-o",
            "--output-dir",
            type=pathlib.Path,
            default=pathlib.Path("."),
            help="Directory to write the output files (default: current directory)",
        )
        parser.set_defaults(cls=cls)
        return parser

    async def run(  # type: ignore[no-untyped-def]
        self,
        chartfile: pathlib.Path,
        force: bool,
        output_dir: pathlib.Path,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        values = await asyncio.to_thread(read_chart_archive, chartfile)
        bundle = build_bundle(values)
        paths = await write_outputs(
            output_dir, bundle, values.tarfile_name, force=force
        )
        _LOGGER.info("Created bundle %s from %s", bundle.name, values.tarfile_name)
        for path in paths:
            print(f"Wrote {path}")


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="helm2bundle",
        description="Packages a helm chart as a Service Bundle.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )
    BundleAction.register(parser)
    return parser


def main(argv: list[str] | None = None) -> None:
    """helm2bundle command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    kwargs: dict[str, Any] = vars(args)
    try:
        asyncio.run(action.run(**kwargs))
    except Helm2BundleException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("helm2bundle error: ", err, file=sys.stderr)
        print(USAGE_HINT, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
