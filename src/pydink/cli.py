"""Command-line entry point.

Usage
-----
Run from the project directory that holds ``modules.json``::

    dink
    dink -f path/to/modules.json

Options::

    -f, --file PATH     Custom path for modules.json
    -v, --verbose       Enable debug logging
    -V, --version       Display version
    -h, --help          Display help
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pydink import __version__
from pydink.client import DinkClient
from pydink.config import DinkConfig
from pydink.exceptions import DinkError, DinkManifestNotFoundError
from pydink.models.manifest import Manifest
from pydink.models.report import ReconcileReport
from pydink.validation import Invalid, load_manifest


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dink",
        description="Vendor remote modules listed in modules.json as local re-export shims.",
    )
    parser.add_argument("-f", "--file", help="Custom path for modules.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-V", "--version", "--ver", action="version", version=__version__)
    return parser


async def _run(config: DinkConfig, manifest: Manifest) -> ReconcileReport:
    async with DinkClient(config) as client:
        return await client.ensure(manifest)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        config = DinkConfig.from_env(**({"manifest_file": args.file} if args.file else {}))
    except DinkError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        result = load_manifest(config.manifest_path)
    except DinkManifestNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"{config.manifest_path} could not be read: {exc}", file=sys.stderr)
        return 1
    if isinstance(result, Invalid):
        print(f"{config.manifest_path} has syntax error: {result.reason()}", file=sys.stderr)
        return 1

    try:
        report = asyncio.run(_run(config, result.manifest))
    except (DinkError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logging.getLogger(__name__).debug(
        "%d linked, %d fetched, %d removed",
        len(report.links),
        len(report.fetched),
        len(report.removed),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
