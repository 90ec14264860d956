import argparse
import logging
import sys
from typing import List, Optional

from compdb.core.config.settings import settings
from compdb.service.api import run

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="compdb-merge",
        description=(
            f"Recursively find every {settings.TARGET_FILE_NAME} under the given roots "
            f"and merge them into ./{settings.OUTPUT_FILE_NAME}."
        ),
    )
    parser.add_argument("roots", nargs="*", help="Directories to search (default: current directory)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log merged fragments (-v) or every visited directory (-vv)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser.parse_args(argv)


def configure_logging(verbosity: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(format=settings.LOG_FORMAT, stream=sys.stderr, level=level)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        summary = run(args.roots)
    except Exception as e:
        logger.critical(f"Merge failed: {e}")
        return 1

    logger.info(
        f"Wrote {summary.output_path}: {summary.fragments_merged} merged, "
        f"{summary.fragments_empty} empty, {summary.fragments_skipped} skipped"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
