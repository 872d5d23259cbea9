"""Command-line entry point.

    telesto --api-key KEY --input routes.csv --output responses.json
    telesto -c CLIENT_ID -p PRIVATE_KEY [-C CHANNEL] < routes.csv > out.json

Exits with status 1 and a message on standard error when the run is
aborted by a configuration or input error; no output is written then.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .config import get_config
from .container import Container
from .domain.errors import TelestoError
from .observability import configure_logging
from .pipeline import credentials_from_options, format_error, run_batch

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="telesto",
        description="Batch request Google Directions API responses.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-i", "--input", metavar="PATH", help="Input file path (default: stdin)"
    )
    parser.add_argument(
        "-o", "--output", metavar="PATH", help="Output file path (default: stdout)"
    )
    parser.add_argument("-a", "--api-key", metavar="KEY", help="Directions API key")
    parser.add_argument("-c", "--client-id", metavar="ID", help="Premium plan client ID")
    parser.add_argument(
        "-p", "--private-key", metavar="KEY", help="Premium plan private key"
    )
    parser.add_argument("-C", "--channel", metavar="NAME", help="Premium plan channel")
    parser.add_argument(
        "-n",
        "--concurrency",
        metavar="N",
        type=_positive_int,
        help=(
            "Maximum number of requests in flight "
            "(default: TELESTO_DISPATCH_CONCURRENCY or 50)"
        ),
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: TELESTO_LOG_LEVEL or WARNING)",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None, container: Optional[Container] = None
) -> int:
    """Run the command line.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:]).
        container: DI container override, mainly for tests.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    config = container.config if container is not None else get_config()
    configure_logging(config.observability, level=args.log_level)

    try:
        credentials = credentials_from_options(
            config,
            api_key=args.api_key,
            client_id=args.client_id,
            private_key=args.private_key,
            channel=args.channel,
        )
        run_batch(
            credentials,
            input_path=args.input,
            output_path=args.output,
            container=container,
            concurrency=args.concurrency,
        )
    except TelestoError as e:
        logger.debug("Run aborted", exc_info=True)
        print(format_error(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
