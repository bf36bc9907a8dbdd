#!/usr/bin/env python
# Starts the anonymizing server. The configuration file has a `[calendars]` section where each
# element is formatted as `path = "remote_url"`; `http://<address>:<port>/<path>` will then return
# an anonymized version of `remote_url`.

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from icstools.config import load_config
from icstools.errors import ConfigError
from icstools.server import create_app

logger = logging.getLogger("icstools")


def setup_logging(verbose=False):
    """
    Sends all log output through Rich on stderr.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Anonymize the contents of iCal URLs while keeping the time slots.")
    parser.add_argument("-c", "--config-file", required=True, help="Path to the TOML configuration file")
    parser.add_argument("-a", "--address", default="127.0.0.1", help="Address on which to listen")
    parser.add_argument("-p", "--port", type=int, default=8000, help="Port on which to listen")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log generated calendars and other debug output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config_file)
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    logger.info("Serving %d calendar(s) on %s:%d", len(config.calendars), args.address, args.port)
    logger.debug("Loaded %r", config)
    create_app(config).run(host=args.address, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
