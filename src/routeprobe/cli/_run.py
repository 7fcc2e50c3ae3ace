"""``routeprobe run`` — serve the recognizer form with pounce."""

import argparse
import logging

from routeprobe.app import App
from routeprobe.config import AppConfig


def run_server(args: argparse.Namespace) -> None:
    """Build an App from CLI flags and start the server.

    CLI flags override ``AppConfig`` defaults.
    """
    defaults = AppConfig()
    config = AppConfig(
        host=args.host or defaults.host,
        port=args.port or defaults.port,
        debug=args.debug,
        log_level=args.log_level or ("debug" if args.debug else defaults.log_level),
    )
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    App(config=config).run()
