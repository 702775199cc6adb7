"""Protean Engine runner for the storefront domain.

Starts the Engine that processes events asynchronously:
- OutboxProcessor: polls outbox table, publishes events to the broker
- StreamSubscriptions: reads the broker, invokes projectors and event handlers

Usage:
    python src/server.py
    python src/server.py --test-mode   # drain pending messages and exit
"""

import argparse

from protean.server.engine import Engine
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def run(test_mode=False, debug=False):
    storefront.init()
    engine = Engine(storefront, test_mode=test_mode, debug=debug)
    logger.info("engine.starting", domain=storefront.name, test_mode=test_mode)
    engine.run()


def main():
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages and exit",
    )
    parser.add_argument("--debug", action="store_true", help="Log every message handled")
    args = parser.parse_args()

    run(test_mode=args.test_mode, debug=args.debug)


if __name__ == "__main__":
    main()
