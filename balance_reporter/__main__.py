#!/usr/bin/env python3
"""Prints the network, address and native balance of the configured signer.

The network is chosen with $HARDHAT_NETWORK (default: spicy); RPC URLs and the
private key are read from the environment or a .env file."""

import logging
import os
import sys

from dotenv import load_dotenv

from balance_reporter.errors import BalanceReporterError, ConfigurationError
from balance_reporter.network import NetworkContext, load_network_config
from balance_reporter.reporter import DEFAULT_LOW_BALANCE_THRESHOLD, BalanceReporter
from balance_reporter.utils import parse_ether, logger


def _low_balance_threshold() -> int:
    value = os.getenv("LOW_BALANCE_THRESHOLD")
    if not value:
        return DEFAULT_LOW_BALANCE_THRESHOLD
    try:
        return parse_ether(value)
    except ValueError as e:
        raise ConfigurationError(f"LOW_BALANCE_THRESHOLD: {e}") from e


def _log_level() -> int:
    value = os.getenv("LOG_LEVEL", "WARNING").strip()
    if value.isdigit():
        return int(value)
    # getLevelName maps a registered level name to its number, anything else to a string
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.WARNING


def main() -> int:
    """Runs the balance reporter and returns the process exit status."""
    load_dotenv()
    logging.basicConfig(
        level=_log_level(),
        format="%(levelname)s %(name)s: %(message)s")

    try:
        context = NetworkContext(load_network_config())
        BalanceReporter(context, _low_balance_threshold()).run()
    except BalanceReporterError as e:
        logger.debug("Balance check failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
