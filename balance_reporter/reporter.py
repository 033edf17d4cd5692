import sys
from typing import Optional, TextIO

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from balance_reporter.errors import ConfigurationError, NetworkError
from balance_reporter.network import NetworkContext
from balance_reporter.utils import (EthereumAddress, HasEthAccount, format_ether,
                                    parse_ether, to_checksum_address, logger)


DEFAULT_LOW_BALANCE_THRESHOLD = parse_ether("0.1")

# what web3 and its HTTP transport raise when a request does not produce a result
RPC_FAILURES = (Web3Exception, requests.exceptions.RequestException, OSError, ValueError)


def check_low_balance(balance: int, threshold: int = DEFAULT_LOW_BALANCE_THRESHOLD) -> bool:
    """returns True if the balance (in wei) is below the threshold (in wei)."""
    return balance < threshold


def _resolve_address(account: Optional[HasEthAccount]) -> EthereumAddress:
    if account is None:
        raise ConfigurationError("No account configured")
    try:
        return to_checksum_address(account.eth_address)
    except ValueError as e:
        raise ConfigurationError(f"Account has an invalid address: {e}") from e


def query_balance(client: Web3, address: EthereumAddress) -> int:
    """Issues a single eth_getBalance request for the address and returns the balance in wei.
    Raises a NetworkError if the request fails or the result is not a non-negative integer."""
    logger.info(f"Querying the balance of {address}")
    try:
        balance = client.eth.get_balance(address)
    except RPC_FAILURES as e:
        raise NetworkError(f"Balance query for {address} failed: {e}") from e

    if isinstance(balance, bool) or not isinstance(balance, int) or balance < 0:
        raise NetworkError(
            f"Malformed balance returned for {address}: {balance!r}")
    return balance


def run(client: Web3, account: Optional[HasEthAccount], network_name: str, currency_symbol: str,
        out: Optional[TextIO] = None,
        low_balance_threshold: int = DEFAULT_LOW_BALANCE_THRESHOLD) -> str:
    """Prints the network name, the account's address and its native balance, one per line.
    Returns the formatted balance.

    The account is resolved before anything is printed, so a ConfigurationError leaves
    no output. A NetworkError is raised after the network and address lines were
    written; those lines stay and the balance line is never written."""
    if out is None:
        out = sys.stdout
    address = _resolve_address(account)

    print(f"Network: {network_name}", file=out)
    print(f"Address: {address}", file=out)
    out.flush()

    balance = query_balance(client, address)
    formatted = format_ether(balance)
    print(f"Balance: {formatted} {currency_symbol}", file=out)

    if check_low_balance(balance, low_balance_threshold):
        logger.warning(
            f"Low {currency_symbol} balance on {network_name}: {formatted} {currency_symbol} "
            f"(below {format_ether(low_balance_threshold)} {currency_symbol})")
    return formatted


class BalanceReporter:
    """Reports the default account's native balance on the network of the given context."""

    def __init__(self, context: NetworkContext,
                 low_balance_threshold: int = DEFAULT_LOW_BALANCE_THRESHOLD) -> None:
        self._context = context
        self._low_balance_threshold = low_balance_threshold

    def run(self, out: Optional[TextIO] = None) -> str:
        account = self._context.default_account()
        client = self._context.get_public_client()
        return run(client, account, self._context.name, self._context.currency_symbol,
                   out, self._low_balance_threshold)
