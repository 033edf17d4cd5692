import logging
from decimal import Decimal
from typing import NewType, Protocol

import eth_typing
from hexbytes import HexBytes
from web3 import Web3


NATIVE_DECIMALS = 18  # 1 native unit = 10**18 wei

PrivateKey = NewType("PrivateKey", HexBytes)
EthereumAddress = eth_typing.ChecksumAddress


# Create a logger
logger = logging.getLogger("balance_reporter")


class HasEthAccount(Protocol):
    """Defines a type for objects that have an ethereum address and a private key."""
    @property
    def eth_address(self) -> EthereumAddress: ...

    @property
    def private_key(self) -> PrivateKey: ...


def format_ether(amount: int) -> str:
    """returns the amount (given in wei) as a decimal string of whole native units.
    The result is exact: no rounding, no trailing zeros, and "0" for zero.
    Raises a ValueError for amounts outside 0..2**256-1."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"amount must be an int, got {type(amount).__name__}")
    return f"{Decimal(Web3.from_wei(amount, 'ether')):f}"


def parse_ether(value: str) -> int:
    """converts a decimal string of native units to wei. Raises a ValueError
    if the string is not a number or has more precision than wei allows."""
    try:
        wei = Web3.to_wei(value.strip(), 'ether')
        exact = Web3.from_wei(wei, 'ether') == Decimal(value.strip())
    except (ArithmeticError, AttributeError, TypeError) as e:
        raise ValueError(f"invalid ether amount: {value!r}") from e
    if not exact:
        raise ValueError(
            f"{value!r} has more than {NATIVE_DECIMALS} decimal places")
    return wei


def to_checksum_address(value: str) -> EthereumAddress:
    """returns the mixed-case checksum encoding of a 20-byte hex address.
    Raises a ValueError if the value is not an address."""
    if not isinstance(value, str) or not Web3.is_address(value):
        raise ValueError(f"not a valid address: {value!r}")
    return Web3.to_checksum_address(value)
