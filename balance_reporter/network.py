import os
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

import eth_account
from eth_utils import ValidationError
from hexbytes import HexBytes
from web3 import Web3

from balance_reporter.errors import ConfigurationError
from balance_reporter.utils import EthereumAddress, PrivateKey, logger


DEFAULT_NETWORK = "spicy"
NETWORK_ENV_VAR = "HARDHAT_NETWORK"
PRIVATE_KEY_ENV_VAR = "PRIVATE_KEY"

# first account of every local hardhat node ("test test ... junk" mnemonic)
HARDHAT_DEV_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


@dataclass(frozen=True)
class NetworkSpec:
    """Static description of a network this tool knows how to reach."""
    rpc_env_var: str
    currency_symbol: str
    default_rpc_url: Optional[str] = None
    dev_key: Optional[str] = None


NETWORKS: Dict[str, NetworkSpec] = {
    "spicy": NetworkSpec("SPICY_RPC_URL", "CHZ"),
    "mainnet": NetworkSpec("MAINNET_RPC_URL", "CHZ"),
    "localhost": NetworkSpec("LOCALHOST_RPC_URL", "ETH",
                             "http://127.0.0.1:8545", HARDHAT_DEV_KEY),
    "hardhat": NetworkSpec("LOCALHOST_RPC_URL", "ETH",
                           "http://127.0.0.1:8545", HARDHAT_DEV_KEY),
}


@dataclass(frozen=True)
class NetworkConfig:
    """The resolved settings of the selected network. This object is immutable."""
    name: str
    rpc_url: str
    currency_symbol: str
    accounts: Tuple[PrivateKey, ...] = ()


def _get(env: Mapping[str, str], key: str) -> Optional[str]:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_private_key(value: str) -> PrivateKey:
    try:
        key = HexBytes(value)
    except ValueError:
        raise ConfigurationError(
            f"{PRIVATE_KEY_ENV_VAR} is not a hex string") from None
    if len(key) != 32:
        raise ConfigurationError(
            f"{PRIVATE_KEY_ENV_VAR} must be 32 bytes, got {len(key)}")
    try:
        eth_account.Account.from_key(key)
    except (ValueError, ValidationError) as e:
        raise ConfigurationError(
            f"{PRIVATE_KEY_ENV_VAR} is not a valid secp256k1 key: {e}") from None
    return PrivateKey(key)


def _check_rpc_url(network_name: str, url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            f"RPC URL for network '{network_name}' is malformed: {url!r}")
    return url


def load_network_config(name: Optional[str] = None,
                        env: Optional[Mapping[str, str]] = None) -> NetworkConfig:
    """Resolves the settings of a network from the environment.
    The network is the given name, else $HARDHAT_NETWORK, else the default network.
    Raises a ConfigurationError if the network is unknown, has no RPC URL,
    or the private key is malformed."""
    if env is None:
        env = os.environ
    if name is None:
        name = _get(env, NETWORK_ENV_VAR) or DEFAULT_NETWORK

    if name not in NETWORKS:
        names = ", ".join(sorted(NETWORKS))
        raise ConfigurationError(
            f"Unknown network '{name}' (known networks: {names})")
    known = NETWORKS[name]

    rpc_url = _get(env, known.rpc_env_var) or known.default_rpc_url
    if rpc_url is None:
        raise ConfigurationError(
            f"No RPC URL for network '{name}': set {known.rpc_env_var}")

    raw_key = _get(env, PRIVATE_KEY_ENV_VAR) or known.dev_key
    accounts = (_parse_private_key(raw_key),) if raw_key else ()

    rpc_url = _check_rpc_url(name, rpc_url)
    logger.info(f"Selected network {name} at {urlparse(rpc_url).hostname} with {len(accounts)} account(s)")
    return NetworkConfig(name, rpc_url, known.currency_symbol, accounts)


class Signer:
    """A local key-pair identity. Only its address is used by the reporter."""

    def __init__(self, private_key: PrivateKey) -> None:
        self._private_key = private_key
        self._eth_address = EthereumAddress(
            eth_account.Account.from_key(private_key).address)

    @property
    def eth_address(self) -> EthereumAddress:
        """The checksummed ethereum address of this signer."""
        return self._eth_address

    @property
    def private_key(self) -> PrivateKey:
        return self._private_key

    def __repr__(self) -> str:
        return f"Signer({self._eth_address})"


class NetworkContext:
    """Gives access to the accounts and the read client of a configured network.
    Nothing here talks to the network; the client connects on its first request."""

    def __init__(self, config: NetworkConfig) -> None:
        self._config = config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def currency_symbol(self) -> str:
        return self._config.currency_symbol

    def get_wallet_accounts(self) -> List[Signer]:
        """returns a signer for every configured private key, in order."""
        return [Signer(key) for key in self._config.accounts]

    def default_account(self) -> Signer:
        """returns the first configured account.
        Raises a ConfigurationError if no account is configured."""
        accounts = self.get_wallet_accounts()
        if not accounts:
            raise ConfigurationError(
                f"No account configured for network '{self.name}': set {PRIVATE_KEY_ENV_VAR}")
        return accounts[0]

    def get_public_client(self) -> Web3:
        """returns a Web3 instance bound to the network's RPC endpoint.
        The provider's automatic retries are disabled: a failed request fails once."""
        logger.info(f"Creating a Web3 instance for {self.name} at {urlparse(self._config.rpc_url).hostname}")
        provider = Web3.HTTPProvider(
            _check_rpc_url(self.name, self._config.rpc_url),
            exception_retry_configuration=None)
        return Web3(provider)
