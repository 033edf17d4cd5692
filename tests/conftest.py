import io
from typing import Dict

import eth_account
import pytest
from web3 import Web3

from balance_reporter.network import NetworkConfig, NetworkContext, load_network_config
from testing_utils import HARDHAT_KEY_0, ONE_ETH, FakeRPCProvider, StubAccount, logger


@pytest.fixture
def out() -> io.StringIO:
    """Captures what the reporter writes"""
    return io.StringIO()


@pytest.fixture
def spicy_env() -> Dict[str, str]:
    """An environment selecting the Spicy testnet with one private key"""
    return {
        "HARDHAT_NETWORK": "spicy",
        "SPICY_RPC_URL": "https://spicy-rpc.chiliz.com",
        "PRIVATE_KEY": HARDHAT_KEY_0,
    }


@pytest.fixture
def spicy_config(spicy_env: Dict[str, str]) -> NetworkConfig:
    logger.info("Loading the spicy network configuration")
    return load_network_config(env=spicy_env)


@pytest.fixture
def spicy_context(spicy_config: NetworkConfig) -> NetworkContext:
    return NetworkContext(spicy_config)


@pytest.fixture
def alice() -> StubAccount:
    """An account with a freshly generated address"""
    account = eth_account.Account.create()
    logger.info(f"Created account with address {account.address}")
    return StubAccount(account.address)


@pytest.fixture
def fake_provider() -> FakeRPCProvider:
    """A provider holding a balance of 1.5 ether for every address"""
    return FakeRPCProvider(balance=ONE_ETH * 3 // 2)


@pytest.fixture
def w3(fake_provider: FakeRPCProvider) -> Web3:
    """Web3 instance answering from the fake provider"""
    return Web3(fake_provider)
