from balance_reporter.errors import BalanceReporterError, ConfigurationError, NetworkError
from balance_reporter.network import NetworkConfig, NetworkContext, Signer, load_network_config
from balance_reporter.reporter import BalanceReporter, run
from balance_reporter.utils import format_ether, parse_ether

__all__ = [
    "BalanceReporter",
    "BalanceReporterError",
    "ConfigurationError",
    "NetworkConfig",
    "NetworkContext",
    "NetworkError",
    "Signer",
    "format_ether",
    "load_network_config",
    "parse_ether",
    "run",
]
