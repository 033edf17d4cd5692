class BalanceReporterError(Exception):
    """Base class for every error the balance reporter raises."""


class ConfigurationError(BalanceReporterError):
    """No account is available, or the network settings are missing or malformed."""


class NetworkError(BalanceReporterError):
    """The balance query failed: the endpoint is unreachable, timed out,
    returned an RPC error, or returned a malformed result."""
