"""Custom exception classes for bsc-deploy-config library."""


class DeployConfigError(Exception):
    """Base exception for deployment configuration errors."""

    pass


class UnknownNetworkError(DeployConfigError, KeyError):
    """Raised when requested network is not in the network table."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0]) if self.args else ""


class MissingSecretError(DeployConfigError, ValueError):
    """Raised when a secret required by a remote network is not set."""

    pass


class ProviderConstructionError(DeployConfigError, RuntimeError):
    """Raised when a provider cannot be built or does not match its network."""

    pass


class ConfigNotFoundError(DeployConfigError, FileNotFoundError):
    """Raised when a configuration file is not found."""

    pass


class InvalidConfigError(DeployConfigError, ValueError):
    """Raised when configuration content violates the profile schema."""

    pass


class RpcError(DeployConfigError, RuntimeError):
    """Raised when a JSON-RPC request fails at the transport or node level."""

    pass
