"""Main API for bsc-deploy-config library."""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from .constants import COMPILER_CONFIG, NETWORK_CONFIG
from .environment import load_secrets
from .exceptions import InvalidConfigError, ProviderConstructionError, RpcError, UnknownNetworkError
from .parsers import load_config_file, parse_compilers, parse_network_table
from .paths import resolve_config_path
from .provider import JsonRpcProvider
from .types import CompilerSpec, NetworkProfile, Secrets

logger = logging.getLogger(__name__)


class DeploymentConfig:
    """Immutable network table and compiler pins, looked up by name."""

    def __init__(
        self,
        networks: Mapping[str, NetworkProfile],
        compilers: Mapping[str, CompilerSpec],
    ):
        """
        Initialize the configuration.

        Args:
            networks: Mapping of network name -> NetworkProfile
            compilers: Mapping of compiler name -> CompilerSpec
        """
        self._networks: Dict[str, NetworkProfile] = dict(networks)
        self._compilers: Dict[str, CompilerSpec] = dict(compilers)

    def has_network(self, name: str) -> bool:
        """
        Check if a network is declared.

        Args:
            name: Network name to check

        Returns:
            True if network exists, False otherwise
        """
        return name in self._networks

    def network_names(self) -> List[str]:
        """Declared network names, in declaration order."""
        return list(self._networks)

    def get_network(self, name: str) -> NetworkProfile:
        """
        Get the profile of a network.

        Args:
            name: Network name (e.g., "development", "testnet", "bsc")

        Returns:
            NetworkProfile

        Raises:
            UnknownNetworkError: If network is not declared
        """
        if name not in self._networks:
            raise UnknownNetworkError(
                f"Network '{name}' not found; known networks: "
                f"{', '.join(self._networks) or 'none'}"
            )
        return self._networks[name]

    def compiler(self, name: str = "solc") -> CompilerSpec:
        """
        Get a pinned compiler.

        Raises:
            InvalidConfigError: If no compiler of that name is pinned
        """
        if name not in self._compilers:
            raise InvalidConfigError(f"Compiler '{name}' is not configured")
        return self._compilers[name]

    @property
    def compiler_version(self) -> str:
        """Pinned solc version (e.g., "0.5.16")."""
        return self.compiler("solc").version

    def run(self, network: str, secrets: Optional[Secrets] = None) -> "DeploymentRun":
        """Start a deployment run against a network."""
        return DeploymentRun(self, network, secrets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeploymentConfig):
            return NotImplemented
        return self._networks == other._networks and self._compilers == other._compilers

    def __repr__(self) -> str:
        return f"DeploymentConfig(networks={self.network_names()!r})"


def load_config(config_path: Optional[Union[Path, str]] = None) -> DeploymentConfig:
    """
    Load deployment configuration.

    Args:
        config_path: JSON file with "networks" and "compilers" tables.
                     If None, uses the built-in table.

    Returns:
        DeploymentConfig

    Raises:
        ConfigNotFoundError: If config_path doesn't exist
        InvalidConfigError: If the configuration is malformed
    """
    if config_path is None:
        data = {"networks": NETWORK_CONFIG, "compilers": COMPILER_CONFIG}
        source = "built-in table"
    else:
        path = resolve_config_path(config_path)
        data = load_config_file(path)
        source = str(path)

    if "networks" not in data:
        raise InvalidConfigError(f"No networks declared in {source}")

    config = DeploymentConfig(
        networks=parse_network_table(data["networks"]),
        compilers=parse_compilers(data.get("compilers", {})),
    )
    logger.debug("Loaded networks %s from %s", config.network_names(), source)
    return config


def resolve_provider(profile: NetworkProfile, secrets: Secrets) -> JsonRpcProvider:
    """
    Build the transport for a network.

    Remote profiles invoke their provider factory; local profiles get a
    plain JSON-RPC transport and never need a mnemonic.

    Args:
        profile: Selected network profile
        secrets: Process secrets

    Returns:
        Provider handle; the caller owns it and must close it

    Raises:
        MissingSecretError: If a remote profile is selected without a mnemonic
        ProviderConstructionError: If the provider cannot be built
    """
    if profile.provider_factory is None:
        logger.debug("Using local node %s for network '%s'", profile.url, profile.name)
        return JsonRpcProvider(profile.url)

    logger.debug("Building provider for network '%s'", profile.name)
    return profile.provider_factory(secrets)


class DeploymentRun:
    """
    One deployment run against a selected network.

    The provider is built on first access and at most once per run.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        network: str,
        secrets: Optional[Secrets] = None,
    ):
        """
        Select a network.

        Args:
            config: Loaded configuration
            network: Network name
            secrets: Process secrets; loaded from the environment on first
                     provider access if None

        Raises:
            UnknownNetworkError: If network is not declared
        """
        self.config = config
        self.profile = config.get_network(network)
        self._secrets = secrets
        self._provider: Optional[JsonRpcProvider] = None
        self._closed = False

    @property
    def network(self) -> str:
        return self.profile.name

    @property
    def compiler(self) -> CompilerSpec:
        return self.config.compiler()

    @property
    def provider_built(self) -> bool:
        return self._provider is not None

    @property
    def provider(self) -> JsonRpcProvider:
        """
        Provider for the selected network, built on first access.

        Raises:
            MissingSecretError: If a remote network is selected without a mnemonic
            ProviderConstructionError: If the provider cannot be built
            RpcError: If the run has been closed
        """
        if self._closed:
            raise RpcError(f"Deployment run for '{self.network}' is closed")
        if self._provider is None:
            if self._secrets is None:
                self._secrets = load_secrets()
            self._provider = resolve_provider(self.profile, self._secrets)
        return self._provider

    def verify_network(self) -> None:
        """
        Check that the node serves the configured network id.

        Raises:
            MissingSecretError: If a remote network is selected without a mnemonic
            ProviderConstructionError: If the node is unreachable or reports
                                       a different network id
        """
        provider = self.provider
        try:
            reported = provider.net_version()
        except (RpcError, ValueError, TypeError) as e:
            raise ProviderConstructionError(
                f"Could not query network id of '{self.network}' at {self.profile.url}: {e}"
            ) from e

        if reported != self.profile.network_id:
            raise ProviderConstructionError(
                f"Network '{self.network}' expects network_id "
                f"{self.profile.network_id}, node reports {reported}"
            )

    def close(self) -> None:
        """Release the provider if one was built. The run is not restartable."""
        if self._provider is not None:
            self._provider.close()
        self._closed = True

    def __enter__(self) -> "DeploymentRun":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
