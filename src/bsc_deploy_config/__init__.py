"""
bsc-deploy-config: network profiles, HD wallet providers and compiler pins for BSC deployments
"""

from importlib.metadata import PackageNotFoundError, version

from .config import DeploymentConfig, DeploymentRun, load_config, resolve_provider
from .environment import load_secrets
from .exceptions import (
    ConfigNotFoundError,
    DeployConfigError,
    InvalidConfigError,
    MissingSecretError,
    ProviderConstructionError,
    RpcError,
    UnknownNetworkError,
)
from .provider import HDWalletProvider, HDWalletProviderFactory, JsonRpcProvider
from .types import CompilerSpec, NetworkProfile, Secrets

try:
    __version__ = version("bsc-deploy-config")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentConfig",
    "DeploymentRun",
    "load_config",
    "resolve_provider",
    "load_secrets",
    "NetworkProfile",
    "CompilerSpec",
    "Secrets",
    "JsonRpcProvider",
    "HDWalletProvider",
    "HDWalletProviderFactory",
    "DeployConfigError",
    "UnknownNetworkError",
    "MissingSecretError",
    "ProviderConstructionError",
    "ConfigNotFoundError",
    "InvalidConfigError",
    "RpcError",
]
