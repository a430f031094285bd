"""Data types and dataclasses for bsc-deploy-config library."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

from .exceptions import InvalidConfigError

if TYPE_CHECKING:
    from .provider import JsonRpcProvider


@dataclass(frozen=True)
class Secrets:
    """Process secrets, populated once and passed down explicitly."""

    mnemonic: Optional[str] = field(default=None, repr=False)

    @property
    def has_mnemonic(self) -> bool:
        return bool(self.mnemonic)


@dataclass(frozen=True)
class CompilerSpec:
    """Pinned compiler toolchain."""

    version: str  # e.g., "0.5.16"
    name: str = "solc"


@dataclass(frozen=True)
class NetworkProfile:
    """Connection parameters for one named network."""

    # Required fields
    name: str  # e.g., "development", "testnet", "bsc"
    network_id: int  # Chain id

    # Local node
    host: Optional[str] = None
    port: Optional[int] = None

    # Remote node; invoked with Secrets only when the network is selected
    provider_factory: Optional[Callable[[Secrets], "JsonRpcProvider"]] = None

    # Pass-through policy for the deployment framework
    confirmations: Optional[int] = None
    timeout_blocks: Optional[int] = None
    skip_dry_run: bool = False

    def __post_init__(self) -> None:
        has_host = self.host is not None
        has_port = self.port is not None
        has_endpoint = has_host and has_port
        has_factory = self.provider_factory is not None

        if has_host != has_port:
            raise InvalidConfigError(
                f"Network '{self.name}': host and port must be set together"
            )
        if has_endpoint and has_factory:
            raise InvalidConfigError(
                f"Network '{self.name}' sets both host/port and a provider"
            )
        if not has_endpoint and not has_factory:
            raise InvalidConfigError(
                f"Network '{self.name}' needs either host and port or a provider"
            )

    @property
    def is_remote(self) -> bool:
        return self.provider_factory is not None

    @property
    def url(self) -> Optional[str]:
        """RPC endpoint URL of this network, if known without building a provider."""
        if self.provider_factory is not None:
            return getattr(self.provider_factory, "rpc_url", None)
        return f"http://{self.host}:{self.port}"
