"""JSON-RPC transports and the mnemonic-backed HD wallet provider."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests
from eth_account import Account
from eth_account.signers.local import LocalAccount

from .constants import (
    DEFAULT_ADDRESS_INDEX,
    DEFAULT_DERIVATION_PATH,
    DEFAULT_NUM_ADDRESSES,
    MNEMONIC_ENV,
    RPC_TIMEOUT,
)
from .exceptions import MissingSecretError, ProviderConstructionError, RpcError
from .types import Secrets

logger = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()


def _to_quantity(value: Any) -> Any:
    """Encode ints as JSON-RPC hex quantities; leave strings untouched."""
    if isinstance(value, int):
        return hex(value)
    return value


class JsonRpcProvider:
    """Plain HTTP JSON-RPC transport, used as-is for local nodes."""

    def __init__(self, rpc_url: str, timeout: int = RPC_TIMEOUT):
        """
        Initialize the transport.

        Args:
            rpc_url: HTTP(S) endpoint of the node
            timeout: Per-request timeout in seconds

        Raises:
            ProviderConstructionError: If rpc_url is not an HTTP(S) URL
        """
        parsed = urlparse(rpc_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ProviderConstructionError(f"Invalid RPC URL: {rpc_url!r}")

        self.rpc_url = rpc_url
        self.timeout = timeout
        self._session = requests.Session()
        self._request_id = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Send a JSON-RPC 2.0 request.

        Args:
            method: RPC method name (e.g., "eth_chainId")
            params: RPC parameters

        Returns:
            Result field of the RPC response

        Raises:
            RpcError: If the provider is closed, the transport fails,
                      or the node returns an error object
        """
        if self._closed:
            raise RpcError(f"Provider for {self.rpc_url} is closed")

        self._request_id += 1
        try:
            response = self._session.post(
                self.rpc_url,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params or [],
                    "id": self._request_id,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RpcError(f"Network error during RPC call {method}: {e}") from e

        if response.status_code != 200:
            raise RpcError(
                f"RPC request {method} failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise RpcError(f"RPC response to {method} is not JSON") from e

        if not isinstance(result, dict):
            raise RpcError(f"RPC response to {method} is not a JSON object")

        if "error" in result:
            raise RpcError(f"RPC error: {result['error']}")

        return result.get("result")

    def net_version(self) -> int:
        """Network id reported by the node."""
        return int(self.request("net_version"))

    def chain_id(self) -> int:
        """Chain id reported by the node (EIP-695)."""
        return int(self.request("eth_chainId"), 16)

    def close(self) -> None:
        """Release the HTTP session. Safe to call more than once."""
        if not self._closed:
            self._session.close()
            self._closed = True
            logger.info("Closed provider for %s", self.rpc_url)

    def __enter__(self) -> "JsonRpcProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rpc_url!r})"


class HDWalletProvider(JsonRpcProvider):
    """
    Signing transport whose keys are derived from a BIP-39 mnemonic.

    Accounts are derived at {derivation_path}{i} for i in
    [address_index, address_index + num_addresses). Account queries and
    eth_sendTransaction are answered locally; all other calls are forwarded
    to the node.
    """

    def __init__(
        self,
        mnemonic: str,
        rpc_url: str,
        address_index: int = DEFAULT_ADDRESS_INDEX,
        num_addresses: int = DEFAULT_NUM_ADDRESSES,
        derivation_path: str = DEFAULT_DERIVATION_PATH,
        timeout: int = RPC_TIMEOUT,
    ):
        """
        Derive the wallet accounts and open the transport.

        No network request is made here.

        Raises:
            MissingSecretError: If mnemonic is empty
            ProviderConstructionError: If the URL, index range, derivation
                                       path or mnemonic is invalid
        """
        if not mnemonic:
            raise MissingSecretError(f"{MNEMONIC_ENV} is required for {rpc_url}")
        if address_index < 0 or num_addresses < 1:
            raise ProviderConstructionError(
                f"Invalid address range: index={address_index}, count={num_addresses}"
            )

        super().__init__(rpc_url, timeout=timeout)

        self._accounts: Dict[str, LocalAccount] = {}
        for index in range(address_index, address_index + num_addresses):
            account_path = f"{derivation_path}{index}"
            try:
                account = Account.from_mnemonic(mnemonic, account_path=account_path)
            except Exception:
                self._session.close()
                self._closed = True
                # Chained errors would echo the phrase back
                raise ProviderConstructionError(
                    f"Could not derive account at {account_path}; "
                    f"check {MNEMONIC_ENV} and the derivation path"
                ) from None
            self._accounts[account.address] = account

        logger.debug(
            "Built HD wallet provider for %s with %d account(s)",
            rpc_url,
            len(self._accounts),
        )

    @property
    def addresses(self) -> List[str]:
        """Checksummed addresses in derivation order."""
        return list(self._accounts)

    def get_address(self, index: int = 0) -> str:
        """
        Get a derived address.

        Args:
            index: Position relative to address_index

        Returns:
            Checksummed address

        Raises:
            IndexError: If index is outside the derived range
        """
        return self.addresses[index]

    def _account_for(self, address: str) -> LocalAccount:
        for known, account in self._accounts.items():
            if known.lower() == address.lower():
                return account
        raise ValueError(f"Address {address} is not managed by this provider")

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        if method in ("eth_accounts", "eth_requestAccounts"):
            return self.addresses
        if method == "eth_sendTransaction":
            if not params:
                raise ValueError("eth_sendTransaction requires a transaction object")
            return self.send_transaction(params[0])
        return super().request(method, params)

    def send_transaction(self, transaction: Dict[str, Any]) -> str:
        """
        Sign a transaction locally and submit it as a raw transaction.

        Missing nonce, chainId, gasPrice and gas are fetched from the node.

        Args:
            transaction: Transaction fields; "from" defaults to the first address

        Returns:
            Transaction hash (0x-prefixed hex)

        Raises:
            ValueError: If "from" is not a derived address
            RpcError: If any node request fails
        """
        tx = dict(transaction)
        sender = tx.pop("from", None) or self.addresses[0]
        account = self._account_for(sender)

        if "nonce" not in tx:
            tx["nonce"] = int(
                super().request("eth_getTransactionCount", [account.address, "pending"]),
                16,
            )
        if "chainId" not in tx:
            tx["chainId"] = self.chain_id()
        if "gasPrice" not in tx and "maxFeePerGas" not in tx:
            tx["gasPrice"] = int(super().request("eth_gasPrice"), 16)
        if "gas" not in tx:
            estimate = {"from": account.address}
            for key in ("to", "data", "value"):
                if key in tx:
                    estimate[key] = _to_quantity(tx[key])
            tx["gas"] = int(super().request("eth_estimateGas", [estimate]), 16)

        signed = account.sign_transaction(tx)
        raw_tx = "0x" + bytes(signed.raw_transaction).hex()
        return super().request("eth_sendRawTransaction", [raw_tx])


@dataclass(frozen=True)
class HDWalletProviderFactory:
    """Deferred HD wallet provider constructor bound to one RPC endpoint."""

    rpc_url: str
    address_index: int = DEFAULT_ADDRESS_INDEX
    num_addresses: int = DEFAULT_NUM_ADDRESSES
    derivation_path: str = DEFAULT_DERIVATION_PATH

    def __call__(self, secrets: Secrets) -> HDWalletProvider:
        """
        Build the provider from secrets.

        Raises:
            MissingSecretError: If secrets carry no mnemonic
            ProviderConstructionError: If the provider cannot be built
        """
        if not secrets.has_mnemonic:
            raise MissingSecretError(
                f"{MNEMONIC_ENV} is not set; it is required to sign for {self.rpc_url}"
            )
        return HDWalletProvider(
            secrets.mnemonic,
            self.rpc_url,
            address_index=self.address_index,
            num_addresses=self.num_addresses,
            derivation_path=self.derivation_path,
        )
