"""Configuration parsers for bsc-deploy-config library."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .constants import (
    DEFAULT_ADDRESS_INDEX,
    DEFAULT_DERIVATION_PATH,
    DEFAULT_NUM_ADDRESSES,
)
from .exceptions import ConfigNotFoundError, InvalidConfigError
from .provider import HDWalletProviderFactory
from .types import CompilerSpec, NetworkProfile

logger = logging.getLogger(__name__)

# Field mapping from config-file keys to NetworkProfile attributes
_PROFILE_KEYS = {
    "host": "host",
    "port": "port",
    "network_id": "network_id",
    "provider": "provider_factory",
    "confirmations": "confirmations",
    "timeoutBlocks": "timeout_blocks",
    "skipDryRun": "skip_dry_run",
}

PROVIDER_TYPES = ("hdwallet",)


def _require_int(value: Any, field: str, network: str, minimum: int = 0) -> int:
    """Accept ints and decimal strings; bools are rejected."""
    if isinstance(value, bool):
        raise InvalidConfigError(f"Network '{network}': {field} must be an integer")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if not isinstance(value, int):
        raise InvalidConfigError(f"Network '{network}': {field} must be an integer")
    if value < minimum:
        raise InvalidConfigError(f"Network '{network}': {field} must be >= {minimum}")
    return value


def parse_provider(data: Any, network: str) -> HDWalletProviderFactory:
    """
    Parse a provider declaration into a deferred factory.

    A bare string is shorthand for an hdwallet provider at that URL.

    Args:
        data: Provider declaration (dict with "type" and "url", or URL string)
        network: Network name, for error messages

    Returns:
        HDWalletProviderFactory (not yet invoked)

    Raises:
        InvalidConfigError: If the declaration is malformed
    """
    if isinstance(data, str):
        data = {"type": "hdwallet", "url": data}
    if not isinstance(data, Mapping):
        raise InvalidConfigError(f"Network '{network}': provider must be an object")

    provider_type = data.get("type", "hdwallet")
    if provider_type not in PROVIDER_TYPES:
        raise InvalidConfigError(
            f"Network '{network}': unsupported provider type '{provider_type}'"
        )

    url = data.get("url")
    if not isinstance(url, str) or not url:
        raise InvalidConfigError(f"Network '{network}': provider url is required")

    derivation_path = data.get("derivationPath", DEFAULT_DERIVATION_PATH)
    if not isinstance(derivation_path, str):
        raise InvalidConfigError(f"Network '{network}': derivationPath must be a string")

    return HDWalletProviderFactory(
        rpc_url=url,
        address_index=_require_int(
            data.get("addressIndex", DEFAULT_ADDRESS_INDEX), "addressIndex", network
        ),
        num_addresses=_require_int(
            data.get("numAddresses", DEFAULT_NUM_ADDRESSES), "numAddresses", network, 1
        ),
        derivation_path=derivation_path,
    )


def parse_network_profile(name: str, data: Mapping[str, Any]) -> NetworkProfile:
    """
    Parse one network entry into a NetworkProfile.

    Args:
        name: Network key (e.g., "testnet")
        data: Entry in truffle-config shape

    Returns:
        Validated NetworkProfile

    Raises:
        InvalidConfigError: If fields are missing, mistyped, or the entry
                            sets both or neither of host/port and provider
    """
    if not isinstance(data, Mapping):
        raise InvalidConfigError(f"Network '{name}' must be an object")

    for key in data:
        if key not in _PROFILE_KEYS:
            logger.warning("Network '%s': ignoring unsupported key '%s'", name, key)

    if "network_id" not in data:
        raise InvalidConfigError(f"Network '{name}': network_id is required")

    kwargs: Dict[str, Any] = {
        "name": name,
        "network_id": _require_int(data["network_id"], "network_id", name),
    }

    if "host" in data:
        if not isinstance(data["host"], str) or not data["host"]:
            raise InvalidConfigError(f"Network '{name}': host must be a string")
        kwargs["host"] = data["host"]
    if "port" in data:
        port = _require_int(data["port"], "port", name, 1)
        if port > 65535:
            raise InvalidConfigError(f"Network '{name}': port must be <= 65535")
        kwargs["port"] = port
    if ("host" in kwargs) != ("port" in kwargs):
        raise InvalidConfigError(f"Network '{name}': host and port must be set together")

    if "provider" in data:
        kwargs["provider_factory"] = parse_provider(data["provider"], name)

    for key in ("confirmations", "timeoutBlocks"):
        if key in data:
            kwargs[_PROFILE_KEYS[key]] = _require_int(data[key], key, name)

    if "skipDryRun" in data:
        if not isinstance(data["skipDryRun"], bool):
            raise InvalidConfigError(f"Network '{name}': skipDryRun must be a boolean")
        kwargs["skip_dry_run"] = data["skipDryRun"]

    return NetworkProfile(**kwargs)


def parse_network_table(data: Mapping[str, Any]) -> Dict[str, NetworkProfile]:
    """
    Parse the networks table.

    Args:
        data: Mapping of network name -> entry

    Returns:
        Mapping of network name -> NetworkProfile, in declaration order
    """
    if not isinstance(data, Mapping):
        raise InvalidConfigError("networks must be an object")
    return {name: parse_network_profile(name, entry) for name, entry in data.items()}


def parse_compilers(data: Mapping[str, Any]) -> Dict[str, CompilerSpec]:
    """
    Parse the compilers table.

    Args:
        data: Mapping of compiler name -> {"version": ...}

    Returns:
        Mapping of compiler name -> CompilerSpec
    """
    if not isinstance(data, Mapping):
        raise InvalidConfigError("compilers must be an object")

    compilers: Dict[str, CompilerSpec] = {}
    for name, entry in data.items():
        version: Optional[Any] = entry.get("version") if isinstance(entry, Mapping) else None
        if not isinstance(version, str) or not version:
            raise InvalidConfigError(f"Compiler '{name}': version is required")
        compilers[name] = CompilerSpec(version=version, name=name)
    return compilers


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Read a JSON configuration file.

    Args:
        config_path: Path to the JSON file

    Returns:
        Raw configuration dictionary with "networks" and "compilers" keys

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        InvalidConfigError: If the file is not a JSON object
    """
    try:
        with open(config_path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Configuration file not found at {config_path}") from e
    except json.JSONDecodeError as e:
        raise InvalidConfigError(f"Configuration file {config_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigError(f"Configuration file {config_path} must hold a JSON object")
    return data
