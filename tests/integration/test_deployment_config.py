"""Integration tests for the DeploymentConfig API."""

import json
from pathlib import Path

import pytest
import responses

from bsc_deploy_config import (
    ConfigNotFoundError,
    DeploymentConfig,
    HDWalletProvider,
    InvalidConfigError,
    JsonRpcProvider,
    MissingSecretError,
    Secrets,
    UnknownNetworkError,
    load_config,
    resolve_provider,
)


class TestLoadConfig:
    """Test the load_config() function."""

    def test_builtin_table_networks(self, config: DeploymentConfig):
        """Test that the built-in table declares the three networks."""
        assert config.network_names() == ["development", "testnet", "bsc"]

    def test_loads_from_file(self, config_file: Path, config: DeploymentConfig):
        """Test that a truffle-shaped JSON file loads equal to the built-in table."""
        assert load_config(config_file) == config

    def test_loads_from_string_path(self, config_file: Path):
        """Test that string paths are accepted."""
        assert load_config(str(config_file)).has_network("bsc")

    def test_missing_file(self, tmp_path: Path):
        """Test that a missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "does_not_exist.json")

    def test_missing_file_catchable_as_file_not_found(self, tmp_path: Path):
        """Test that ConfigNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "does_not_exist.json")

    def test_file_without_networks(self, tmp_path: Path):
        """Test that a file must declare networks."""
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"compilers": {"solc": {"version": "0.5.16"}}}))

        with pytest.raises(InvalidConfigError, match="networks"):
            load_config(path)

    def test_reload_is_idempotent(self):
        """Test that loading twice yields identical profiles."""
        first = load_config()
        second = load_config()

        assert first == second
        for name in first.network_names():
            assert first.get_network(name) == second.get_network(name)
        assert first.compiler() == second.compiler()


class TestGetNetwork:
    """Test the get_network() method."""

    @pytest.mark.parametrize(
        "name,network_id",
        [("development", 5777), ("testnet", 97), ("bsc", 56)],
    )
    def test_network_ids(self, config: DeploymentConfig, name: str, network_id: int):
        """Test that each network carries its literal chain id."""
        assert config.get_network(name).network_id == network_id

    def test_development_endpoint(self, config: DeploymentConfig):
        """Test the local Ganache endpoint."""
        profile = config.get_network("development")

        assert profile.host == "localhost"
        assert profile.port == 7545
        assert profile.url == "http://localhost:7545"
        assert profile.provider_factory is None

    def test_testnet_profile(self, config: DeploymentConfig):
        """Test the BSC testnet endpoint and policy hints."""
        profile = config.get_network("testnet")

        assert profile.url == "https://data-seed-prebsc-2-s1.binance.org:8545"
        assert profile.confirmations == 5
        assert profile.timeout_blocks == 200
        assert profile.skip_dry_run is True

    def test_mainnet_profile(self, config: DeploymentConfig):
        """Test the BSC mainnet endpoint and policy hints."""
        profile = config.get_network("bsc")

        assert profile.url == "https://bsc-dataseed1.binance.org"
        assert profile.confirmations == 10
        assert profile.timeout_blocks == 200
        assert profile.skip_dry_run is True

    def test_unknown_network(self, config: DeploymentConfig):
        """Test that an unknown name raises UnknownNetworkError."""
        with pytest.raises(UnknownNetworkError) as exc_info:
            config.get_network("nonexistent")

        assert "nonexistent" in str(exc_info.value)
        assert "development" in str(exc_info.value)

    def test_unknown_network_catchable_as_key_error(self, config: DeploymentConfig):
        """Test that UnknownNetworkError can be caught as KeyError."""
        with pytest.raises(KeyError):
            config.get_network("nonexistent")

    def test_has_network(self, config: DeploymentConfig):
        """Test has_network() for known and unknown names."""
        assert config.has_network("bsc")
        assert not config.has_network("ropsten")


class TestCompiler:
    """Test compiler pin lookups."""

    def test_compiler_version(self, config: DeploymentConfig):
        """Test that the solc pin is exactly 0.5.16."""
        assert config.compiler_version == "0.5.16"
        assert config.compiler("solc").version == "0.5.16"

    def test_compiler_unaffected_by_network_selection(self, config: DeploymentConfig):
        """Test that selecting networks does not change the compiler pin."""
        for name in config.network_names():
            assert config.run(name, Secrets()).compiler.version == "0.5.16"

    def test_unknown_compiler(self, config: DeploymentConfig):
        """Test that unknown compilers raise InvalidConfigError."""
        with pytest.raises(InvalidConfigError):
            config.compiler("vyper")


class TestResolveProvider:
    """Test the resolve_provider() function."""

    def test_development_needs_no_mnemonic(self, config: DeploymentConfig, empty_secrets):
        """Test that the local network builds a plain transport without secrets."""
        with resolve_provider(config.get_network("development"), empty_secrets) as provider:
            assert type(provider) is JsonRpcProvider
            assert provider.rpc_url == "http://localhost:7545"

    @pytest.mark.parametrize("name", ["testnet", "bsc"])
    def test_remote_without_mnemonic(self, config: DeploymentConfig, empty_secrets, name: str):
        """Test that remote networks fail with MissingSecretError and stay offline."""
        with responses.RequestsMock() as rsps:
            with pytest.raises(MissingSecretError):
                resolve_provider(config.get_network(name), empty_secrets)
            assert len(rsps.calls) == 0

    @pytest.mark.parametrize(
        "name,url",
        [
            ("testnet", "https://data-seed-prebsc-2-s1.binance.org:8545"),
            ("bsc", "https://bsc-dataseed1.binance.org"),
        ],
    )
    def test_remote_with_mnemonic(
        self, config: DeploymentConfig, secrets: Secrets, expected_addresses, name: str, url: str
    ):
        """Test that remote networks build an HD wallet provider."""
        with resolve_provider(config.get_network(name), secrets) as provider:
            assert isinstance(provider, HDWalletProvider)
            assert provider.rpc_url == url
            assert provider.addresses == expected_addresses[:1]
