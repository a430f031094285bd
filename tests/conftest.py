"""Shared pytest fixtures for bsc-deploy-config tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from bsc_deploy_config import DeploymentConfig, Secrets, load_config

# Well-known development mnemonic (Hardhat/Foundry default accounts)
TEST_MNEMONIC = "test test test test test test test test test test test junk"
TEST_ADDRESSES = [
    "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
    "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
    "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC",
]

TESTNET_URL = "https://data-seed-prebsc-2-s1.binance.org:8545"
MAINNET_URL = "https://bsc-dataseed1.binance.org"
LOCAL_URL = "http://localhost:7545"


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch) -> Path:
    """Run in an empty directory with MNEMONIC unset; returns the directory."""
    monkeypatch.delenv("MNEMONIC", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config() -> DeploymentConfig:
    """Return the built-in deployment configuration."""
    return load_config()


@pytest.fixture
def secrets() -> Secrets:
    """Return secrets carrying the test mnemonic."""
    return Secrets(mnemonic=TEST_MNEMONIC)


@pytest.fixture
def empty_secrets() -> Secrets:
    """Return secrets without a mnemonic."""
    return Secrets()


@pytest.fixture
def truffle_config_dict() -> Dict[str, Any]:
    """Return the network table in truffle-config shape."""
    return {
        "networks": {
            "development": {"host": "localhost", "port": 7545, "network_id": 5777},
            "testnet": {
                "provider": {"type": "hdwallet", "url": TESTNET_URL},
                "network_id": 97,
                "confirmations": 5,
                "timeoutBlocks": 200,
                "skipDryRun": True,
            },
            "bsc": {
                "provider": {"type": "hdwallet", "url": MAINNET_URL},
                "network_id": 56,
                "confirmations": 10,
                "timeoutBlocks": 200,
                "skipDryRun": True,
            },
        },
        "compilers": {"solc": {"version": "0.5.16"}},
    }


@pytest.fixture
def config_file(tmp_path: Path, truffle_config_dict: Dict[str, Any]) -> Path:
    """Write the truffle-config shaped table to a temporary JSON file."""
    path = tmp_path / "deploy-config.json"
    with open(path, "w") as f:
        json.dump(truffle_config_dict, f, indent=2)
    return path


@pytest.fixture
def mnemonic() -> str:
    """Return the test mnemonic."""
    return TEST_MNEMONIC


@pytest.fixture
def expected_addresses() -> list:
    """Return the first addresses derived from the test mnemonic."""
    return list(TEST_ADDRESSES)
