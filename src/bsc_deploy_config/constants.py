"""Configuration constants for bsc-deploy-config library."""

# Environment variable holding the HD wallet seed phrase
MNEMONIC_ENV = "MNEMONIC"

# HD wallet provider defaults (BIP-44 Ethereum path, first account only)
DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/"
DEFAULT_ADDRESS_INDEX = 0
DEFAULT_NUM_ADDRESSES = 1

# JSON-RPC request timeout in seconds
RPC_TIMEOUT = 30

# Network table in truffle-config shape; parsed by parsers.parse_network_table
NETWORK_CONFIG = {
    "development": {
        "host": "localhost",
        "port": 7545,
        "network_id": 5777,  # Ganache
    },
    "testnet": {
        "provider": {
            "type": "hdwallet",
            "url": "https://data-seed-prebsc-2-s1.binance.org:8545",
        },
        "network_id": 97,  # BSC testnet (Chapel)
        "confirmations": 5,
        "timeoutBlocks": 200,
        "skipDryRun": True,
    },
    "bsc": {
        "provider": {
            "type": "hdwallet",
            "url": "https://bsc-dataseed1.binance.org",
        },
        "network_id": 56,  # BSC mainnet
        "confirmations": 10,
        "timeoutBlocks": 200,
        "skipDryRun": True,
    },
}

COMPILER_CONFIG = {
    "solc": {
        "version": "0.5.16",
    },
}
