"""
Network Context
Resolves the target network, its RPC connection and signing accounts
"""

import os
import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional
from web3 import Web3
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from runner.exceptions import NetworkConnectionError

DEFAULT_CONFIG_PATH = "config/networks.json"


@dataclass(frozen=True)
class NetworkConfig:
    """Static settings for one network"""

    name: str
    url: str
    chain_id: int
    private_keys: List[str] = field(default_factory=list)
    request_timeout: int = 30


def _split_keys(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [key.strip() for key in raw.split(',') if key.strip()]


def load_config_file(config_path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """Read the networks JSON file"""
    with open(config_path, 'r') as f:
        return json.load(f)


def load_network_config(
    name: Optional[str] = None,
    config_path: str = DEFAULT_CONFIG_PATH,
    config: Optional[Dict] = None
) -> NetworkConfig:
    """
    Build a NetworkConfig from the JSON file and environment

    Environment overrides:
        DEPLOY_NETWORK: network name when none is given
        <NAME>_RPC_URL: endpoint URL
        DEPLOYER_PRIVATE_KEY: comma-separated signing keys (replace configured ones)

    Raises:
        NetworkConnectionError: unknown network or no URL
    """
    if config is None:
        config = load_config_file(config_path)

    name = name or os.getenv('DEPLOY_NETWORK') or config.get('default_network', 'localhost')
    networks = config.get('networks', {})

    if name not in networks:
        raise NetworkConnectionError(
            f"Unknown network '{name}' (configured: {', '.join(sorted(networks))})"
        )

    entry = networks[name]

    url = os.getenv(f"{name.upper()}_RPC_URL")
    if not url and entry.get('url_env'):
        url = os.getenv(entry['url_env'])
    url = url or entry.get('url')

    if not url:
        raise NetworkConnectionError(f"No RPC URL configured for network '{name}'")

    keys = _split_keys(os.getenv('DEPLOYER_PRIVATE_KEY'))
    if not keys and entry.get('accounts_env'):
        keys = _split_keys(os.getenv(entry['accounts_env']))
    if not keys:
        keys = list(entry.get('accounts', []))

    return NetworkConfig(
        name=name,
        url=url,
        chain_id=int(entry['chain_id']),
        private_keys=keys,
        request_timeout=int(entry.get('request_timeout', 30))
    )


class NetworkContext:
    """
    Explicit connection handed to the deployment runner

    Holds the Web3 instance, the expected chain id and the signer set.
    """

    def __init__(self, w3: Web3, name: str, chain_id: int, accounts: List[LocalAccount]):
        """
        Initialize Network Context

        Args:
            w3: Web3 instance
            name: Network name used in records and file names
            chain_id: Expected chain id
            accounts: Signing accounts, the first one deploys
        """
        self.w3 = w3
        self.name = name
        self.chain_id = chain_id
        self.accounts = accounts

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "NetworkContext":
        """Connect to the network described by config"""
        w3 = Web3(Web3.HTTPProvider(
            config.url,
            request_kwargs={'timeout': config.request_timeout}
        ))
        accounts = [Account.from_key(key) for key in config.private_keys]

        logger.info(f"Network: {config.name} ({config.url}, chain {config.chain_id})")
        return cls(w3, config.name, config.chain_id, accounts)

    @property
    def deployer(self) -> LocalAccount:
        """First signer"""
        if not self.accounts:
            raise NetworkConnectionError(f"No signing accounts configured for '{self.name}'")
        return self.accounts[0]

    def ensure_connected(self):
        """
        Check the endpoint answers and serves the expected chain

        Raises:
            NetworkConnectionError: node unreachable or chain id mismatch
        """
        try:
            connected = self.w3.is_connected()
        except Exception as e:
            raise NetworkConnectionError(f"Failed to connect to {self.name}: {e}") from e

        if not connected:
            raise NetworkConnectionError(f"Failed to connect to {self.name}")

        remote_chain_id = self.w3.eth.chain_id
        if remote_chain_id != self.chain_id:
            raise NetworkConnectionError(
                f"Chain id mismatch on {self.name}: configured {self.chain_id}, node reports {remote_chain_id}"
            )

    def get_balance(self, address: str) -> Decimal:
        """Native balance in ether"""
        balance_wei = self.w3.eth.get_balance(Web3.to_checksum_address(address))
        return Decimal(str(self.w3.from_wei(balance_wei, 'ether')))
