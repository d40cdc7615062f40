"""
Network Manager
Resolves the target network from config and opens the Web3 connection
"""

import os
import json
from typing import Dict, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from blockchain.exceptions import ConfigError, NetworkConnectionError

load_dotenv()

DEFAULT_CONFIG_PATH = "config/networks.json"


class NetworkManager:
    """
    Network selection and connection

    Each entry under "networks" in the config file describes one network:
    its RPC url (or the env var holding it), expected chain id, account
    source and confirmation settings.
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize Network Manager

        Args:
            config_path: Path to the networks JSON file
        """
        self.config_path = config_path
        self.config = self._load_config(config_path)
        self.networks = self.config['networks']
        self.default_network = self.config.get('default_network', 'localhost')

    def _load_config(self, config_path: str) -> Dict:
        try:
            with open(config_path, 'r') as f:
                config = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f"Network config not found: {config_path}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in network config {config_path}: {e}") from e

        if not isinstance(config.get('networks'), dict) or not config['networks']:
            raise ConfigError(f"No networks defined in {config_path}")

        return config

    def get_network_config(self, network: Optional[str] = None) -> Dict:
        """
        Get resolved configuration for a network

        Args:
            network: Network name (None = default network)

        Returns:
            Network config dict with "network" and "url" filled in
        """
        network_name = network if network else self.default_network

        if network_name not in self.networks:
            available = ', '.join(sorted(self.networks))
            raise ConfigError(
                f"Network \"{network_name}\" is not defined. Available networks: {available}"
            )

        network_config = dict(self.networks[network_name])
        network_config['network'] = network_name
        network_config['url'] = self._resolve_url(network_name, network_config)

        return network_config

    def _resolve_url(self, network_name: str, network_config: Dict) -> str:
        # <NAME>_RPC_URL wins over everything in the file
        override = os.getenv(f"{network_name.upper()}_RPC_URL")
        if override:
            return override

        url_env = network_config.get('url_env')
        if url_env:
            url = os.getenv(url_env)
            if url:
                return url
            if not network_config.get('url'):
                raise ConfigError(
                    f"{url_env} must be set to deploy to network \"{network_name}\""
                )

        url = network_config.get('url')
        if not url:
            raise ConfigError(f"No url configured for network \"{network_name}\"")

        return url

    def connect(self, network_config: Dict) -> Web3:
        """
        Open a connection to the network and verify it

        Args:
            network_config: Output of get_network_config

        Returns:
            Connected Web3 instance
        """
        name = network_config.get('name', network_config['network'])
        url = network_config['url']

        w3 = Web3(Web3.HTTPProvider(url))

        if not w3.is_connected():
            logger.error(f"Failed to connect to {name}")
            raise NetworkConnectionError(
                f"Cannot connect to network \"{network_config['network']}\" at {url}"
            )

        expected_chain_id = network_config.get('chain_id')
        if expected_chain_id is not None:
            chain_id = w3.eth.chain_id
            if chain_id != expected_chain_id:
                raise NetworkConnectionError(
                    f"Network \"{network_config['network']}\" is configured with chain id "
                    f"{expected_chain_id}, but the node at {url} reports {chain_id}"
                )

        logger.success(f"Connected to {name}")
        return w3
