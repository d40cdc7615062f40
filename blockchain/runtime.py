"""
Deployment Runtime
Entry point for scripts: network connection, signer and contract factories
"""

import os
from typing import Dict, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from .artifacts import ArtifactStore
from .contract_factory import ContractFactory
from .signer import Signer
from utils.async_helpers import run_sync
from utils.network_manager import NetworkManager, DEFAULT_CONFIG_PATH

load_dotenv()


class Runtime:
    """
    Everything a deploy script needs, bound to one network

    The connection and signer are opened lazily on the first factory
    request so that connection failures surface inside the script.
    """

    def __init__(
        self,
        network: Optional[str] = None,
        artifacts_dir: str = "artifacts",
        config_path: str = DEFAULT_CONFIG_PATH,
        network_manager: Optional[NetworkManager] = None,
        artifact_store: Optional[ArtifactStore] = None
    ):
        """
        Initialize Runtime

        Args:
            network: Network name (None = default network from config)
            artifacts_dir: Compilation artifacts directory
            config_path: Networks config file
            network_manager: Pre-built network manager
            artifact_store: Pre-built artifact store
        """
        self.network_name = network
        self.config_path = config_path
        self.artifacts = artifact_store or ArtifactStore(artifacts_dir)

        self._network_manager = network_manager
        self._network_config: Optional[Dict] = None
        self._w3: Optional[Web3] = None
        self._signer: Optional[Signer] = None

    @classmethod
    def from_env(cls) -> 'Runtime':
        """Build a runtime from DEPLOY_NETWORK, ARTIFACTS_DIR and NETWORK_CONFIG"""
        return cls(
            network=os.getenv('DEPLOY_NETWORK'),
            artifacts_dir=os.getenv('ARTIFACTS_DIR', 'artifacts'),
            config_path=os.getenv('NETWORK_CONFIG', DEFAULT_CONFIG_PATH)
        )

    @property
    def network_manager(self) -> NetworkManager:
        if self._network_manager is None:
            self._network_manager = NetworkManager(self.config_path)
        return self._network_manager

    @property
    def network_config(self) -> Dict:
        if self._network_config is None:
            self._network_config = self.network_manager.get_network_config(self.network_name)
        return self._network_config

    async def get_web3(self) -> Web3:
        if self._w3 is None:
            self._w3 = await run_sync(self.network_manager.connect, self.network_config)
        return self._w3

    async def get_signer(self) -> Signer:
        if self._signer is None:
            w3 = await self.get_web3()
            self._signer = await run_sync(Signer.from_network_config, w3, self.network_config)
        return self._signer

    async def get_contract_factory(self, name: str) -> ContractFactory:
        """
        Get a factory for a compiled contract

        Args:
            name: Contract name or fully qualified name

        Returns:
            ContractFactory bound to the network's signer
        """
        artifact = self.artifacts.read_artifact(name)

        w3 = await self.get_web3()
        signer = await self.get_signer()

        logger.debug(f"Factory for {artifact.fully_qualified_name} on {self.network_config['network']}")
        return ContractFactory(w3, artifact, signer, self.network_config)
