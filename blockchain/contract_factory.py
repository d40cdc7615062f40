"""
Contract Factory
Deploys new instances of a compiled contract
"""

import asyncio
import time
from typing import Dict, Optional
from web3 import Web3
from web3.exceptions import TimeExhausted
from loguru import logger

from .artifacts import Artifact
from .exceptions import DeploymentError, DeploymentFailedError, InvalidArtifactError
from .signer import Signer
from utils.async_helpers import run_sync

DEFAULT_TIMEOUT = 300
DEFAULT_POLL_LATENCY = 0.5


class DeployedContract:
    """
    Handle to a contract whose creation transaction has been sent

    address, receipt and contract stay None until deployed() confirms
    the transaction.
    """

    def __init__(
        self,
        w3: Web3,
        artifact: Artifact,
        tx_hash: bytes,
        confirmations: int = 1,
        timeout: float = DEFAULT_TIMEOUT,
        poll_latency: float = DEFAULT_POLL_LATENCY
    ):
        self.w3 = w3
        self.artifact = artifact
        self.deploy_transaction_hash = tx_hash
        self.confirmations = confirmations
        self.timeout = timeout
        self.poll_latency = poll_latency

        self.address: Optional[str] = None
        self.receipt = None
        self.contract = None

    async def deployed(self) -> 'DeployedContract':
        """
        Wait until the creation transaction is confirmed

        Returns:
            self, with address, receipt and contract set

        Raises:
            DeploymentFailedError: Transaction reverted or left no code
            TimeExhausted: Not confirmed within the network timeout
        """
        if self.address is not None:
            return self

        tx_hash_hex = Web3.to_hex(self.deploy_transaction_hash)
        started = time.monotonic()
        logger.info("Waiting for confirmation...")

        receipt = await run_sync(
            self.w3.eth.wait_for_transaction_receipt,
            self.deploy_transaction_hash,
            timeout=self.timeout,
            poll_latency=self.poll_latency
        )

        if receipt['status'] != 1:
            logger.error(f"Deployment of {self.artifact.contract_name} reverted")
            raise DeploymentFailedError(
                f"Deployment of {self.artifact.contract_name} reverted "
                f"(transaction {tx_hash_hex})",
                tx_hash=tx_hash_hex
            )

        if self.confirmations > 1:
            await self._wait_for_confirmations(receipt['blockNumber'], started)

        contract_address = receipt['contractAddress']
        code = await run_sync(self.w3.eth.get_code, contract_address)

        if not code:
            raise DeploymentFailedError(
                f"No code at {contract_address} after deploying "
                f"{self.artifact.contract_name} (transaction {tx_hash_hex})",
                tx_hash=tx_hash_hex
            )

        self.receipt = receipt
        self.address = contract_address
        self.contract = self.w3.eth.contract(address=contract_address, abi=self.artifact.abi)

        logger.success(f"{self.artifact.contract_name} deployed at {contract_address}")
        logger.debug(f"Gas used: {receipt['gasUsed']}")
        return self

    async def _wait_for_confirmations(self, block_number: int, started: float):
        target = block_number + self.confirmations - 1

        while await run_sync(lambda: self.w3.eth.block_number) < target:
            if time.monotonic() - started >= self.timeout:
                raise TimeExhausted(
                    f"Transaction {Web3.to_hex(self.deploy_transaction_hash)} did not reach "
                    f"{self.confirmations} confirmations after {self.timeout} seconds"
                )
            await asyncio.sleep(self.poll_latency)


class ContractFactory:
    """
    Deploys instances of one compiled contract from one signer
    """

    def __init__(self, w3: Web3, artifact: Artifact, signer: Signer, network_config: Optional[Dict] = None):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            artifact: Compiled contract
            signer: Account sending the creation transaction
            network_config: Confirmation settings of the target network
        """
        if not artifact.is_deployable():
            raise InvalidArtifactError(
                f"You are trying to create a contract factory for the contract "
                f"{artifact.contract_name}, which is abstract and can't be deployed",
                contract_name=artifact.contract_name
            )

        if artifact.has_unlinked_libraries():
            raise InvalidArtifactError(
                f"The contract {artifact.contract_name} is missing links for libraries",
                contract_name=artifact.contract_name
            )

        self.w3 = w3
        self.artifact = artifact
        self.signer = signer

        config = network_config or {}
        self.confirmations = config.get('confirmations', 1)
        self.timeout = config.get('timeout', DEFAULT_TIMEOUT)
        self.poll_latency = config.get('poll_latency', DEFAULT_POLL_LATENCY)

        self.contract = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    @property
    def constructor_inputs(self) -> list:
        for entry in self.artifact.abi:
            if entry.get('type') == 'constructor':
                return entry.get('inputs', [])
        return []

    async def deploy(self, *args) -> DeployedContract:
        """
        Send one contract-creation transaction

        Args:
            *args: Constructor arguments

        Returns:
            DeployedContract; await its deployed() for the address
        """
        expected = len(self.constructor_inputs)
        if len(args) != expected:
            raise DeploymentError(
                f"{self.artifact.contract_name} constructor expects {expected} "
                f"arguments, got {len(args)}"
            )

        logger.info(f"Deploying {self.artifact.contract_name}...")

        constructor = self.contract.constructor(*args)
        tx_hash = await self.signer.send(constructor)

        return DeployedContract(
            self.w3,
            self.artifact,
            tx_hash,
            confirmations=self.confirmations,
            timeout=self.timeout,
            poll_latency=self.poll_latency
        )
