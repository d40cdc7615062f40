"""
Signer
Sends transactions from a node-managed account or a local private key
"""

import os
from typing import Dict, Optional
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from .exceptions import SignerError
from utils.async_helpers import run_sync
from utils.gas_calculator import GasCalculator

load_dotenv()

REMOTE_ACCOUNTS = 'remote'


class Signer:
    """
    Sends contract-creation transactions for one account

    Two modes, picked by the network's "accounts" setting:
    - "remote": the node holds the keys (Hardhat node, anvil); the first
      node account sends through eth_sendTransaction
    - anything else: name of an env var holding a private key; transactions
      are built and signed locally and sent raw
    """

    def __init__(
        self,
        w3: Web3,
        address: str,
        account=None,
        gas_calculator: Optional[GasCalculator] = None
    ):
        """
        Initialize Signer

        Args:
            w3: Web3 instance
            address: Sending address
            account: eth_account LocalAccount, None for node-managed accounts
            gas_calculator: Gas calculator for locally signed transactions
        """
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.account = account
        self.gas_calculator = gas_calculator or GasCalculator(w3)

    @classmethod
    def from_network_config(cls, w3: Web3, network_config: Dict) -> 'Signer':
        """
        Create the signer configured for a network

        Args:
            w3: Connected Web3 instance
            network_config: Resolved network configuration

        Returns:
            Signer
        """
        gas_calculator = GasCalculator(w3, network_config)
        accounts = network_config.get('accounts', REMOTE_ACCOUNTS)

        if accounts == REMOTE_ACCOUNTS:
            node_accounts = w3.eth.accounts
            if not node_accounts:
                raise SignerError(
                    f"Network \"{network_config['network']}\" has no node-managed accounts"
                )
            return cls(w3, node_accounts[0], gas_calculator=gas_calculator)

        private_key = os.getenv(accounts)
        if not private_key:
            raise SignerError(
                f"{accounts} must be set to deploy to network \"{network_config['network']}\""
            )

        account = Account.from_key(private_key)
        return cls(w3, account.address, account=account, gas_calculator=gas_calculator)

    @property
    def is_local(self) -> bool:
        return self.account is not None

    async def get_balance(self) -> int:
        return await run_sync(self.w3.eth.get_balance, self.address)

    async def send(self, call) -> bytes:
        """
        Send a contract call (constructor or function) exactly once

        Args:
            call: web3 ContractConstructor or ContractFunction

        Returns:
            Transaction hash
        """
        logger.info(f"Deploying from: {self.address}")

        balance = await self.get_balance()
        logger.info(f"Account balance: {self.w3.from_wei(balance, 'ether')} ETH")

        if not self.is_local:
            tx_hash = await run_sync(call.transact, {'from': self.address})
            logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
            return tx_hash

        gas_limit = await self.gas_calculator.estimate_gas_limit(call, self.address)
        fee_params = await self.gas_calculator.get_fee_params()

        cost = self.gas_calculator.estimate_cost(gas_limit, fee_params)
        logger.info(f"Estimated deployment cost: {self.w3.from_wei(cost, 'ether')} ETH")

        nonce = await run_sync(self.w3.eth.get_transaction_count, self.address, 'pending')
        chain_id = await run_sync(lambda: self.w3.eth.chain_id)

        transaction = await run_sync(call.build_transaction, {
            'from': self.address,
            'nonce': nonce,
            'gas': gas_limit,
            'chainId': chain_id,
            **fee_params
        })

        logger.info("Signing transaction...")
        signed_tx = self.account.sign_transaction(transaction)

        tx_hash = await run_sync(self.w3.eth.send_raw_transaction, signed_tx.raw_transaction)
        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
        return tx_hash
