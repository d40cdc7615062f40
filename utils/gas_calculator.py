"""
Gas Calculator
Gas limit estimation and fee parameters for deployment transactions
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from .async_helpers import run_sync

DEFAULT_GAS_MULTIPLIER = 1.2
DEFAULT_GAS_LIMIT = 3_000_000


class GasCalculator:
    """
    Computes gas limits and fee parameters from live network data
    """

    def __init__(self, w3: Web3, network_config: Optional[Dict] = None):
        """
        Initialize Gas Calculator

        Args:
            w3: Web3 instance
            network_config: Selected network configuration
        """
        self.w3 = w3
        config = network_config or {}

        self.gas_multiplier = config.get('gas_multiplier', DEFAULT_GAS_MULTIPLIER)
        self.default_gas_limit = config.get('default_gas_limit', DEFAULT_GAS_LIMIT)
        self.max_gas_price_gwei = config.get('max_gas_price_gwei')

    async def estimate_gas_limit(self, call, sender: str) -> int:
        """
        Estimate gas for a contract call with a safety buffer

        Args:
            call: Contract constructor or function call
            sender: Sending address

        Returns:
            Gas limit
        """
        try:
            estimate = await run_sync(call.estimate_gas, {'from': sender})
            gas_limit = int(estimate * self.gas_multiplier)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = self.default_gas_limit

        logger.info(f"Gas limit: {gas_limit}")
        return gas_limit

    async def get_fee_params(self) -> Dict[str, int]:
        """
        Get fee fields for a transaction

        Returns:
            EIP-1559 fields when the chain has a base fee, else legacy gasPrice
        """
        latest = await run_sync(self.w3.eth.get_block, 'latest')
        base_fee = latest.get('baseFeePerGas')

        if base_fee is None:
            gas_price = self._cap(await run_sync(lambda: self.w3.eth.gas_price))
            logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")
            return {'gasPrice': gas_price}

        priority_fee = await run_sync(lambda: self.w3.eth.max_priority_fee)
        # Headroom for two blocks of base fee growth
        max_fee = self._cap(base_fee * 2 + priority_fee)
        priority_fee = min(priority_fee, max_fee)

        logger.info(
            f"Max fee: {self.w3.from_wei(max_fee, 'gwei')} gwei, "
            f"priority fee: {self.w3.from_wei(priority_fee, 'gwei')} gwei"
        )
        return {
            'maxFeePerGas': max_fee,
            'maxPriorityFeePerGas': priority_fee
        }

    def estimate_cost(self, gas_limit: int, fee_params: Dict[str, int]) -> int:
        """
        Worst-case transaction cost

        Args:
            gas_limit: Gas limit
            fee_params: Output of get_fee_params

        Returns:
            Cost in wei
        """
        price = fee_params.get('maxFeePerGas', fee_params.get('gasPrice', 0))
        return gas_limit * price

    def _cap(self, price_wei: int) -> int:
        if self.max_gas_price_gwei is None:
            return price_wei

        cap_wei = self.w3.to_wei(self.max_gas_price_gwei, 'gwei')
        if price_wei > cap_wei:
            logger.warning(f"Gas price capped at {self.max_gas_price_gwei} gwei")
            return int(cap_wei)
        return price_wei
