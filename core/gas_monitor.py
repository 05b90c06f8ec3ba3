import asyncio
import time
from web3 import Web3
from config.constants import SYMBOLS
from utils.logger import setup_logger


class GasMonitor:
    def __init__(self, config, web3_instance):
        self.config = config
        self.web3 = web3_instance
        self.logger = setup_logger("GasMonitor")
        self.gas_price_cache = None
        self.last_update = 0
        self.cache_timeout = 30  # секунды
        self.margin = 1.15
        self.fallback_gas_price = Web3.to_wei('1', 'gwei')

    async def get_optimal_gas_price(self) -> int:
        """Получение оптимальной цены газа"""
        try:
            current_time = time.time()

            # Кэширование
            if self.gas_price_cache is not None and current_time - self.last_update < self.cache_timeout:
                return self.gas_price_cache

            gas_price = await asyncio.to_thread(lambda: self.web3.eth.gas_price)

            # Добавляем маржу для надежности
            optimal_price = int(gas_price * self.margin)  # +15%

            self.gas_price_cache = optimal_price
            self.last_update = current_time

            self.logger.debug(f"{SYMBOLS['gas']} Optimal gas price: {Web3.from_wei(optimal_price, 'gwei'):.4f} Gwei")
            return optimal_price

        except Exception as e:
            self.logger.warning(f"{SYMBOLS['warning']} Failed to fetch gas price, using fallback: {e}")
            return self.fallback_gas_price

    def get_gas_limit(self, transaction_type: str) -> int:
        """Лимит газа для типа транзакции"""
        gas_limits = {
            "faucet": self.config.faucet_gas_limit,
            "approve": self.config.approve_gas_limit,
            "swap": self.config.swap_gas_limit,
        }
        return gas_limits.get(transaction_type, self.config.swap_gas_limit)
