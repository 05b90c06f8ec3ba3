import asyncio
from dataclasses import dataclass, field
from typing import List

from web3 import Web3

from config.constants import SYMBOLS, TOKEN_DECIMALS, short_address
from services.faucet_service import FaucetService
from services.swap_service import SwapService, from_token_units
from utils.randomizer import Randomizer
from utils.logger import setup_logger


@dataclass
class WalletOutcome:
    label: str
    successful: int
    attempted: int


@dataclass
class RunOutcome:
    """Итог запуска: успешные свапы по каждому кошельку и в сумме"""
    wallets: List[WalletOutcome] = field(default_factory=list)

    @property
    def total_success(self) -> int:
        return sum(item.successful for item in self.wallets)

    @property
    def total_attempted(self) -> int:
        return sum(item.attempted for item in self.wallets)

    def add(self, label: str, successful: int, attempted: int):
        self.wallets.append(WalletOutcome(label=label, successful=successful, attempted=attempted))


class TransactionEngine:
    def __init__(self, config, chain_client, sleep=asyncio.sleep):
        self.config = config
        self.client = chain_client
        self.faucet_service = FaucetService(chain_client, config)
        self.swap_service = SwapService(chain_client, config)
        self.logger = setup_logger("TransactionEngine")
        self._sleep = sleep

    async def delay(self):
        """Фиксированная пауза между операциями"""
        seconds = self.config.delay_seconds
        self.logger.info(f"{SYMBOLS['wait']} Waiting for {seconds:g} seconds...")
        await self._sleep(seconds)

    async def claim_faucet(self, wallet) -> bool:
        return await self.faucet_service.claim_tokens(wallet)

    async def check_balances(self, wallet):
        """Вывод балансов кошелька (только диагностика)"""
        label = wallet.label
        try:
            self.logger.info(f"{SYMBOLS['wallet']} {label} ({short_address(wallet.address)}):")
            token_balances = {}
            for symbol, token_address in self.config.token_addresses.items():
                token_balances[symbol] = await self.client.get_token_balance(token_address, wallet.address)
            eth_balance = await self.client.get_balance(wallet.address)

            self.logger.info(f"  {SYMBOLS['eth']} ETH: {Web3.from_wei(eth_balance, 'ether')}")
            for symbol, balance in token_balances.items():
                amount = from_token_units(balance, TOKEN_DECIMALS[symbol])
                self.logger.info(f"  {SYMBOLS[symbol.lower()]} {symbol}: {amount}")

        except Exception as e:
            self.logger.error(f"{SYMBOLS['error']} {label} | Error checking balances: {e}")

    async def run_wallet_swaps(self, wallet, count: int) -> int:
        """N свапов для одного кошелька, возвращает число успешных"""
        label = wallet.label
        self.logger.info(f"{SYMBOLS['info']} Starting {count} swap operations for {label}...")
        await self.check_balances(wallet)

        success_count = 0

        for i in range(count):
            directive = Randomizer.get_swap_directive(self.config)

            self.logger.info(
                f"{SYMBOLS['swap']} {label} | Swap {i + 1}/{count}: {directive.amount_str} PRIOR for {directive.token}")
            if await self.swap_service.swap_prior(wallet, directive):
                success_count += 1

            if i < count - 1:
                await self.delay()

        self.logger.info(
            f"{SYMBOLS['info']} {label} | Completed {success_count}/{count} swap operations successfully")
        await self.check_balances(wallet)
        return success_count

    async def run_selected_wallets(self, wallets, swaps_per_wallet: int) -> RunOutcome:
        """Кран + свапы для каждого кошелька строго по очереди"""
        if isinstance(swaps_per_wallet, bool) or not isinstance(swaps_per_wallet, int) or swaps_per_wallet <= 0:
            raise ValueError(f"Swap count must be a positive integer, got {swaps_per_wallet!r}")

        outcome = RunOutcome()
        self.logger.info(f"{SYMBOLS['info']} Processing {len(wallets)} wallet(s)")

        for i, wallet in enumerate(wallets):
            self.logger.info(
                f"{SYMBOLS['wallet']} Processing wallet {i + 1}/{len(wallets)}: {wallet.label} ({wallet.source})")

            try:
                # Результат крана не влияет на свапы
                await self.claim_faucet(wallet)
                await self.delay()

                successes = await self.run_wallet_swaps(wallet, swaps_per_wallet)
            except Exception as e:
                self.logger.error(f"{SYMBOLS['error']} {wallet.label} | Wallet sequence failed: {e}")
                successes = 0

            outcome.add(wallet.label, successes, swaps_per_wallet)

            if i < len(wallets) - 1:
                await self.delay()

        self.logger.info(
            f"{SYMBOLS['info']} All selected wallets processed. "
            f"Total swap success: {outcome.total_success}/{outcome.total_attempted}"
        )
        return outcome
