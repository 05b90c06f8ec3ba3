from decimal import Decimal

from eth_abi import encode
from web3 import Web3

from config.constants import SYMBOLS, SWAP_SELECTORS, TOKEN_DECIMALS
from utils.logger import setup_logger


def to_token_units(amount: Decimal, decimals: int) -> int:
    """Перевод человекочитаемой суммы в минимальные единицы токена"""
    return int(Decimal(amount).scaleb(decimals))


def from_token_units(value: int, decimals: int) -> Decimal:
    return Decimal(value).scaleb(-decimals)


class SwapService:
    def __init__(self, chain_client, config):
        self.client = chain_client
        self.config = config
        self.logger = setup_logger("SwapService")

        self.prior_address = config.prior_address
        # Один spender для обоих направлений свапа
        self.router_address = config.router_address

    @staticmethod
    def build_swap_data(token: str, amount_in: int) -> str:
        """Call data роутера: селектор функции для токена + uint256 сумма"""
        selector = SWAP_SELECTORS.get(token)
        if selector is None:
            raise ValueError(f"Unsupported swap token: {token}")
        return selector + encode(['uint256'], [amount_in]).hex()

    async def approve_prior(self, wallet, amount_in: int) -> bool:
        """Approve PRIOR для роутера, только если текущего allowance не хватает"""
        label = wallet.label
        try:
            # ✅ ПРОВЕРЯЕМ ТЕКУЩИЙ ALLOWANCE
            current_allowance = await self.client.get_allowance(
                self.prior_address, wallet.address, self.router_address)

            if current_allowance >= amount_in:
                self.logger.info(
                    f"{SYMBOLS['info']} {label} | Allowance for PRIOR already sufficient: "
                    f"{from_token_units(current_allowance, TOKEN_DECIMALS['PRIOR'])}"
                )
                return True

            self.logger.info(f"{SYMBOLS['approve']} {label} | Approving PRIOR...")
            tx_hash = await self.client.approve(wallet, self.prior_address, self.router_address, amount_in)
            self.logger.info(f"{SYMBOLS['pending']} {label} | Approval transaction sent: {tx_hash}")

            receipt = await self.client.wait_for_confirmation(tx_hash)
            self.logger.info(f"{SYMBOLS['success']} {label} | Approval confirmed in block {receipt.blockNumber}")
            return True

        except Exception as e:
            self.logger.error(f"{SYMBOLS['error']} {label} | Error approving PRIOR: {e}")
            return False

    async def swap_prior(self, wallet, directive) -> bool:
        """Свап PRIOR -> USDT/USDC через роутер"""
        label = wallet.label
        token = directive.token
        try:
            amount_in = to_token_units(directive.amount, TOKEN_DECIMALS['PRIOR'])

            if not await self.approve_prior(wallet, amount_in):
                self.logger.warning(f"{SYMBOLS['warning']} {label} | Approval failed, aborting swap")
                return False

            data = self.build_swap_data(token, amount_in)

            self.logger.info(f"{SYMBOLS['pending']} {label} | Swapping {directive.amount_str} PRIOR for {token}...")
            tx_hash = await self.client.submit_swap(wallet, data, Web3.to_checksum_address(self.router_address))
            self.logger.info(f"{SYMBOLS['pending']} {label} | Swap transaction sent: {tx_hash}")

            receipt = await self.client.wait_for_confirmation(tx_hash)
            self.logger.info(f"{SYMBOLS['success']} {label} | Swap confirmed in block {receipt.blockNumber}")
            return True

        except Exception as e:
            self.logger.error(f"{SYMBOLS['error']} {label} | Error swapping PRIOR for {token}: {e}")
            return False
