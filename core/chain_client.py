import asyncio
from typing import Any, Dict

from web3 import Web3
from web3.exceptions import TimeExhausted

from config.constants import ERC20_ABI, FAUCET_ABI, SYMBOLS
from core.gas_monitor import GasMonitor
from utils.logger import setup_logger


class ChainError(Exception):
    """Ошибка взаимодействия с сетью (RPC, отправка, подтверждение)"""

    def __init__(self, message: str, tx_hash: str = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class ChainClient:
    """
    Узкий интерфейс к сети поверх web3.py.
    Синхронные вызовы web3 выполняются через asyncio.to_thread.
    """

    def __init__(self, config, web3_instance=None):
        self.config = config
        self.web3 = web3_instance or Web3(Web3.HTTPProvider(config.rpc_url))
        self.gas_monitor = GasMonitor(config, self.web3)
        self.logger = setup_logger("ChainClient")

    async def _run(self, description: str, func, *args, **kwargs):
        """Выполнение вызова web3 в потоке с приведением ошибок к ChainError"""
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except ChainError:
            raise
        except Exception as e:
            raise ChainError(f"{description} failed: {e}") from e

    def _token_contract(self, token_address: str):
        return self.web3.eth.contract(address=Web3.to_checksum_address(token_address), abi=ERC20_ABI)

    async def is_connected(self) -> bool:
        try:
            return bool(await asyncio.to_thread(self.web3.is_connected))
        except Exception as e:
            self.logger.error(f"{SYMBOLS['error']} Connection check failed: {e}")
            return False

    async def get_chain_id(self) -> int:
        return await self._run("Chain id request", lambda: self.web3.eth.chain_id)

    async def get_code(self, address: str) -> bytes:
        return await self._run("Code request", self.web3.eth.get_code, Web3.to_checksum_address(address))

    async def get_balance(self, address: str) -> int:
        """Нативный баланс в wei"""
        return await self._run("Balance request", self.web3.eth.get_balance, address)

    async def get_token_balance(self, token_address: str, address: str) -> int:
        """Баланс ERC20 токена в минимальных единицах"""
        contract = self._token_contract(token_address)
        return await self._run("Token balance request", contract.functions.balanceOf(address).call)

    async def get_allowance(self, token_address: str, owner: str, spender: str) -> int:
        contract = self._token_contract(token_address)
        call = contract.functions.allowance(owner, Web3.to_checksum_address(spender)).call
        return await self._run("Allowance request", call)

    async def _base_params(self, wallet, gas_limit: int) -> Dict[str, Any]:
        nonce = await self._run(
            "Nonce request", self.web3.eth.get_transaction_count, wallet.address, 'pending')
        gas_price = await self.gas_monitor.get_optimal_gas_price()
        return {
            'from': wallet.address,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'nonce': nonce,
            'chainId': self.config.chain_id,
        }

    async def _sign_and_send(self, wallet, transaction: Dict[str, Any], description: str) -> str:
        def send():
            signed_txn = wallet.account.sign_transaction(transaction)
            tx_hash = self.web3.eth.send_raw_transaction(signed_txn.raw_transaction)
            return Web3.to_hex(tx_hash)

        return await self._run(description, send)

    async def approve(self, wallet, token_address: str, spender: str, amount: int) -> str:
        """Отправка approve, возвращает хэш транзакции"""
        params = await self._base_params(wallet, self.gas_monitor.get_gas_limit("approve"))
        contract = self._token_contract(token_address)
        transaction = await self._run(
            "Approval build",
            contract.functions.approve(Web3.to_checksum_address(spender), amount).build_transaction,
            params
        )
        return await self._sign_and_send(wallet, transaction, "Approval submission")

    async def submit_faucet_claim(self, wallet) -> str:
        params = await self._base_params(wallet, self.gas_monitor.get_gas_limit("faucet"))
        contract = self.web3.eth.contract(
            address=Web3.to_checksum_address(self.config.faucet_address),
            abi=FAUCET_ABI
        )
        transaction = await self._run(
            "Faucet claim build", contract.functions.claimTokens().build_transaction, params)
        return await self._sign_and_send(wallet, transaction, "Faucet claim submission")

    async def submit_swap(self, wallet, data: str, to: str) -> str:
        """Отправка транзакции с готовыми call data"""
        transaction = await self._base_params(wallet, self.gas_monitor.get_gas_limit("swap"))
        transaction.pop('from')
        transaction.update({
            'to': Web3.to_checksum_address(to),
            'data': data,
            'value': 0,
        })
        return await self._sign_and_send(wallet, transaction, "Swap submission")

    async def wait_for_confirmation(self, tx_hash: str):
        """Ожидание receipt; ChainError при таймауте или revert"""
        try:
            receipt = await asyncio.to_thread(
                self.web3.eth.wait_for_transaction_receipt,
                tx_hash,
                timeout=self.config.confirmation_timeout
            )
        except TimeExhausted as e:
            raise ChainError(
                f"Transaction {tx_hash} not confirmed in {self.config.confirmation_timeout}s", tx_hash) from e
        except Exception as e:
            raise ChainError(f"Receipt request for {tx_hash} failed: {e}", tx_hash) from e

        if receipt.status != 1:
            raise ChainError(f"Transaction {tx_hash} reverted in block {receipt.blockNumber}", tx_hash)

        return receipt
