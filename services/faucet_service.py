from config.constants import SYMBOLS
from utils.logger import setup_logger


class FaucetService:
    def __init__(self, chain_client, config):
        self.client = chain_client
        self.config = config
        self.logger = setup_logger("FaucetService")

    async def claim_tokens(self, wallet) -> bool:
        """Получение тестовых токенов из крана"""
        label = wallet.label
        try:
            self.logger.info(f"{SYMBOLS['faucet']} {label} | Claiming tokens from faucet...")
            tx_hash = await self.client.submit_faucet_claim(wallet)
            self.logger.info(f"{SYMBOLS['pending']} {label} | Faucet claim transaction sent: {tx_hash}")

            receipt = await self.client.wait_for_confirmation(tx_hash)
            self.logger.info(
                f"{SYMBOLS['success']} {label} | Faucet claim confirmed in block {receipt.blockNumber}")
            return True

        except Exception as e:
            self.logger.error(f"{SYMBOLS['error']} {label} | Error claiming faucet: {e}")
            return False
