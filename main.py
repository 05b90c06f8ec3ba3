import asyncio
import sys
import os
from datetime import datetime, timezone

sys.path.append(os.path.dirname(__file__))

from config.settings import Config
from config.constants import SYMBOLS, short_address
from core.wallet_manager import WalletManager
from core.chain_client import ChainClient
from core.transaction_engine import TransactionEngine
from utils.logger import setup_logger, configure_logging
from utils.input_utils import secure_input, parse_menu_choice, parse_swap_count, is_confirmed

CYAN = '\x1b[36m'
RESET = '\x1b[0m'

BANNER = f"""
{CYAN}=========================================={RESET}
{CYAN}        PRIOR TESTNET AUTO BOT            {RESET}
{CYAN}=========================================={RESET}
"""

MENU = (
    f"{SYMBOLS['info']} Select operation:\n"
    "1. Generate new wallet\n"
    "2. Run swaps with env wallets\n"
    "3. Run swaps with generated wallets\n"
    "4. Run swaps with all wallets\n"
    "Enter choice (1-4): "
)

# Сообщения при отсутствии кошельков выбранного типа
EMPTY_SOURCE_MESSAGES = {
    "env": "No env wallets found. Please check your .env file",
    "generated": "No generated wallets found. Please generate some first",
    "all": "No wallets found in either env or generated sources",
}


class PriorTestnetBot:
    def __init__(self, config, prompt=secure_input, environ=None, chain_client=None, sleep=asyncio.sleep):
        self.config = config
        self.prompt = prompt
        self.logger = setup_logger("PriorTestnetBot")
        self.wallet_manager = WalletManager(config, environ=environ)
        self.chain_client = chain_client
        self._sleep = sleep

    def _create_engine(self) -> TransactionEngine:
        """Клиент сети создается только когда дело доходит до транзакций"""
        if self.chain_client is None:
            self.chain_client = ChainClient(self.config)
        return TransactionEngine(self.config, self.chain_client, sleep=self._sleep)

    def select_wallets(self, choice: str):
        if choice == "env":
            return self.wallet_manager.env_wallets
        if choice == "generated":
            return self.wallet_manager.generated_wallets
        return self.wallet_manager.get_all_wallets()

    async def run(self):
        """Меню запуска: один выбор оператора за сессию"""
        print(BANNER)
        self.logger.info(f"{SYMBOLS['info']} Bot started on {datetime.now(timezone.utc).isoformat()}")

        for issue in self.config.validate():
            self.logger.warning(f"{SYMBOLS['warning']} Config issue: {issue}")

        env_wallets, generated_wallets = self.wallet_manager.load_wallets()

        print(f"\n{SYMBOLS['info']} Available wallets:")
        print(f"  Env wallets: {len(env_wallets)}")
        print(f"  Generated wallets: {len(generated_wallets)}")

        choice = parse_menu_choice(self.prompt(MENU))

        if choice is None:
            print(f"{SYMBOLS['error']} Invalid choice. Please select 1-4")
            return None

        if choice == "generate":
            return self.wallet_manager.generate_wallet()

        wallets = self.select_wallets(choice)
        if not wallets:
            print(f"{SYMBOLS['error']} {EMPTY_SOURCE_MESSAGES[choice]}")
            return None

        return await self.process_swaps(wallets)

    async def process_swaps(self, wallets):
        """Запрос количества свапов и подтверждения перед запуском"""
        print(f"{SYMBOLS['wallet']} Loaded {len(wallets)} wallet(s):")
        for i, wallet in enumerate(wallets, 1):
            print(f"  {i}. {wallet.label} ({wallet.source}) ({short_address(wallet.address)})")

        swap_count = parse_swap_count(self.prompt(f"\n{SYMBOLS['info']} How many swaps to perform per wallet? "))
        if swap_count is None:
            print(f"{SYMBOLS['error']} Please provide a valid number of swaps")
            return None

        print(f"{SYMBOLS['info']} Will claim faucet and perform {swap_count} swaps "
              f"for each of {len(wallets)} wallet(s)")

        if not is_confirmed(self.prompt(f"{SYMBOLS['info']} Proceed? (y/n) ")):
            print(f"{SYMBOLS['info']} Operation canceled")
            return None

        engine = self._create_engine()
        return await engine.run_selected_wallets(wallets, swap_count)


def main() -> int:
    logger = setup_logger("PriorTestnetBot")
    try:
        config = Config.load()
        configure_logging(config.log_level, config.log_file)

        app = PriorTestnetBot(config)
        asyncio.run(app.run())
        return 0

    except KeyboardInterrupt:
        print(f"\n\n{SYMBOLS['stop']} Program interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"{SYMBOLS['error']} Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
