import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config.settings import Config  # noqa: E402
from config.constants import SOURCE_ENV  # noqa: E402
from core.chain_client import ChainError  # noqa: E402
from core.wallet_manager import Wallet  # noqa: E402
from database.models import Credential  # noqa: E402
from utils.logger import configure_logging  # noqa: E402

# Тесты не пишут файл логов
configure_logging("DEBUG", None)

TEST_KEYS = [
    "0x" + "11" * 32,
    "0x" + "22" * 32,
    "0x" + "33" * 32,
]


def make_wallet(index: int = 1, source: str = SOURCE_ENV, key: str = None) -> Wallet:
    private_key = key or TEST_KEYS[(index - 1) % len(TEST_KEYS)]
    return Wallet(
        name=f"Env Wallet {index}",
        credential=Credential.from_private_key(private_key, source),
    )


class FakeChainClient:
    """Записывает все вызовы интерфейса сети в порядке их выполнения"""

    def __init__(self, allowance: int = 0, fail_swaps_on=(), fail_approve: bool = False,
                 fail_faucet: bool = False, balance_error: bool = False):
        self.calls = []
        self.allowance = allowance
        self.fail_swaps_on = set(fail_swaps_on)
        self.fail_approve = fail_approve
        self.fail_faucet = fail_faucet
        self.balance_error = balance_error
        self.swap_count = 0
        self._tx_counter = 0

    def _next_hash(self, kind: str) -> str:
        self._tx_counter += 1
        return f"0x{kind}{self._tx_counter:04d}"

    def calls_of(self, name: str):
        return [call for call in self.calls if call[0] == name]

    async def get_balance(self, address):
        self.calls.append(("get_balance", address))
        if self.balance_error:
            raise ChainError("rpc down")
        return 10 ** 18

    async def get_token_balance(self, token_address, address):
        self.calls.append(("get_token_balance", token_address, address))
        if self.balance_error:
            raise ChainError("rpc down")
        return 5 * 10 ** 6

    async def get_allowance(self, token_address, owner, spender):
        self.calls.append(("get_allowance", token_address, owner, spender))
        return self.allowance

    async def approve(self, wallet, token_address, spender, amount):
        self.calls.append(("approve", wallet.address, token_address, spender, amount))
        if self.fail_approve:
            raise ChainError("approve rejected")
        return self._next_hash("a")

    async def submit_faucet_claim(self, wallet):
        self.calls.append(("submit_faucet_claim", wallet.address))
        if self.fail_faucet:
            raise ChainError("already claimed")
        return self._next_hash("f")

    async def submit_swap(self, wallet, data, to):
        self.swap_count += 1
        self.calls.append(("submit_swap", wallet.address, data, to))
        if self.swap_count in self.fail_swaps_on:
            raise ChainError("swap reverted")
        return self._next_hash("s")

    async def wait_for_confirmation(self, tx_hash):
        self.calls.append(("wait_for_confirmation", tx_hash))
        return SimpleNamespace(status=1, blockNumber=100 + self._tx_counter)


class SleepRecorder:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def config(tmp_path):
    return Config(wallets_file=str(tmp_path / "wallets.json"), log_file=None)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def wallet_factory():
    return make_wallet


@pytest.fixture
def client_factory():
    return FakeChainClient
