import random
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from config.constants import SWAP_TOKENS


@dataclass(frozen=True)
class SwapDirective:
    """Параметры одного свапа: сумма PRIOR и целевой токен"""
    amount: Decimal
    token: str

    @property
    def amount_str(self) -> str:
        return f"{self.amount:f}"


class Randomizer:
    """Утилиты для генерации случайных значений"""

    @staticmethod
    def get_random_amount(min_amount: float = 0.001, max_amount: float = 0.002, precision: int = 6) -> Decimal:
        """Случайная сумма в диапазоне [min, max] с фиксированным числом знаков"""
        raw_amount = random.uniform(min_amount, max_amount)
        quantum = Decimal(1).scaleb(-precision)
        amount = Decimal(str(raw_amount)).quantize(quantum, rounding=ROUND_HALF_UP)

        # Округление не должно выводить сумму за границы диапазона
        lower = Decimal(str(min_amount)).quantize(quantum, rounding=ROUND_HALF_UP)
        upper = Decimal(str(max_amount)).quantize(quantum, rounding=ROUND_HALF_UP)
        return min(max(amount, lower), upper)

    @staticmethod
    def get_random_token(tokens: Sequence[str] = SWAP_TOKENS) -> str:
        """Случайный целевой токен (равновероятно)"""
        return random.choice(tuple(tokens))

    @staticmethod
    def get_swap_directive(config=None) -> SwapDirective:
        """Новые параметры свапа для каждой попытки"""
        if config is None:
            amount = Randomizer.get_random_amount()
        else:
            amount = Randomizer.get_random_amount(
                config.swap_amount_min,
                config.swap_amount_max,
                config.swap_amount_precision
            )
        return SwapDirective(amount=amount, token=Randomizer.get_random_token())
