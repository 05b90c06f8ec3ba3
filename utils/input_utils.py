from typing import Optional

MENU_CHOICES = {
    "1": "generate",
    "2": "env",
    "3": "generated",
    "4": "all",
}

CONFIRM_ANSWERS = ("y", "yes")


def secure_input(prompt: str) -> str:
    """
    Ввод строки оператора без лишних пробелов
    """
    return input(prompt).strip()


def parse_menu_choice(raw: str) -> Optional[str]:
    """Пункт меню (1-4) -> действие, None если выбор неверный"""
    if raw is None:
        return None
    return MENU_CHOICES.get(raw.strip())


def parse_swap_count(raw: str) -> Optional[int]:
    """Количество свапов: только положительное целое число"""
    if raw is None:
        return None

    value = raw.strip()
    if not (value.isascii() and value.isdigit()):
        return None

    count = int(value)
    return count if count > 0 else None


def is_confirmed(raw: str) -> bool:
    """Подтверждение y/yes (без учета регистра)"""
    if raw is None:
        return False
    return raw.strip().lower() in CONFIRM_ANSWERS
