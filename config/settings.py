import os
import json
from dataclasses import dataclass, fields
from typing import Dict, Any, List, Mapping, Optional
from dotenv import load_dotenv
from web3 import Web3
from utils.logger import setup_logger
from config.constants import (
    DEFAULT_RPC_URL,
    DEFAULT_CHAIN_ID,
    PRIOR_ADDRESS,
    USDT_ADDRESS,
    USDC_ADDRESS,
    FAUCET_ADDRESS,
    ROUTER_ADDRESS,
    SYMBOLS,
)

load_dotenv()

# Переменные окружения, которые могут переопределить настройки
ENV_OVERRIDES = {
    "RPC_URL": ("rpc_url", str),
    "CHAIN_ID": ("chain_id", int),
    "WALLETS_FILE": ("wallets_file", str),
    "LOG_LEVEL": ("log_level", str),
    "LOG_FILE": ("log_file", str),
    "DELAY_SECONDS": ("delay_seconds", float),
}


def _coerce(field_type, value):
    """Приведение значения из JSON к типу поля Config"""
    if field_type == Optional[str]:
        return None if value is None else str(value)
    if value is None or isinstance(value, (bool, list, dict)):
        raise TypeError(f"expected {field_type.__name__}, got {type(value).__name__}")
    return field_type(value)


@dataclass(frozen=True)
class Config:
    """Настройки бота. Создаются один раз при запуске и дальше не меняются."""

    # Сеть
    rpc_url: str = DEFAULT_RPC_URL
    chain_id: int = DEFAULT_CHAIN_ID

    # Контракты
    prior_address: str = PRIOR_ADDRESS
    usdt_address: str = USDT_ADDRESS
    usdc_address: str = USDC_ADDRESS
    faucet_address: str = FAUCET_ADDRESS
    router_address: str = ROUTER_ADDRESS

    # Операции
    delay_seconds: float = 10
    swap_amount_min: float = 0.001
    swap_amount_max: float = 0.002
    swap_amount_precision: int = 6

    # Газ
    faucet_gas_limit: int = 200000
    approve_gas_limit: int = 60000
    swap_gas_limit: int = 500000
    confirmation_timeout: int = 180

    # Хранилище и логи
    wallets_file: str = "wallets.json"
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/prior_bot.log"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Создание конфига из словаря: лишние ключи игнорируются, значения приводятся к типам полей"""
        logger = setup_logger("Config")
        valid_fields = {}
        for field in fields(cls):
            if field.name not in data:
                continue
            value = data[field.name]
            try:
                valid_fields[field.name] = _coerce(field.type, value)
            except (TypeError, ValueError):
                logger.warning(f"{SYMBOLS['warning']} Ignoring invalid {field.name}={value!r}")
        return cls(**valid_fields)

    @classmethod
    def load(cls, config_path: str = "config/config.json", environ: Mapping[str, str] = None) -> "Config":
        """Загрузка конфигурации: значения по умолчанию -> JSON файл -> переменные окружения"""
        logger = setup_logger("Config")
        environ = os.environ if environ is None else environ

        data = {}
        if config_path and os.path.exists(config_path):
            try:
                with open(config_path, 'r') as f:
                    file_data = json.load(f)
                if isinstance(file_data, dict):
                    data.update(file_data)
                else:
                    logger.warning(f"{SYMBOLS['warning']} Config file {config_path} is not a JSON object, ignoring it")
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"{SYMBOLS['error']} Failed to read config file {config_path}: {e}")

        for env_name, (field_name, cast) in ENV_OVERRIDES.items():
            raw_value = environ.get(env_name)
            if raw_value is None or raw_value.strip() == "":
                continue
            try:
                data[field_name] = cast(raw_value.strip())
            except ValueError:
                logger.warning(f"{SYMBOLS['warning']} Ignoring invalid {env_name}={raw_value!r}")

        config = cls.from_dict(data)
        logger.debug(f"{SYMBOLS['network']} Network: {config.rpc_url} (ChainID: {config.chain_id})")
        return config

    def validate(self) -> List[str]:
        """Валидация конфигурации, возвращает список проблем"""
        issues = []

        if not self.rpc_url:
            issues.append("RPC URL is empty")
        if self.chain_id <= 0:
            issues.append(f"Invalid chain_id: {self.chain_id}")

        for field in fields(self):
            if field.name.endswith("_address"):
                value = getattr(self, field.name)
                if not Web3.is_address(value):
                    issues.append(f"Invalid {field.name}: {value}")

        if self.delay_seconds < 0:
            issues.append("delay_seconds must not be negative")
        if not 0 < self.swap_amount_min <= self.swap_amount_max:
            issues.append(
                f"Invalid swap amount range: {self.swap_amount_min} - {self.swap_amount_max}")
        if self.swap_amount_precision < 0:
            issues.append("swap_amount_precision must not be negative")

        for name in ("faucet_gas_limit", "approve_gas_limit", "swap_gas_limit", "confirmation_timeout"):
            if getattr(self, name) <= 0:
                issues.append(f"{name} must be positive")

        return issues

    @property
    def token_addresses(self) -> Dict[str, str]:
        """Адреса токенов по символу"""
        return {
            "PRIOR": self.prior_address,
            "USDT": self.usdt_address,
            "USDC": self.usdc_address,
        }
