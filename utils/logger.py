import logging
import sys
from pathlib import Path
from typing import Optional

# Глобальный словарь для отслеживания инициализированных логгеров
_initialized_loggers = set()

# Общие настройки логирования, задаются один раз при старте
_log_settings = {
    "level": logging.INFO,
    "log_file": "logs/prior_bot.log",
}

FORMATTER = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def _attach_handlers(logger: logging.Logger):
    """Консольный и файловый обработчики"""
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(FORMATTER)
    logger.addHandler(console_handler)

    log_file = _log_settings["log_file"]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(FORMATTER)
        logger.addHandler(file_handler)


def setup_logger(name: str = None) -> logging.Logger:
    """Настройка системы логирования без дублирования"""
    if name is None:
        name = __name__

    logger = logging.getLogger(name)

    # Если логгер уже инициализирован - возвращаем его
    if name in _initialized_loggers:
        return logger

    logger.setLevel(_log_settings["level"])
    logger.propagate = False

    # ✅ ПРОВЕРЯЕМ, ЧТОБЫ НЕ ДОБАВЛЯТЬ ОБРАБОТЧИКИ ПОВТОРНО
    if not logger.handlers:
        _attach_handlers(logger)

    _initialized_loggers.add(name)

    return logger


def configure_logging(level: str = "INFO", log_file: Optional[str] = "logs/prior_bot.log"):
    """Применение уровня и файла логов из конфига ко всем логгерам"""
    resolved_level = logging.getLevelName(str(level).upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO

    _log_settings["level"] = resolved_level
    _log_settings["log_file"] = log_file

    for name in _initialized_loggers:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(resolved_level)
        _attach_handlers(logger)
