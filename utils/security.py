import re

PRIVATE_KEY_PATTERN = re.compile(r'^(?:0x)?([0-9a-fA-F]{64})$')
EMBEDDED_KEY_PATTERN = re.compile(r'(?:0x)?[0-9a-fA-F]{64}')
SEED_WORDS = ('seed', 'mnemonic')


def normalize_private_key(private_key: str) -> str:
    """
    Ключ из .env или wallets.json -> '0x' + 64 hex символа.
    ValueError, если строка не похожа на приватный ключ (сам ключ в ошибку не попадает).
    """
    match = PRIVATE_KEY_PATTERN.match((private_key or "").strip())
    if not match:
        raise ValueError("Private key must be 64 hexadecimal characters with optional 0x prefix")
    return '0x' + match.group(1).lower()


def secure_log(message: str) -> str:
    """Текст ошибки для лога без ключей и seed фраз"""
    if any(word in message.lower() for word in SEED_WORDS):
        return "***SEED_PHRASE_REDACTED***"
    return EMBEDDED_KEY_PATTERN.sub("***PRIVATE_KEY_REDACTED***", message)
