from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from utils.security import normalize_private_key


@dataclass(frozen=True)
class Credential:
    """Нормализованный приватный ключ и источник (env / generated)"""
    private_key: str
    source: str

    @classmethod
    def from_private_key(cls, private_key: str, source: str) -> "Credential":
        return cls(private_key=normalize_private_key(private_key), source=source)


@dataclass(frozen=True)
class WalletRecord:
    """Запись сгенерированного кошелька в wallets.json"""
    address: str
    private_key: str
    mnemonic: Optional[str]
    created_at: str

    @classmethod
    def create(cls, address: str, private_key: str, mnemonic: str) -> "WalletRecord":
        created_at = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return cls(address=address, private_key=private_key, mnemonic=mnemonic, created_at=created_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "privateKey": self.private_key,
            "mnemonic": self.mnemonic,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WalletRecord":
        """Чтение записи (поддерживает и camelCase, и snake_case ключи)"""
        private_key = data.get("privateKey") or data.get("private_key")
        if not private_key:
            raise ValueError("Wallet record has no private key")

        return cls(
            address=data.get("address", ""),
            private_key=private_key,
            mnemonic=data.get("mnemonic"),
            created_at=data.get("createdAt") or data.get("created_at") or "",
        )
