import os
import json
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Mapping, Optional

from eth_account import Account
from web3 import Web3

from config.constants import SYMBOLS, SOURCE_ENV, SOURCE_GENERATED, short_address
from database.models import Credential, WalletRecord
from utils.logger import setup_logger
from utils.security import secure_log

Account.enable_unaudited_hdwallet_features()


class WalletStoreError(Exception):
    """Не удалось записать хранилище сгенерированных кошельков"""


class Wallet:
    def __init__(self, name: str, credential: Credential):
        self.name = name
        self.credential = credential
        self.account = Account.from_key(credential.private_key)

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def source(self) -> str:
        return self.credential.source

    @property
    def label(self) -> str:
        return self.name

    def __repr__(self):
        return f"Wallet(name={self.name!r}, source={self.source!r}, address={short_address(self.address)!r})"


class WalletManager:
    def __init__(self, config, environ: Mapping[str, str] = None):
        self.config = config
        self.environ = os.environ if environ is None else environ
        self.wallets_file = Path(config.wallets_file)
        self.logger = setup_logger("WalletManager")

        self.env_wallets: List[Wallet] = []
        self.generated_wallets: List[Wallet] = []

    def load_wallets(self):
        """Загрузка кошельков из обоих источников"""
        self.env_wallets = self.load_env_wallets()
        self.generated_wallets = self.load_generated_wallets()
        return self.env_wallets, self.generated_wallets

    def get_all_wallets(self) -> List[Wallet]:
        """Сначала кошельки из .env, затем сгенерированные"""
        return [*self.env_wallets, *self.generated_wallets]

    def load_env_wallets(self) -> List[Wallet]:
        """Кошельки из PRIVATE_KEY_1..n, иначе из PRIVATE_KEY"""
        wallets = []
        index = 1

        while self.environ.get(f"PRIVATE_KEY_{index}"):
            wallet = self._build_wallet(
                self.environ[f"PRIVATE_KEY_{index}"], f"Env Wallet {index}", SOURCE_ENV)
            if wallet:
                wallets.append(wallet)
            index += 1

        if index == 1 and self.environ.get("PRIVATE_KEY"):
            wallet = self._build_wallet(self.environ["PRIVATE_KEY"], "Default Env Wallet", SOURCE_ENV)
            if wallet:
                wallets.append(wallet)

        return wallets

    def load_generated_wallets(self) -> List[Wallet]:
        """Кошельки из wallets.json (ошибки чтения -> пустой список)"""
        try:
            records = self._read_records()
        except (OSError, ValueError) as e:
            self.logger.debug(f"No generated wallets loaded from {self.wallets_file}: {e}")
            return []

        wallets = []
        for position, data in enumerate(records, 1):
            if not isinstance(data, dict):
                self.logger.warning(f"{SYMBOLS['warning']} Skipping malformed wallet record #{position}")
                continue
            try:
                record = WalletRecord.from_dict(data)
            except ValueError as e:
                self.logger.warning(f"{SYMBOLS['warning']} Skipping wallet record #{position}: {e}")
                continue

            wallet = self._build_wallet(record.private_key, f"Generated Wallet {position}", SOURCE_GENERATED)
            if wallet:
                wallets.append(wallet)

        return wallets

    def generate_wallet(self) -> Optional[Wallet]:
        """Создание нового кошелька и добавление его в wallets.json"""
        try:
            account, mnemonic = Account.create_with_mnemonic()
            record = WalletRecord.create(
                address=account.address,
                private_key=Web3.to_hex(account.key),
                mnemonic=mnemonic,
            )

            records = self._load_records_for_append()
            records.append(record.to_dict())
            self._write_records(records)

        except Exception as e:
            self.logger.error(f"{SYMBOLS['error']} Error generating wallet: {secure_log(str(e))}")
            return None

        # Секреты выводятся только в консоль, в лог не пишутся
        print(f"{SYMBOLS['success']} New wallet generated and saved to {self.wallets_file}:")
        print(f"  Address: {record.address}")
        print(f"  Private Key: {record.private_key}")
        print(f"  Mnemonic: {record.mnemonic}")
        print(f"{SYMBOLS['warning']} Please store these credentials securely!")

        self.logger.info(f"{SYMBOLS['success']} Generated wallet {short_address(record.address)}")

        wallet = Wallet(
            name=f"Generated Wallet {len(records)}",
            credential=Credential.from_private_key(record.private_key, SOURCE_GENERATED),
        )
        self.generated_wallets.append(wallet)
        return wallet

    def _build_wallet(self, private_key: str, name: str, source: str) -> Optional[Wallet]:
        try:
            return Wallet(name=name, credential=Credential.from_private_key(private_key, source))
        except Exception as e:
            self.logger.error(f"{SYMBOLS['error']} Failed to load wallet {name}: {secure_log(str(e))}")
            return None

    def _read_records(self) -> list:
        """Чтение wallets.json, не-список считается пустым хранилищем"""
        if not self.wallets_file.exists():
            return []

        with open(self.wallets_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"{self.wallets_file} does not contain a list")
        return data

    def _load_records_for_append(self) -> list:
        """Существующие записи перед добавлением новой"""
        try:
            return self._read_records()
        except ValueError as e:
            # Поврежденный файл копируется рядом, сам файл заменит только атомарная запись
            backup_path = self._backup_store()
            self.logger.warning(f"{SYMBOLS['warning']} {e}. Backup created: {backup_path}")
            return []
        except OSError as e:
            raise WalletStoreError(f"Cannot read {self.wallets_file}: {e}") from e

    def _backup_store(self) -> Path:
        """Копия wallets.json под новым именем, существующие копии не перезаписываются"""
        timestamp = datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%S%fZ')
        backup_path = self.wallets_file.with_name(f"{self.wallets_file.name}.{timestamp}.backup")
        suffix = 1
        while backup_path.exists():
            backup_path = self.wallets_file.with_name(f"{self.wallets_file.name}.{timestamp}-{suffix}.backup")
            suffix += 1

        try:
            shutil.copy2(self.wallets_file, backup_path)
        except OSError as e:
            raise WalletStoreError(f"Cannot back up unreadable {self.wallets_file}: {e}") from e
        return backup_path

    def _write_records(self, records: list):
        """Атомарная запись: временный файл + os.replace"""
        directory = self.wallets_file.parent
        tmp_path = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.wallets-', suffix='.tmp', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.wallets_file)
            tmp_path = None
        except OSError as e:
            raise WalletStoreError(f"Cannot write {self.wallets_file}: {e}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
