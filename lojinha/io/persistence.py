"""Local key-value persistence for the offline product list and auth token."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..core.types import Product

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "lojinha_products"
TOKEN_KEY = "auth_token"


class KeyValueStorage(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> None: ...


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(KeyValueStorage):
    """One file per key under ``directory``.

    Writes land in a temp file in the same directory and are moved into place
    with ``os.replace``, so a reader sees either the old or the new value.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / key

    def get(self, key: str) -> Optional[str]:
        p = self._path(key)
        if not p.exists():
            return None
        return p.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, self._path(key))
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def remove(self, key: str) -> None:
        p = self._path(key)
        if p.exists():
            p.unlink()


class ProductPersistence:
    def __init__(self, storage: KeyValueStorage, key: str = PRODUCTS_KEY):
        self.storage = storage
        self.key = key

    def read(self) -> Optional[List[Product]]:
        """Return the persisted list, or None if absent or malformed."""
        try:
            raw = self.storage.get(self.key)
            if raw is None:
                return None
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [Product.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring malformed product list under %r: %s", self.key, e)
            return None

    def write(self, products: Iterable[Product]) -> None:
        payload = json.dumps([p.to_dict() for p in products], ensure_ascii=False, indent=2)
        self.storage.set(self.key, payload)

    def clear(self) -> None:
        self.storage.remove(self.key)


class TokenStore:
    def __init__(self, storage: KeyValueStorage, key: str = TOKEN_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Optional[str]:
        token = self.storage.get(self.key)
        return token.strip() if token and token.strip() else None

    def save(self, token: str) -> None:
        self.storage.set(self.key, token)

    def clear(self) -> None:
        self.storage.remove(self.key)
