"""Remote product store abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..core.types import Credential, Product, StockAdjustment


class RemoteStore(ABC):
    name: str

    def __init__(self, name: str, credential: Optional[Credential] = None):
        self.name = name
        self.credential = credential

    def is_authenticated(self) -> bool:
        return bool(self.credential and self.credential.token)

    def logout(self) -> None:
        self.credential = None

    @abstractmethod
    def authenticate(self, username: str, password: str) -> Credential: ...

    @abstractmethod
    def fetch_all(self) -> List[Product]: ...

    @abstractmethod
    def fetch_one(self, product_id: str) -> Product: ...

    @abstractmethod
    def create(self, product: Product) -> Product: ...

    @abstractmethod
    def update(self, product_id: str, changes: Dict[str, Any]) -> Product: ...

    @abstractmethod
    def delete(self, product_id: str) -> None: ...

    @abstractmethod
    def adjust_stock(self, product_id: str, adjustment: StockAdjustment) -> Product: ...

    @abstractmethod
    def stock_history(
        self, product_id: Optional[str] = None, limit: int = 50
    ) -> List[Dict[str, Any]]: ...

    def increment_stock(self, product_id: str) -> Product:
        return self.adjust_stock(product_id, StockAdjustment.increment())

    def decrement_stock(self, product_id: str) -> Product:
        return self.adjust_stock(product_id, StockAdjustment.decrement())

    def set_stock(self, product_id: str, quantity: int) -> Product:
        return self.adjust_stock(product_id, StockAdjustment.set_to(quantity))
