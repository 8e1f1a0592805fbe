"""Core type definitions for the storefront inventory.

Products travel over the wire (and into local persistence) using the remote
API's field names: ``nome``, ``qtd``, ``preco``, ``imagem``. The dataclasses
below use English names and convert at the edges.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class BackendMode(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


class StockAction(str, Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"
    SET = "set"


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    quantity: int = 0
    price: str = ""  # display string, e.g. "R$ 110,00"
    image: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Decode an API/persistence record.

        Accepts both the wire names and the English attribute names. Raises
        ``KeyError``/``ValueError``/``TypeError`` when ``id`` is missing or
        ``qtd`` is not an integer.
        """
        qty = data.get("qtd", data.get("quantity", 0))
        return cls(
            id=str(data["id"]),
            name=str(data.get("nome", data.get("name", ""))),
            quantity=max(0, int(qty or 0)),
            price=str(data.get("preco", data.get("price", ""))),
            image=str(data.get("imagem", data.get("image", "")) or ""),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "nome": self.name,
            "qtd": self.quantity,
            "preco": self.price,
            "imagem": self.image,
        }
        if self.created_at is not None:
            out["created_at"] = self.created_at
        if self.updated_at is not None:
            out["updated_at"] = self.updated_at
        return out

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0


# Immutable view of the product list handed to observers.
Snapshot = Tuple[Product, ...]


@dataclass(frozen=True)
class Credential:
    token: str
    username: Optional[str] = None


@dataclass(frozen=True)
class StockAdjustment:
    action: StockAction
    quantity: Optional[int] = None  # only meaningful for SET

    @classmethod
    def increment(cls) -> "StockAdjustment":
        return cls(StockAction.INCREMENT)

    @classmethod
    def decrement(cls) -> "StockAdjustment":
        return cls(StockAction.DECREMENT)

    @classmethod
    def set_to(cls, quantity: int) -> "StockAdjustment":
        return cls(StockAction.SET, int(quantity))

    def to_body(self) -> Dict[str, Any]:
        if self.action == StockAction.SET:
            return {"qtd": self.quantity}
        return {"action": self.action.value}

    def apply(self, current: int) -> int:
        """Quantity after applying this adjustment locally, never below zero."""
        if self.action == StockAction.INCREMENT:
            target = current + 1
        elif self.action == StockAction.DECREMENT:
            target = current - 1
        else:
            target = int(self.quantity or 0)
        return max(0, target)


WIRE_NAMES = {"name": "nome", "quantity": "qtd", "price": "preco", "image": "imagem"}


def to_wire_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Rename English attribute names in a partial update to the API's names."""
    return {WIRE_NAMES.get(k, k): v for k, v in changes.items()}
