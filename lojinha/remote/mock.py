"""In-memory remote store for dry runs and tests.

Behaves like the REST API: login hands out tokens, writes need one, create
rejects records without the required fields, and stock history is recorded.
Flip ``online`` off to make every call fail with ``TransportError``.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from .base import RemoteStore
from ..core.errors import AuthError, TransportError, ValidationError
from ..core.types import Credential, Product, StockAdjustment, to_wire_changes


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class MockRemoteStore(RemoteStore):
    def __init__(
        self,
        products: Iterable[Product] = (),
        users: Optional[Dict[str, str]] = None,
        name: str = "mock",
        online: bool = True,
    ):
        super().__init__(name)
        self._products: Dict[str, Product] = {p.id: p for p in products}
        self._users = dict(users if users is not None else {"admin": "admin"})
        self._tokens: Dict[str, str] = {}
        self._history: List[Dict[str, Any]] = []
        self.online = online
        self.calls: List[str] = []

    def _call(self, op: str) -> None:
        self.calls.append(op)
        if not self.online:
            raise TransportError(f"{self.name}: remote unreachable ({op})")

    def _require_auth(self) -> None:
        token = self.credential.token if self.credential else None
        if not token or token not in self._tokens:
            raise AuthError("missing or invalid token")

    def _get(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise TransportError(f"product {product_id!r} not found", status_code=404)
        return product

    def authenticate(self, username: str, password: str) -> Credential:
        self._call("authenticate")
        if self._users.get(username) != password:
            raise AuthError("invalid credentials")
        token = uuid.uuid4().hex
        self._tokens[token] = username
        self.credential = Credential(token=token, username=username)
        return self.credential

    def fetch_all(self) -> List[Product]:
        self._call("fetch_all")
        return list(self._products.values())

    def fetch_one(self, product_id: str) -> Product:
        self._call("fetch_one")
        return self._get(product_id)

    def create(self, product: Product) -> Product:
        self._call("create")
        self._require_auth()
        missing = [f for f in ("id", "name", "price") if not getattr(product, f)]
        if missing:
            raise ValidationError(f"missing required fields: {', '.join(missing)}")
        if product.id in self._products:
            raise ValidationError(f"product {product.id!r} already exists")
        ts = _now()
        created = replace(product, created_at=ts, updated_at=ts)
        self._products[created.id] = created
        return created

    def update(self, product_id: str, changes: Dict[str, Any]) -> Product:
        self._call("update")
        self._require_auth()
        merged = {**self._get(product_id).to_dict(), **to_wire_changes(changes), "id": product_id}
        updated = replace(Product.from_dict(merged), updated_at=_now())
        self._products[product_id] = updated
        return updated

    def delete(self, product_id: str) -> None:
        self._call("delete")
        self._require_auth()
        self._get(product_id)
        del self._products[product_id]

    def adjust_stock(self, product_id: str, adjustment: StockAdjustment) -> Product:
        self._call("adjust_stock")
        self._require_auth()
        current = self._get(product_id)
        updated = replace(
            current, quantity=adjustment.apply(current.quantity), updated_at=_now()
        )
        self._products[product_id] = updated
        self._history.append(
            {
                "productId": product_id,
                "action": adjustment.action.value,
                "before": current.quantity,
                "after": updated.quantity,
                "user": self._tokens.get(self.credential.token) if self.credential else None,
                "timestamp": updated.updated_at,
            }
        )
        return updated

    def stock_history(
        self, product_id: Optional[str] = None, limit: int = 50
    ) -> List[Dict[str, Any]]:
        self._call("stock_history")
        self._require_auth()
        entries = [h for h in self._history if product_id in (None, h["productId"])]
        return list(reversed(entries))[:limit]
