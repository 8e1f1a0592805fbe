"""REST adapter for the storefront API.

Endpoints (all relative to ``base_url``):
* ``POST /auth/login`` -> ``{token, user}``
* ``GET/POST /products``, ``GET/PATCH/DELETE /products/{id}``
* ``PATCH /products/{id}/stock`` with ``{action}`` or ``{qtd}``
* ``GET /stock-history?limit=&productId=``

Protected writes need ``Authorization: Bearer <token>``. The header is sent on
every call once a credential is held; reads work without it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .base import RemoteStore
from ..core.errors import AuthError, TransportError, ValidationError
from ..core.types import Credential, Product, StockAdjustment, to_wire_changes
from ..io.persistence import TokenStore

logger = logging.getLogger(__name__)


class ApiRemoteStore(RemoteStore):
    def __init__(
        self,
        base_url: str,
        name: str = "api",
        timeout: float = 5.0,
        token_store: Optional[TokenStore] = None,
        credential: Optional[Credential] = None,
    ):
        super().__init__(name, credential)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token_store = token_store
        # A token saved by a previous process is picked up here
        if self.credential is None and token_store is not None:
            token = token_store.load()
            if token:
                self.credential = Credential(token=token)

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if self.credential and self.credential.token:
            headers["Authorization"] = f"Bearer {self.credential.token}"
        return headers

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text or resp.reason or str(resp.status_code)
        if isinstance(data, dict):
            for key in ("error", "message", "detail"):
                if data.get(key):
                    return str(data[key])
        return str(data)

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = self.base_url + path
        try:
            resp = requests.request(
                method,
                url,
                headers=self._headers(),
                params=params,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        status = resp.status_code
        if status in (401, 403):
            raise AuthError(self._error_message(resp))
        if status in (400, 422):
            raise ValidationError(self._error_message(resp))
        if not (200 <= status < 300):
            raise TransportError(
                f"{method} {path} returned {status}: {self._error_message(resp)}",
                status_code=status,
            )
        if status == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(f"{method} {path} returned a non-JSON body") from e

    def _product(self, data: Any, path: str) -> Product:
        if not isinstance(data, dict):
            raise TransportError(f"{path} returned {type(data).__name__}, expected an object")
        try:
            return Product.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            raise TransportError(f"{path} returned an unreadable product: {e}") from e

    def authenticate(self, username: str, password: str) -> Credential:
        try:
            data = self._request(
                "POST", "/auth/login", body={"username": username, "password": password}
            )
        except ValidationError as e:
            raise AuthError(str(e)) from e
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise AuthError("login response carried no token")
        user = data.get("user") or {}
        self.credential = Credential(token=token, username=user.get("username", username))
        if self.token_store is not None:
            self.token_store.save(token)
        logger.info("Authenticated as %s", self.credential.username)
        return self.credential

    def logout(self) -> None:
        super().logout()
        if self.token_store is not None:
            self.token_store.clear()

    def fetch_all(self) -> List[Product]:
        data = self._request("GET", "/products")
        # Endpoint may return a list or an object with a 'products' key
        items = (
            data
            if isinstance(data, list)
            else (data.get("products") if isinstance(data, dict) else None)
        )
        if not isinstance(items, list):
            raise TransportError("/products returned no product list")
        return [self._product(item, "/products") for item in items]

    def fetch_one(self, product_id: str) -> Product:
        path = f"/products/{product_id}"
        return self._product(self._request("GET", path), path)

    def create(self, product: Product) -> Product:
        data = self._request("POST", "/products", body=product.to_dict())
        return self._product(data, "/products")

    def update(self, product_id: str, changes: Dict[str, Any]) -> Product:
        path = f"/products/{product_id}"
        data = self._request("PATCH", path, body=to_wire_changes(changes))
        return self._product(data, path)

    def delete(self, product_id: str) -> None:
        self._request("DELETE", f"/products/{product_id}")

    def adjust_stock(self, product_id: str, adjustment: StockAdjustment) -> Product:
        path = f"/products/{product_id}/stock"
        data = self._request("PATCH", path, body=adjustment.to_body())
        return self._product(data, path)

    def stock_history(
        self, product_id: Optional[str] = None, limit: int = 50
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"limit": limit}
        if product_id:
            params["productId"] = product_id
        data = self._request("GET", "/stock-history", params=params)
        if data is None:
            return []
        if not isinstance(data, list):
            raise TransportError("/stock-history returned no list")
        return data
