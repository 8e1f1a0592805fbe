"""Inventory cache: the in-process product list and its sync with the remote store.

The cache owns a single snapshot (an immutable tuple of products) and a
:class:`ProductChannel` that replays it to late subscribers. Every mutation
builds a new tuple and publishes it; nothing else ever writes the snapshot.

Backend mode decides where the list comes from:

* ``REMOTE``: the remote store is the source of truth. Stock changes go to
  the server and the entry is replaced with whatever the server returns. If
  the server cannot be reached, the same change is applied to the local
  snapshot and persisted, then the ``TransportError`` is re-raised so the
  caller can show it. The two paths can disagree (the server may answer
  with a value other than ``old +/- 1``); that divergence is kept as is.
* ``LOCAL``: the list lives in local persistence and every change is
  written back immediately.

Product creation, edits and deletion always go through the remote store.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, AsyncIterator, Callable, Dict, Iterable, Optional

from .channel import Listener, ProductChannel
from .defaults import DEFAULT_PRODUCTS
from ..core.errors import StoreError, TransportError
from ..core.types import BackendMode, Product, Snapshot, StockAdjustment
from ..io.metrics import inc_fallback, inc_mutation
from ..io.persistence import ProductPersistence
from ..remote.base import RemoteStore

logger = logging.getLogger(__name__)


class InventoryCache:
    def __init__(
        self,
        remote: RemoteStore,
        persistence: ProductPersistence,
        mode: BackendMode | str = BackendMode.REMOTE,
        defaults: Optional[Iterable[Product]] = None,
    ):
        self.remote = remote
        self.persistence = persistence
        self._mode = BackendMode(mode)
        self.defaults: Snapshot = tuple(DEFAULT_PRODUCTS if defaults is None else defaults)
        self._channel = ProductChannel()

    # --- read side --------------------------------------------------------

    @property
    def mode(self) -> BackendMode:
        return self._mode

    @property
    def products(self) -> Snapshot:
        return self._channel.value

    def get(self, product_id: str) -> Optional[Product]:
        for p in self.products:
            if p.id == product_id:
                return p
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._channel.subscribe(listener)

    def stream(self) -> AsyncIterator[Snapshot]:
        return self._channel.stream()

    # --- loading ----------------------------------------------------------

    def _read_local(self) -> Snapshot:
        stored = self.persistence.read()
        if stored is None:
            return self.defaults
        return tuple(stored)

    def load(self) -> Snapshot:
        """Replace the snapshot from the active backend and publish it.

        A failed remote load never raises: the last persisted list (or the
        defaults) is published instead.
        """
        if self._mode == BackendMode.REMOTE:
            try:
                snapshot = tuple(self.remote.fetch_all())
            except StoreError as e:
                logger.warning(
                    "Loading products from %s failed, using local copy: %s",
                    self.remote.name,
                    e,
                )
                inc_fallback("load")
                snapshot = self._read_local()
        else:
            snapshot = self._read_local()
        self._channel.publish(snapshot)
        return snapshot

    def reset(self) -> Snapshot:
        if self._mode == BackendMode.REMOTE:
            return self.load()
        self.persistence.write(self.defaults)
        self._channel.publish(self.defaults)
        inc_mutation("reset", self._mode.value)
        return self.defaults

    def set_backend_mode(self, mode: BackendMode | str) -> Snapshot:
        self._mode = BackendMode(mode)
        logger.info("Inventory backend switched to %s", self._mode.value)
        return self.load()

    # --- helpers ----------------------------------------------------------

    def _patched(
        self, product_id: str, change: Callable[[Product], Product]
    ) -> Optional[Snapshot]:
        """New snapshot with the entry for ``product_id`` changed, or None if absent."""
        current = self.products
        for i, p in enumerate(current):
            if p.id == product_id:
                return current[:i] + (change(p),) + current[i + 1 :]
        return None

    def _commit(self, operation: str, snapshot: Snapshot, persist: bool) -> None:
        if persist:
            self.persistence.write(snapshot)
        self._channel.publish(snapshot)
        inc_mutation(operation, self._mode.value)

    def _apply_locally(
        self, operation: str, product_id: str, adjustment: StockAdjustment
    ) -> Optional[Product]:
        snapshot = self._patched(
            product_id, lambda p: replace(p, quantity=adjustment.apply(p.quantity))
        )
        if snapshot is None:
            return None
        self._commit(operation, snapshot, persist=True)
        return self.get(product_id)

    def _adjust(
        self, operation: str, product_id: str, adjustment: StockAdjustment
    ) -> Optional[Product]:
        if self._mode == BackendMode.LOCAL:
            return self._apply_locally(operation, product_id, adjustment)
        try:
            updated = self.remote.adjust_stock(product_id, adjustment)
        except TransportError as e:
            logger.warning(
                "%s of %r failed on %s, applying locally: %s",
                operation,
                product_id,
                self.remote.name,
                e,
            )
            inc_fallback(operation)
            self._apply_locally(operation, product_id, adjustment)
            raise
        snapshot = self._patched(updated.id, lambda _: updated)
        if snapshot is not None:
            self._commit(operation, snapshot, persist=False)
        return updated

    # --- stock ------------------------------------------------------------

    def increment(self, product_id: str) -> Optional[Product]:
        return self._adjust("increment", product_id, StockAdjustment.increment())

    def decrement(self, product_id: str) -> Optional[Product]:
        return self._adjust("decrement", product_id, StockAdjustment.decrement())

    def set_quantity(self, product_id: str, quantity: int) -> Optional[Product]:
        return self._adjust("set_quantity", product_id, StockAdjustment.set_to(quantity))

    # --- catalogue edits (remote only) -------------------------------------

    def create(self, product: Product) -> Product:
        created = self.remote.create(product)
        self._commit(
            "create", self.products + (created,), persist=self._mode == BackendMode.LOCAL
        )
        return created

    def update(self, product_id: str, changes: Dict[str, Any]) -> Product:
        updated = self.remote.update(product_id, changes)
        snapshot = self._patched(updated.id, lambda _: updated)
        if snapshot is not None:
            self._commit("update", snapshot, persist=self._mode == BackendMode.LOCAL)
        return updated

    def delete(self, product_id: str) -> None:
        self.remote.delete(product_id)
        snapshot = tuple(p for p in self.products if p.id != product_id)
        if len(snapshot) != len(self.products):
            self._commit("delete", snapshot, persist=self._mode == BackendMode.LOCAL)
