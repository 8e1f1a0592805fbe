"""App bootstrap: wire storage, remote store and inventory cache from settings."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .config import Settings
from ..catalog.query import CatalogQuery, run_query
from ..io.persistence import FileStorage, ProductPersistence, TokenStore
from ..remote.api import ApiRemoteStore
from ..remote.base import RemoteStore
from ..remote.mock import MockRemoteStore
from ..state.defaults import DEFAULT_PRODUCTS
from ..state.inventory import InventoryCache

logger = logging.getLogger(__name__)


def build_environment(settings: Settings) -> Tuple[InventoryCache, RemoteStore]:
    storage = FileStorage(settings.storage_dir)
    remote: RemoteStore
    if settings.dry_run:
        remote = MockRemoteStore(products=DEFAULT_PRODUCTS)
    else:
        remote = ApiRemoteStore(
            settings.api_url,
            timeout=settings.timeout,
            token_store=TokenStore(storage),
        )
    cache = InventoryCache(remote, ProductPersistence(storage), mode=settings.backend)
    return cache, remote


def main(settings: Optional[Settings] = None):  # pragma: no cover - manual run
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    cache, remote = build_environment(settings)
    logger.info("Loading catalogue (%s backend via %s)", cache.mode.value, remote.name)
    cache.load()
    page = run_query(cache.products, CatalogQuery(page_size=len(cache.products) or 1))
    for p in page.items:
        stock = p.quantity if p.in_stock else "out of stock"
        print(f"{p.id:<12} {p.name:<28} {p.price:>12}  {stock}")
    print(f"{page.total} products")


if __name__ == "__main__":  # pragma: no cover
    main()
