"""Error taxonomy.

Callers react differently per kind:
AuthError leaves the cache untouched and should prompt a new login.
TransportError triggers the local fallback on loads and stock changes.
ValidationError is shown to the user verbatim.
"""

from __future__ import annotations

from typing import Optional


class StoreError(Exception):
    """Base class for all storefront errors."""


class AuthError(StoreError):
    """Bad credentials, or a protected call made without a valid token."""


class TransportError(StoreError):
    """Network failure, timeout, or an unexpected server response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(StoreError):
    """The remote store rejected the payload."""


class CheckoutError(StoreError):
    """A purchase request that cannot be sent."""


class OutOfStockError(CheckoutError):
    """The product has no units available."""
