"""WhatsApp checkout: pick a quantity and hand the order off as a chat message."""

from __future__ import annotations

from decimal import Decimal
from urllib.parse import quote

from ..core.errors import CheckoutError, OutOfStockError
from ..core.types import Product
from ..core.utils import parse_price

WHATSAPP_BASE_URL = "https://wa.me"


class Checkout:
    def __init__(self, product: Product, whatsapp_number: str):
        if product.quantity == 0:
            raise OutOfStockError(f"{product.name} is out of stock")
        self.product = product
        self.whatsapp_number = "".join(c for c in whatsapp_number if c.isdigit())
        self.quantity = 1

    def increment(self) -> int:
        if self.quantity < self.product.quantity:
            self.quantity += 1
        return self.quantity

    def decrement(self) -> int:
        if self.quantity > 1:
            self.quantity -= 1
        return self.quantity

    def total(self) -> Decimal:
        return parse_price(self.product.price) * self.quantity

    def message(self) -> str:
        plural = "s" if self.quantity > 1 else ""
        return (
            "Olá! 👋\n\n"
            f"Gostaria de comprar {self.quantity} {self.product.name}{plural}\n\n"
            f"Preço unitário: {self.product.price}\n\n"
            "Poderia me ajudar com essa compra? 😊"
        )

    def validate(self) -> None:
        if self.quantity < 1:
            raise CheckoutError("quantity must be at least 1")
        if self.quantity > self.product.quantity:
            raise CheckoutError(
                f"only {self.product.quantity} units of {self.product.name} in stock"
            )

    def confirm(self) -> str:
        """Validate the order and return the wa.me link that opens the chat."""
        self.validate()
        if not self.whatsapp_number:
            raise CheckoutError("no WhatsApp number configured")
        # same character set JavaScript's encodeURIComponent leaves alone
        text = quote(self.message(), safe="-_.!~*'()")
        return f"{WHATSAPP_BASE_URL}/{self.whatsapp_number}?text={text}"
