from decimal import Decimal
from urllib.parse import parse_qs, urlparse

import pytest

from lojinha.catalog.checkout import Checkout
from lojinha.core.errors import CheckoutError, OutOfStockError
from lojinha.core.types import Product

GAS = Product("gas", "Botijão", 2, "R$ 110,00")


def test_out_of_stock_product_cannot_start_checkout():
    with pytest.raises(OutOfStockError):
        Checkout(Product("x", "X", 0, "R$ 1,00"), "5561999999999")


def test_quantity_is_bounded_by_stock_and_one():
    c = Checkout(GAS, "5561999999999")
    assert c.decrement() == 1
    assert c.increment() == 2
    assert c.increment() == 2
    assert c.total() == Decimal("220.00")


def test_message_pluralizes():
    c = Checkout(GAS, "5561999999999")
    assert "comprar 1 Botijão\n" in c.message()
    c.increment()
    assert "comprar 2 Botijãos" in c.message()
    assert "Preço unitário: R$ 110,00" in c.message()


def test_confirm_builds_whatsapp_link():
    c = Checkout(GAS, "+55 (61) 99999-9999")
    url = c.confirm()
    parsed = urlparse(url)
    assert parsed.netloc == "wa.me"
    assert parsed.path == "/5561999999999"
    assert parse_qs(parsed.query)["text"][0] == c.message()
    assert " " not in url


def test_confirm_rejects_quantity_over_stock():
    c = Checkout(GAS, "5561999999999")
    c.quantity = 5
    with pytest.raises(CheckoutError):
        c.confirm()


def test_confirm_requires_number():
    with pytest.raises(CheckoutError):
        Checkout(GAS, "").confirm()
