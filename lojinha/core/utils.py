"""Small utilities."""

from __future__ import annotations

import re
import unicodedata
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


def clamp(x: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, x))


def normalize_text(text: str) -> str:
    """Lowercase and strip accents so "Água" matches "agua"."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def parse_price(text: str) -> Decimal:
    """Parse a pt-BR display price into a Decimal.

    "R$ 1.234,56" -> 1234.56. A lone dot followed by one or two digits is
    read as a decimal point ("12.50" -> 12.50); otherwise dots are thousands
    separators.
    """
    cleaned = re.sub(r"[^0-9,.\-]", "", text or "")
    if not cleaned or not re.search(r"\d", cleaned):
        raise ValueError(f"no amount in price {text!r}")
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif cleaned.count(".") == 1 and len(cleaned.split(".")[1]) in (1, 2):
        pass
    else:
        cleaned = cleaned.replace(".", "")
    try:
        return Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"invalid price {text!r}") from e


def format_price(amount: Decimal) -> str:
    """Format as "R$ 1.234,56"."""
    q = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if q < 0 else ""
    whole, cents = f"{abs(q):.2f}".split(".")
    groups = []
    while len(whole) > 3:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    groups.insert(0, whole)
    return f"{sign}R$ {'.'.join(groups)},{cents}"
