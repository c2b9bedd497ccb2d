"""Environment-based settings.

Values come from the process environment, optionally seeded from a
``.env`` file in the working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from dotenv import find_dotenv, load_dotenv

from shop.domain.model.cart import MAX_DISTINCT_LINES
from shop.domain.model.value_objects import DEFAULT_CURRENCY
from shop.domain.service.pricing import DEFAULT_DIGITAL_TAX_RATE, DEFAULT_GENERAL_TAX_RATE


def _decimal(name: str, default: int) -> Decimal:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return Decimal(default)
    try:
        return Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:

    default_currency: str = DEFAULT_CURRENCY
    general_tax_rate: Decimal = Decimal(DEFAULT_GENERAL_TAX_RATE)
    digital_tax_rate: Decimal = Decimal(DEFAULT_DIGITAL_TAX_RATE)
    cart_max_lines: int = MAX_DISTINCT_LINES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> Settings:
        """Read ``SHOP_*`` variables, falling back to the defaults above."""
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        return cls(
            default_currency=os.getenv("SHOP_DEFAULT_CURRENCY", DEFAULT_CURRENCY).strip().upper(),
            general_tax_rate=_decimal("SHOP_GENERAL_TAX_RATE", DEFAULT_GENERAL_TAX_RATE),
            digital_tax_rate=_decimal("SHOP_DIGITAL_TAX_RATE", DEFAULT_DIGITAL_TAX_RATE),
            cart_max_lines=_int("SHOP_CART_MAX_LINES", MAX_DISTINCT_LINES),
            log_level=os.getenv("SHOP_LOG_LEVEL", "INFO").strip().upper(),
        )
