# =============================================================================
# substock_core/inventory/classifier.py
# Stock-level and expiry classification
# =============================================================================

from __future__ import annotations
import math
from dataclasses import replace
from datetime import datetime
from typing import Optional, TypeVar

import pandas as pd

from substock_core.config import NEAR_EXPIRY_DAYS
from .models import ExpiryStatus, InventoryItem, StockStatus

SECONDS_PER_DAY = 24 * 60 * 60

ItemT = TypeVar("ItemT", bound=InventoryItem)


def classify_stock(balance: float, min_stock: float) -> StockStatus:
    """EMPTY at or below zero, LOW up to and including the threshold."""
    if balance <= 0:
        return StockStatus.EMPTY
    if balance <= min_stock:
        return StockStatus.LOW
    return StockStatus.NORMAL


def parse_expiry(exp_date: str) -> Optional[datetime]:
    """Parse an expiry string to a naive datetime; None when unusable."""
    parsed = pd.to_datetime(exp_date, errors="coerce")
    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert(None)
    return parsed.to_pydatetime()


def days_to_expire(exp_date: str, now: datetime) -> Optional[int]:
    """
    Whole days until expiry, rounded up.

    A partial day counts as a full day, and a negative fraction rounds
    toward zero, so a lot that expired earlier today reports 0.
    """
    expiry = parse_expiry(exp_date)
    if expiry is None:
        return None
    diff = (expiry - now).total_seconds() / SECONDS_PER_DAY
    return math.ceil(diff)


def classify_expiry(days: Optional[int]) -> ExpiryStatus:
    if days is None:
        return ExpiryStatus.OK
    if days < 0:
        return ExpiryStatus.EXPIRED
    if days < NEAR_EXPIRY_DAYS:
        return ExpiryStatus.NEAR
    return ExpiryStatus.OK


def classify_item(item: ItemT, now: datetime) -> ItemT:
    """Return a copy of ``item`` with its status fields re-derived."""
    days = days_to_expire(item.exp_date, now)
    return replace(
        item,
        status=classify_stock(item.balance, item.min_stock),
        exp_status=classify_expiry(days),
        days_to_expire=days,
    )
