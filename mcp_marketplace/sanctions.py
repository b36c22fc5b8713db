"""Sanction (block) state helpers shared by search, listings and the store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .models import Vendor, VendorStatus


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_blocked_now(
    status: VendorStatus | str,
    blocked_until: datetime | None,
    now: datetime | None = None,
) -> bool:
    """Return True while a block is in force.

    A block without expiry is indefinite; an expiry at or before ``now``
    means the block has lapsed.
    """
    if status != "blocked":
        return False
    if blocked_until is None:
        return True
    reference = _as_utc(now) if now is not None else utc_now()
    return _as_utc(blocked_until) > reference


def is_vendor_blocked(vendor: Vendor | None, now: datetime | None = None) -> bool:
    if vendor is None:
        return False
    return is_blocked_now(vendor.status, vendor.blocked_until, now)


def blocked_until_by_days(days: int | None, now: datetime | None = None) -> datetime | None:
    """Expiry for a sanction of ``days`` days; ``None`` means indefinite."""
    if days is None:
        return None
    reference = _as_utc(now) if now is not None else utc_now()
    return reference + timedelta(days=days)
