"""Vendor directory listing and contact visibility."""

from __future__ import annotations

from datetime import datetime

from .models import MarketSnapshot, SessionContext, Vendor, VendorContact
from .sanctions import is_vendor_blocked, utc_now


def list_vendors(
    snapshot: MarketSnapshot,
    category: str | None = None,
    *,
    session: SessionContext | None = None,
    now: datetime | None = None,
) -> list[Vendor]:
    """Vendors in store order, filtered by category and visibility.

    Blocked vendors are hidden unless the session is an administrator.
    """
    is_admin = session is not None and session.is_admin
    evaluated_at = now or utc_now()
    return [
        vendor
        for vendor in snapshot.vendors
        if (not category or category in vendor.categories)
        and (is_admin or not is_vendor_blocked(vendor, evaluated_at))
    ]


def mask_contact_value(value: str | None) -> str:
    """Mask a contact value, keeping two characters at each end."""
    if not value:
        return "-"
    if len(value) <= 4:
        return "****"
    return f"{value[:2]}***{value[-2:]}"


def contact_view(vendor: Vendor) -> VendorContact:
    """Contact details as shown to other users."""
    if vendor.contact_public:
        return vendor.contact
    return VendorContact(
        phone=mask_contact_value(vendor.contact.phone),
        email=mask_contact_value(vendor.contact.email),
        kakao=mask_contact_value(vendor.contact.kakao),
    )
