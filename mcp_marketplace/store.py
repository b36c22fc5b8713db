"""In-memory marketplace store with optional JSON persistence."""

from __future__ import annotations

import json
import logging
import math
import secrets
import time
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .config import DB_KEY, MAX_REVIEW_RATING, MIN_REVIEW_RATING
from .exceptions import (
    NotFoundError,
    PermissionDeniedError,
    SanctionedError,
    StoreError,
    ValidationError,
)
from .models import (
    MarketSnapshot,
    Product,
    ProductDraft,
    ProductPatch,
    Review,
    SessionContext,
    Vendor,
    VendorProfileDraft,
    VendorProfilePatch,
)
from .sanctions import blocked_until_by_days, is_vendor_blocked, utc_now

logger = logging.getLogger("mcp_marketplace.store")


def uid(prefix: str = "id") -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


def build_product_keywords(name: str, desc: str, tags: list[str], category: str) -> list[str]:
    """Deduplicated lowercase whitespace split of a product's text fields."""
    words = " ".join([name, desc, *tags, category]).lower().split()
    return list(dict.fromkeys(words))


def _apply_product_patch(product: Product, changes: dict[str, Any]) -> Product:
    """Merge ``changes`` into ``product`` under the same rules as a new draft."""
    fields = {name: getattr(product, name) for name in ProductDraft.model_fields}
    fields.update(changes)
    try:
        draft = ProductDraft.model_validate(fields)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid product update",
            {"product_id": product.id, "errors": exc.errors(include_url=False)},
        ) from exc
    return product.model_copy(
        update={
            **draft.model_dump(),
            "keywords": build_product_keywords(draft.name, draft.desc, draft.tags, draft.category),
        }
    )


def _round_rating(value: float) -> float:
    # Half-up rounding to one decimal
    return math.floor(value * 10 + 0.5) / 10


def recalc_vendor_stats(snapshot: MarketSnapshot, vendor_id: str) -> MarketSnapshot:
    """Recompute ``avg_rating`` and ``review_count`` of one vendor.

    Pure and idempotent: the result depends only on the review collection.

    Args:
        snapshot: Current store state
        vendor_id: Vendor whose statistics to refresh

    Returns:
        A new snapshot with the vendor's statistics updated
    """
    ratings = [review.rating for review in snapshot.reviews if review.vendor_id == vendor_id]
    review_count = len(ratings)
    avg_rating = _round_rating(sum(ratings) / review_count) if review_count else 0.0

    vendors = [
        vendor.model_copy(update={"avg_rating": avg_rating, "review_count": review_count})
        if vendor.id == vendor_id
        else vendor
        for vendor in snapshot.vendors
    ]
    return snapshot.model_copy(update={"vendors": vendors})


def recalc_all_vendor_stats(snapshot: MarketSnapshot) -> MarketSnapshot:
    """Recompute statistics for every vendor."""
    for vendor in snapshot.vendors:
        snapshot = recalc_vendor_stats(snapshot, vendor.id)
    return snapshot


class MarketStore:
    """Holds the current marketplace snapshot and applies mutations to it.

    Every mutation replaces the held snapshot, so a snapshot handed out
    earlier keeps describing the state at the time it was taken.
    """

    def __init__(
        self,
        snapshot: MarketSnapshot | None = None,
        path: str | Path | None = None,
    ) -> None:
        self._snapshot = snapshot or MarketSnapshot()
        self._path = Path(path) if path else None

    @classmethod
    def load(cls, path: str | Path | None, seed: MarketSnapshot | None = None) -> MarketStore:
        """Load a store document, falling back to ``seed`` when missing or corrupt."""
        from .seed import seed_snapshot

        fallback = seed if seed is not None else seed_snapshot()
        if not path:
            return cls(fallback)

        target = Path(path)
        snapshot: MarketSnapshot | None = None
        if target.exists():
            try:
                document = json.loads(target.read_text(encoding="utf-8"))
                snapshot = MarketSnapshot.model_validate(document[DB_KEY])
            except (OSError, ValueError, KeyError, TypeError, PydanticValidationError) as exc:
                logger.warning("Ignoring unreadable store at %s: %s", target, exc)

        store = cls(snapshot or fallback, target)
        if snapshot is None:
            store.save()
        return store

    @property
    def path(self) -> Path | None:
        return self._path

    def snapshot(self) -> MarketSnapshot:
        """Deep copy of the current state for one read-only evaluation."""
        return self._snapshot.model_copy(deep=True)

    def save(self) -> None:
        self._write(self._snapshot)

    def _write(self, snapshot: MarketSnapshot) -> None:
        if self._path is None:
            return
        document = {DB_KEY: snapshot.model_dump(mode="json")}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Could not write store to {self._path}", {"error": str(exc)}) from exc

    def _commit(self, snapshot: MarketSnapshot) -> None:
        # Held state only changes once the document is on disk
        self._write(snapshot)
        self._snapshot = snapshot

    # Lookups

    def get_vendor(self, vendor_id: str) -> Vendor:
        vendor = self._snapshot.vendor_by_id(vendor_id)
        if vendor is None:
            raise NotFoundError(f"Vendor '{vendor_id}' not found", {"vendor_id": vendor_id})
        return vendor

    def vendor_for_owner(self, user_id: str | None) -> Vendor | None:
        if not user_id:
            return None
        for vendor in self._snapshot.vendors:
            if vendor.owner_user_id == user_id:
                return vendor
        return None

    def _require_own_vendor(self, session: SessionContext) -> Vendor:
        if session.role != "seller":
            raise PermissionDeniedError("Only sellers can manage a vendor listing")
        vendor = self.vendor_for_owner(session.user_id)
        if vendor is None:
            raise PermissionDeniedError(
                "Seller has no vendor profile", {"user_id": session.user_id}
            )
        return vendor

    def _require_active_seller(self, session: SessionContext, now: datetime | None) -> Vendor:
        vendor = self._require_own_vendor(session)
        if is_vendor_blocked(vendor, now):
            raise SanctionedError("Vendor is currently sanctioned", {"vendor_id": vendor.id})
        return vendor

    @staticmethod
    def _require_admin(session: SessionContext) -> None:
        if not session.is_admin:
            raise PermissionDeniedError("Administrator session required")

    # Vendors

    def register_vendor(self, session: SessionContext, draft: VendorProfileDraft) -> Vendor:
        """Create the vendor listing owned by a seller account.

        New listings are never sample data, so they rank ahead of the
        bundled catalogue on equal scores.
        """
        if session.role != "seller" or not session.is_authenticated:
            raise PermissionDeniedError("Only seller accounts can register a vendor")
        existing = self.vendor_for_owner(session.user_id)
        if existing is not None:
            raise ValidationError(
                "Seller already has a vendor profile", {"vendor_id": existing.id}
            )

        vendor = Vendor(
            id=uid("vendor"),
            owner_user_id=str(session.user_id),
            is_sample=False,
            **draft.model_dump(),
        )
        self._commit(self._snapshot.model_copy(update={"vendors": [*self._snapshot.vendors, vendor]}))
        logger.info("Seller %s registered vendor %s", session.user_id, vendor.id)
        return vendor

    def update_vendor_profile(self, session: SessionContext, patch: VendorProfilePatch) -> Vendor:
        """Apply ``patch`` to the seller's own vendor profile.

        Sanctioned vendors may still edit their profile. Rating statistics,
        status, id, owner and the sample flag are left as they are.
        """
        vendor = self._require_own_vendor(session)
        fields = {name: getattr(vendor, name) for name in VendorProfileDraft.model_fields}
        fields.update(
            {key: value for key, value in patch.model_dump(exclude_unset=True).items() if value is not None}
        )
        try:
            profile = VendorProfileDraft.model_validate(fields)
        except PydanticValidationError as exc:
            raise ValidationError(
                "Invalid vendor profile", {"vendor_id": vendor.id, "errors": exc.errors(include_url=False)}
            ) from exc

        updated = vendor.model_copy(
            update={name: getattr(profile, name) for name in VendorProfileDraft.model_fields}
        )
        self._replace_vendor(updated)
        logger.info("Vendor %s profile updated", vendor.id)
        return updated

    # Products

    def create_product(
        self,
        session: SessionContext,
        draft: ProductDraft,
        *,
        now: datetime | None = None,
    ) -> Product:
        """Add a product to the seller's own vendor with freshly built keywords."""
        vendor = self._require_active_seller(session, now)
        product = Product(
            id=uid("product"),
            vendor_id=vendor.id,
            keywords=build_product_keywords(draft.name, draft.desc, draft.tags, draft.category),
            **draft.model_dump(),
        )
        self._commit(
            self._snapshot.model_copy(update={"products": [*self._snapshot.products, product]})
        )
        logger.info("Vendor %s created product %s", vendor.id, product.id)
        return product

    def update_product(
        self,
        session: SessionContext,
        product_id: str,
        patch: ProductPatch,
        *,
        now: datetime | None = None,
    ) -> Product:
        """Apply ``patch`` to one of the seller's products and rebuild its keywords."""
        vendor = self._require_active_seller(session, now)
        # Prices may be cleared to None ("inquire"); text fields may not
        changes: dict[str, Any] = {
            key: value
            for key, value in patch.model_dump(exclude_unset=True).items()
            if value is not None or key in ("price_min", "price_max")
        }

        updated: Product | None = None
        products: list[Product] = []
        for product in self._snapshot.products:
            if product.id == product_id and product.vendor_id == vendor.id:
                updated = _apply_product_patch(product, changes)
                products.append(updated)
            else:
                products.append(product)

        if updated is None:
            raise NotFoundError(
                f"Product '{product_id}' not found for vendor '{vendor.id}'",
                {"product_id": product_id},
            )

        self._commit(self._snapshot.model_copy(update={"products": products}))
        return updated

    def delete_product(
        self,
        session: SessionContext,
        product_id: str,
        *,
        now: datetime | None = None,
    ) -> None:
        vendor = self._require_active_seller(session, now)
        remaining = [
            p for p in self._snapshot.products if not (p.id == product_id and p.vendor_id == vendor.id)
        ]
        if len(remaining) == len(self._snapshot.products):
            raise NotFoundError(f"Product '{product_id}' not found", {"product_id": product_id})
        self._commit(self._snapshot.model_copy(update={"products": remaining}))

    # Reviews

    def add_review(
        self,
        session: SessionContext,
        vendor_id: str,
        rating: int,
        text: str,
        *,
        now: datetime | None = None,
    ) -> Review:
        """
        Record a review and refresh the vendor's derived statistics.

        Args:
            session: Author's session; must be logged in and not an administrator
            vendor_id: Reviewed vendor
            rating: Integer rating from 1 to 5
            text: Review body, trimmed before storing
            now: Creation time and sanction reference

        Returns:
            The stored review
        """
        if not session.is_authenticated:
            raise PermissionDeniedError("Log in to leave a review")
        if session.is_admin:
            raise PermissionDeniedError("Administrators cannot write reviews")

        vendor = self.get_vendor(vendor_id)
        if is_vendor_blocked(vendor, now):
            raise SanctionedError("Sanctioned vendors cannot receive reviews", {"vendor_id": vendor_id})
        if (
            isinstance(rating, bool)
            or not isinstance(rating, int)
            or not MIN_REVIEW_RATING <= rating <= MAX_REVIEW_RATING
        ):
            raise ValidationError(
                f"Rating must be an integer from {MIN_REVIEW_RATING} to {MAX_REVIEW_RATING}",
                {"rating": rating},
            )

        review = Review(
            id=uid("review"),
            vendor_id=vendor_id,
            author_user_id=str(session.user_id),
            rating=rating,
            text=text.strip(),
            created_at=now or utc_now(),
        )
        with_review = self._snapshot.model_copy(update={"reviews": [*self._snapshot.reviews, review]})
        self._commit(recalc_vendor_stats(with_review, vendor_id))
        logger.info("Review %s added for vendor %s", review.id, vendor_id)
        return review

    # Sanctions

    def apply_vendor_sanction(
        self,
        session: SessionContext,
        vendor_id: str,
        days: int | None,
        *,
        now: datetime | None = None,
    ) -> Vendor:
        """Block a vendor for ``days`` days, or indefinitely when ``days`` is None."""
        self._require_admin(session)
        if days is not None and days <= 0:
            raise ValidationError("Sanction length must be a positive number of days", {"days": days})
        vendor = self.get_vendor(vendor_id)
        updated = vendor.model_copy(
            update={"status": "blocked", "blocked_until": blocked_until_by_days(days, now)}
        )
        self._replace_vendor(updated)
        logger.info("Vendor %s sanctioned until %s", vendor_id, updated.blocked_until or "further notice")
        return updated

    def clear_vendor_sanction(self, session: SessionContext, vendor_id: str) -> Vendor:
        self._require_admin(session)
        vendor = self.get_vendor(vendor_id)
        updated = vendor.model_copy(update={"status": "active", "blocked_until": None})
        self._replace_vendor(updated)
        logger.info("Vendor %s sanction cleared", vendor_id)
        return updated

    def _replace_vendor(self, updated: Vendor) -> None:
        vendors = [updated if v.id == updated.id else v for v in self._snapshot.vendors]
        self._commit(self._snapshot.model_copy(update={"vendors": vendors}))
