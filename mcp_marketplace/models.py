"""
Data models for the marketplace.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .config import MAX_INQUIRY_LENGTH, MAX_QUERY_LENGTH

# Type aliases for better type safety
VendorStatus = Literal["active", "blocked"]
UserRole = Literal["buyer", "seller", "admin"]
ResultView = Literal["product", "vendor"]
PageItem = int | Literal["ellipsis"]


class VendorContact(BaseModel):
    """Vendor contact channels."""

    model_config = ConfigDict(frozen=True)

    phone: str | None = None
    email: str | None = None
    kakao: str | None = None


class Vendor(BaseModel):
    """A vendor (seller company) listed on the marketplace."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_user_id: str = ""
    company_name: str
    categories: list[str] = Field(min_length=1)
    contact: VendorContact = Field(default_factory=VendorContact)
    contact_public: bool = False
    avg_rating: float = 0.0  # Derived from reviews, see store.recalc_vendor_stats
    review_count: int = 0  # Derived from reviews
    status: VendorStatus = "active"
    blocked_until: datetime | None = None  # None with status "blocked" means indefinite
    is_sample: bool = False  # Bundled demo record


class Product(BaseModel):
    """A product offered by a vendor."""

    model_config = ConfigDict(frozen=True)

    id: str
    vendor_id: str
    name: str
    category: str
    desc: str = ""
    tags: list[str] = Field(default_factory=list)
    price_min: float | None = None  # None means "inquire"
    price_max: float | None = None
    keywords: list[str] = Field(default_factory=list)  # Maintained by the store


class Review(BaseModel):
    """A buyer review of a vendor."""

    model_config = ConfigDict(frozen=True)

    id: str
    vendor_id: str
    author_user_id: str
    rating: int = Field(ge=1, le=5)
    text: str = ""
    created_at: datetime


class MarketSnapshot(BaseModel):
    """Immutable view of the store collections read by one search evaluation."""

    model_config = ConfigDict(frozen=True)

    vendors: list[Vendor] = Field(default_factory=list)
    products: list[Product] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)

    def vendor_by_id(self, vendor_id: str) -> Vendor | None:
        for vendor in self.vendors:
            if vendor.id == vendor_id:
                return vendor
        return None


class SessionContext(BaseModel):
    """Caller identity supplied to every mutating operation."""

    model_config = ConfigDict(frozen=True)

    user_id: str | None = None
    role: UserRole | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


class SearchQuery(BaseModel):
    """Ephemeral search request."""

    q: str = Field(default="", max_length=MAX_QUERY_LENGTH)
    vendor_query: str = Field(default="", max_length=MAX_QUERY_LENGTH)
    category: str = ""
    vendor_id: str = ""
    min_rating: float = 0.0
    natural_language: bool = False


class NaturalQueryResult(BaseModel):
    """Keywords and categories inferred from a natural-language query."""

    keywords: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class ProductResult(BaseModel):
    """A scored product together with its resolved vendor."""

    product: Product
    vendor: Vendor
    score: int = 0


class VendorGroup(BaseModel):
    """Results grouped under one vendor."""

    vendor: Vendor
    items: list[ProductResult]
    best_score: int = 0


class PageWindow(BaseModel):
    """Pagination descriptor with a compact navigation window."""

    current_page: int = 1
    total_pages: int = 1
    items: list[PageItem] = Field(default_factory=lambda: [1])

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1


class SearchResponse(BaseModel):
    """One page of marketplace search results."""

    view: ResultView = "product"
    results: list[ProductResult] = Field(default_factory=list)
    groups: list[VendorGroup] = Field(default_factory=list)
    total_results: int = 0  # Matching products
    total_vendors: int = 0  # Distinct vendors among matching products
    page: int = 1  # Current page number
    total_pages: int = 1  # Total number of pages
    page_items: list[PageItem] = Field(default_factory=lambda: [1])
    has_next: bool = False  # Whether there are more pages
    has_previous: bool = False  # Whether there are previous pages
    interpretation: NaturalQueryResult | None = None


class ProductDraft(BaseModel):
    """Seller input for a new product; id, vendor and keywords are assigned."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    desc: str = ""
    tags: list[str] = Field(default_factory=list)
    price_min: float | None = Field(default=None, ge=0)
    price_max: float | None = Field(default=None, ge=0)


class ProductPatch(BaseModel):
    """Partial product update; only fields that were set are applied."""

    name: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    desc: str | None = None
    tags: list[str] | None = None
    price_min: float | None = Field(default=None, ge=0)  # Explicit None clears to "inquire"
    price_max: float | None = Field(default=None, ge=0)


class VendorProfileDraft(BaseModel):
    """Seller input for a new vendor profile."""

    company_name: str = Field(default="신규 업체", min_length=1)
    categories: list[str] = Field(default_factory=lambda: ["기타"], min_length=1)
    contact: VendorContact = Field(default_factory=VendorContact)
    contact_public: bool = False


class VendorProfilePatch(BaseModel):
    """Partial vendor profile update; identity, ownership and sample flag never change."""

    company_name: str | None = Field(default=None, min_length=1)
    categories: list[str] | None = Field(default=None, min_length=1)
    contact: VendorContact | None = None
    contact_public: bool | None = None


class ContactInquiry(BaseModel):
    """Message submitted through the contact form."""

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)
    message: str = Field(min_length=1, max_length=MAX_INQUIRY_LENGTH)
