"""Bundled demo data. Every seeded vendor is flagged ``is_sample``."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .models import MarketSnapshot, Product, Review, Vendor
from .store import build_product_keywords, recalc_all_vendor_stats

_SEED_CREATED_AT = datetime(2024, 1, 15, tzinfo=timezone.utc)

_SEED_VENDORS: list[dict[str, Any]] = [
    {
        "id": "vendor-sample-1",
        "owner_user_id": "user-sample-seller-1",
        "company_name": "한빛기계",
        "categories": ["기계", "전기"],
        "contact": {"phone": "031-555-0101", "email": "sales@hanbit.example"},
        "contact_public": True,
    },
    {
        "id": "vendor-sample-2",
        "owner_user_id": "user-sample-seller-2",
        "company_name": "대성전기",
        "categories": ["전기", "계장"],
        "contact": {"phone": "02-555-0199", "kakao": "daesung_elec"},
        "contact_public": False,
    },
    {
        "id": "vendor-sample-3",
        "owner_user_id": "user-sample-seller-3",
        "company_name": "튼튼건자재",
        "categories": ["건축"],
        "contact": {"email": "order@teunteun.example"},
        "contact_public": True,
    },
    {
        "id": "vendor-sample-4",
        "owner_user_id": "user-sample-seller-4",
        "company_name": "프로공구",
        "categories": ["공구", "기타"],
        "contact": {"phone": "051-555-0144"},
        "contact_public": False,
    },
]

_SEED_PRODUCTS: list[dict[str, Any]] = [
    {
        "id": "product-sample-1",
        "vendor_id": "vendor-sample-1",
        "name": "37kW 유도 모터",
        "category": "기계",
        "desc": "산업용 삼상 유도 모터, 컨베이어 및 펌프 구동용",
        "tags": ["모터", "삼상"],
        "price_min": 1800000,
        "price_max": 2400000,
    },
    {
        "id": "product-sample-2",
        "vendor_id": "vendor-sample-1",
        "name": "웜 감속기 1/30",
        "category": "기계",
        "desc": "중부하용 웜 감속기",
        "tags": ["감속기"],
    },
    {
        "id": "product-sample-3",
        "vendor_id": "vendor-sample-2",
        "name": "75kW 인버터",
        "category": "전기",
        "desc": "모터 속도 제어용 범용 인버터",
        "tags": ["인버터", "드라이브"],
        "price_min": 3500000,
    },
    {
        "id": "product-sample-4",
        "vendor_id": "vendor-sample-2",
        "name": "압력 트랜스미터 4-20mA",
        "category": "계장",
        "desc": "배관 압력 측정용 트랜스미터",
        "tags": ["센서", "트랜스미터"],
    },
    {
        "id": "product-sample-5",
        "vendor_id": "vendor-sample-3",
        "name": "샌드위치 패널 50mm",
        "category": "건축",
        "desc": "단열 샌드위치 패널, 공장 외벽용",
        "tags": ["패널", "단열"],
        "price_min": 18000,
        "price_max": 26000,
    },
    {
        "id": "product-sample-6",
        "vendor_id": "vendor-sample-4",
        "name": "충전 임팩 드릴 18V",
        "category": "공구",
        "desc": "배터리 2개 포함 충전식 임팩 드릴",
        "tags": ["드릴", "임팩"],
        "price_min": 210000,
        "price_max": 260000,
    },
]

_SEED_REVIEWS: list[tuple[str, int, str]] = [
    ("vendor-sample-1", 5, "납기 준수, 설치 지원까지 좋았습니다."),
    ("vendor-sample-1", 4, "가격 대비 만족합니다."),
    ("vendor-sample-2", 4, "기술 문의 응답이 빠릅니다."),
    ("vendor-sample-3", 3, "배송이 조금 늦었습니다."),
]


def seed_snapshot() -> MarketSnapshot:
    """Build the demo snapshot with keywords and vendor statistics derived."""
    vendors = [Vendor(is_sample=True, **data) for data in _SEED_VENDORS]
    products = [
        Product(
            keywords=build_product_keywords(
                data["name"], data["desc"], data["tags"], data["category"]
            ),
            **data,
        )
        for data in _SEED_PRODUCTS
    ]
    reviews = [
        Review(
            id=f"review-sample-{index}",
            vendor_id=vendor_id,
            author_user_id="user-sample-buyer",
            rating=rating,
            text=text,
            created_at=_SEED_CREATED_AT,
        )
        for index, (vendor_id, rating, text) in enumerate(_SEED_REVIEWS, start=1)
    ]
    return recalc_all_vendor_stats(
        MarketSnapshot(vendors=vendors, products=products, reviews=reviews)
    )
