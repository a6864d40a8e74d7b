"""Shared fixtures for JSON-LD assembly tests."""

import asyncio
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from app.layers.hooks import DocumentHooks
from app.layers.url_resolver import RouteUrlResolver
from app.models.catalog import (
    CategorySimpleModel,
    ManufacturerBriefModel,
    PictureModel,
    ProductBreadcrumbModel,
    ProductDetailsModel,
    ProductPriceModel,
    ProductReviewModel,
    ProductReviewOverviewModel,
)

STORE_HOST = "shop.example.com"


class RecordingResolver(RouteUrlResolver):
    """Route resolver that records lookups and can delay them."""

    def __init__(self, delays: Optional[Dict[str, float]] = None):
        super().__init__(store_host=STORE_HOST)
        self.delays = delays or {}
        self.calls: List[tuple] = []
        self.completed: List[str] = []

    async def resolve_url(self, entity_type, params, scheme):
        self.calls.append((entity_type, params.get("slug"), scheme))
        delay = self.delays.get(params.get("slug"))
        if delay:
            await asyncio.sleep(delay)
        url = await super().resolve_url(entity_type, params, scheme)
        self.completed.append(params.get("slug"))
        return url


@pytest.fixture
def resolver() -> RecordingResolver:
    return RecordingResolver()


@pytest.fixture
def hooks() -> DocumentHooks:
    return DocumentHooks(isolate_failures=False)


@pytest.fixture
def category_chain() -> List[CategorySimpleModel]:
    return [
        CategorySimpleModel(id=1, name="Electronics", se_name="electronics"),
        CategorySimpleModel(id=2, name="Cameras & photo", se_name="camera-photo"),
        CategorySimpleModel(id=3, name="Digital cameras", se_name="digital-cameras"),
    ]


@pytest.fixture
def product_breadcrumb(category_chain) -> ProductBreadcrumbModel:
    return ProductBreadcrumbModel(
        product_id=10,
        product_name="Nikon D5500 DSLR",
        product_se_name="nikon-d5500-dslr",
        category_breadcrumb=category_chain,
    )


def build_product(
    product_id: int,
    price: Any = "12.00",
    associated: Optional[List[ProductDetailsModel]] = None,
    rating_sum: int = 0,
    total_reviews: int = 0,
    reviews: Optional[List[ProductReviewModel]] = None,
    call_for_price: bool = False,
    in_stock: bool = True,
    **fields: Any,
) -> ProductDetailsModel:
    """Product details model with sensible defaults."""
    values: Dict[str, Any] = dict(
        id=product_id,
        name=f"Product {product_id}",
        se_name=f"product-{product_id}",
        sku=f"SKU-{product_id}",
        gtin=f"0000000000{product_id}",
        manufacturer_part_number=f"MPN-{product_id}",
        short_description=f"Short description of product {product_id}",
        default_picture_model=PictureModel(image_url=f"https://{STORE_HOST}/images/{product_id}.jpeg"),
        product_manufacturers=[ManufacturerBriefModel(name="Nikon", se_name="nikon")],
        product_review_overview=ProductReviewOverviewModel(rating_sum=rating_sum, total_reviews=total_reviews),
        product_reviews=reviews or [],
        product_price=ProductPriceModel(
            price_value=Decimal(str(price)),
            call_for_price=call_for_price,
            currency_code="USD",
        ),
        in_stock=in_stock,
        associated_products=associated or [],
    )
    values.update(fields)
    return ProductDetailsModel(**values)


@pytest.fixture
def make_product():
    """Factory for product details models."""
    return build_product


@pytest.fixture
def review() -> ProductReviewModel:
    return ProductReviewModel(
        title="Great camera",
        review_text="Sharp pictures and long battery life.",
        rating=5,
        customer_name="Alex Morgan",
        written_on_str="3/14/2026 9:26 AM",
    )
