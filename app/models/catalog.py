"""
Catalog view models consumed by the JSON-LD assemblers.

These are populated by the storefront before assembly and are treated as
read-only input. Field names follow the storefront's product details page.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class CategorySimpleModel(BaseModel):
    """One step of a category breadcrumb, root first."""
    id: Optional[int] = None
    name: str
    se_name: str


class ProductBreadcrumbModel(BaseModel):
    """Breadcrumb shown on a product page."""
    enabled: bool = True
    product_id: Optional[int] = None
    product_name: str
    product_se_name: str
    category_breadcrumb: List[CategorySimpleModel] = Field(default_factory=list)


class ProductPriceModel(BaseModel):
    """Price state of a product."""
    price_value: Decimal = Decimal("0")
    call_for_price: bool = False
    currency_code: str


class PictureModel(BaseModel):
    """Default product picture."""
    image_url: Optional[str] = None


class ManufacturerBriefModel(BaseModel):
    """Manufacturer linked to a product."""
    name: str
    se_name: Optional[str] = None


class ProductReviewOverviewModel(BaseModel):
    """Aggregate review counters."""
    rating_sum: int = Field(ge=0, default=0)
    total_reviews: int = Field(ge=0, default=0)


class ProductReviewModel(BaseModel):
    """Single approved review, date already formatted for display."""
    title: str
    review_text: str
    rating: int = Field(ge=0, le=5)
    customer_name: str
    written_on_str: str


class ProductDetailsModel(BaseModel):
    """
    Product details page model.

    Grouped products carry their children in ``associated_products``;
    each child is a full details model of its own.
    """
    id: int
    name: str
    se_name: str
    sku: Optional[str] = None
    gtin: Optional[str] = None
    manufacturer_part_number: Optional[str] = None
    short_description: Optional[str] = None
    default_picture_model: PictureModel = Field(default_factory=PictureModel)
    product_manufacturers: List[ManufacturerBriefModel] = Field(default_factory=list)
    product_review_overview: ProductReviewOverviewModel = Field(default_factory=ProductReviewOverviewModel)
    product_reviews: List[ProductReviewModel] = Field(default_factory=list)
    product_price: ProductPriceModel
    available_end_date: Optional[datetime] = None
    in_stock: bool = True
    associated_products: List["ProductDetailsModel"] = Field(default_factory=list)
