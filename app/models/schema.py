"""
Schema.org JSON-LD models for catalog structured data.
These models keep the output deterministic and Google-compatible.
"""
import json
from datetime import datetime
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field

SCHEMA_CONTEXT = "https://schema.org"


class SchemaNode(BaseModel):
    """Base class for every schema.org node, nested or top-level."""
    model_config = ConfigDict(populate_by_name=True)


class SchemaBase(SchemaNode):
    """
    Base class for top-level documents.

    Extra attributes are allowed so post-process hooks can append fields
    to a finished document.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    
    def to_jsonld(self) -> Dict[str, Any]:
        """Convert to JSON-LD format. None values are omitted, empty lists kept."""
        data: Dict[str, Any] = {"@context": SCHEMA_CONTEXT}
        data.update(self.model_dump(mode="json", exclude_none=True, by_alias=True))
        return data
    
    def to_script_tag(self) -> str:
        """Generate HTML script tag with JSON-LD."""
        return f'<script type="application/ld+json">\n{json.dumps(self.to_jsonld(), indent=2)}\n</script>'


class BreadcrumbItemSchema(SchemaNode):
    """Linked entity inside a breadcrumb step."""
    id: str = Field(alias="@id")
    name: str


class BreadcrumbListItem(SchemaNode):
    """Item within a BreadcrumbList."""
    type: str = Field(default="ListItem", alias="@type")
    position: int
    item: BreadcrumbItemSchema


class BreadcrumbListSchema(SchemaBase):
    """BreadcrumbList schema for navigation."""
    type: str = Field(default="BreadcrumbList", alias="@type")
    itemListElement: List[BreadcrumbListItem] = Field(default_factory=list)


class BrandSchema(SchemaNode):
    """Brand built from a product manufacturer."""
    type: str = Field(default="Brand", alias="@type")
    name: str


class PersonSchema(SchemaNode):
    """Person schema for review authors."""
    type: str = Field(default="Person", alias="@type")
    name: str


class RatingSchema(SchemaNode):
    """Rating given by a single review."""
    type: str = Field(default="Rating", alias="@type")
    ratingValue: int


class AggregateRatingSchema(SchemaNode):
    """AggregateRating schema for product reviews."""
    type: str = Field(default="AggregateRating", alias="@type")
    ratingValue: str
    reviewCount: int = Field(ge=0)


class ReviewSchema(SchemaNode):
    """Review schema."""
    type: str = Field(default="Review", alias="@type")
    name: str
    reviewBody: str
    reviewRating: RatingSchema
    author: PersonSchema
    datePublished: str


class OfferSchema(SchemaNode):
    """Offer schema for product pricing."""
    type: str = Field(default="Offer", alias="@type")
    url: str
    price: Optional[str] = None  # omitted for call-for-price products
    priceCurrency: str
    priceValidUntil: Optional[datetime] = None
    availability: str  # https://schema.org/InStock or OutOfStock


class ProductSchema(SchemaBase):
    """Product schema for e-commerce."""
    type: str = Field(default="Product", alias="@type")
    name: str
    sku: Optional[str] = None
    gtin: Optional[str] = None
    mpn: Optional[str] = None  # Manufacturer Part Number
    description: Optional[str] = None
    image: Optional[str] = None
    brand: List[BrandSchema] = Field(default_factory=list)
    aggregateRating: Optional[AggregateRatingSchema] = None
    offers: OfferSchema
    isSimilarTo: List["ProductSchema"] = Field(default_factory=list)
    review: List[ReviewSchema] = Field(default_factory=list)
