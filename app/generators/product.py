"""
Product rich-snippet assembly.

A grouped product lists its associated products as ``isSimilarTo``; each of
those is assembled by the same rules as the top-level product. The product
graph is walked with an explicit stack instead of recursion, so cyclic or
very deep catalog data truncates a branch rather than exhausting the stack.
"""
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from app.errors import MalformedInputError
from app.generators.pricing import effective_price, resolve_price
from app.generators.rating import normalize_rating
from app.layers.hooks import DocumentHooks
from app.layers.url_resolver import EntityType, UrlResolver, resolve_many
from app.models.catalog import ProductDetailsModel
from app.models.schema import (
    BrandSchema,
    OfferSchema,
    PersonSchema,
    ProductSchema,
    RatingSchema,
    ReviewSchema,
)
from app.utils.logger import LayerLogger

IN_STOCK = "https://schema.org/InStock"
OUT_OF_STOCK = "https://schema.org/OutOfStock"


@dataclass
class PlannedNode:
    """A product scheduled for assembly and where it hangs in the graph."""
    product: ProductDetailsModel
    depth: int
    parent: Optional[int]  # index of the parent in the plan
    ancestors: FrozenSet[int]


class ProductGraphAssembler:
    """
    Builds Product documents with nested similar products.
    
    Similar-product branches are dropped when the product already appears
    on the path from the root (a cycle) or when the branch would go deeper
    than ``max_depth`` levels below the root.
    """
    
    def __init__(
        self,
        resolver: UrlResolver,
        hooks: Optional[DocumentHooks] = None,
        max_depth: Optional[int] = None,
        concurrent: bool = False,
    ):
        self.resolver = resolver
        self.hooks = hooks if hooks is not None else DocumentHooks()
        self.max_depth = max_depth
        self.concurrent = concurrent
        self.logger = LayerLogger("product_assembler")
    
    async def assemble_product(self, product: ProductDetailsModel, scheme: str) -> ProductSchema:
        """
        Assemble the Product document for a product details page.
        
        Raises:
            ResolutionError: any product URL could not be resolved
            MalformedInputError: the product data cannot form a valid node
        """
        self.logger.log_action("product_jsonld", "started", product_id=product.id, scheme=scheme)
        
        plan = self._plan(product)
        urls = await resolve_many(
            self.resolver,
            [(EntityType.PRODUCT, planned.product.se_name) for planned in plan],
            scheme,
            concurrent=self.concurrent,
        )
        
        nodes = [self._build_node(planned.product, url) for planned, url in zip(plan, urls)]
        for index, planned in enumerate(plan):
            if planned.parent is not None:
                nodes[planned.parent].isSimilarTo.append(nodes[index])
        
        root = nodes[0]
        await self.hooks.notify(root)
        
        self.logger.log_action(
            "product_jsonld",
            "completed",
            product_id=product.id,
            nodes=len(nodes),
            similar_products=len(root.isSimilarTo),
        )
        return root
    
    def _plan(self, root: ProductDetailsModel) -> List[PlannedNode]:
        """
        Walk the associated-product graph depth first.
        
        The plan is in pre-order, so siblings keep their input order and
        sequential URL resolution happens in traversal order.
        """
        plan: List[PlannedNode] = []
        stack = [PlannedNode(product=root, depth=0, parent=None, ancestors=frozenset())]
        
        while stack:
            planned = stack.pop()
            index = len(plan)
            plan.append(planned)
            
            path = planned.ancestors | {planned.product.id}
            children = []
            for associated in planned.product.associated_products:
                if associated.id in path:
                    self.logger.log_truncation(
                        associated.id, planned.depth + 1, "cycle", parent_id=planned.product.id
                    )
                    continue
                if self.max_depth is not None and planned.depth + 1 > self.max_depth:
                    self.logger.log_truncation(
                        associated.id, planned.depth + 1, "max_depth",
                        parent_id=planned.product.id, max_depth=self.max_depth,
                    )
                    continue
                children.append(PlannedNode(
                    product=associated,
                    depth=planned.depth + 1,
                    parent=index,
                    ancestors=path,
                ))
            
            stack.extend(reversed(children))
        
        return plan
    
    def _build_node(self, product: ProductDetailsModel, url: str) -> ProductSchema:
        """Product node without similar products; those are attached afterwards."""
        price_model = product.product_price
        if not price_model.currency_code:
            raise MalformedInputError(
                f"Product {product.id} has no currency code",
                details={"product_id": product.id},
            )
        
        overview = product.product_review_overview
        has_reviews = overview.total_reviews > 0
        
        node = ProductSchema(
            name=product.name,
            sku=product.sku,
            gtin=product.gtin,
            mpn=product.manufacturer_part_number,
            description=product.short_description,
            image=product.default_picture_model.image_url,
            brand=[BrandSchema(name=manufacturer.name) for manufacturer in product.product_manufacturers],
            aggregateRating=(
                normalize_rating(overview.rating_sum, overview.total_reviews) if has_reviews else None
            ),
            offers=OfferSchema(
                url=url,
                price=resolve_price(price_model.call_for_price, effective_price(product)),
                priceCurrency=price_model.currency_code,
                priceValidUntil=product.available_end_date,
                availability=IN_STOCK if product.in_stock else OUT_OF_STOCK,
            ),
        )
        
        if has_reviews:
            node.review = [
                ReviewSchema(
                    name=review.title,
                    reviewBody=review.review_text,
                    reviewRating=RatingSchema(ratingValue=review.rating),
                    author=PersonSchema(name=review.customer_name),
                    datePublished=review.written_on_str,
                )
                for review in product.product_reviews
            ]
        
        return node
