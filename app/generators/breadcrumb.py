"""
BreadcrumbList assembly for category and product pages.
"""
from typing import List, Optional, Sequence

from app.layers.hooks import DocumentHooks
from app.layers.url_resolver import EntityType, UrlResolver, resolve_many
from app.models.catalog import CategorySimpleModel, ProductBreadcrumbModel
from app.models.schema import BreadcrumbItemSchema, BreadcrumbListItem, BreadcrumbListSchema
from app.utils.logger import LayerLogger


class BreadcrumbAssembler:
    """
    Builds BreadcrumbList documents from a category chain (root first).
    
    Positions are 1-based and follow the chain; a product page appends the
    product as the last step. URLs come from the resolver, and a failure on
    any step fails the whole list.
    """
    
    def __init__(
        self,
        resolver: UrlResolver,
        hooks: Optional[DocumentHooks] = None,
        concurrent: bool = False,
    ):
        self.resolver = resolver
        self.hooks = hooks if hooks is not None else DocumentHooks()
        self.concurrent = concurrent
        self.logger = LayerLogger("breadcrumb_assembler")
    
    async def _build_list(
        self,
        category_chain: Sequence[CategorySimpleModel],
        scheme: str,
    ) -> BreadcrumbListSchema:
        urls = await resolve_many(
            self.resolver,
            [(EntityType.CATEGORY, category.se_name) for category in category_chain],
            scheme,
            concurrent=self.concurrent,
        )
        
        items: List[BreadcrumbListItem] = []
        for position, (category, url) in enumerate(zip(category_chain, urls), start=1):
            items.append(BreadcrumbListItem(
                position=position,
                item=BreadcrumbItemSchema(id=url, name=category.name),
            ))
        
        return BreadcrumbListSchema(itemListElement=items)
    
    async def assemble_category_breadcrumb(
        self,
        category_chain: Sequence[CategorySimpleModel],
        scheme: str,
    ) -> BreadcrumbListSchema:
        """Breadcrumb for a category page."""
        self.logger.log_action("category_breadcrumb", "started", steps=len(category_chain), scheme=scheme)
        
        breadcrumb = await self._build_list(category_chain, scheme)
        await self.hooks.notify(breadcrumb)
        
        self.logger.log_action("category_breadcrumb", "completed", items=len(breadcrumb.itemListElement))
        return breadcrumb
    
    async def assemble_product_breadcrumb(
        self,
        breadcrumb_model: ProductBreadcrumbModel,
        scheme: str,
    ) -> BreadcrumbListSchema:
        """Breadcrumb for a product page: the category chain plus the product."""
        self.logger.log_action(
            "product_breadcrumb",
            "started",
            steps=len(breadcrumb_model.category_breadcrumb),
            product_id=breadcrumb_model.product_id,
            scheme=scheme,
        )
        
        breadcrumb = await self._build_list(breadcrumb_model.category_breadcrumb, scheme)
        product_url = await self.resolver.resolve_url(
            EntityType.PRODUCT,
            {"slug": breadcrumb_model.product_se_name},
            scheme,
        )
        breadcrumb.itemListElement.append(BreadcrumbListItem(
            position=len(breadcrumb.itemListElement) + 1,
            item=BreadcrumbItemSchema(id=product_url, name=breadcrumb_model.product_name),
        ))
        await self.hooks.notify(breadcrumb)
        
        self.logger.log_action("product_breadcrumb", "completed", items=len(breadcrumb.itemListElement))
        return breadcrumb
