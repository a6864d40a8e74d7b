"""
JSON-LD generator for catalog pages.
Entry point used by the API: picks the URL scheme, validates input and
delegates to the breadcrumb and product assemblers.
"""
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from app.config import config
from app.errors import MalformedInputError
from app.generators.breadcrumb import BreadcrumbAssembler
from app.generators.product import ProductGraphAssembler
from app.layers.hooks import DocumentHooks
from app.layers.url_resolver import ConnectionSecurityProbe, UrlResolver, scheme_for
from app.models.catalog import CategorySimpleModel, ProductBreadcrumbModel, ProductDetailsModel
from app.models.schema import BreadcrumbListSchema, ProductSchema
from app.utils.logger import LayerLogger

ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_model(model_cls: Type[ModelT], value: Union[ModelT, Dict[str, Any]]) -> ModelT:
    """Accept a model instance or raw dict; raw dicts are validated."""
    if isinstance(value, model_cls):
        return value
    try:
        return model_cls.model_validate(value)
    except ValidationError as e:
        raise MalformedInputError(
            f"Invalid {model_cls.__name__}: {e.error_count()} validation error(s)",
            details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
        ) from e


class JsonLdGenerator:
    """
    Structured data for category and product pages.
    
    Principles:
    - Only output fields supported by the view model
    - Scheme comes from the caller's connection, never global state
    - Any resolution failure fails the document; nothing partial is returned
    """
    
    def __init__(
        self,
        resolver: UrlResolver,
        hooks: Optional[DocumentHooks] = None,
        max_depth: Optional[int] = None,
        concurrent: Optional[bool] = None,
    ):
        self.hooks = hooks if hooks is not None else DocumentHooks()
        concurrent = config.JSONLD_CONCURRENT_URL_RESOLUTION if concurrent is None else concurrent
        self.breadcrumbs = BreadcrumbAssembler(resolver, self.hooks, concurrent=concurrent)
        self.products = ProductGraphAssembler(
            resolver,
            self.hooks,
            max_depth=config.JSONLD_MAX_SIMILAR_DEPTH if max_depth is None else max_depth,
            concurrent=concurrent,
        )
        self.logger = LayerLogger("jsonld_generator")
    
    async def prepare_category_breadcrumb(
        self,
        category_breadcrumb: Sequence[Union[CategorySimpleModel, Dict[str, Any]]],
        probe: ConnectionSecurityProbe,
    ) -> BreadcrumbListSchema:
        """BreadcrumbList for a category page."""
        chain: List[CategorySimpleModel] = [
            coerce_model(CategorySimpleModel, category) for category in category_breadcrumb
        ]
        return await self.breadcrumbs.assemble_category_breadcrumb(chain, scheme_for(probe))
    
    async def prepare_product_breadcrumb(
        self,
        breadcrumb_model: Union[ProductBreadcrumbModel, Dict[str, Any]],
        probe: ConnectionSecurityProbe,
    ) -> Optional[BreadcrumbListSchema]:
        """BreadcrumbList for a product page, or None when the breadcrumb is disabled."""
        model = coerce_model(ProductBreadcrumbModel, breadcrumb_model)
        if not model.enabled:
            self.logger.log_decision(
                decision="skip_product_breadcrumb",
                reason="breadcrumb disabled for product",
                product_id=model.product_id,
            )
            return None
        return await self.breadcrumbs.assemble_product_breadcrumb(model, scheme_for(probe))
    
    async def prepare_product(
        self,
        product_model: Union[ProductDetailsModel, Dict[str, Any]],
        probe: ConnectionSecurityProbe,
    ) -> ProductSchema:
        """Product document for a product details page."""
        model = coerce_model(ProductDetailsModel, product_model)
        return await self.products.assemble_product(model, scheme_for(probe))
