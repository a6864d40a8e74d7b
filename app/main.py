"""
Catalog JSON-LD service - FastAPI application
Main entry point with REST API endpoints.
"""
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from app.config import config
from app.errors import JsonLdError, MalformedInputError, ResolutionError
from app.generators.jsonld_generator import JsonLdGenerator
from app.layers.hooks import DocumentHooks
from app.layers.url_resolver import RouteUrlResolver
from app.models.catalog import CategorySimpleModel, ProductBreadcrumbModel, ProductDetailsModel
from app.models.schema import SchemaBase
from app.utils.logger import get_logger, set_trace_id


# Initialize FastAPI app
app = FastAPI(
    title="Catalog JSON-LD Service",
    description="Builds schema.org BreadcrumbList and Product JSON-LD for storefront pages",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize components
document_hooks = DocumentHooks()
url_resolver = RouteUrlResolver(store_host=config.STORE_HOST)
jsonld_generator = JsonLdGenerator(resolver=url_resolver, hooks=document_hooks)

logger = get_logger("main")


class RequestSecurityProbe:
    """Connection security of an incoming request."""
    
    def __init__(self, request: Request, use_forwarded_proto: Optional[bool] = None):
        self.request = request
        self.use_forwarded_proto = (
            config.USE_FORWARDED_PROTO if use_forwarded_proto is None else use_forwarded_proto
        )
    
    def is_secured(self) -> bool:
        if self.use_forwarded_proto:
            forwarded = self.request.headers.get("x-forwarded-proto")
            if forwarded:
                return forwarded.split(",")[0].strip().lower() == "https"
        return self.request.url.scheme == "https"


# Response models
class JsonLdResponse(BaseModel):
    """Response model for JSON-LD generation."""
    jsonld: Optional[Dict[str, Any]] = None
    script_tag: Optional[str] = None
    trace_id: str


def _to_response(document: Optional[SchemaBase], trace_id: str) -> JsonLdResponse:
    if document is None:
        return JsonLdResponse(trace_id=trace_id)
    return JsonLdResponse(
        jsonld=document.to_jsonld(),
        script_tag=document.to_script_tag(),
        trace_id=trace_id,
    )


def _to_http_error(error: JsonLdError) -> HTTPException:
    """Map assembly errors to HTTP status codes."""
    if isinstance(error, ResolutionError):
        status_code = 404
    elif isinstance(error, MalformedInputError):
        status_code = 400
    else:
        status_code = 500
    return HTTPException(
        status_code=status_code,
        detail={"code": error.code, "message": error.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are malformed input: 400, same shape as other errors."""
    errors = exc.errors()
    logger.error("request_validation_error", path=request.url.path, errors_count=len(errors))
    return JSONResponse(
        status_code=400,
        content={
            "detail": {
                "code": MalformedInputError("").code,
                "message": f"Invalid request body: {len(errors)} validation error(s)",
                "errors": [
                    {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                    for error in errors
                ],
            }
        },
    )


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.post("/api/jsonld/breadcrumb/category")
async def category_breadcrumb(category_breadcrumb: List[CategorySimpleModel], request: Request):
    """BreadcrumbList for a category page. Body: the category chain, root first."""
    trace_id = set_trace_id()
    
    logger.info("category_breadcrumb_request", steps=len(category_breadcrumb), trace_id=trace_id)
    
    try:
        breadcrumb = await jsonld_generator.prepare_category_breadcrumb(
            category_breadcrumb, RequestSecurityProbe(request)
        )
    except JsonLdError as e:
        logger.error("category_breadcrumb_error", error=str(e), code=e.code)
        raise _to_http_error(e)
    
    return _to_response(breadcrumb, trace_id)


@app.post("/api/jsonld/breadcrumb/product")
async def product_breadcrumb(breadcrumb_model: ProductBreadcrumbModel, request: Request):
    """
    BreadcrumbList for a product page.
    
    Returns an empty response (no jsonld) when the breadcrumb is disabled.
    """
    trace_id = set_trace_id()
    
    logger.info(
        "product_breadcrumb_request",
        product_id=breadcrumb_model.product_id,
        steps=len(breadcrumb_model.category_breadcrumb),
        trace_id=trace_id,
    )
    
    try:
        breadcrumb = await jsonld_generator.prepare_product_breadcrumb(
            breadcrumb_model, RequestSecurityProbe(request)
        )
    except JsonLdError as e:
        logger.error("product_breadcrumb_error", error=str(e), code=e.code)
        raise _to_http_error(e)
    
    return _to_response(breadcrumb, trace_id)


@app.post("/api/jsonld/product")
async def product_jsonld(product_model: ProductDetailsModel, request: Request):
    """Product rich snippet, including similar products and reviews."""
    trace_id = set_trace_id()
    
    logger.info(
        "product_jsonld_request",
        product_id=product_model.id,
        associated_products=len(product_model.associated_products),
        trace_id=trace_id,
    )
    
    try:
        product = await jsonld_generator.prepare_product(product_model, RequestSecurityProbe(request))
    except JsonLdError as e:
        logger.error("product_jsonld_error", error=str(e), code=e.code)
        raise _to_http_error(e)
    
    return _to_response(product, trace_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
