"""
URL resolution for catalog entities.

Assemblers never build URLs themselves. They ask a ``UrlResolver`` for the
canonical absolute URL of an entity given its slug and the scheme the
current connection uses.
"""
import asyncio
import re
from enum import Enum
from typing import Dict, Iterable, List, Optional, Protocol, Set, Tuple

from app.errors import ResolutionError
from app.utils.logger import LayerLogger

# Any script: a letter or digit, then letters, digits, "-" or "_"
SLUG_PATTERN = re.compile(r"[^\W_][\w\-]*")
SUPPORTED_SCHEMES = ("http", "https")


class EntityType(str, Enum):
    """Routable catalog entities."""
    CATEGORY = "category"
    PRODUCT = "product"


class UrlResolver(Protocol):
    """Resolves a canonical absolute URL for an entity."""

    async def resolve_url(self, entity_type: EntityType, params: Dict[str, str], scheme: str) -> str:
        ...


class ConnectionSecurityProbe(Protocol):
    """Tells whether the current connection is secured."""

    def is_secured(self) -> bool:
        ...


class StaticSecurityProbe:
    """Probe with a fixed answer, for callers that already know the scheme."""

    def __init__(self, secured: bool = True):
        self.secured = secured

    def is_secured(self) -> bool:
        return self.secured


def scheme_for(probe: ConnectionSecurityProbe) -> str:
    """URL scheme to resolve with: https on secured connections, else http."""
    return "https" if probe.is_secured() else "http"


class RouteUrlResolver:
    """
    Generic slug route of the storefront: ``{scheme}://{host}/{slug}``.
    
    Every routable entity shares one URL namespace, so the entity type only
    matters when a registry of known slugs is supplied. With a registry,
    slugs that have no record for the entity type fail to resolve.
    """
    
    def __init__(
        self,
        store_host: str,
        known_slugs: Optional[Iterable[Tuple[EntityType, str]]] = None,
    ):
        self.store_host = store_host.strip().rstrip("/")
        self.logger = LayerLogger("url_resolver")
        self.known_slugs: Optional[Set[Tuple[EntityType, str]]] = (
            {(EntityType(entity_type), slug) for entity_type, slug in known_slugs}
            if known_slugs is not None else None
        )
    
    def register(self, entity_type: EntityType, slug: str):
        """Add a slug record to the registry (creating it if needed)."""
        if self.known_slugs is None:
            self.known_slugs = set()
        self.known_slugs.add((EntityType(entity_type), slug))
    
    async def resolve_url(self, entity_type: EntityType, params: Dict[str, str], scheme: str) -> str:
        """
        Resolve the absolute URL for an entity slug.
        
        Raises:
            ResolutionError: unsupported scheme, missing or invalid slug, or
                slug unknown to the registry
        """
        slug = (params or {}).get("slug")
        details = {"entity_type": str(getattr(entity_type, "value", entity_type)), "slug": slug, "scheme": scheme}
        try:
            entity_type = EntityType(entity_type)
        except ValueError:
            raise ResolutionError(f"Unknown entity type: {entity_type!r}", details=details)
        
        if scheme not in SUPPORTED_SCHEMES:
            raise ResolutionError(f"Unsupported URL scheme: {scheme!r}", details=details)
        if not self.store_host:
            raise ResolutionError("Store host is not configured", details=details)
        if not slug or not SLUG_PATTERN.fullmatch(slug):
            self.logger.log_error(f"Invalid slug: {slug!r}", error_type="resolution", **details)
            raise ResolutionError(f"Cannot route slug {slug!r}", details=details)
        if self.known_slugs is not None and (entity_type, slug) not in self.known_slugs:
            self.logger.log_error(f"Unknown slug: {slug!r}", error_type="resolution", **details)
            raise ResolutionError(f"No {details['entity_type']} is routed at {slug!r}", details=details)
        
        return f"{scheme}://{self.store_host}/{slug}"


async def resolve_many(
    resolver: UrlResolver,
    requests: List[Tuple[EntityType, str]],
    scheme: str,
    concurrent: bool = False,
) -> List[str]:
    """
    Resolve several ``(entity_type, slug)`` pairs, results in request order.
    
    Sequential by default. With ``concurrent`` the lookups run as tasks; on
    the first failure the remaining ones are cancelled and awaited before the
    error is raised, so nothing keeps running after the caller sees it.
    """
    if concurrent:
        tasks = [
            asyncio.ensure_future(resolver.resolve_url(entity_type, {"slug": slug}, scheme))
            for entity_type, slug in requests
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
    
    urls = []
    for entity_type, slug in requests:
        urls.append(await resolver.resolve_url(entity_type, {"slug": slug}, scheme))
    return urls
