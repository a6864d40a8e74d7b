"""Layers package initialization."""
from app.layers.url_resolver import (
    ConnectionSecurityProbe,
    EntityType,
    RouteUrlResolver,
    StaticSecurityProbe,
    UrlResolver,
    resolve_many,
    scheme_for,
)
from app.layers.hooks import DocumentHooks

__all__ = [
    "ConnectionSecurityProbe",
    "EntityType",
    "RouteUrlResolver",
    "StaticSecurityProbe",
    "UrlResolver",
    "resolve_many",
    "scheme_for",
    "DocumentHooks",
]
