"""Exceptions raised while assembling JSON-LD documents."""
from typing import Any, Dict, Optional


class JsonLdError(Exception):
    """Base exception for JSON-LD assembly."""

    def __init__(
        self,
        message: str,
        code: str = "JSONLD_000",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ResolutionError(JsonLdError):
    """An entity URL could not be resolved. Aborts the whole assembly."""

    def __init__(
        self,
        message: str,
        code: str = "JSONLD_404",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class MalformedInputError(JsonLdError):
    """Input view model cannot produce a well-formed document."""

    def __init__(
        self,
        message: str,
        code: str = "JSONLD_400",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class HookError(JsonLdError):
    """A post-process subscriber failed."""

    def __init__(
        self,
        message: str,
        code: str = "JSONLD_500",
        hook_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        d = details or {}
        if hook_name is not None:
            d["hook"] = hook_name
        super().__init__(message, code, d)
