"""
Configuration management for the catalog JSON-LD service.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""
    
    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    
    # Storefront host used when building absolute entity URLs
    STORE_HOST: str = os.getenv("STORE_HOST", "localhost")
    # Trust X-Forwarded-Proto when probing connection security (behind a proxy)
    USE_FORWARDED_PROTO: bool = os.getenv("USE_FORWARDED_PROTO", "false").lower() == "true"
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")  # json or console
    
    # JSON-LD assembly
    JSONLD_MAX_SIMILAR_DEPTH: int = int(os.getenv("JSONLD_MAX_SIMILAR_DEPTH", "5"))
    JSONLD_CONCURRENT_URL_RESOLUTION: bool = (
        os.getenv("JSONLD_CONCURRENT_URL_RESOLUTION", "false").lower() == "true"
    )
    JSONLD_HOOK_FAILURE_POLICY: str = os.getenv("JSONLD_HOOK_FAILURE_POLICY", "raise")  # raise or isolate
    
    @classmethod
    def is_hook_isolation_enabled(cls) -> bool:
        """Check if failing post-process hooks are logged instead of raised."""
        return cls.JSONLD_HOOK_FAILURE_POLICY.lower() == "isolate"


config = Config()
