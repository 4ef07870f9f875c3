import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from case_search.entities.page import MAX_PAGE_SIZE

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Wikidata
    wikidata_sparql_url: str = os.getenv("WIKIDATA_SPARQL_URL", "https://query.wikidata.org/sparql")
    wikidata_user_agent: str = os.getenv("WIKIDATA_USER_AGENT", "CaseSearch/1.0")
    wikidata_max_results: int = int(os.getenv("WIKIDATA_MAX_RESULTS", "5000"))
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "30"))

    # Cache
    cache_max_entries: int = int(os.getenv("CACHE_MAX_ENTRIES", "100"))
    cache_default_ttl: float = float(os.getenv("CACHE_DEFAULT_TTL", "3600"))  # 1 hour
    corpus_cache_ttl: float = float(os.getenv("CORPUS_CACHE_TTL", "3600"))  # 1 hour
    query_cache_ttl: float = float(os.getenv("QUERY_CACHE_TTL", "300"))  # 5 minutes
    cache_sweep_interval: float = float(os.getenv("CACHE_SWEEP_INTERVAL", "300"))

    # Pagination
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "50"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "9090"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    cors_origin: str = os.getenv("CORS_ORIGIN", "http://localhost:5173")
    environment: str = os.getenv("ENVIRONMENT", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_max_entries < 1:
            raise ValueError("CACHE_MAX_ENTRIES must be at least 1")

        for name in ("cache_default_ttl", "corpus_cache_ttl", "query_cache_ttl", "cache_sweep_interval"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be greater than 0")

        if self.corpus_cache_ttl < self.query_cache_ttl:
            raise ValueError("CORPUS_CACHE_TTL must not be shorter than QUERY_CACHE_TTL")

        if not 1 <= self.max_page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"MAX_PAGE_SIZE must be between 1 and {MAX_PAGE_SIZE}, got {self.max_page_size}")

        if not 1 <= self.default_page_size <= self.max_page_size:
            raise ValueError(
                f"DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE ({self.max_page_size}), "
                f"got {self.default_page_size}"
            )

        if self.upstream_timeout <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be greater than 0")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
