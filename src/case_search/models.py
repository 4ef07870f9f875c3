from dataclasses import dataclass


@dataclass
class QueryMetrics:
    """Track hit/miss metrics for cached query operations."""

    total_queries: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    upstream_failures: int = 0
    total_lookup_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_queries == 0:
            return 0.0
        return self.cache_hits / self.total_queries

    @property
    def avg_lookup_time_ms(self) -> float:
        """Calculate average lookup time."""
        if self.total_queries == 0:
            return 0.0
        return self.total_lookup_time_ms / self.total_queries

    def record_hit(self, lookup_time_ms: float) -> None:
        """Record a cache hit."""
        self.total_queries += 1
        self.cache_hits += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_miss(self, lookup_time_ms: float) -> None:
        """Record a cache miss that was computed successfully."""
        self.total_queries += 1
        self.cache_misses += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_upstream_failure(self) -> None:
        """Record a miss that failed because the corpus could not be fetched."""
        self.upstream_failures += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_queries": self.total_queries,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "upstream_failures": self.upstream_failures,
            "hit_rate": self.hit_rate,
            "avg_lookup_time_ms": self.avg_lookup_time_ms,
        }
