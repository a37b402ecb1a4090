"""Query cache and searchable selector configuration models."""

from pydantic import BaseModel, Field


class CacheConfig(BaseModel):
    """Revalidating cache configuration."""

    stale_after_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Age after which a cached entry is revalidated on subscribe",
    )


class SelectionConfig(BaseModel):
    """Searchable selector configuration."""

    debounce_ms: int = Field(
        default=300,
        ge=0,
        description="Quiet period before a typed filter triggers a lookup",
    )

    @property
    def debounce_seconds(self) -> float:
        """Debounce delay in seconds."""
        return self.debounce_ms / 1000
