"""Cache key and snapshot models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from masterdesk.errors import FetchError


class QueryKey(BaseModel):
    """Identity of a cached query.

    Keys compare and hash structurally, so two selectors asking for the
    same resource and filter share one cache slot.
    """

    model_config = ConfigDict(frozen=True)

    resource: str = Field(..., min_length=1, description="Resource name, e.g. 'brands'")
    filter_text: str = Field(default="", description="Free-text search filter")
    cursor: str | None = Field(default=None, description="Pagination cursor")
    entity_id: str | None = Field(default=None, description="Set for single-entity lookups")

    @classmethod
    def search(cls, resource: str, filter_text: str = "", cursor: str | None = None) -> "QueryKey":
        """Key for a filtered list query."""
        return cls(resource=resource, filter_text=filter_text, cursor=cursor)

    @classmethod
    def detail(cls, resource: str, entity_id: str) -> "QueryKey":
        """Key for a single-entity query."""
        return cls(resource=resource, entity_id=entity_id)

    @property
    def is_detail(self) -> bool:
        return self.entity_id is not None


class CacheStatus(str, Enum):
    """Lifecycle of a cache entry."""

    PENDING = "pending"  # Nothing fetched yet
    READY = "ready"  # Last fetch succeeded
    ERROR = "error"  # Last fetch failed; value may hold older data


class Option(BaseModel):
    """A selectable choice projected from a remote entity."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class CacheEntry(BaseModel):
    """Immutable snapshot of a query's latest known state.

    ``value`` is a tuple of ``Option`` for list queries and the entity
    itself for detail queries. On ERROR it still carries the value of the
    last successful fetch, if any.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: QueryKey
    status: CacheStatus = CacheStatus.PENDING
    value: Any = None
    fetched_at: float | None = None
    error: FetchError | None = None

    @property
    def has_value(self) -> bool:
        return self.value is not None

    @property
    def options(self) -> tuple[Option, ...]:
        """The value as an option tuple, empty when nothing is loaded."""
        if self.value is None:
            return ()
        return tuple(self.value)
