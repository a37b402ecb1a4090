"""Typed per-resource operations over the backend API."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from masterdesk.client.client import MasterDataClient

EntityT = TypeVar("EntityT", bound=BaseModel)
EntityT_co = TypeVar("EntityT_co", covariant=True)


class ResourceAPI(Protocol[EntityT_co]):
    """The four operations the core consumes for a resource."""

    name: str

    async def list(self, filter_text: str = "") -> Sequence[EntityT_co]: ...

    async def get(self, entity_id: str) -> EntityT_co: ...

    async def create(self, payload: BaseModel) -> EntityT_co: ...

    async def update(self, entity_id: str, payload: BaseModel) -> EntityT_co: ...


class HttpResource(Generic[EntityT]):
    """REST resource bound to a collection path such as ``/api/Brands``."""

    def __init__(
        self,
        client: "MasterDataClient",
        name: str,
        path: str,
        entity_type: type[EntityT],
    ) -> None:
        self.name = name
        self._client = client
        self._path = path
        self._entity_type = entity_type

    def __repr__(self) -> str:
        return f"HttpResource({self.name!r}, {self._path!r})"

    def _parse(self, data: Any) -> EntityT:
        return self._entity_type.model_validate(data)

    async def list(self, filter_text: str = "") -> list[EntityT]:
        """List entities whose name matches ``filter_text``."""
        data = await self._client.request("GET", self._path, params={"search": filter_text})
        return [self._parse(item) for item in data or []]

    async def get(self, entity_id: str) -> EntityT:
        """Fetch a single entity by ID."""
        data = await self._client.request("GET", f"{self._path}/{entity_id}")
        return self._parse(data)

    async def create(self, payload: BaseModel) -> EntityT:
        """Create an entity.

        Some endpoints answer with the new ID only; the entity is then
        fetched so callers always get the canonical record back.
        """
        data = await self._client.request(
            "POST", self._path, json=payload.model_dump(mode="json", by_alias=True)
        )
        if isinstance(data, str):
            return await self.get(data)
        return self._parse(data)

    async def update(self, entity_id: str, payload: BaseModel) -> EntityT:
        """Replace an entity's editable fields."""
        data = await self._client.request(
            "PUT",
            f"{self._path}/{entity_id}",
            json=payload.model_dump(mode="json", by_alias=True),
        )
        if not data:
            return await self.get(entity_id)
        return self._parse(data)
