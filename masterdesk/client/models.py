"""Entity and payload models exchanged with the master-data backend.

The backend speaks camelCase JSON; models accept either the alias or the
Python field name and dump with aliases.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for all wire models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Brand(ApiModel):
    """A product brand."""

    id: str
    name: str


class Province(ApiModel):
    """A province reference record."""

    id: str
    name: str


class Product(ApiModel):
    """A product as returned by the detail and list endpoints.

    ``brand_name`` is embedded by the detail endpoint so an edit form can
    label the current brand before any brand search has run.
    """

    id: str
    name: str
    brand_id: str
    description: str
    price: float
    quantity: int
    brand_name: str | None = Field(default=None)


class ProductPayload(ApiModel):
    """Validated body for creating or updating a product."""

    name: str
    brand_id: str
    description: str
    price: float
    quantity: int


class ProvincePayload(ApiModel):
    """Validated body for creating or updating a province."""

    name: str
