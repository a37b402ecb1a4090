"""Master-data API client.

Usage:
    from masterdesk.client import MasterDataClient

    async with MasterDataClient(base_url="http://localhost:3000/api/be") as client:
        brands = await client.brands.list("acme")
"""

from masterdesk.client.client import MasterDataClient
from masterdesk.client.models import (
    Brand,
    Product,
    ProductPayload,
    Province,
    ProvincePayload,
)
from masterdesk.client.resources import HttpResource, ResourceAPI
from masterdesk.errors import RequestFailed

__all__ = [
    "Brand",
    "HttpResource",
    "MasterDataClient",
    "Product",
    "ProductPayload",
    "Province",
    "ProvincePayload",
    "RequestFailed",
    "ResourceAPI",
]
