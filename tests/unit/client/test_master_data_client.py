"""Unit tests for MasterDataClient using httpx.MockTransport."""

import json

import httpx
import pytest

from masterdesk.client.client import MasterDataClient
from masterdesk.client.models import Brand, Product, ProductPayload, ProvincePayload
from masterdesk.config.models.api import APIConfig
from masterdesk.errors import RequestFailed

PRODUCT_JSON = {
    "id": "p-1",
    "name": "Anvil",
    "brandId": "42",
    "brandName": "Acme",
    "description": "Heavy",
    "price": 2500,
    "quantity": 3,
}


def make_client(handler, token: str | None = None) -> MasterDataClient:
    return MasterDataClient(
        base_url="http://backend.test/api/be",
        token=token,
        transport=httpx.MockTransport(handler),
    )


class TestList:
    """Tests for list()."""

    @pytest.mark.asyncio
    async def test_list_sends_search_param(self) -> None:
        """list() queries the collection with ?search=."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": "1", "name": "Acme"}])

        async with make_client(handler) as client:
            brands = await client.brands.list("ac")

        assert brands == [Brand(id="1", name="Acme")]
        assert seen[0].url.path == "/api/be/api/Brands"
        assert seen[0].url.params["search"] == "ac"

    @pytest.mark.asyncio
    async def test_list_empty_body(self) -> None:
        """An empty response is an empty list."""
        async with make_client(lambda r: httpx.Response(204)) as client:
            assert await client.provinces.list() == []


class TestGetCreateUpdate:
    """Tests for get, create and update."""

    @pytest.mark.asyncio
    async def test_get_parses_camel_case(self) -> None:
        """Entities are read from camelCase JSON."""
        async with make_client(lambda r: httpx.Response(200, json=PRODUCT_JSON)) as client:
            product = await client.products.get("p-1")

        assert isinstance(product, Product)
        assert product.brand_id == "42"
        assert product.brand_name == "Acme"

    @pytest.mark.asyncio
    async def test_update_sends_camel_case_payload(self) -> None:
        """update() PUTs the aliased payload."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=PRODUCT_JSON)

        payload = ProductPayload(
            name="Anvil", brand_id="42", description="Heavy", price=2500, quantity=3
        )
        async with make_client(handler) as client:
            await client.products.update("p-1", payload)

        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/api/be/api/Products/p-1"
        body = json.loads(seen[0].content)
        assert body["brandId"] == "42"
        assert "brand_id" not in body

    @pytest.mark.asyncio
    async def test_update_without_body_refetches(self) -> None:
        """A 204 update is followed by a GET of the entity."""
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.method)
            if request.method == "PUT":
                return httpx.Response(204)
            return httpx.Response(200, json={"id": "7", "name": "Aceh"})

        async with make_client(handler) as client:
            province = await client.provinces.update("7", ProvincePayload(name="Aceh"))

        assert calls == ["PUT", "GET"]
        assert province.name == "Aceh"

    @pytest.mark.asyncio
    async def test_create_returning_id_refetches(self) -> None:
        """A create answered with a bare ID fetches the new entity."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(201, json="p-1")
            return httpx.Response(200, json=PRODUCT_JSON)

        payload = ProductPayload(
            name="Anvil", brand_id="42", description="Heavy", price=2500, quantity=3
        )
        async with make_client(handler) as client:
            product = await client.products.create(payload)

        assert product.id == "p-1"


class TestErrors:
    """Tests for failure mapping."""

    @pytest.mark.asyncio
    async def test_http_error_raises_request_failed(self) -> None:
        """Non-2xx responses raise RequestFailed with status and message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"title": "Name is required"})

        async with make_client(handler) as client:
            with pytest.raises(RequestFailed) as exc_info:
                await client.provinces.update("1", ProvincePayload(name="x"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Name is required"

    @pytest.mark.asyncio
    async def test_plain_text_error(self) -> None:
        """Non-JSON error bodies become the message."""
        async with make_client(lambda r: httpx.Response(500, text="boom")) as client:
            with pytest.raises(RequestFailed) as exc_info:
                await client.brands.list()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "boom"

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self) -> None:
        """Connection failures surface as RequestFailed without a status."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(RequestFailed) as exc_info:
                await client.brands.list()

        assert exc_info.value.status_code is None


class TestHeaders:
    """Tests for request headers."""

    @pytest.mark.asyncio
    async def test_bearer_token_attached(self) -> None:
        """A configured token is sent as a bearer header."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with make_client(handler, token="abc") as client:
            await client.brands.list()

        assert seen[0].headers["Authorization"] == "Bearer abc"

    def test_from_config(self) -> None:
        """Clients are built from the api settings section."""
        client = MasterDataClient.from_config(APIConfig(base_url="http://x.test/be/"))
        assert client.base_url == "http://x.test/be"
