"""
Unit tests for catalog item API endpoints.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from internal.domain.errors import RepositoryError
from internal.transport.http.middleware import RequestIdMiddleware
from internal.transport.http.v1.handlers import router, set_dependencies, system_router
from internal.usecase.create_item import CreateItemUseCase
from internal.usecase.query_items import QueryItemsUseCase
from internal.usecase.update_item import UpdateItemUseCase


@pytest.fixture
def app(store, notifier):
    """Application wired to the in-memory store."""
    set_dependencies(
        create_use_case=CreateItemUseCase(store=store, notifier=notifier),
        update_use_case=UpdateItemUseCase(store=store, notifier=notifier),
        query_use_case=QueryItemsUseCase(store=store),
    )
    application = FastAPI()
    application.add_middleware(RequestIdMiddleware)
    application.include_router(router)
    application.include_router(system_router)
    yield application
    set_dependencies(None, None, None)


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


ITEM_BODY = {
    "name": "Wireless Mouse",
    "code": "mouse-001",
    "description": "2.4 GHz optical mouse",
    "price": "59.90",
    "category": "peripherals",
}


class TestCreateItemEndpoint:
    """Tests for POST /api/v1/items."""

    @pytest.mark.asyncio
    async def test_create_returns_201(self, app, notifier):
        async with _client(app) as client:
            response = await client.post("/api/v1/items", json=ITEM_BODY)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["code"] == "MOUSE-001"
        assert data["active"] is True
        assert data["formatted_price"] == "R$ 59,90"
        assert data["category_code"] == "PERIPHERALS-MOUSE-001"
        notifier.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_duplicate_returns_409(self, app):
        async with _client(app) as client:
            await client.post("/api/v1/items", json=ITEM_BODY)
            response = await client.post("/api/v1/items", json=ITEM_BODY)

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "duplicate_code"

    @pytest.mark.asyncio
    async def test_create_invalid_name_returns_400(self, app):
        async with _client(app) as client:
            response = await client.post(
                "/api/v1/items",
                json={**ITEM_BODY, "name": "A"},
                headers={"X-Request-ID": "req-123"},
            )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["code"] == "validation_error"
        assert detail["field"] == "name"
        assert detail["request_id"] == "req-123"
        assert response.headers["X-Request-ID"] == "req-123"

    @pytest.mark.asyncio
    async def test_create_oversized_price_returns_400(self, app, store, notifier):
        async with _client(app) as client:
            response = await client.post("/api/v1/items", json={**ITEM_BODY, "price": "1E+26"})

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "price"
        assert await store.count_all() == 0
        notifier.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_largest_price_returns_201(self, app):
        async with _client(app) as client:
            response = await client.post(
                "/api/v1/items", json={**ITEM_BODY, "price": "99999999.99"}
            )

        assert response.status_code == 201
        assert response.json()["formatted_price"] == "R$ 99999999,99"


class TestReadEndpoints:
    """Tests for item lookups and listings."""

    @pytest.mark.asyncio
    async def test_get_by_id_and_code(self, app):
        async with _client(app) as client:
            await client.post("/api/v1/items", json=ITEM_BODY)
            by_id = await client.get("/api/v1/items/1")
            by_code = await client.get("/api/v1/items/code/mouse-001")
            missing = await client.get("/api/v1/items/999")

        assert by_id.status_code == 200
        assert by_code.json()["id"] == 1
        assert missing.status_code == 404
        assert missing.json()["detail"]["code"] == "not_found"

    @pytest.mark.asyncio
    async def test_list_with_filters(self, app):
        async with _client(app) as client:
            await client.post("/api/v1/items", json=ITEM_BODY)
            await client.post(
                "/api/v1/items",
                json={**ITEM_BODY, "code": "PAD-1", "price": "15.00", "category": None},
            )
            await client.patch("/api/v1/items/2/deactivate")

            everything = await client.get("/api/v1/items")
            active = await client.get("/api/v1/items", params={"active_only": True})
            category = await client.get("/api/v1/items", params={"category": "PERIPHERALS"})
            cheap = await client.get("/api/v1/items", params={"max_price": "20.00"})

        assert everything.json()["total"] == 2
        assert [i["code"] for i in active.json()["data"]] == ["MOUSE-001"]
        assert [i["code"] for i in category.json()["data"]] == ["MOUSE-001"]
        assert [i["code"] for i in cheap.json()["data"]] == ["PAD-1"]

    @pytest.mark.asyncio
    async def test_list_with_inverted_range_returns_400(self, app):
        async with _client(app) as client:
            response = await client.get(
                "/api/v1/items", params={"min_price": "30.00", "max_price": "10.00"}
            )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "invalid_range"

    @pytest.mark.asyncio
    async def test_stats(self, app):
        async with _client(app) as client:
            await client.post("/api/v1/items", json=ITEM_BODY)
            await client.post("/api/v1/items", json={**ITEM_BODY, "code": "PAD-1"})
            await client.patch("/api/v1/items/1/deactivate")
            response = await client.get("/api/v1/items/stats")

        assert response.json() == {"total_items": 2, "active_items": 1}


class TestUpdateEndpoints:
    """Tests for item mutation endpoints."""

    @pytest.mark.asyncio
    async def test_update_fields_and_price(self, app):
        async with _client(app) as client:
            await client.post("/api/v1/items", json=ITEM_BODY)
            updated = await client.put(
                "/api/v1/items/1",
                json={"name": "Gaming Mouse", "description": None, "price": "99.00", "category": "gaming"},
            )
            repriced = await client.patch("/api/v1/items/1/price", json={"price": "89.90"})

        assert updated.status_code == 200
        assert updated.json()["name"] == "Gaming Mouse"
        assert updated.json()["code"] == "MOUSE-001"
        assert repriced.json()["formatted_price"] == "R$ 89,90"

    @pytest.mark.asyncio
    async def test_update_price_invalid_returns_400(self, app):
        async with _client(app) as client:
            await client.post("/api/v1/items", json=ITEM_BODY)
            response = await client.patch("/api/v1/items/1/price", json={"price": "1.999"})

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "price"

    @pytest.mark.asyncio
    async def test_update_missing_item_returns_404(self, app):
        async with _client(app) as client:
            response = await client.patch("/api/v1/items/999/price", json={"price": "1.00"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_activate_and_deactivate(self, app):
        async with _client(app) as client:
            await client.post("/api/v1/items", json=ITEM_BODY)
            deactivated = await client.patch("/api/v1/items/1/deactivate")
            activated = await client.patch("/api/v1/items/1/activate")

        assert deactivated.json()["active"] is False
        assert activated.json()["active"] is True


class TestErrorsAndSystemEndpoints:
    """Tests for store failures, uninitialized service and system routes."""

    @pytest.mark.asyncio
    async def test_repository_error_returns_503(self, app):
        failing_query = MagicMock(spec=QueryItemsUseCase)
        failing_query.count_all = AsyncMock(side_effect=RepositoryError("Failed to count all"))
        set_dependencies(
            create_use_case=None,
            update_use_case=None,
            query_use_case=failing_query,
        )

        async with _client(app) as client:
            response = await client.get("/api/v1/items/stats")

        assert response.status_code == 503
        assert response.json()["detail"]["code"] == "repository_error"

    @pytest.mark.asyncio
    async def test_uninitialized_service_returns_503(self, app):
        set_dependencies(None, None, None)

        async with _client(app) as client:
            response = await client.post("/api/v1/items", json=ITEM_BODY)

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_health_and_metrics(self, app):
        async with _client(app) as client:
            health = await client.get("/health")
            metrics = await client.get("/metrics")

        assert health.json()["status"] == "healthy"
        assert metrics.status_code == 200
        assert "catalog_item_mutations_total" in metrics.text
