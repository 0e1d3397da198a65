"""API tests for item endpoints."""

import pytest


class TestItemAccess:
    """Authentication and role checks."""

    async def test_list_requires_token(self, client):
        response = await client.get("/api/items")
        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_invalid_token(self, client):
        response = await client.get("/api/items", headers={"Authorization": "Bearer junk"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    async def test_user_can_read(self, client, user_headers, create_item):
        created = await create_item()
        assert (await client.get("/api/items", headers=user_headers)).status_code == 200
        response = await client.get(f"/api/items/{created['id']}", headers=user_headers)
        assert response.status_code == 200

    @pytest.mark.parametrize(
        ("method", "path", "body"),
        [
            ("POST", "/api/items", {"description": "X", "unit": "pcs", "category": "tool"}),
            ("PUT", "/api/items/1", {"unit": "box"}),
            ("DELETE", "/api/items/1", None),
            ("POST", "/api/items/1/stock-adjustment", {"type": "in", "quantity": 1}),
            ("POST", "/api/items/import", {"category": "tool", "data": []}),
        ],
    )
    async def test_user_cannot_write(self, client, user_headers, method, path, body):
        response = await client.request(method, path, json=body, headers=user_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admin only."


class TestCreateItem:
    async def test_create(self, create_item):
        body = await create_item(stockIn=10, stockOut=3, totalStock=99, history=[{"x": 1}])

        assert body["id"] > 0
        assert body["stockIn"] == 10
        assert body["stockOut"] == 3
        assert body["totalStock"] == 7
        assert body["history"] == []
        assert body["category"] == "tool"
        assert "createdAt" in body

    @pytest.mark.parametrize(
        "body",
        [
            {"unit": "pcs", "category": "tool"},
            {"description": "   ", "unit": "pcs", "category": "tool"},
            {"description": "Saw", "unit": "pcs", "category": "machine"},
            {"description": "Saw", "unit": "pcs", "category": "tool", "stockIn": -1},
            {"description": "Saw", "unit": "pcs", "category": "tool", "minStock": -1},
        ],
    )
    async def test_invalid_body(self, client, admin_headers, body):
        response = await client.post("/api/items", json=body, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("number", ["1e400", "Infinity", "NaN"])
    async def test_non_finite_counter(self, client, admin_headers, number):
        response = await client.post(
            "/api/items",
            content=(
                '{"description": "Saw", "unit": "pcs", "category": "tool", '
                f'"stockIn": {number}}}'
            ),
            headers={**admin_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        listing = await client.get("/api/items", headers=admin_headers)
        assert listing.json()["total"] == 0


class TestGetItem:
    async def test_not_found(self, client, admin_headers):
        response = await client.get("/api/items/999", headers=admin_headers)
        assert response.status_code == 404
        body = response.json()
        assert body["message"] == "Item not found"
        assert body["error_code"] == "ITEM_NOT_FOUND"
        assert body["path"] == "/api/items/999"


class TestListItems:
    async def test_filters_sort_and_paging(self, client, admin_headers, create_item):
        await create_item(description="Chisel", stockIn=100, stockOut=20)
        await create_item(description="Angle grinder", stockIn=100, stockOut=90)
        await create_item(description="Bolt", category="accessory", stockIn=100, stockOut=70)

        response = await client.get(
            "/api/items",
            params={"category": "tool", "sortBy": "totalStock", "sortOrder": "desc", "limit": 1},
            headers=admin_headers,
        )

        body = response.json()
        assert response.status_code == 200
        assert body["total"] == 2
        assert body["totalPages"] == 2
        assert body["currentPage"] == 1
        assert [i["description"] for i in body["items"]] == ["Chisel"]

    async def test_stock_status(self, client, admin_headers, create_item):
        await create_item(description="Chisel", stockIn=100, stockOut=20)
        await create_item(description="Angle grinder", stockIn=100, stockOut=90)

        response = await client.get(
            "/api/items", params={"stockStatus": "critical"}, headers=admin_headers
        )

        assert [i["description"] for i in response.json()["items"]] == ["Angle grinder"]

    async def test_search(self, client, admin_headers, create_item):
        await create_item(description="Claw Hammer")
        await create_item(description="Chisel")

        response = await client.get("/api/items", params={"search": "HAMM"}, headers=admin_headers)

        assert [i["description"] for i in response.json()["items"]] == ["Claw Hammer"]

    @pytest.mark.parametrize(
        "params",
        [{"stockStatus": "empty"}, {"sortBy": "passwordHash"}, {"limit": 500}, {"page": 0}],
    )
    async def test_invalid_query(self, client, admin_headers, params):
        response = await client.get("/api/items", params=params, headers=admin_headers)
        assert response.status_code == 400

    async def test_page_beyond_integer_range(self, client, admin_headers):
        response = await client.get(
            "/api/items", params={"page": 10**20}, headers=admin_headers
        )

        body = response.json()
        assert response.status_code == 400
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["detail"]["field"] == "page"


class TestUpdateItem:
    async def test_corrective_update(self, client, admin_headers, create_item):
        created = await create_item(stockIn=10)

        response = await client.put(
            f"/api/items/{created['id']}",
            json={"stockOut": 15, "unit": "box", "totalStock": 42},
            headers=admin_headers,
        )

        body = response.json()
        assert response.status_code == 200
        assert body["unit"] == "box"
        assert body["totalStock"] == 0
        assert body["history"] == []

    async def test_not_found(self, client, admin_headers):
        response = await client.put("/api/items/999", json={"unit": "box"}, headers=admin_headers)
        assert response.status_code == 404

    @pytest.mark.parametrize("body", [{"minStock": -1}, {"stockOut": -2}])
    async def test_negative_counters_rejected(self, client, admin_headers, create_item, body):
        created = await create_item(minStock=3)

        response = await client.put(
            f"/api/items/{created['id']}", json=body, headers=admin_headers
        )

        assert response.status_code == 400
        item = (await client.get(f"/api/items/{created['id']}", headers=admin_headers)).json()
        assert item["minStock"] == 3
        assert item["stockOut"] == 0


class TestDeleteItem:
    async def test_delete(self, client, admin_headers, create_item):
        created = await create_item()

        response = await client.delete(f"/api/items/{created['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Item deleted successfully"}
        response = await client.get(f"/api/items/{created['id']}", headers=admin_headers)
        assert response.status_code == 404

    async def test_delete_missing(self, client, admin_headers):
        response = await client.delete("/api/items/999", headers=admin_headers)
        assert response.status_code == 404


class TestStockAdjustment:
    """Stock IN/OUT through the API."""

    async def _adjust(self, client, headers, item_id, **body):
        return await client.post(
            f"/api/items/{item_id}/stock-adjustment", json=body, headers=headers
        )

    async def test_in_then_out(self, client, admin_headers, create_item):
        created = await create_item(stockIn=10)

        response = await self._adjust(
            client, admin_headers, created["id"], type="in", quantity=5, notes="Delivery"
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Stock in updated successfully"

        response = await self._adjust(client, admin_headers, created["id"], type="out", quantity=12)
        body = response.json()
        assert body["message"] == "Stock out updated successfully"
        item = body["item"]
        assert item["stockIn"] == 15
        assert item["stockOut"] == 12
        assert item["totalStock"] == 3
        assert [(h["type"], h["quantity"], h["notes"]) for h in item["history"]] == [
            ("in", 5, "Delivery"),
            ("out", 12, "OUT adjustment"),
        ]
        assert "date" in item["history"][0]

    async def test_insufficient_stock(self, client, admin_headers, create_item):
        created = await create_item(stockIn=5)

        response = await self._adjust(client, admin_headers, created["id"], type="out", quantity=10)

        body = response.json()
        assert response.status_code == 400
        assert body["message"] == "Insufficient stock. Available: 5, Requested: 10"
        assert body["detail"] == {"item_id": created["id"], "available": 5, "requested": 10}
        item =(await client.get(f"/api/items/{created['id']}", headers=admin_headers)).json()
        assert item["totalStock"] == 5
        assert item["history"] == []

    @pytest.mark.parametrize(
        ("body", "message"),
        [
            ({"type": "sideways", "quantity": 1}, 'Type must be "in" or "out"'),
            ({"type": "in", "quantity": 0}, "Quantity must be a positive number"),
            ({"type": "in", "quantity": "abc"}, "Quantity must be a positive number"),
            ({"type": "in"}, "Quantity must be a positive number"),
        ],
    )
    async def test_invalid_adjustment(self, client, admin_headers, create_item, body, message):
        created = await create_item()
        response = await self._adjust(client, admin_headers, created["id"], **body)
        assert response.status_code == 400
        assert response.json()["message"] == message

    async def test_missing_item(self, client, admin_headers):
        response = await self._adjust(client, admin_headers, 999, type="in", quantity=1)
        assert response.status_code == 404

    async def test_counter_overflow_rejected(self, client, admin_headers, create_item):
        created = await create_item(stockIn=0)
        first = await self._adjust(client, admin_headers, created["id"], type="in", quantity=1e308)
        assert first.status_code == 200

        response = await self._adjust(
            client, admin_headers, created["id"], type="in", quantity=1e308
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Quantity is too large"
        item = (await client.get(f"/api/items/{created['id']}", headers=admin_headers)).json()
        assert item["stockIn"] == 1e308
        assert item["totalStock"] == 1e308
        assert len(item["history"]) == 1


class TestIdRange:
    """Ids beyond SQLite's integer range are rejected up front."""

    @pytest.mark.parametrize(
        ("method", "suffix", "body"),
        [
            ("GET", "", None),
            ("PUT", "", {"unit": "box"}),
            ("DELETE", "", None),
            ("POST", "/stock-adjustment", {"type": "in", "quantity": 1}),
        ],
    )
    async def test_huge_item_id(self, client, admin_headers, method, suffix, body):
        response = await client.request(
            method, f"/api/items/{10**20}{suffix}", json=body, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestImportItems:
    async def test_import_merges_and_reports_errors(self, client, admin_headers):
        payload = {
            "category": "tool",
            "data": [
                {"Description": "Hammer", "Unit": "pcs", "Stock In": 5},
                {"Description": "Saw"},
                {"Description": "hammer", "Unit": "pcs", "Stock In": "3"},
            ],
        }

        response = await client.post("/api/items/import", json=payload, headers=admin_headers)

        body = response.json()
        assert response.status_code == 200
        assert body["created"] == 1
        assert body["updated"] == 1
        assert len(body["errors"]) == 1
        assert body["errors"][0].startswith("Row 2")

        listing = await client.get("/api/items", headers=admin_headers)
        items = listing.json()["items"]
        assert len(items) == 1
        assert items[0]["totalStock"] == 8
        assert len(items[0]["history"]) == 2

    async def test_oversized_number_is_a_row_error(self, client, admin_headers):
        payload = {
            "category": "tool",
            "data": [{"Description": "Hammer", "Unit": "pcs", "Stock In": "9" * 400}],
        }

        response = await client.post("/api/items/import", json=payload, headers=admin_headers)

        body = response.json()
        assert response.status_code == 200
        assert body["created"] == 0
        assert body["errors"][0].startswith("Row 1: Invalid stock values")
        listing = await client.get("/api/items", headers=admin_headers)
        assert listing.json()["total"] == 0

    async def test_invalid_category(self, client, admin_headers):
        response = await client.post(
            "/api/items/import", json={"category": "machine", "data": []}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["message"].startswith("Import failed")
