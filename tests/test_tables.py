"""Tests for table administration"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_table(client: AsyncClient):
    response = await client.post("/tables", json={"name": "Bar 1", "capacity": 3})

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Bar 1"
    assert data["capacity"] == 3
    assert data["isActive"] is True


@pytest.mark.asyncio
async def test_create_table_rejects_zero_capacity(client: AsyncClient):
    response = await client.post("/tables", json={"name": "Ghost", "capacity": 0})

    assert response.status_code == 400
    assert "capacity" in response.json()["errors"]


@pytest.mark.asyncio
async def test_list_tables_filters_by_active(client: AsyncClient, test_tables, inactive_table):
    everything = await client.get("/tables")
    active = await client.get("/tables", params={"active": "true"})
    inactive = await client.get("/tables", params={"active": "false"})

    assert len(everything.json()) == 6
    assert len(active.json()) == 5
    assert [t["name"] for t in inactive.json()] == ["Terrace"]


@pytest.mark.asyncio
async def test_deactivated_table_keeps_reservations(client: AsyncClient, test_tables):
    """Deactivation blocks new bookings without touching existing ones"""
    table = test_tables[2]
    created = await client.post(
        "/reservations",
        json={
            "customerName": "Ali Veli",
            "customerPhone": "+905551112233",
            "partySize": 4,
            "tableId": table.id,
            "reservedAt": "2030-06-01T19:00:00Z",
        },
    )

    deactivate = await client.patch(f"/tables/{table.id}", json={"isActive": False})
    existing = await client.get(f"/reservations/{created.json()['id']}")
    rejected = await client.post(
        "/reservations",
        json={
            "customerName": "Ali Veli",
            "customerPhone": "+905551112233",
            "partySize": 4,
            "tableId": table.id,
            "reservedAt": "2030-06-05T19:00:00Z",
        },
    )

    assert deactivate.status_code == 200
    assert deactivate.json()["isActive"] is False
    assert existing.json()["status"] == "confirmed"
    assert rejected.status_code == 404


@pytest.mark.asyncio
async def test_update_unknown_table(client: AsyncClient):
    response = await client.patch("/tables/missing", json={"isActive": True})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
