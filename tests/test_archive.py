from decimal import Decimal

from httpx import AsyncClient


async def _closed_year_with_rows(client: AsyncClient, headers) -> None:
    year = await client.post(
        "/api/v1/fiscal-years",
        json={"year": "2024-2025", "start_date": "2024-09-01", "end_date": "2025-08-31", "is_current": True},
        headers=headers,
    )
    student = await client.post(
        "/api/v1/students",
        json={"full_name": "Sara", "mobile": "0750", "grade": "پۆلی شەشەم", "tuition_fee": "1000"},
        headers=headers,
    )
    await client.post("/api/v1/payments", json={"student_id": student.json()["id"], "amount": "400"}, headers=headers)
    await client.post("/api/v1/expenses", json={"category": "Electricity", "amount": "150"}, headers=headers)
    response = await client.post(f"/api/v1/fiscal-years/{year.json()['id']}/close", headers=headers)
    assert response.status_code == 200


async def test_archived_views_filter_by_year(client: AsyncClient, admin_headers, shareholder_headers) -> None:
    await _closed_year_with_rows(client, admin_headers)
    await client.post("/api/v1/income", json={"source": "New term", "amount": "70"}, headers=admin_headers)

    income = (await client.get("/api/v1/archive/2024-2025/income", headers=shareholder_headers)).json()
    assert len(income) == 1
    assert income[0]["fiscal_year"] == "2024-2025"

    payments = (await client.get("/api/v1/archive/2024-2025/payments", headers=shareholder_headers)).json()
    assert [Decimal(p["amount"]) for p in payments] == [Decimal("400")]

    students = (await client.get("/api/v1/archive/2024-2025/students", headers=shareholder_headers)).json()
    assert students[0]["grade"] == "پۆلی حەوتەم"
    assert Decimal(students[0]["previous_year_debt"]) == Decimal("600")

    empty = (await client.get("/api/v1/archive/2025-2026/income", headers=shareholder_headers)).json()
    assert empty == []

    current = (await client.get("/api/v1/income", headers=admin_headers)).json()
    assert [i["source"] for i in current] == ["New term"]


async def test_archive_summary(client: AsyncClient, admin_headers) -> None:
    await _closed_year_with_rows(client, admin_headers)
    summary = (await client.get("/api/v1/archive/2024-2025/summary", headers=admin_headers)).json()
    assert summary["student_count"] == 1
    assert summary["ledgers"]["income"]["count"] == 1
    assert Decimal(summary["ledgers"]["income"]["total"]) == Decimal("400")
    assert Decimal(summary["ledgers"]["expenses"]["total"]) == Decimal("150")
    assert Decimal(summary["net_result"]) == Decimal("250")


async def test_archive_unknown_entity_or_year(client: AsyncClient, admin_headers) -> None:
    await _closed_year_with_rows(client, admin_headers)
    assert (await client.get("/api/v1/archive/2024-2025/staff", headers=admin_headers)).status_code == 404
    assert (await client.get("/api/v1/archive/1999-2000/income", headers=admin_headers)).status_code == 404
