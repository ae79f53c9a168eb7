from datetime import date
from decimal import Decimal
from typing import Dict

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.fiscal_years import service as fiscal_year_service
from app.core.exceptions import NotFoundError, ValidationError
from app.core.models import FiscalYear, Income, Student


async def _create_year(client: AsyncClient, headers: Dict[str, str], label: str, is_current: bool = True) -> dict:
    start, end = label.split("-")
    response = await client.post(
        "/api/v1/fiscal-years",
        json={
            "year": label,
            "start_date": f"{start}-09-01",
            "end_date": f"{end}-08-31",
            "is_current": is_current,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _create_student(client: AsyncClient, headers: Dict[str, str], grade: str, **amounts) -> dict:
    payload = {"full_name": "Test Student", "mobile": "07701234567", "grade": grade, "tuition_fee": "1000"}
    payload.update(amounts)
    response = await client.post("/api/v1/students", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _current_count(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(FiscalYear.id)).where(FiscalYear.is_current.is_(True)))
    return result.scalar_one()


async def test_create_and_get_current(client: AsyncClient, admin_headers) -> None:
    created = await _create_year(client, admin_headers, "2024-2025")
    assert created["is_current"] is True
    assert created["is_closed"] is False

    response = await client.get("/api/v1/fiscal-years/current", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["year"] == "2024-2025"


async def test_current_is_null_without_years(client: AsyncClient, admin_headers) -> None:
    response = await client.get("/api/v1/fiscal-years/current", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() is None


async def test_creating_current_year_replaces_previous(
    client: AsyncClient, db_session: AsyncSession, admin_headers
) -> None:
    first = await _create_year(client, admin_headers, "2023-2024")
    await _create_year(client, admin_headers, "2024-2025")
    assert await _current_count(db_session) == 1

    years = (await client.get("/api/v1/fiscal-years", headers=admin_headers)).json()
    assert [y["year"] for y in years] == ["2024-2025", "2023-2024"]
    assert next(y for y in years if y["id"] == first["id"])["is_current"] is False


async def test_create_rejects_duplicate_label_and_bad_dates(client: AsyncClient, admin_headers) -> None:
    await _create_year(client, admin_headers, "2024-2025")
    duplicate = await client.post(
        "/api/v1/fiscal-years",
        json={"year": "2024-2025", "start_date": "2024-09-01", "end_date": "2025-08-31"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 409

    backwards = await client.post(
        "/api/v1/fiscal-years",
        json={"year": "2030-2031", "start_date": "2031-08-31", "end_date": "2030-09-01"},
        headers=admin_headers,
    )
    assert backwards.status_code == 400

    malformed = await client.post(
        "/api/v1/fiscal-years",
        json={"year": "next year", "start_date": "2030-09-01", "end_date": "2031-08-31"},
        headers=admin_headers,
    )
    assert malformed.status_code == 422


async def test_set_current(client: AsyncClient, db_session: AsyncSession, admin_headers) -> None:
    older = await _create_year(client, admin_headers, "2023-2024")
    await _create_year(client, admin_headers, "2024-2025")

    response = await client.put(f"/api/v1/fiscal-years/{older['id']}/set-current", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["is_current"] is True
    assert await _current_count(db_session) == 1

    missing = await client.put("/api/v1/fiscal-years/999/set-current", headers=admin_headers)
    assert missing.status_code == 404


async def test_close_then_archive(client: AsyncClient, db_session: AsyncSession, admin_headers) -> None:
    year = await _create_year(client, admin_headers, "2024-2025")
    for source in ("Uniforms", "Books", "Bus"):
        response = await client.post(
            "/api/v1/income", json={"source": source, "amount": "100"}, headers=admin_headers
        )
        assert response.status_code == 201
    promoted = await _create_student(client, admin_headers, "Grade 9", paid_amount="400")
    unparsable = await _create_student(client, admin_headers, "KG")

    response = await client.post(f"/api/v1/fiscal-years/{year['id']}/close", headers=admin_headers)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["success"] is True
    assert body["promotedStudents"] == 1
    assert body["newYear"] == "2025-2026"

    incomes = (await db_session.execute(select(Income))).scalars().all()
    assert len(incomes) == 3
    assert {i.fiscal_year for i in incomes} == {"2024-2025"}

    st = await db_session.get(Student, promoted["id"])
    assert st.grade == "Grade 10"
    assert st.fiscal_year == "2024-2025"
    assert Decimal(st.previous_year_debt) == Decimal("600")
    assert Decimal(st.paid_amount) == Decimal("0")
    assert Decimal(st.remaining_amount) == Decimal("1000")

    kg = await db_session.get(Student, unparsable["id"])
    assert kg.grade == "KG"
    assert Decimal(kg.paid_amount) == Decimal("0")
    assert Decimal(kg.remaining_amount) == Decimal("1000")

    years = {y["year"]: y for y in (await client.get("/api/v1/fiscal-years", headers=admin_headers)).json()}
    closed = years["2024-2025"]
    assert closed["is_closed"] is True
    assert closed["is_current"] is False
    assert closed["closed_at"] is not None
    successor = years["2025-2026"]
    assert successor["is_current"] is True
    assert successor["start_date"] == "2025-09-01"
    assert successor["end_date"] == "2026-08-31"
    assert await _current_count(db_session) == 1

    current_income = (await client.get("/api/v1/income", headers=admin_headers)).json()
    assert current_income == []


async def test_reclose_is_rejected_without_mutation(
    client: AsyncClient, db_session: AsyncSession, admin_headers
) -> None:
    year = await _create_year(client, admin_headers, "2024-2025")
    student = await _create_student(client, admin_headers, "Grade 1")

    first = await client.post(f"/api/v1/fiscal-years/{year['id']}/close", headers=admin_headers)
    assert first.status_code == 200
    second = await client.post(f"/api/v1/fiscal-years/{year['id']}/close", headers=admin_headers)
    assert second.status_code == 400

    st = await db_session.get(Student, student["id"])
    assert st.grade == "Grade 2"
    count = await db_session.execute(select(func.count(FiscalYear.id)))
    assert count.scalar_one() == 2


async def test_close_unknown_year_is_not_found(client: AsyncClient, admin_headers) -> None:
    response = await client.post("/api/v1/fiscal-years/42/close", headers=admin_headers)
    assert response.status_code == 404


async def test_successor_is_reused(client: AsyncClient, db_session: AsyncSession, admin_headers) -> None:
    year = await _create_year(client, admin_headers, "2024-2025")
    pre_created = await _create_year(client, admin_headers, "2025-2026", is_current=False)

    response = await client.post(f"/api/v1/fiscal-years/{year['id']}/close", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["newYear"] == "2025-2026"

    rows = (await db_session.execute(select(FiscalYear).where(FiscalYear.year == "2025-2026"))).scalars().all()
    assert len(rows) == 1
    assert rows[0].id == pre_created["id"]
    assert rows[0].is_current is True
    assert await _current_count(db_session) == 1


async def test_close_rejected_when_successor_is_closed(client: AsyncClient, admin_headers) -> None:
    year = await _create_year(client, admin_headers, "2024-2025", is_current=False)
    successor = await _create_year(client, admin_headers, "2025-2026")
    closed = await client.post(f"/api/v1/fiscal-years/{successor['id']}/close", headers=admin_headers)
    assert closed.status_code == 200

    response = await client.post(f"/api/v1/fiscal-years/{year['id']}/close", headers=admin_headers)
    assert response.status_code == 400


async def test_closed_year_cannot_be_set_current(client: AsyncClient, admin_headers) -> None:
    year = await _create_year(client, admin_headers, "2024-2025")
    await client.post(f"/api/v1/fiscal-years/{year['id']}/close", headers=admin_headers)

    response = await client.put(f"/api/v1/fiscal-years/{year['id']}/set-current", headers=admin_headers)
    assert response.status_code == 400


async def test_delete_guard(client: AsyncClient, db_session: AsyncSession, admin_headers) -> None:
    closed = await _create_year(client, admin_headers, "2023-2024")
    await client.post(f"/api/v1/fiscal-years/{closed['id']}/close", headers=admin_headers)
    rejected = await client.delete(f"/api/v1/fiscal-years/{closed['id']}", headers=admin_headers)
    assert rejected.status_code == 400

    await client.post("/api/v1/income", json={"source": "Fair", "amount": "50"}, headers=admin_headers)
    open_year = await _create_year(client, admin_headers, "2030-2031", is_current=False)
    response = await client.delete(f"/api/v1/fiscal-years/{open_year['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert await db_session.get(FiscalYear, open_year["id"]) is None

    incomes = (await client.get("/api/v1/income", headers=admin_headers)).json()
    assert [i["source"] for i in incomes] == ["Fair"]


async def test_reopen(client: AsyncClient, db_session: AsyncSession, admin_headers) -> None:
    year = await _create_year(client, admin_headers, "2024-2025")
    not_closed = await client.post(f"/api/v1/fiscal-years/{year['id']}/reopen", headers=admin_headers)
    assert not_closed.status_code == 400

    await client.post("/api/v1/income", json={"source": "Books", "amount": "10"}, headers=admin_headers)
    await client.post(f"/api/v1/fiscal-years/{year['id']}/close", headers=admin_headers)

    response = await client.post(f"/api/v1/fiscal-years/{year['id']}/reopen", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["is_closed"] is False
    assert body["closed_at"] is None
    assert body["is_current"] is False

    incomes = (await db_session.execute(select(Income))).scalars().all()
    assert {i.fiscal_year for i in incomes} == {"2024-2025"}


async def test_close_rolls_back_when_promotion_fails(
    db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    year = FiscalYear(year="2024-2025", start_date=date(2024, 9, 1), end_date=date(2025, 8, 31), is_current=True)
    db_session.add_all([year, Income(source="Books", amount=Decimal("10"))])
    await db_session.commit()
    year_id = year.id

    async def broken_promotion(db):
        raise RuntimeError("promotion failed")

    monkeypatch.setattr(fiscal_year_service, "promote_all_students", broken_promotion)
    with pytest.raises(RuntimeError):
        await fiscal_year_service.close_fiscal_year(db_session, year_id)

    income = (await db_session.execute(select(Income))).scalar_one()
    assert income.fiscal_year is None
    reloaded = (await db_session.execute(select(FiscalYear).where(FiscalYear.id == year_id))).scalar_one()
    assert reloaded.is_closed is False
    assert reloaded.is_current is True
    count = await db_session.execute(select(func.count(FiscalYear.id)))
    assert count.scalar_one() == 1


async def test_service_errors_carry_kind(db_session: AsyncSession) -> None:
    with pytest.raises(NotFoundError):
        await fiscal_year_service.reopen_fiscal_year(db_session, 1)
    year = FiscalYear(year="2024-2025", start_date=date(2024, 9, 1), end_date=date(2025, 8, 31))
    db_session.add(year)
    await db_session.commit()
    with pytest.raises(ValidationError):
        await fiscal_year_service.reopen_fiscal_year(db_session, year.id)


def test_successor_year_label_and_dates() -> None:
    label, start, end = fiscal_year_service.successor_year("2024-2025")
    assert label == "2025-2026"
    assert start == date(2025, 9, 1)
    assert end == date(2026, 8, 31)
    with pytest.raises(ValidationError):
        fiscal_year_service.successor_year("twenty-four")
