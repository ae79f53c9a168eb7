"""
Seed script for a fresh database: creates the tables and a small demo school.

Run once with DATABASE_URL set:
  python -m app.db.seed_demo

Creates (only when the students table is empty):
- the current fiscal year for the school year containing today
- two students, two staff members, one income and one expense entry
- one tuition payment (which also books its income entry and updates the student balance)
"""
import asyncio
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.api.v1.ledger.schemas import PaymentCreate
from app.api.v1.ledger.service import create_payment
from app.core.models import Expense, FiscalYear, Income, Staff, Student
from app.db.session import AsyncSessionLocal, Base, engine


def school_year_containing(day: date) -> FiscalYear:
    first = day.year if day.month >= 9 else day.year - 1
    return FiscalYear(
        year=f"{first}-{first + 1}",
        start_date=date(first, 9, 1),
        end_date=date(first + 1, 8, 31),
        is_current=True,
        is_closed=False,
    )


async def create_tables(bind: AsyncEngine) -> None:
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_demo(db: AsyncSession) -> bool:
    """Insert demo rows into an empty database. Returns False when students already exist."""
    count = await db.execute(select(func.count(Student.id)))
    if count.scalar_one() > 0:
        print("Students already present; skipping demo seed.")
        return False

    today = date.today()
    has_current = await db.execute(select(FiscalYear.id).where(FiscalYear.is_current.is_(True)))
    if has_current.first() is None:
        db.add(school_year_containing(today))

    first_student = Student(
        full_name="محەمەد ئەحمەد کەریم",
        mobile="07701234567",
        grade="پۆلی شەشەم",
        tuition_fee=Decimal("1500000"),
        paid_amount=Decimal("500000"),
        remaining_amount=Decimal("1000000"),
    )
    db.add_all(
        [
            first_student,
            Student(
                full_name="سارە عەلی حەسەن",
                mobile="07501234567",
                grade="پۆلی حەوتەم",
                tuition_fee=Decimal("1500000"),
                paid_amount=Decimal("1500000"),
                remaining_amount=Decimal("0"),
            ),
            Staff(full_name="کاروان عوسمان", mobile="07709876543", role="مامۆستا", salary=Decimal("800000")),
            Staff(full_name="نیان جەمال", mobile="07509876543", role="سەرپەرشتیار", salary=Decimal("1000000")),
            Income(source="فرۆشتنی جلوبەرگ", amount=Decimal("250000"), date=today, description="فرۆشتنی 10 پارچە جلوبەرگ"),
            Expense(category="کارەبا", amount=Decimal("150000"), date=today, description="پسوڵەی کارەبای مانگی 1"),
        ]
    )
    await db.commit()

    await create_payment(db, PaymentCreate(student_id=first_student.id, amount=Decimal("250000"), date=today))
    print("Demo seed done.")
    return True


async def main() -> None:
    await create_tables(engine)
    async with AsyncSessionLocal() as db:
        try:
            await seed_demo(db)
        except Exception as e:
            await db.rollback()
            print("Error:", e)
            raise


if __name__ == "__main__":
    asyncio.run(main())
