from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin, require_viewer
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import (
    ExpenseCreate,
    ExpenseResponse,
    FoodPaymentCreate,
    FoodPaymentResponse,
    IncomeCreate,
    IncomeResponse,
    PaymentCreate,
    PaymentResponse,
    SalaryPaymentCreate,
    SalaryPaymentResponse,
)
from . import service

router = APIRouter(prefix="/api/v1", tags=["ledger"])


def _no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Income ---
@router.get("/income", response_model=List[IncomeResponse], dependencies=[Depends(require_viewer)])
async def list_income(db: AsyncSession = Depends(get_db)) -> List[IncomeResponse]:
    """Income of the current fiscal period."""
    return await service.list_income(db)


@router.post(
    "/income",
    response_model=IncomeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_income(payload: IncomeCreate, db: AsyncSession = Depends(get_db)) -> IncomeResponse:
    return await service.create_income(db, payload)


@router.delete(
    "/income/{income_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_income(income_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    try:
        await service.delete_income(db, income_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return _no_content()


# --- Expenses ---
@router.get("/expenses", response_model=List[ExpenseResponse], dependencies=[Depends(require_viewer)])
async def list_expenses(db: AsyncSession = Depends(get_db)) -> List[ExpenseResponse]:
    """Expenses of the current fiscal period."""
    return await service.list_expenses(db)


@router.post(
    "/expenses",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_expense(payload: ExpenseCreate, db: AsyncSession = Depends(get_db)) -> ExpenseResponse:
    return await service.create_expense(db, payload)


@router.delete(
    "/expenses/{expense_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_expense(expense_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    try:
        await service.delete_expense(db, expense_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return _no_content()


# --- Tuition payments ---
@router.get("/payments", response_model=List[PaymentResponse], dependencies=[Depends(require_viewer)])
async def list_payments(db: AsyncSession = Depends(get_db)) -> List[PaymentResponse]:
    return await service.list_payments(db)


@router.post(
    "/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_payment(payload: PaymentCreate, db: AsyncSession = Depends(get_db)) -> PaymentResponse:
    """Record a tuition installment; updates the student balance and income."""
    try:
        return await service.create_payment(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


# --- Salary payments ---
@router.get(
    "/salary-payments",
    response_model=List[SalaryPaymentResponse],
    dependencies=[Depends(require_viewer)],
)
async def list_salary_payments(db: AsyncSession = Depends(get_db)) -> List[SalaryPaymentResponse]:
    return await service.list_salary_payments(db)


@router.post(
    "/salary-payments",
    response_model=SalaryPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_salary_payment(
    payload: SalaryPaymentCreate,
    db: AsyncSession = Depends(get_db),
) -> SalaryPaymentResponse:
    """Pay a month's salary; books the amount as an expense."""
    try:
        return await service.create_salary_payment(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/salary-payments/{salary_payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_salary_payment(salary_payment_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    try:
        await service.delete_salary_payment(db, salary_payment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return _no_content()


# --- Food payments ---
@router.get(
    "/food-payments",
    response_model=List[FoodPaymentResponse],
    dependencies=[Depends(require_viewer)],
)
async def list_food_payments(db: AsyncSession = Depends(get_db)) -> List[FoodPaymentResponse]:
    return await service.list_food_payments(db)


@router.post(
    "/food-payments",
    response_model=FoodPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_food_payment(
    payload: FoodPaymentCreate,
    db: AsyncSession = Depends(get_db),
) -> FoodPaymentResponse:
    try:
        return await service.create_food_payment(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/food-payments/{food_payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_food_payment(food_payment_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    try:
        await service.delete_food_payment(db, food_payment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return _no_content()
