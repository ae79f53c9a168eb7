from app.core.models.expense import Expense
from app.core.models.fiscal_year import FiscalYear
from app.core.models.food_payment import FoodPayment
from app.core.models.income import Income
from app.core.models.payment import Payment
from app.core.models.salary_payment import SalaryPayment
from app.core.models.shareholder import Shareholder
from app.core.models.staff import Staff
from app.core.models.student import Student

__all__ = [
    "Expense",
    "FiscalYear",
    "FoodPayment",
    "Income",
    "Payment",
    "SalaryPayment",
    "Shareholder",
    "Staff",
    "Student",
]
