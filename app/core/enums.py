from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    SHAREHOLDER = "shareholder"


class ArchiveEntity(str, Enum):
    """Entity types readable through the archive endpoints (URL path segment)."""

    INCOME = "income"
    EXPENSES = "expenses"
    PAYMENTS = "payments"
    SALARY_PAYMENTS = "salary-payments"
    FOOD_PAYMENTS = "food-payments"
    STUDENTS = "students"
