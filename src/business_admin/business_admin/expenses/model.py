from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ExpenseCategory, ExpensePaymentMode, ExpenseStatus

CATEGORY_LABELS = {
    ExpenseCategory.FUEL: "Diesel/Petrol for Tractor, Hydra",
    ExpenseCategory.RAW_MATERIALS: "Raw Materials (Cement, Sand)",
    ExpenseCategory.GROCERIES: "Groceries for Food",
    ExpenseCategory.TEA_SNACKS: "Tea/Snacks",
    ExpenseCategory.SAFETY_EQUIPMENT: "Safety Gloves, Helmets, Jackets, Shoes",
    ExpenseCategory.ACCOMMODATION: "Rooms/House Rent for Workers",
    ExpenseCategory.TRANSPORT: "Transport Charges",
    ExpenseCategory.EMERGENCY: "Emergency Purchases",
    ExpenseCategory.SUPERVISOR_TRAVEL: "Supervisor Travelling",
    ExpenseCategory.OFFICE_STATIONERY: "Office Stationery",
}

PAYMENT_MODE_LABELS = {
    ExpensePaymentMode.CASH: "Cash",
    ExpensePaymentMode.ONLINE: "Online",
}


@dataclass(frozen=True)
class Expense:
    """Domain entity: a site/business expense awaiting or past approval."""

    expense_id: int
    amount: Decimal
    category: ExpenseCategory
    expense_date: date
    payment_mode: ExpensePaymentMode
    status: ExpenseStatus = ExpenseStatus.PENDING
    vendor: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[int] = None
    updated_by: Optional[int] = None
    decided_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

    @property
    def category_label(self) -> str:
        return CATEGORY_LABELS.get(self.category, self.category.value)

    @property
    def payment_mode_label(self) -> str:
        return PAYMENT_MODE_LABELS.get(self.payment_mode, self.payment_mode.value)


@dataclass(frozen=True)
class ExpenseInput:
    amount: Decimal
    category: ExpenseCategory
    expense_date: date
    payment_mode: ExpensePaymentMode
    vendor: Optional[str] = None
    description: Optional[str] = None
