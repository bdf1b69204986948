from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for access control."""

    ADMIN = "admin"
    STAFF = "staff"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Attendance status values as stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"


class PaymentMode(str, Enum):
    CASH = "Cash"
    ONLINE = "Online"


class SalaryRecordType(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    ABSENT = "absent"


class SalaryStatus(str, Enum):
    DUE = "due"
    OVERPAID = "overpaid"


class ExpenseCategory(str, Enum):
    FUEL = "fuel"
    RAW_MATERIALS = "raw_materials"
    GROCERIES = "groceries"
    TEA_SNACKS = "tea_snacks"
    SAFETY_EQUIPMENT = "safety_equipment"
    ACCOMMODATION = "accommodation"
    TRANSPORT = "transport"
    EMERGENCY = "emergency"
    SUPERVISOR_TRAVEL = "supervisor_travel"
    OFFICE_STATIONERY = "office_stationery"


class ExpensePaymentMode(str, Enum):
    """Expenses store payment modes in lower case (unlike payments)."""

    CASH = "cash"
    ONLINE = "online"


class ExpenseStatus(str, Enum):
    """Approval workflow for expenses."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
