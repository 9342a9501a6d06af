"""Domain model entities for billtrack.

These are pure data classes representing business concepts, independent of
database schema. The store returns them as read-only snapshots; services and
the dashboard aggregator never mutate them.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class InvoiceType(str, Enum):
    """Direction of an invoice."""

    PAYABLE = "payable"
    RECEIVABLE = "receivable"


class InvoiceStatus(str, Enum):
    """Persisted invoice status."""

    PENDING = "pending"
    PAID = "paid"
    RECEIVED = "received"
    CANCELED = "canceled"


class DisplayStatus(str, Enum):
    """Time-sensitive status shown to users."""

    PAID = "paid"
    DUE = "due"
    OVERDUE = "overdue"


class EntityType(str, Enum):
    """Role a partner plays for the business."""

    SUPPLIER = "supplier"
    CLIENT = "client"
    BOTH = "both"


class UserRole(str, Enum):
    """User permission level."""

    ADMIN = "admin"
    ORDINARY = "ordinary"


@dataclass(frozen=True)
class User:
    """Application user domain entity."""

    id: int
    username: str
    password: str
    name: str
    email: str
    role: UserRole
    created_at: datetime


@dataclass(frozen=True)
class Partner:
    """Supplier or client domain entity."""

    id: int
    name: str
    document_number: str
    entity_type: EntityType
    created_at: datetime
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    contact_name: Optional[str] = None
    bank_details: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """Invoice category domain entity."""

    id: int
    name: str
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    invoice_type: InvoiceType
    number: str
    partner_id: int
    category_id: int
    issue_date: datetime
    due_date: datetime
    amount: Decimal
    description: Optional[str]
    status: InvoiceStatus
    created_at: datetime
    created_by: int
    payment_method: Optional[str] = None
    transaction_date: Optional[datetime] = None
    attachment_xml: Optional[str] = None
    attachment_pdf: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class InvoiceWithRelations:
    """Invoice joined with its resolved partner and category."""

    invoice: Invoice
    partner: Partner
    category: Category


@dataclass(frozen=True)
class DashboardStats:
    """Summary figures for the dashboard."""

    total_invoices: int
    # Payables
    to_pay: Decimal
    overdue_payables: Decimal
    paid: Decimal
    # Receivables
    to_receive: Decimal
    overdue_receivables: Decimal
    received: Decimal
    # Counts due within the next week
    next_week_payables: int
    next_week_receivables: int


@dataclass(frozen=True)
class TopPartner:
    """Partner ranking entry."""

    id: int
    name: str
    total: Decimal
    percentage: float
    type: str


@dataclass(frozen=True)
class CategoryDistribution:
    """Category share of invoiced amounts."""

    id: int
    name: str
    total_payable: Decimal
    total_receivable: Decimal
    percentage: float
    icon: str

    @property
    def total(self) -> Decimal:
        """Combined payable and receivable amount."""
        return self.total_payable + self.total_receivable


@dataclass(frozen=True)
class PeriodSummary:
    """Amounts for invoices issued within a date range."""

    start_date: date
    end_date: date
    invoice_count: int
    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
