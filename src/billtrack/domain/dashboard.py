"""Dashboard aggregation domain service.

All figures are recomputed from the store on every call. Each public method
samples the clock once and uses that instant for every comparison it makes,
so sub-totals of the same call never disagree about what "now" is.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from billtrack.database.base import Database
from billtrack.domain.entities import (
    CategoryDistribution,
    DashboardStats,
    EntityType,
    Invoice,
    InvoiceStatus,
    InvoiceType,
    InvoiceWithRelations,
    PeriodSummary,
    TopPartner,
)
from billtrack.domain.errors import InvalidArgumentError, invalid_choice
from billtrack.domain.filters import (
    DEFAULT_UPCOMING_DAYS,
    InvoiceFilterService,
    require_int,
)
from billtrack.domain.status import DUE_SOON_DAYS
from billtrack.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)

TRAILING_WINDOW_DAYS = 90
DEFAULT_TOP_PARTNERS_LIMIT = 5

UNKNOWN_NAME = "Unknown"
UNKNOWN_PARTNER_TYPE = "unknown"

CATEGORY_ICONS = {
    "Rent/Facilities": "building",
    "Equipment": "computer",
    "Services": "service",
    "Materials": "archive",
}
DEFAULT_CATEGORY_ICON = "folder"

# Partner role -> invoice type it is ranked on; None ranks every invoice
PARTNER_TYPE_TO_INVOICE_TYPE = {
    None: None,
    EntityType.BOTH.value: None,
    EntityType.SUPPLIER.value: InvoiceType.PAYABLE,
    EntityType.CLIENT.value: InvoiceType.RECEIVABLE,
}

ZERO = Decimal("0.00")


def percentage(part: Decimal, whole: Decimal) -> float:
    """Share of part in whole as a percentage, 0 when whole is zero."""
    if whole == 0:
        return 0.0
    return float(part / whole * 100)


def sum_amounts(invoices: Iterable[Invoice]) -> Decimal:
    """Exact Decimal sum of invoice amounts."""
    return sum((inv.amount for inv in invoices), ZERO)


def category_icon(name: Optional[str]) -> str:
    """Look up the display icon for a category name."""
    return CATEGORY_ICONS.get(name or "", DEFAULT_CATEGORY_ICON)


class DashboardService:
    """Service computing dashboard statistics and rankings."""

    def __init__(self, db: Database, clock: Clock = utcnow):
        """Initialize dashboard service.

        Args:
            db: Database instance
            clock: Callable returning the current naive UTC instant
        """
        self.db = db
        self.clock = clock
        self.filters = InvoiceFilterService(db, clock=clock)

    def get_dashboard_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        """Compute the dashboard statistics bundle.

        Payable and receivable sides are computed the same way: pending
        amounts due within the next week, pending amounts already overdue,
        and amounts settled during the current calendar month.
        """
        now = self.filters.resolve_now(now)
        invoices = self.db.list_invoices()
        payables = [inv for inv in invoices if inv.invoice_type == InvoiceType.PAYABLE]
        receivables = [inv for inv in invoices if inv.invoice_type == InvoiceType.RECEIVABLE]

        due_payables = self._due_within_week(payables, now)
        due_receivables = self._due_within_week(receivables, now)

        stats = DashboardStats(
            total_invoices=len(invoices),
            to_pay=sum_amounts(due_payables),
            overdue_payables=sum_amounts(self._overdue(payables, now)),
            paid=sum_amounts(self._settled_this_month(payables, InvoiceStatus.PAID, now)),
            to_receive=sum_amounts(due_receivables),
            overdue_receivables=sum_amounts(self._overdue(receivables, now)),
            received=sum_amounts(
                self._settled_this_month(receivables, InvoiceStatus.RECEIVED, now)
            ),
            next_week_payables=len(due_payables),
            next_week_receivables=len(due_receivables),
        )
        logger.debug("Dashboard stats at %s over %d invoices", now, len(invoices))
        return stats

    def _due_within_week(self, invoices: list[Invoice], now: datetime) -> list[Invoice]:
        horizon = now + timedelta(days=DUE_SOON_DAYS)
        return [
            inv
            for inv in invoices
            if inv.status == InvoiceStatus.PENDING and now <= inv.due_date <= horizon
        ]

    def _overdue(self, invoices: list[Invoice], now: datetime) -> list[Invoice]:
        return [
            inv
            for inv in invoices
            if inv.status == InvoiceStatus.PENDING and inv.due_date < now
        ]

    def _settled_this_month(
        self, invoices: list[Invoice], status: InvoiceStatus, now: datetime
    ) -> list[Invoice]:
        return [
            inv
            for inv in invoices
            if inv.status == status
            and inv.transaction_date is not None
            and inv.transaction_date.year == now.year
            and inv.transaction_date.month == now.month
        ]

    def _trailing_window(self, now: datetime) -> list[Invoice]:
        """Invoices issued within the trailing window ending at now."""
        window_start = now - timedelta(days=TRAILING_WINDOW_DAYS)
        return [inv for inv in self.db.list_invoices() if inv.issue_date >= window_start]

    def get_top_partners(
        self,
        limit: int = DEFAULT_TOP_PARTNERS_LIMIT,
        partner_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[TopPartner]:
        """Rank partners by amount invoiced over the trailing window.

        Args:
            limit: Maximum number of partners returned, must be positive
            partner_type: "supplier" ranks payables only, "client" receivables
                only. "both" is not a type filter: like None it ranks every
                invoice, payables and receivables together, instead of
                matching no invoice type. Other values raise.
            now: Reference instant

        Returns:
            Partners sorted by total descending. Ties keep the order in which
            partners first appear among invoices (by invoice ID). Percentages
            are shares of the returned entries only, so they sum to 100.

        Raises:
            InvalidArgumentError: If limit is not a positive integer or the type is unknown
        """
        require_int(limit, "limit", 1)
        partner_type = getattr(partner_type, "value", partner_type)
        if partner_type not in PARTNER_TYPE_TO_INVOICE_TYPE:
            raise InvalidArgumentError(
                invalid_choice("partner type", partner_type, [t.value for t in EntityType])
            )
        invoice_type = PARTNER_TYPE_TO_INVOICE_TYPE[partner_type]
        now = self.filters.resolve_now(now)

        totals: dict[int, Decimal] = {}
        for inv in self._trailing_window(now):
            if invoice_type is not None and inv.invoice_type != invoice_type:
                continue
            totals[inv.partner_id] = totals.get(inv.partner_id, ZERO) + inv.amount

        ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]
        grand_total = sum((total for _, total in ranked), ZERO)

        partners = {p.id: p for p in self.db.list_partners()}
        results = []
        for partner_id, total in ranked:
            partner = partners.get(partner_id)
            results.append(
                TopPartner(
                    id=partner_id,
                    name=partner.name if partner else UNKNOWN_NAME,
                    total=total,
                    percentage=percentage(total, grand_total),
                    type=partner.entity_type.value if partner else UNKNOWN_PARTNER_TYPE,
                )
            )
        return results

    def get_top_suppliers(
        self, limit: int = DEFAULT_TOP_PARTNERS_LIMIT, now: Optional[datetime] = None
    ) -> list[TopPartner]:
        """Rank suppliers by payable amounts."""
        return self.get_top_partners(limit, EntityType.SUPPLIER.value, now=now)

    def get_category_distribution(
        self, now: Optional[datetime] = None
    ) -> list[CategoryDistribution]:
        """Split invoiced amounts over the trailing window by category.

        Percentages are shares of the grand total over every category in the
        result; nothing is truncated.
        """
        now = self.filters.resolve_now(now)

        payable: dict[int, Decimal] = defaultdict(lambda: ZERO)
        receivable: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for inv in self._trailing_window(now):
            if inv.invoice_type == InvoiceType.PAYABLE:
                payable[inv.category_id] += inv.amount
            else:
                receivable[inv.category_id] += inv.amount

        category_ids = list(dict.fromkeys([*payable, *receivable]))
        grand_total = sum(payable.values(), ZERO) + sum(receivable.values(), ZERO)

        categories = {c.id: c for c in self.db.list_categories()}
        distribution = []
        for category_id in category_ids:
            category = categories.get(category_id)
            name = category.name if category else UNKNOWN_NAME
            total_payable = payable.get(category_id, ZERO)
            total_receivable = receivable.get(category_id, ZERO)
            distribution.append(
                CategoryDistribution(
                    id=category_id,
                    name=name,
                    total_payable=total_payable,
                    total_receivable=total_receivable,
                    percentage=percentage(total_payable + total_receivable, grand_total),
                    icon=category_icon(category.name if category else None),
                )
            )

        distribution.sort(key=lambda entry: entry.total, reverse=True)
        return distribution

    def get_upcoming_invoices(
        self,
        days: int = DEFAULT_UPCOMING_DAYS,
        invoice_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[InvoiceWithRelations]:
        """Pending invoices due within the next ``days`` days."""
        return self.filters.get_upcoming_invoices(days, invoice_type, now=now)

    def get_overdue_invoices(
        self, invoice_type: Optional[str] = None, now: Optional[datetime] = None
    ) -> list[InvoiceWithRelations]:
        """Pending invoices past their due date."""
        return self.filters.get_overdue_invoices(invoice_type, now=now)

    def get_period_summary(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> PeriodSummary:
        """Summarize invoices issued in a date range.

        Defaults to the first day of the current month through today.
        """
        now = self.filters.resolve_now(now)
        if start_date is None:
            start_date = now.date().replace(day=1)
        if end_date is None:
            end_date = now.date()
        if start_date > end_date:
            raise InvalidArgumentError(
                f"start date {start_date} is after end date {end_date}"
            )

        issued = [
            joined.invoice
            for joined in self.filters.get_invoices_issued_between(start_date, end_date)
        ]
        return PeriodSummary(
            start_date=start_date,
            end_date=end_date,
            invoice_count=len(issued),
            total_amount=sum_amounts(issued),
            paid_amount=sum_amounts(
                inv
                for inv in issued
                if inv.status in (InvoiceStatus.PAID, InvoiceStatus.RECEIVED)
            ),
            pending_amount=sum_amounts(
                inv for inv in issued if inv.status == InvoiceStatus.PENDING
            ),
        )
