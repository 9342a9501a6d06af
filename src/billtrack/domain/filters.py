"""Invoice query filters.

Every view joins invoices with their partner and category through id maps
built once per call. Partners and categories can be deleted while invoices
still point at them; such invoices are left out of the joined views rather
than failing the whole query.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from billtrack.database.base import Database
from billtrack.domain.entities import (
    Category,
    Invoice,
    InvoiceStatus,
    InvoiceType,
    InvoiceWithRelations,
    Partner,
)
from billtrack.domain.errors import InvalidArgumentError, invalid_choice
from billtrack.domain.status import DUE_SOON_DAYS, is_due_soon
from billtrack.utils.clock import Clock, to_naive_utc, utcnow

logger = logging.getLogger(__name__)

DEFAULT_UPCOMING_DAYS = 30


def require_int(value: object, name: str, minimum: int) -> int:
    """Validate an integer query parameter.

    Raises:
        InvalidArgumentError: If value is not an int (bools excluded) or is below minimum
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidArgumentError(f"{name} must be >= {minimum}, got {value}")
    return value


def coerce_invoice_type(invoice_type: Optional[str]) -> Optional[InvoiceType]:
    """Validate an optional invoice type filter."""
    if invoice_type is None:
        return None
    try:
        return InvoiceType(invoice_type)
    except ValueError:
        raise InvalidArgumentError(
            invalid_choice("invoice type", invoice_type, [t.value for t in InvoiceType])
        ) from None


def days_after(now: datetime, days: int, name: str = "days") -> datetime:
    """Return now + days, rejecting windows that run past the last representable date.

    Raises:
        InvalidArgumentError: If the result is out of the datetime range
    """
    try:
        return now + timedelta(days=days)
    except OverflowError:
        raise InvalidArgumentError(
            f"{name} {days} reaches past the supported date range"
        ) from None


def due_soon(
    due_date: date | datetime,
    horizon_days: int = DUE_SOON_DAYS,
    now: Optional[datetime] = None,
) -> bool:
    """Return True if the due date falls strictly inside (now, now + horizon_days)."""
    require_int(horizon_days, "horizon_days", 0)
    now = utcnow() if now is None else to_naive_utc(now)
    days_after(now, horizon_days, "horizon_days")  # range check only
    return is_due_soon(due_date, days=horizon_days, now=now)


class InvoiceFilterService:
    """Filtered, joined views over the invoice collection."""

    def __init__(self, db: Database, clock: Clock = utcnow):
        """Initialize filter service.

        Args:
            db: Database instance
            clock: Callable returning the current naive UTC instant
        """
        self.db = db
        self.clock = clock

    def resolve_now(self, now: Optional[datetime]) -> datetime:
        """Sample the clock unless the caller pinned an instant."""
        return self.clock() if now is None else to_naive_utc(now)

    def join_relations(self, invoices: Iterable[Invoice]) -> list[InvoiceWithRelations]:
        """Attach partner and category to each invoice, dropping dangling ones."""
        partners: dict[int, Partner] = {p.id: p for p in self.db.list_partners()}
        categories: dict[int, Category] = {c.id: c for c in self.db.list_categories()}

        joined = []
        for invoice in invoices:
            partner = partners.get(invoice.partner_id)
            category = categories.get(invoice.category_id)
            if partner is None or category is None:
                logger.debug(
                    "Skipping invoice %d with unresolved partner %d or category %d",
                    invoice.id,
                    invoice.partner_id,
                    invoice.category_id,
                )
                continue
            joined.append(InvoiceWithRelations(invoice=invoice, partner=partner, category=category))
        return joined

    def list_invoices(self, invoice_type: Optional[str] = None) -> list[InvoiceWithRelations]:
        """List all resolvable invoices, optionally by type."""
        kind = coerce_invoice_type(invoice_type)
        return self.join_relations(self.db.list_invoices(kind.value if kind else None))

    def get_invoice(self, invoice_id: int) -> Optional[InvoiceWithRelations]:
        """Get one invoice with relations, or None if it or a relation is missing."""
        invoice = self.db.get_invoice(invoice_id)
        if invoice is None:
            return None
        joined = self.join_relations([invoice])
        return joined[0] if joined else None

    def get_upcoming_invoices(
        self,
        days: int = DEFAULT_UPCOMING_DAYS,
        invoice_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[InvoiceWithRelations]:
        """Pending invoices due within [now, now + days], soonest first.

        Raises:
            InvalidArgumentError: If days is not a non-negative integer, runs past the
                supported date range, or the type is unknown
        """
        require_int(days, "days", 0)
        kind = coerce_invoice_type(invoice_type)
        now = self.resolve_now(now)
        horizon = days_after(now, days)

        matches = [
            inv
            for inv in self.db.list_invoices(kind.value if kind else None)
            if inv.status == InvoiceStatus.PENDING and now <= inv.due_date <= horizon
        ]
        matches.sort(key=lambda inv: inv.due_date)
        logger.debug("Upcoming window %s..%s matched %d invoices", now, horizon, len(matches))
        return self.join_relations(matches)

    def get_overdue_invoices(
        self,
        invoice_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[InvoiceWithRelations]:
        """Pending invoices past their due date, most recently due first."""
        kind = coerce_invoice_type(invoice_type)
        now = self.resolve_now(now)

        matches = [
            inv
            for inv in self.db.list_invoices(kind.value if kind else None)
            if inv.status == InvoiceStatus.PENDING and inv.due_date < now
        ]
        matches.sort(key=lambda inv: inv.due_date, reverse=True)
        return self.join_relations(matches)

    def get_invoices_issued_between(
        self, start_date: date, end_date: date
    ) -> list[InvoiceWithRelations]:
        """Invoices issued within the inclusive date range, oldest first."""
        start = datetime.combine(start_date, time.min)
        end = datetime.combine(end_date, time.max)
        matches = [inv for inv in self.db.list_invoices() if start <= inv.issue_date <= end]
        matches.sort(key=lambda inv: inv.issue_date)
        return self.join_relations(matches)
