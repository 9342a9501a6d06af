"""Invoice display status classification.

The persisted status only records what happened to an invoice (pending,
paid, received, canceled). What users see is derived from it together with
the due date and the current instant, so it changes over time without any
write.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from billtrack.domain.entities import DisplayStatus, InvoiceStatus, Invoice
from billtrack.utils.clock import to_naive_utc, utcnow

DUE_SOON_DAYS = 7

SETTLED_STATUSES = frozenset({InvoiceStatus.PAID.value, InvoiceStatus.RECEIVED.value})


def classify_status(
    due_date: date | datetime,
    status: str,
    payment_date: Optional[date | datetime] = None,
    now: Optional[datetime] = None,
) -> DisplayStatus:
    """Derive the display status of an invoice.

    Args:
        due_date: Invoice due date
        status: Persisted status value
        payment_date: Accepted for callers that have it; does not affect the result
        now: Reference instant, defaults to the current UTC time

    Returns:
        PAID for settled invoices, OVERDUE when the due date is strictly in
        the past, DUE otherwise. Canceled invoices are classified by date.
    """
    if getattr(status, "value", status) in SETTLED_STATUSES:
        return DisplayStatus.PAID

    if is_overdue(due_date, now=now):
        return DisplayStatus.OVERDUE

    return DisplayStatus.DUE


def classify_invoice(invoice: Invoice, now: Optional[datetime] = None) -> DisplayStatus:
    """Shorthand for :func:`classify_status` on an invoice entity."""
    return classify_status(
        invoice.due_date, invoice.status, invoice.transaction_date, now=now
    )


def is_overdue(due_date: date | datetime, now: Optional[datetime] = None) -> bool:
    """Return True if the due date is strictly before now."""
    reference = utcnow() if now is None else to_naive_utc(now)
    return to_naive_utc(due_date) < reference


def is_due_soon(
    due_date: date | datetime,
    days: int = DUE_SOON_DAYS,
    now: Optional[datetime] = None,
) -> bool:
    """Return True if the due date lies strictly between now and now + days."""
    reference = utcnow() if now is None else to_naive_utc(now)
    due = to_naive_utc(due_date)
    return reference < due < reference + timedelta(days=days)
