"""Invoice domain service."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from billtrack.database.base import Database
from billtrack.domain.entities import (
    Invoice as InvoiceEntity,
    InvoiceStatus,
    InvoiceType,
)
from billtrack.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    invalid_choice,
    invalid_status_transition,
    invoice_not_found,
    partner_not_found,
    user_not_found,
)
from billtrack.utils.amount_parser import parse_amount, quantize_amount
from billtrack.utils.clock import Clock, to_naive_utc, utcnow

logger = logging.getLogger(__name__)

# Status an invoice moves to once settled, by type
SETTLED_STATUS = {
    InvoiceType.PAYABLE: InvoiceStatus.PAID,
    InvoiceType.RECEIVABLE: InvoiceStatus.RECEIVED,
}

_DATE_FIELDS = ("issue_date", "due_date", "transaction_date")


def normalize_amount(amount: Decimal | int | float | str) -> Decimal:
    """Turn a boundary amount into a canonical non-negative Decimal.

    Strings go through :func:`parse_amount`, so "1.234,56" and "R$ 1.234,56"
    are accepted.

    Raises:
        ValidationError: If the amount cannot be parsed or is negative
    """
    if isinstance(amount, bool):
        raise ValidationError(f"Invalid amount {amount!r}")
    if isinstance(amount, str):
        try:
            value = parse_amount(amount)
        except ValueError as e:
            raise ValidationError(str(e)) from e
    elif isinstance(amount, (Decimal, int, float)):
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
        if not value.is_finite():
            raise ValidationError(f"Invalid amount {amount!r}")
        value = quantize_amount(value)
    else:
        raise ValidationError(f"Invalid amount {amount!r}")

    if value < 0:
        raise ValidationError(f"Amount must not be negative, got {value}")
    return value


def coerce_invoice_type(invoice_type: str) -> InvoiceType:
    """Validate an invoice type written through the service."""
    try:
        return InvoiceType(invoice_type)
    except ValueError:
        raise ValidationError(
            invalid_choice("invoice type", invoice_type, [t.value for t in InvoiceType])
        ) from None


def coerce_status(status: str) -> InvoiceStatus:
    """Validate an invoice status written through the service."""
    try:
        return InvoiceStatus(status)
    except ValueError:
        raise ValidationError(
            invalid_choice("status", status, [s.value for s in InvoiceStatus])
        ) from None


class InvoiceService:
    """Service for managing invoices and their lifecycle."""

    def __init__(self, db: Database, clock: Clock = utcnow):
        """Initialize invoice service.

        Args:
            db: Database instance
            clock: Callable returning the current naive UTC instant
        """
        self.db = db
        self.clock = clock

    def _require_partner(self, partner_id: int) -> None:
        if self.db.get_partner(partner_id) is None:
            raise NotFoundError(partner_not_found(partner_id))

    def _require_category(self, category_id: int) -> None:
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    def _require_invoice(self, invoice_id: int) -> InvoiceEntity:
        invoice = self.db.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def create_invoice(
        self,
        invoice_type: str,
        number: str,
        partner_id: int,
        category_id: int,
        issue_date: date | datetime,
        due_date: date | datetime,
        amount: Decimal | int | float | str,
        created_by: int,
        description: Optional[str] = None,
        payment_method: Optional[str] = None,
        attachment_xml: Optional[str] = None,
        attachment_pdf: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a pending invoice.

        Args:
            invoice_type: "payable" or "receivable"
            number: Invoice number, free text
            partner_id: Partner the invoice is issued by or to
            category_id: Category ID
            issue_date: Issue date
            due_date: Due date
            amount: Amount as a number or formatted string
            created_by: ID of the creating user
            description: Optional description
            payment_method: Optional expected payment method
            attachment_xml: Optional XML attachment reference
            attachment_pdf: Optional PDF attachment reference
            notes: Optional notes

        Returns:
            Invoice ID

        Raises:
            ValidationError: If type or amount is invalid
            NotFoundError: If partner, category or user doesn't exist
        """
        kind = coerce_invoice_type(invoice_type)
        value = normalize_amount(amount)
        self._require_partner(partner_id)
        self._require_category(category_id)
        if self.db.get_user(created_by) is None:
            raise NotFoundError(user_not_found(created_by))

        invoice_id = self.db.create_invoice(
            invoice_type=kind.value,
            number=number,
            partner_id=partner_id,
            category_id=category_id,
            issue_date=to_naive_utc(issue_date),
            due_date=to_naive_utc(due_date),
            amount=value,
            created_by=created_by,
            status=InvoiceStatus.PENDING.value,
            description=description,
            payment_method=payment_method,
            attachment_xml=attachment_xml,
            attachment_pdf=attachment_pdf,
            notes=notes,
        )
        logger.info("Created %s invoice %d for %s", kind.value, invoice_id, value)
        return invoice_id

    def get_invoice(self, invoice_id: int) -> Optional[InvoiceEntity]:
        """Get invoice by ID.

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice entity or None if not found
        """
        return self.db.get_invoice(invoice_id)

    def list_invoices(self, invoice_type: Optional[str] = None) -> list[InvoiceEntity]:
        """List invoices, including those whose partner or category is gone."""
        if invoice_type is not None:
            invoice_type = coerce_invoice_type(invoice_type).value
        return self.db.list_invoices(invoice_type)

    def update_invoice(self, invoice_id: int, **fields: Any) -> InvoiceEntity:
        """Update invoice fields.

        Amounts are parsed like on create, dates are normalized, and partner
        or category changes must point at existing records.

        Raises:
            NotFoundError: If the invoice or a referenced record doesn't exist
            ValidationError: If a value is invalid
        """
        self._require_invoice(invoice_id)

        if "amount" in fields:
            fields["amount"] = normalize_amount(fields["amount"])
        if "invoice_type" in fields:
            fields["invoice_type"] = coerce_invoice_type(fields["invoice_type"]).value
        if "status" in fields:
            fields["status"] = coerce_status(fields["status"]).value
        if "partner_id" in fields:
            self._require_partner(fields["partner_id"])
        if "category_id" in fields:
            self._require_category(fields["category_id"])
        for key in _DATE_FIELDS:
            if fields.get(key) is not None:
                fields[key] = to_naive_utc(fields[key])

        self.db.update_invoice(invoice_id, **fields)
        return self.db.get_invoice(invoice_id)

    def record_payment(
        self,
        invoice_id: int,
        transaction_date: Optional[date | datetime] = None,
        payment_method: Optional[str] = None,
    ) -> InvoiceEntity:
        """Mark a pending invoice as paid (payable) or received (receivable).

        Args:
            invoice_id: Invoice ID
            transaction_date: When the money moved, defaults to now
            payment_method: Optional payment method

        Returns:
            Updated invoice entity

        Raises:
            NotFoundError: If the invoice doesn't exist
            ValidationError: If the invoice is not pending
        """
        invoice = self._require_invoice(invoice_id)
        target = SETTLED_STATUS[invoice.invoice_type]
        if invoice.status != InvoiceStatus.PENDING:
            raise ValidationError(
                invalid_status_transition(invoice_id, invoice.status.value, target.value)
            )

        fields: dict[str, Any] = {
            "status": target.value,
            "transaction_date": self.clock()
            if transaction_date is None
            else to_naive_utc(transaction_date),
        }
        if payment_method is not None:
            fields["payment_method"] = payment_method

        self.db.update_invoice(invoice_id, **fields)
        logger.info("Invoice %d marked %s", invoice_id, target.value)
        return self.db.get_invoice(invoice_id)

    def cancel_invoice(self, invoice_id: int) -> InvoiceEntity:
        """Cancel a pending invoice.

        Raises:
            NotFoundError: If the invoice doesn't exist
            ValidationError: If the invoice is not pending
        """
        invoice = self._require_invoice(invoice_id)
        if invoice.status != InvoiceStatus.PENDING:
            raise ValidationError(
                invalid_status_transition(
                    invoice_id, invoice.status.value, InvoiceStatus.CANCELED.value
                )
            )
        self.db.update_invoice(invoice_id, status=InvoiceStatus.CANCELED.value)
        logger.info("Invoice %d canceled", invoice_id)
        return self.db.get_invoice(invoice_id)

    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice.

        Raises:
            NotFoundError: If the invoice doesn't exist
        """
        self._require_invoice(invoice_id)
        self.db.delete_invoice(invoice_id)
