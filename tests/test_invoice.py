"""Tests for invoice service."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from billtrack.domain.entities import InvoiceStatus, InvoiceType
from billtrack.domain.errors import NotFoundError, ValidationError
from billtrack.domain.invoice import normalize_amount


class TestNormalizeAmount:
    """Tests for boundary amount normalization."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1.234,56", Decimal("1234.56")),
            ("R$ 10,00", Decimal("10.00")),
            (Decimal("3.14159"), Decimal("3.14")),
            (7, Decimal("7.00")),
            (0.1, Decimal("0.10")),
            ("1.234", Decimal("1234.00")),
        ],
    )
    def test_valid(self, value, expected):
        assert normalize_amount(value) == expected

    @pytest.mark.parametrize(
        "value", ["abc", "", "-5", "(1,00)", "1,234.56", "0,005", -1, True, None, float("nan")]
    )
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            normalize_amount(value)


class TestInvoiceLifecycle:
    """Tests for InvoiceService."""

    def test_create_invoice_is_pending(self, invoice_service, sample_user, sample_partners, sample_categories, now):
        invoice_id = invoice_service.create_invoice(
            invoice_type="payable",
            number="NF-1",
            partner_id=sample_partners["supplier"].id,
            category_id=sample_categories["Services"],
            issue_date=date(2024, 6, 1),
            due_date=date(2024, 6, 30),
            amount="1.234,56",
            created_by=sample_user.id,
            notes="first",
        )

        invoice = invoice_service.get_invoice(invoice_id)
        assert invoice.invoice_type == InvoiceType.PAYABLE
        assert invoice.status == InvoiceStatus.PENDING
        assert invoice.amount == Decimal("1234.56")
        assert invoice.issue_date == datetime(2024, 6, 1)
        assert invoice.due_date == datetime(2024, 6, 30)
        assert invoice.transaction_date is None
        assert invoice.notes == "first"
        assert invoice.created_by == sample_user.id

    def test_aware_dates_are_stored_as_utc(self, invoice_service, sample_user, sample_partners, sample_categories):
        invoice_id = invoice_service.create_invoice(
            invoice_type="receivable",
            number="NF-2",
            partner_id=sample_partners["client"].id,
            category_id=sample_categories["Sales"],
            issue_date=datetime(2024, 6, 1, 9, 0, tzinfo=timezone(timedelta(hours=-3))),
            due_date=datetime(2024, 6, 30, 21, 0, tzinfo=timezone(timedelta(hours=-3))),
            amount=Decimal("10"),
            created_by=sample_user.id,
        )

        invoice = invoice_service.get_invoice(invoice_id)
        assert invoice.issue_date == datetime(2024, 6, 1, 12, 0)
        assert invoice.due_date == datetime(2024, 7, 1, 0, 0)

    def test_numbers_need_not_be_unique(self, invoice_service, make_invoice):
        first = make_invoice()
        invoice_service.update_invoice(first, number="SAME")
        second = make_invoice()
        invoice_service.update_invoice(second, number="SAME")

        assert [i.number for i in invoice_service.list_invoices()] == ["SAME", "SAME"]

    @pytest.mark.parametrize(
        "field,value,error",
        [
            ("partner_id", 999, NotFoundError),
            ("category_id", 999, NotFoundError),
            ("created_by", 999, NotFoundError),
            ("invoice_type", "refund", ValidationError),
            ("amount", "not money", ValidationError),
            ("amount", "-10", ValidationError),
        ],
    )
    def test_create_rejects_bad_input(self, invoice_service, sample_user, sample_partners, sample_categories, field, value, error):
        kwargs = dict(
            invoice_type="payable",
            number="NF-X",
            partner_id=sample_partners["supplier"].id,
            category_id=sample_categories["Services"],
            issue_date=date(2024, 6, 1),
            due_date=date(2024, 6, 30),
            amount="10,00",
            created_by=sample_user.id,
        )
        kwargs[field] = value

        with pytest.raises(error):
            invoice_service.create_invoice(**kwargs)
        assert invoice_service.list_invoices() == []

    def test_list_invoices_by_type(self, invoice_service, make_invoice):
        make_invoice("payable")
        receivable = make_invoice("receivable")

        assert [i.id for i in invoice_service.list_invoices("receivable")] == [receivable]
        assert len(invoice_service.list_invoices()) == 2
        with pytest.raises(ValidationError):
            invoice_service.list_invoices("refund")

    def test_record_payment_payable(self, invoice_service, make_invoice, now):
        invoice_id = make_invoice("payable")

        invoice = invoice_service.record_payment(invoice_id, payment_method="pix")

        assert invoice.status == InvoiceStatus.PAID
        assert invoice.transaction_date == now
        assert invoice.payment_method == "pix"

    def test_record_payment_receivable(self, invoice_service, make_invoice):
        invoice_id = make_invoice("receivable")

        invoice = invoice_service.record_payment(invoice_id, transaction_date=date(2024, 6, 10))

        assert invoice.status == InvoiceStatus.RECEIVED
        assert invoice.transaction_date == datetime(2024, 6, 10)

    def test_record_payment_twice(self, invoice_service, make_invoice):
        invoice_id = make_invoice()
        invoice_service.record_payment(invoice_id)

        with pytest.raises(ValidationError, match="cannot be marked paid"):
            invoice_service.record_payment(invoice_id)

    def test_cancel(self, invoice_service, make_invoice):
        invoice_id = make_invoice()

        assert invoice_service.cancel_invoice(invoice_id).status == InvoiceStatus.CANCELED
        with pytest.raises(ValidationError):
            invoice_service.record_payment(invoice_id)
        with pytest.raises(ValidationError):
            invoice_service.cancel_invoice(invoice_id)

    def test_update_invoice(self, invoice_service, make_invoice, sample_categories):
        invoice_id = make_invoice()

        invoice = invoice_service.update_invoice(
            invoice_id,
            amount="R$ 2.000,00",
            category_id=sample_categories["Equipment"],
            due_date=date(2024, 7, 1),
            description="Laptop",
        )

        assert invoice.amount == Decimal("2000.00")
        assert invoice.category_id == sample_categories["Equipment"]
        assert invoice.due_date == datetime(2024, 7, 1)
        assert invoice.description == "Laptop"

    def test_update_rejects_bad_references(self, invoice_service, make_invoice):
        invoice_id = make_invoice()
        with pytest.raises(NotFoundError):
            invoice_service.update_invoice(invoice_id, partner_id=999)
        with pytest.raises(ValidationError):
            invoice_service.update_invoice(invoice_id, status="lost")

    def test_update_unknown_field(self, invoice_service, make_invoice):
        invoice_id = make_invoice()
        with pytest.raises(ValueError, match="Unknown fields"):
            invoice_service.update_invoice(invoice_id, color="red")

    def test_missing_invoice(self, invoice_service):
        assert invoice_service.get_invoice(999) is None
        for operation in (
            invoice_service.record_payment,
            invoice_service.cancel_invoice,
            invoice_service.delete_invoice,
        ):
            with pytest.raises(NotFoundError):
                operation(999)
        with pytest.raises(NotFoundError):
            invoice_service.update_invoice(999, notes="x")

    def test_delete(self, invoice_service, make_invoice):
        invoice_id = make_invoice()
        invoice_service.delete_invoice(invoice_id)
        assert invoice_service.get_invoice(invoice_id) is None
