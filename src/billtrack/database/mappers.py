"""Mapper functions to convert SQLAlchemy models into domain entities.

Stored strings become enums here, and amounts are re-quantized so callers
always see two fractional digits regardless of the backend's numeric type.
"""

from decimal import Decimal

from billtrack.domain import entities as domain
from billtrack.database.models import (
    User as ORMUser,
    Partner as ORMPartner,
    Category as ORMCategory,
    Invoice as ORMInvoice,
)
from billtrack.utils.amount_parser import quantize_amount


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        password=orm_user.password,
        name=orm_user.name,
        email=orm_user.email,
        role=domain.UserRole(orm_user.role),
        created_at=orm_user.created_at,
    )


def partner_to_domain(orm_partner: ORMPartner) -> domain.Partner:
    """Convert SQLAlchemy Partner model to domain Partner entity."""
    return domain.Partner(
        id=orm_partner.id,
        name=orm_partner.name,
        document_number=orm_partner.document_number,
        entity_type=domain.EntityType(orm_partner.entity_type),
        created_at=orm_partner.created_at,
        email=orm_partner.email,
        phone=orm_partner.phone,
        address=orm_partner.address,
        contact_name=orm_partner.contact_name,
        bank_details=orm_partner.bank_details,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        description=orm_category.description,
        created_at=orm_category.created_at,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_type=domain.InvoiceType(orm_invoice.invoice_type),
        number=orm_invoice.number,
        partner_id=orm_invoice.partner_id,
        category_id=orm_invoice.category_id,
        issue_date=orm_invoice.issue_date,
        due_date=orm_invoice.due_date,
        amount=quantize_amount(Decimal(orm_invoice.amount)),
        description=orm_invoice.description,
        status=domain.InvoiceStatus(orm_invoice.status),
        created_at=orm_invoice.created_at,
        created_by=orm_invoice.created_by,
        payment_method=orm_invoice.payment_method,
        transaction_date=orm_invoice.transaction_date,
        attachment_xml=orm_invoice.attachment_xml,
        attachment_pdf=orm_invoice.attachment_pdf,
        notes=orm_invoice.notes,
    )
