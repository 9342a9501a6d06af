"""Partner domain service."""

import logging
from typing import Optional

from billtrack.database.base import Database
from billtrack.domain.entities import EntityType, Partner as PartnerEntity
from billtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_document_number,
    invalid_choice,
    partner_not_found,
)

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("email", "phone", "address", "contact_name", "bank_details")


def coerce_entity_type(entity_type: str) -> str:
    """Validate a partner entity type and return its stored value."""
    try:
        return EntityType(entity_type).value
    except ValueError:
        raise ValidationError(
            invalid_choice("entity type", entity_type, [t.value for t in EntityType])
        ) from None


class PartnerService:
    """Service for managing suppliers and clients."""

    def __init__(self, db: Database):
        """Initialize partner service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_partner(
        self,
        name: str,
        document_number: str,
        entity_type: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        contact_name: Optional[str] = None,
        bank_details: Optional[str] = None,
    ) -> int:
        """Create a partner.

        Args:
            name: Partner name
            document_number: Business identifier such as a tax ID, unique across partners
            entity_type: "supplier", "client" or "both"
            email: Optional contact email
            phone: Optional phone number
            address: Optional address
            contact_name: Optional contact person
            bank_details: Optional bank details

        Returns:
            Partner ID

        Raises:
            ConflictError: If the document number is already registered
            ValidationError: If the entity type is unknown
        """
        entity_type = coerce_entity_type(entity_type)
        if self.db.get_partner_by_document(document_number) is not None:
            raise ConflictError(duplicate_document_number(document_number))

        # Blank contact fields are stored as NULL
        contact = {
            key: value or None
            for key, value in zip(
                CONTACT_FIELDS, (email, phone, address, contact_name, bank_details)
            )
        }
        partner_id = self.db.create_partner(
            name=name, document_number=document_number, entity_type=entity_type, **contact
        )
        logger.info("Created %s partner %d (%s)", entity_type, partner_id, name)
        return partner_id

    def create_supplier(self, name: str, document_number: str, **contact: Optional[str]) -> int:
        """Create a partner of type supplier."""
        return self.create_partner(name, document_number, EntityType.SUPPLIER.value, **contact)

    def get_partner(self, partner_id: int) -> Optional[PartnerEntity]:
        """Get partner by ID.

        Args:
            partner_id: Partner ID

        Returns:
            Partner entity or None if not found
        """
        return self.db.get_partner(partner_id)

    def get_supplier(self, partner_id: int) -> Optional[PartnerEntity]:
        """Get a partner only if it acts as a supplier."""
        partner = self.db.get_partner(partner_id)
        if partner is None or partner.entity_type == EntityType.CLIENT:
            return None
        return partner

    def list_partners(self, entity_type: Optional[str] = None) -> list[PartnerEntity]:
        """List partners.

        Args:
            entity_type: Optional filter; "supplier" and "client" also include "both"

        Returns:
            List of partner entities
        """
        if entity_type is not None:
            entity_type = coerce_entity_type(entity_type)
            if entity_type == EntityType.BOTH.value:
                return [
                    p for p in self.db.list_partners() if p.entity_type == EntityType.BOTH
                ]
        return self.db.list_partners(entity_type)

    def list_suppliers(self) -> list[PartnerEntity]:
        """List partners acting as suppliers."""
        return self.list_partners(EntityType.SUPPLIER.value)

    def update_partner(self, partner_id: int, **fields: Optional[str]) -> PartnerEntity:
        """Update partner fields in place.

        Args:
            partner_id: Partner ID
            **fields: name, document_number, entity_type or contact fields

        Returns:
            Updated partner entity

        Raises:
            NotFoundError: If the partner doesn't exist
            ConflictError: If the new document number belongs to another partner
            ValidationError: If the entity type is unknown
        """
        if self.db.get_partner(partner_id) is None:
            raise NotFoundError(partner_not_found(partner_id))

        if "entity_type" in fields:
            fields["entity_type"] = coerce_entity_type(fields["entity_type"])

        document_number = fields.get("document_number")
        if document_number is not None:
            existing = self.db.get_partner_by_document(document_number)
            if existing is not None and existing.id != partner_id:
                raise ConflictError(duplicate_document_number(document_number))

        self.db.update_partner(partner_id, **fields)
        return self.db.get_partner(partner_id)

    def delete_partner(self, partner_id: int) -> None:
        """Delete a partner.

        Invoices that reference the partner are kept and drop out of joined
        views.

        Raises:
            NotFoundError: If the partner doesn't exist
        """
        if self.db.get_partner(partner_id) is None:
            raise NotFoundError(partner_not_found(partner_id))
        self.db.delete_partner(partner_id)
