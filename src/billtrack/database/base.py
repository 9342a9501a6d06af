"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from billtrack.domain.entities import (
    User,
    Partner,
    Category,
    Invoice,
)


class Database(ABC):
    """Abstract entity store for billtrack.

    Every read returns a snapshot of domain entities. Lookups of missing ids
    return None; updates and deletes of missing ids raise NotFoundError.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self, username: str, password: str, name: str, email: str, role: str
    ) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user."""
        pass

    # Partner operations
    @abstractmethod
    def create_partner(self, name: str, document_number: str, entity_type: str, **contact: Optional[str]) -> int:
        """Create a partner. Returns partner ID.

        Contact keywords: email, phone, address, contact_name, bank_details.
        """
        pass

    @abstractmethod
    def get_partner(self, partner_id: int) -> Optional[Partner]:
        """Get partner by ID."""
        pass

    @abstractmethod
    def get_partner_by_document(self, document_number: str) -> Optional[Partner]:
        """Get partner by document number."""
        pass

    @abstractmethod
    def list_partners(self, entity_type: Optional[str] = None) -> list[Partner]:
        """List partners.

        Filtering by "supplier" or "client" also returns partners of type
        "both".
        """
        pass

    @abstractmethod
    def update_partner(self, partner_id: int, **fields: Any) -> None:
        """Update partner fields in place."""
        pass

    @abstractmethod
    def delete_partner(self, partner_id: int) -> None:
        """Delete a partner. Invoices referencing it are left in place."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, description: Optional[str] = None) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    @abstractmethod
    def update_category(self, category_id: int, **fields: Any) -> None:
        """Update category fields in place."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category. Invoices referencing it are left in place."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        invoice_type: str,
        number: str,
        partner_id: int,
        category_id: int,
        issue_date: datetime,
        due_date: datetime,
        amount: Decimal,
        created_by: int,
        status: str = "pending",
        description: Optional[str] = None,
        payment_method: Optional[str] = None,
        transaction_date: Optional[datetime] = None,
        attachment_xml: Optional[str] = None,
        attachment_pdf: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create an invoice. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def list_invoices(self, invoice_type: Optional[str] = None) -> list[Invoice]:
        """List invoices in ID order, optionally filtered by type."""
        pass

    @abstractmethod
    def update_invoice(self, invoice_id: int, **fields: Any) -> None:
        """Update invoice fields in place."""
        pass

    @abstractmethod
    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice."""
        pass
