"""Shared pytest fixtures for billtrack tests."""

import tempfile
import os
from datetime import datetime, timedelta
from decimal import Decimal
import pytest

from billtrack.database.factories import create_sqlite_database
from billtrack.domain.category import CategoryService
from billtrack.domain.dashboard import DashboardService
from billtrack.domain.filters import InvoiceFilterService
from billtrack.domain.invoice import InvoiceService
from billtrack.domain.partner import PartnerService
from billtrack.domain.user import UserService

# Fixed reference instant used by time-sensitive tests
NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def now():
    """Return the fixed reference instant."""
    return NOW


@pytest.fixture
def clock():
    """Clock frozen at the reference instant."""
    return lambda: NOW


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def partner_service(temp_db):
    """Create a PartnerService with a temporary database."""
    return PartnerService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def invoice_service(temp_db, clock):
    """Create an InvoiceService with a frozen clock."""
    return InvoiceService(temp_db, clock=clock)


@pytest.fixture
def filter_service(temp_db, clock):
    """Create an InvoiceFilterService with a frozen clock."""
    return InvoiceFilterService(temp_db, clock=clock)


@pytest.fixture
def dashboard_service(temp_db, clock):
    """Create a DashboardService with a frozen clock."""
    return DashboardService(temp_db, clock=clock)


@pytest.fixture
def sample_user(user_service):
    """Create a sample user for testing."""
    user_id = user_service.create_user(
        username="maria", password="secret", name="Maria Souza", email="maria@example.com"
    )
    return user_service.get_user(user_id)


@pytest.fixture
def sample_partners(partner_service):
    """Create a supplier, a client and a partner acting as both."""
    supplier_id = partner_service.create_partner(
        name="ACME Supplies", document_number="11.111.111/0001-11", entity_type="supplier"
    )
    client_id = partner_service.create_partner(
        name="Big Client", document_number="22.222.222/0001-22", entity_type="client"
    )
    both_id = partner_service.create_partner(
        name="Two Way Co", document_number="33.333.333/0001-33", entity_type="both"
    )
    return {
        "supplier": partner_service.get_partner(supplier_id),
        "client": partner_service.get_partner(client_id),
        "both": partner_service.get_partner(both_id),
    }


@pytest.fixture
def sample_categories(category_service):
    """Seed the default categories and return their IDs by name."""
    category_service.seed_default_categories()
    return {cat.name: cat.id for cat in category_service.list_categories()}


@pytest.fixture
def make_invoice(invoice_service, sample_user, sample_partners, sample_categories):
    """Factory creating invoices with sensible defaults relative to NOW."""
    counter = {"n": 0}

    def _make(
        invoice_type="payable",
        amount="100.00",
        due_in_days=5,
        issued_days_ago=1,
        partner=None,
        category="Services",
        **extra,
    ):
        counter["n"] += 1
        if partner is None:
            partner = "supplier" if invoice_type == "payable" else "client"
        partner_id = sample_partners[partner].id if isinstance(partner, str) else partner
        category_id = sample_categories[category] if isinstance(category, str) else category
        return invoice_service.create_invoice(
            invoice_type=invoice_type,
            number=f"NF-{counter['n']:03d}",
            partner_id=partner_id,
            category_id=category_id,
            issue_date=NOW - timedelta(days=issued_days_ago),
            due_date=NOW + timedelta(days=due_in_days),
            amount=Decimal(amount),
            created_by=sample_user.id,
            **extra,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
