"""SQLAlchemy models for billtrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class User(Base):
    """Application user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    role = Column(String, nullable=False, default="ordinary")
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Partner(Base):
    """Supplier/client model."""

    __tablename__ = "partners"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    document_number = Column(String, unique=True, nullable=False)
    entity_type = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    contact_name = Column(String, nullable=True)
    bank_details = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Category(Base):
    """Invoice category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Invoice(Base):
    """Invoice model.

    Partner, category and creator references are plain integer columns.
    Deleting a partner or category leaves its invoices untouched.
    """

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    invoice_type = Column(String, nullable=False)
    number = Column(String, nullable=False)
    partner_id = Column(Integer, nullable=False, index=True)
    category_id = Column(Integer, nullable=False, index=True)
    issue_date = Column(DateTime, nullable=False)
    due_date = Column(DateTime, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, default="pending")
    payment_method = Column(String, nullable=True)
    transaction_date = Column(DateTime, nullable=True)
    attachment_xml = Column(String, nullable=True)
    attachment_pdf = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    created_by = Column(Integer, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
