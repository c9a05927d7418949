"""SQLAlchemy ORM models for the lead engine."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


lead_products = Table(
    "lead_products",
    Base.metadata,
    Column("lead_id", String(36), ForeignKey("leads.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "product_id", String(36), ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    ),
)


class UserModel(Base):
    """SQLAlchemy model for users table."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    role = Column(String(20), nullable=False)  # ADMIN, SUPERVISOR, AGENT
    status = Column(String(20), nullable=False, default="ACTIVE")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class SectorModel(Base):
    """SQLAlchemy model for sectors table."""

    __tablename__ = "sectors"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class ProductModel(Base):
    """SQLAlchemy model for products table."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class FirstLevelDispositionModel(Base):
    """SQLAlchemy model for first_level_dispositions table."""

    __tablename__ = "first_level_dispositions"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class SecondLevelDispositionModel(Base):
    """SQLAlchemy model for second_level_dispositions table."""

    __tablename__ = "second_level_dispositions"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class ThirdLevelDispositionModel(Base):
    """SQLAlchemy model for third_level_dispositions table."""

    __tablename__ = "third_level_dispositions"
    __table_args__ = (
        UniqueConstraint("name", "category", name="uq_third_level_dispositions_name_category"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    category = Column(String(20), nullable=False)  # no_sale, not_contacted
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class CampaignModel(Base):
    """SQLAlchemy model for campaigns table."""

    __tablename__ = "campaigns"

    id = Column(String(36), primary_key=True, default=_new_id)
    campaign_name = Column(String, nullable=False)
    organization_name = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    lead_count = Column(Integer, nullable=False, default=0, server_default="0")
    assigned_to_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )


class LeadPoolModel(Base):
    """SQLAlchemy model for lead_pools table."""

    __tablename__ = "lead_pools"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    campaign_id = Column(String(36), ForeignKey("campaigns.id"), nullable=False, index=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )


class LeadModel(Base):
    """SQLAlchemy model for leads table."""

    __tablename__ = "leads"
    __table_args__ = (UniqueConstraint("phone_number", name="uq_leads_phone_number"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    full_name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    sector_id = Column(String(36), ForeignKey("sectors.id"), nullable=True)
    campaign_id = Column(String(36), ForeignKey("campaigns.id"), nullable=True, index=True)
    assigned_to_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    lead_pool_id = Column(String(36), ForeignKey("lead_pools.id"), nullable=True, index=True)
    first_level_disposition_id = Column(
        String(36), ForeignKey("first_level_dispositions.id"), nullable=True
    )
    second_level_disposition_id = Column(
        String(36), ForeignKey("second_level_dispositions.id"), nullable=True
    )
    third_level_disposition_id = Column(
        String(36), ForeignKey("third_level_dispositions.id"), nullable=True
    )
    disposition_notes = Column(Text, nullable=True)
    last_called_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    products = relationship("ProductModel", secondary=lead_products, lazy="selectin")


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite returns naive datetimes)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
