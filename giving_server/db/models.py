"""SQLAlchemy ORM models."""
from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Index, Integer, String, Text

from giving_server.infrastructure.database.base import Base
from giving_server.modules.entities.models import generate_guid
from giving_server.modules.entities.registry import MAX_CENTS


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ObjectColumns:
    """Columns every entity table carries."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    guid = Column(String(36), unique=True, nullable=False, index=True, default=generate_guid)
    date_created = Column(DateTime(timezone=True), default=utcnow)
    last_modified = Column(DateTime(timezone=True))
    erased = Column(Boolean, nullable=False, default=False, index=True)


class User(ObjectColumns, Base):
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False, default="")
    name = Column(String(100), nullable=False)
    bio = Column(Text, nullable=False, default="")
    charity = Column(String(36), index=True)
    balance = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
        CheckConstraint(f"balance <= {MAX_CENTS}", name="ck_users_balance_max"),
    )


class Charity(ObjectColumns, Base):
    __tablename__ = "charities"

    name = Column(String(150), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")


class Campaign(ObjectColumns, Base):
    __tablename__ = "campaigns"

    charity = Column(String(36), nullable=False, index=True)
    name = Column(String(150), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")


class Post(ObjectColumns, Base):
    __tablename__ = "posts"

    user = Column(String(36), nullable=False, index=True)
    campaign = Column(String(36), nullable=False, index=True)
    charity = Column(String(36), nullable=False, index=True)
    caption = Column(Text, nullable=False, default="")


class Donation(ObjectColumns, Base):
    __tablename__ = "donations"

    user = Column(String(36), nullable=False, index=True)
    charity = Column(String(36), nullable=False, index=True)
    campaign = Column(String(36), index=True)
    post = Column(String(36), index=True)
    amount = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_donations_amount_positive"),
        CheckConstraint(f"amount <= {MAX_CENTS}", name="ck_donations_amount_max"),
    )


class Update(ObjectColumns, Base):
    __tablename__ = "updates"

    charity = Column(String(36), nullable=False, index=True)
    name = Column(String(150), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")


class EntityReference(Base):
    """One entry of an append-only reference list (e.g. ``charity.donations``)."""

    __tablename__ = "entity_references"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_type = Column(String(20), nullable=False)
    entity_guid = Column(String(36), nullable=False)
    field = Column(String(50), nullable=False)
    ref_guid = Column(String(36), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index("ix_entity_references_owner", "entity_type", "entity_guid", "field"),
    )
