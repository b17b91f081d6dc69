"""SQLAlchemy ORM models for the workforce entities."""

from datetime import date, datetime, time
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Organization(Base):
    """Organization table - top-level tenancy boundary and login subject."""

    __tablename__ = "organization"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    business_email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    company_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    # Last issued token; informational, never checked on requests
    token: Mapped[str | None] = mapped_column(Text, nullable=True)
    token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    profiles: Mapped[list["Profile"]] = relationship(
        "Profile", back_populates="organization", passive_deletes=True
    )


class Profile(Base):
    """Profile table - employees of an organization."""

    __tablename__ = "profile"
    __table_args__ = (Index("idx_profile_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    employment_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    contract_no: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mobile_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    street_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(Text, nullable=True)
    post_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    country: Mapped[str | None] = mapped_column(Text, nullable=True)
    gender: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    nationality: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_access_to_staff_portal: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    organization: Mapped["Organization"] = relationship("Organization", back_populates="profiles")
    credential: Mapped["UserCredential | None"] = relationship(
        "UserCredential", back_populates="profile", passive_deletes=True
    )


class UserCredential(Base):
    """User credential table - login for a single profile."""

    __tablename__ = "user_credential"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profile.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    # Last issued token; informational, never checked on requests
    token: Mapped[str | None] = mapped_column(Text, nullable=True)
    token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    profile: Mapped["Profile"] = relationship("Profile", back_populates="credential")


class Client(Base):
    """Client table - customers an organization staffs."""

    __tablename__ = "client"
    __table_args__ = (Index("idx_client_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    client_name: Mapped[str] = mapped_column(Text, nullable=False)
    client_email: Mapped[str] = mapped_column(Text, nullable=False)
    client_phone_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_person_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_person_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    job_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    reg_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    vat_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    sectors: Mapped[str | None] = mapped_column(Text, nullable=True)
    address_line: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(Text, nullable=True)
    post_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    county: Mapped[str | None] = mapped_column(Text, nullable=True)
    country: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_client_portal_access: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Location(Base):
    """Location table - sites where shifts take place."""

    __tablename__ = "location"
    __table_args__ = (Index("idx_location_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("client.id", ondelete="SET NULL"), nullable=True
    )
    location_name: Mapped[str] = mapped_column(Text, nullable=False)
    street_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(Text, nullable=True)
    post_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    state: Mapped[str | None] = mapped_column(Text, nullable=True)
    country: Mapped[str | None] = mapped_column(Text, nullable=True)
    directions: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Position(Base):
    """Position table - job positions, optionally held by a profile."""

    __tablename__ = "position"
    __table_args__ = (Index("idx_position_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    position_name: Mapped[str] = mapped_column(Text, nullable=False)
    profile_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("profile.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Role(Base):
    """Role table - role types, unique per organization."""

    __tablename__ = "role"
    __table_args__ = (
        UniqueConstraint("organization_id", "role_type", name="uq_role_org_type"),
        Index("idx_role_org", "organization_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    role_type: Mapped[str] = mapped_column(Text, nullable=False)
    profile_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("profile.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Geofence(Base):
    """Geofence table - circular work areas assigned to a profile."""

    __tablename__ = "geofence"
    __table_args__ = (Index("idx_geofence_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profile.id", ondelete="CASCADE"), nullable=False
    )
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    radius: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class ShiftPattern(Base):
    """Shift pattern table - recurring shifts at a location."""

    __tablename__ = "shift_pattern"
    __table_args__ = (Index("idx_shift_pattern_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("location.id", ondelete="CASCADE"), nullable=False
    )
    pattern_name: Mapped[str] = mapped_column(Text, nullable=False)
    pattern_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_weekly: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    repeat_week_num: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_on_and_off: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    length_days: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_specific_month: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    days: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    repeat_month: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_last_day_of_month: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    period_starting_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    period_ending_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_applied_on_bank_holidays: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    is_auto_extend: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    auto_extend_month: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    auto_extend_days_before_period: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )
    period_starting_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    period_ending_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    shift_instruction: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class PayRule(Base):
    """Pay rule table - rates and the targets they apply to."""

    __tablename__ = "pay_rule"
    __table_args__ = (Index("idx_pay_rule_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    pay_rate: Mapped[float] = mapped_column(Float, nullable=False)
    pay_code: Mapped[str] = mapped_column(Text, nullable=False)
    conditions: Mapped[str | None] = mapped_column(Text, nullable=True)
    # [{"position_id", "client_id", "location_id", "event_id"}, ...]
    applies_to: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class InternalNote(Base):
    """Internal note table - notes kept about a profile."""

    __tablename__ = "internal_note"
    __table_args__ = (Index("idx_internal_note_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profile.id", ondelete="CASCADE"), nullable=False
    )
    owner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("profile.id", ondelete="SET NULL"), nullable=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Invitation(Base):
    """Invitation table - one row per invited email address."""

    __tablename__ = "invitation"
    __table_args__ = (Index("idx_invitation_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    email: Mapped[str] = mapped_column(Text, nullable=False)
    is_sent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_accepted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_rejected: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Absence(Base):
    """Absence table - leave records of a profile."""

    __tablename__ = "absence"
    __table_args__ = (Index("idx_absence_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False
    )
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profile.id", ondelete="CASCADE"), nullable=False
    )
    absence_type: Mapped[str] = mapped_column(Text, nullable=False)
    starting_date: Mapped[date] = mapped_column(Date, nullable=False)
    ending_date: Mapped[date] = mapped_column(Date, nullable=False)
    days_of_holidays: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
