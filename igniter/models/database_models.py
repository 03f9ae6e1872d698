"""SQLAlchemy ORM models for the records seeded during installation."""
from datetime import datetime
from sqlalchemy import Integer, DateTime, String, Boolean, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from igniter.database import Base, table_name


class Location(Base):
    """A restaurant location."""

    __tablename__ = table_name("locations")

    location_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_name: Mapped[str] = mapped_column(String(128), nullable=False)
    location_email: Mapped[str | None] = mapped_column(String(96), nullable=True)
    location_status: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class StaffGroup(Base):
    """Permission group a staff member belongs to."""

    __tablename__ = table_name("staff_groups")

    staff_group_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    staff_group_name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_access: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)  # Restrict staff to their own location


class Language(Base):
    """Language available to the admin panel."""

    __tablename__ = table_name("languages")

    language_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(32), nullable=False)
    idiom: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Staff(Base):
    """Staff member profile; a user account links to it for admin login."""

    __tablename__ = table_name("staffs")

    staff_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    staff_name: Mapped[str] = mapped_column(String(128), nullable=False)
    staff_email: Mapped[str] = mapped_column(String(96), nullable=False, unique=True, index=True)
    staff_group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(f"{table_name('staff_groups')}.staff_group_id"), nullable=False
    )
    staff_location_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey(f"{table_name('locations')}.location_id"), nullable=True
    )
    language_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey(f"{table_name('languages')}.language_id"), nullable=True
    )
    timezone: Mapped[str | None] = mapped_column(String(32), nullable=True)  # None falls back to the site timezone
    staff_status: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    date_added: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    group: Mapped[StaffGroup] = relationship()
    location: Mapped[Location | None] = relationship()
    language: Mapped[Language | None] = relationship()
    user: Mapped["User | None"] = relationship(back_populates="staff", uselist=False)


class User(Base):
    """Admin login account."""

    __tablename__ = table_name("users")

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    staff_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(f"{table_name('staffs')}.staff_id"), nullable=False, unique=True
    )
    username: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt hash
    super_user: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_activated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    date_activated: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    staff: Mapped[Staff] = relationship(back_populates="user")


class Parameter(Base):
    """System-wide key/value parameter, value stored as JSON."""

    __tablename__ = table_name("parameters")

    item: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
