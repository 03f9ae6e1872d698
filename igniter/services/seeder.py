"""Create the records a fresh installation needs to be usable."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from igniter.exceptions import SeedError
from igniter.models.database_models import Language, Location, Staff, StaffGroup, User
from igniter.models.schemas import AdminAccount
from igniter.services.parameters import ParameterStore
from igniter.services.security import hash_password


logger = logging.getLogger(__name__)

# No longer used by the application; removed on every install.
OBSOLETE_PARAMETERS = ("main_address",)


def first_location(db: Session) -> Location | None:
    return db.scalars(select(Location).order_by(Location.location_id)).first()


def create_default_location(db: Session, name: str) -> Location:
    """Return the location called ``name``, creating it when missing."""
    location = db.scalars(select(Location).filter_by(location_name=name)).first()
    if location is not None:
        logger.info("Location %s already exists (id=%s)", name, location.location_id)
        return location

    location = Location(location_name=name, location_status=True)
    db.add(location)
    db.flush()
    logger.info("Created location %s (id=%s)", name, location.location_id)
    return location


def create_super_user(db: Session, account: AdminAccount) -> User:
    """
    Create or update the staff profile and super user login for ``account``.

    The staff member is matched by email and the login by username, so
    running the installer again updates the same records. The staff member
    joins the first staff group and is assigned the first location and
    language, which the initial migration and location step provide.

    Raises:
        SeedError: if no staff group exists yet.
    """
    group = db.scalars(select(StaffGroup).order_by(StaffGroup.staff_group_id)).first()
    if group is None:
        raise SeedError("No staff groups found. Have the migrations been applied?")
    location = first_location(db)
    language = db.scalars(select(Language).order_by(Language.language_id)).first()

    staff = db.scalars(select(Staff).filter_by(staff_email=account.email)).first()
    if staff is None:
        staff = Staff(staff_email=account.email)
        db.add(staff)
    staff.staff_name = account.name
    staff.staff_group_id = group.staff_group_id
    staff.staff_location_id = location.location_id if location else None
    staff.language_id = language.language_id if language else None
    staff.timezone = None
    staff.staff_status = True
    db.flush()

    user = db.scalars(select(User).filter_by(username=account.username)).first()
    current = staff.user
    if current is not None and current is not user:
        if user is None:
            # One login per staff member: reuse it under the new username.
            user = current
        else:
            # The username already belongs to another login, which replaces this one.
            db.delete(current)
            db.flush()
            db.expire(staff, ["user"])
    if user is None:
        user = User()
        db.add(user)
    user.username = account.username
    user.staff_id = staff.staff_id
    user.password = hash_password(account.password)
    user.super_user = True
    user.is_activated = True
    user.date_activated = datetime.utcnow()
    db.flush()

    logger.info("Super user %s linked to staff %s", user.username, staff.staff_id)
    return user


def add_system_values(db: Session) -> None:
    """Mark the installation complete and point at the default location."""
    location = first_location(db)
    params = ParameterStore(db)
    params.set({
        "ti_setup": "installed",
        "default_location_id": location.location_id if location else None,
    })

    for key in OBSOLETE_PARAMETERS:
        params.forget(key)
