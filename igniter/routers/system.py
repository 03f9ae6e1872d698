"""Router exposing installation status."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from igniter import database
from igniter.models.schemas import SystemStatus
from igniter.services.parameters import ParameterStore


logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/status", response_model=SystemStatus)
def get_status(db: Session = Depends(database.get_db)) -> SystemStatus:
    """
    Report whether the installer has completed.

    Returns:
        SystemStatus: installed flag, core version and default location id
    """
    if not database.has_database():
        return SystemStatus(installed=False)

    try:
        params = ParameterStore(db)
        return SystemStatus(
            installed=params.get("ti_setup") == "installed",
            version=params.get("ti_version"),
            default_location_id=params.get("default_location_id"),
        )
    except SQLAlchemyError:
        logger.exception("Installation status check failed")
        raise HTTPException(status_code=500, detail="Failed to read installation status")
