import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.grid import GridStatusResponse
from app.services.grid_status import compute_grid_status

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/gridstatus", response_model=GridStatusResponse)
def get_grid_status(db: Session = Depends(get_db)):
    """Current grid status with aggregated metrics."""
    try:
        snapshot = compute_grid_status(db)
    except SQLAlchemyError:
        logger.exception("Error retrieving grid status")
        raise HTTPException(status_code=500, detail="Internal server error")
    return GridStatusResponse(**snapshot)
