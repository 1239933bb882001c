import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.grid import OptimizationActionIn, MessageResponse
from app.services.ingestion import ingest_optimization_batch

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/optimize", response_model=MessageResponse)
def post_optimization_actions(
    actions: Optional[List[OptimizationActionIn]] = Body(None),
    db: Session = Depends(get_db),
):
    """Receive load-transfer actions decided by the simulator's load balancer."""
    if not actions:
        raise HTTPException(status_code=400, detail="Optimization actions cannot be empty")

    try:
        ingest_optimization_batch(db, actions)
    except SQLAlchemyError:
        logger.exception("Error processing optimization actions")
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info("Received and processed %d optimization actions", len(actions))
    return {"message": f"Successfully processed {len(actions)} optimization actions"}
