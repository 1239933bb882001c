import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.grid import SensorDataIn, MessageResponse
from app.services.ingestion import ingest_sensor_batch

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/sensordata", response_model=MessageResponse)
def post_sensor_data(
    sensor_data: Optional[List[SensorDataIn]] = Body(None),
    db: Session = Depends(get_db),
):
    """Receive a batch of sensor readings from the simulator."""
    if not sensor_data:
        raise HTTPException(status_code=400, detail="Sensor data cannot be empty")

    try:
        ingest_sensor_batch(db, sensor_data)
    except SQLAlchemyError:
        logger.exception("Error processing sensor data")
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info("Received and processed %d sensor readings", len(sensor_data))
    return {"message": f"Successfully processed {len(sensor_data)} sensor readings"}
