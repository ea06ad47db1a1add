"""
CRUD endpoints for the `data` table.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from core.db import Database, get_db
from core.errors import RecordNotFoundError

from . import repository, schemas

logger = logging.getLogger(__name__)

router = APIRouter()

# `data."date"` is an INTEGER column.
KEY_MIN = -(2**31)
KEY_MAX = 2**31 - 1


def _require_storable_key(date: int) -> None:
    # No row can hold a key outside the column range.
    if not KEY_MIN <= date <= KEY_MAX:
        raise RecordNotFoundError(date)


@router.get("/data", response_model=list[schemas.DataRecord])
async def list_data(db: Database = Depends(get_db)) -> list[dict]:
    logger.debug("list_data")
    return await repository.list_records(db)


@router.get("/data/{date}", response_model=schemas.DataRecord)
async def get_data(date: int, db: Database = Depends(get_db)) -> dict:
    logger.debug("get_data date=%s", date)
    _require_storable_key(date)
    row = await repository.get_record(db, date)
    if row is None:
        raise RecordNotFoundError(date)
    return row


@router.post("/data", response_model=schemas.DataRecord, status_code=status.HTTP_201_CREATED)
async def create_data(payload: schemas.DataRecord, db: Database = Depends(get_db)) -> schemas.DataRecord:
    """
    Insert a row. The submitted `date` is not stored: the response carries
    the key generated by the store in its place.
    """
    logger.debug("create_data submitted_date=%s", payload.date)
    generated = await repository.insert_record(db, day=payload.day, tasks=payload.tasks)
    logger.info("data_created date=%s", generated)
    return payload.model_copy(update={"date": generated})


@router.put("/data/{date}", response_model=schemas.MessageResponse)
async def update_data(date: int, payload: schemas.DataUpdate, db: Database = Depends(get_db)) -> dict:
    logger.debug("update_data date=%s", date)
    _require_storable_key(date)
    updated = await repository.update_record(db, date, day=payload.day, tasks=payload.tasks)
    if not updated:
        raise RecordNotFoundError(date)
    logger.info("data_updated date=%s", date)
    return {"message": "Data successfully updated"}


@router.delete("/data/{date}", response_model=schemas.MessageResponse)
async def delete_data(date: int, db: Database = Depends(get_db)) -> dict:
    logger.debug("delete_data date=%s", date)
    _require_storable_key(date)
    deleted = await repository.delete_record(db, date)
    if not deleted:
        raise RecordNotFoundError(date)
    logger.info("data_deleted date=%s", date)
    return {"message": "Data successfully deleted"}
